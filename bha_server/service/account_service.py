# -*- coding: utf-8 -*-
# @file account_service.py
# @brief Account signup, login and self-service updates
# @author sailing-innocent
# @date 2025-04-21

import logging
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bha_server.auth import create_access_token, hash_password, verify_password
from bha_server.data.schemas import AccountResponse, AccountUpdate, SignupRequest
from bha_server.errors import AuthenticationError, ConflictError, InvalidRequestError
from bha_server.model import Account

logger = logging.getLogger(__name__)

DUPLICATE_ACCOUNT = "User with that email or username already exists."


class AccountService:
    def __init__(self, db: Session):
        self.db = db

    def _live(self):
        return self.db.query(Account).filter(Account.is_deleted.is_(False))

    def signup(self, data: SignupRequest) -> str:
        """Create an account and return a fresh token"""
        taken = (
            self._live()
            .filter(
                or_(
                    func.lower(Account.email) == data.email,
                    func.lower(Account.username) == data.username.lower(),
                )
            )
            .first()
        )
        if taken is not None:
            raise ConflictError(DUPLICATE_ACCOUNT)

        account = Account(
            email=data.email,
            username=data.username,
            password_hash=hash_password(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
        )
        self.db.add(account)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(DUPLICATE_ACCOUNT)
        self.db.refresh(account)
        logger.info("Account %s created (%s)", account.account_id, account.username)
        return create_access_token(account.account_id)

    def login(self, user: str, password: str) -> str:
        """`user` is either the email or the username"""
        lowered = user.lower()
        account = (
            self._live()
            .filter(
                or_(
                    func.lower(Account.email) == lowered,
                    func.lower(Account.username) == lowered,
                )
            )
            .first()
        )
        if account is None or not verify_password(password, account.password_hash):
            raise AuthenticationError("Invalid credentials")
        return create_access_token(account.account_id)

    def get_account(self, account_id: int) -> Optional[AccountResponse]:
        account = self._live().filter(Account.account_id == account_id).first()
        if account:
            return AccountResponse.model_validate(account)
        return None

    def update_account(self, account_id: int, update_data: AccountUpdate) -> Optional[AccountResponse]:
        account = self._live().filter(Account.account_id == account_id).first()
        if not account:
            return None

        update_dict = update_data.model_dump(exclude_unset=True)
        if not update_dict:
            raise InvalidRequestError("No fields to update")

        username = update_dict.get("username")
        if username is not None and username.lower() != account.username.lower():
            clash = (
                self._live()
                .filter(
                    func.lower(Account.username) == username.lower(),
                    Account.account_id != account_id,
                )
                .first()
            )
            if clash is not None:
                raise ConflictError("Username is already taken")

        for key, value in update_dict.items():
            setattr(account, key, value)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Username is already taken")
        self.db.refresh(account)
        return AccountResponse.model_validate(account)

    def set_avatar(self, account_id: int, avatar_url: str) -> None:
        account = self._live().filter(Account.account_id == account_id).first()
        if account is None:
            raise AuthenticationError("Authentication required")
        account.avatar_url = avatar_url
        self.db.commit()
