# -*- coding: utf-8 -*-
# @file auth.py
# @brief API routes for signup, login and the current account
# @author sailing-innocent
# @date 2025-04-21

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bha_server.auth import get_current_account_id
from bha_server.data.schemas import (
    AccountResponse,
    AccountUpdate,
    LoginRequest,
    SignupRequest,
    TokenResponse,
)
from bha_server.db import g_db_func
from bha_server.service.account_service import AccountService

router = APIRouter(prefix="/api/auth", tags=["auth"])


def get_account_service(db: Session = Depends(g_db_func)):
    return AccountService(db)


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def signup(body: SignupRequest, service: AccountService = Depends(get_account_service)):
    """Create an account and sign in"""
    return TokenResponse(token=service.signup(body))


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, service: AccountService = Depends(get_account_service)):
    """Sign in with email or username"""
    return TokenResponse(token=service.login(body.user, body.password))


@router.get("/me", response_model=AccountResponse)
def me(
    account_id: int = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
):
    account = service.get_account(account_id)
    if not account:
        raise HTTPException(status_code=404, detail="User not found")
    return account


@router.put("/account", response_model=AccountResponse)
def update_account(
    body: AccountUpdate,
    account_id: int = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
):
    account = service.update_account(account_id, body)
    if not account:
        raise HTTPException(status_code=404, detail="User not found")
    return account
