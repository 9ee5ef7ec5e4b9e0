# -*- coding: utf-8 -*-
# @file client.py
# @brief Async HTTP client for the archive API
# @author sailing-innocent
# @date 2025-04-21

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

# only idempotent requests are retried on network errors
RETRYABLE_METHODS = ("GET", "HEAD")


class BackendUnavailable(Exception):
    """Raised when the API cannot be reached"""


class BackendClient:
    """Thin wrapper over httpx.AsyncClient that attaches the bearer token"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        max_retries: int = 2,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.max_retries = max_retries
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        params: Any = None,
        json: Any = None,
        content: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        request_headers = dict(headers or {})
        if token:
            request_headers["Authorization"] = f"Bearer {token}"

        method = method.upper()
        attempts = self.max_retries + 1 if method in RETRYABLE_METHODS else 1
        last_error = None
        for attempt in range(attempts):
            try:
                return await self.client.request(
                    method,
                    path,
                    params=params,
                    json=json,
                    content=content,
                    headers=request_headers,
                )
            except (httpx.TimeoutException, httpx.ConnectError) as e:
                logger.error(f"Backend network error on {method} {path} (attempt {attempt + 1}): {e}")
                last_error = e
                continue
            except httpx.TransportError as e:
                logger.error(f"Backend transport error on {method} {path}: {e}")
                raise BackendUnavailable(str(e)) from e

        raise BackendUnavailable(f"Backend unreachable after {attempts} attempt(s): {last_error}")

    async def get_json(self, path: str, token: Optional[str] = None, params: Any = None):
        """GET returning (status code, decoded body or None)"""
        response = await self.request("GET", path, token=token, params=params)
        try:
            body = response.json()
        except ValueError:
            body = None
        return response.status_code, body
