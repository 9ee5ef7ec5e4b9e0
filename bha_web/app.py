# -*- coding: utf-8 -*-
# @file app.py
# @brief Server-rendered pages and the same-origin API proxy
# @author sailing-innocent
# @date 2025-04-21

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import httpx
from fastapi import FastAPI, Form, Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from bha_web import config
from bha_web.client import BackendClient, BackendUnavailable

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

# request headers worth passing through to the API
FORWARDED_HEADERS = ("content-type", "accept")


def _token(request: Request) -> Optional[str]:
    return request.cookies.get(config.auth_cookie_name())


def _set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        config.auth_cookie_name(),
        token,
        max_age=config.cookie_max_age(),
        httponly=True,
        secure=config.cookie_secure(),
        samesite="lax",
        path="/",
    )


def _relay(upstream: httpx.Response) -> Response:
    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        media_type=upstream.headers.get("content-type"),
    )


def create_app(transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """Build the web client; `transport` replaces the network in tests"""
    backend = BackendClient(
        config.backend_url(),
        timeout=config.backend_timeout(),
        transport=transport,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await backend.close()

    app = FastAPI(title="BHA Archive", lifespan=lifespan)
    app.state.backend = backend
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    def render(request: Request, name: str, context: dict, status_code: int = 200):
        context = {"is_logged_in": _token(request) is not None, **context}
        return templates.TemplateResponse(request, name, context, status_code=status_code)

    @app.exception_handler(BackendUnavailable)
    async def backend_unavailable(request: Request, exc: BackendUnavailable):
        logger.error(f"Backend unavailable for {request.method} {request.url.path}: {exc}")
        if request.url.path.startswith("/api/"):
            return JSONResponse(
                status_code=status.HTTP_502_BAD_GATEWAY,
                content={"detail": "Backend unavailable"},
            )
        return render(
            request,
            "error.html",
            {"message": "The archive is unavailable right now."},
            status_code=status.HTTP_502_BAD_GATEWAY,
        )

    # ============ Session Endpoints ============

    async def _issue_token(request: Request, backend_path: str) -> Response:
        try:
            payload = await request.json()
        except ValueError:
            return JSONResponse(status_code=400, content={"detail": "Invalid request body"})

        upstream = await backend.request("POST", backend_path, json=payload)
        if upstream.status_code not in (200, 201):
            return _relay(upstream)

        response = JSONResponse(status_code=upstream.status_code, content={"success": True})
        _set_auth_cookie(response, upstream.json()["token"])
        return response

    @app.post("/api/auth/login")
    async def login(request: Request):
        """Sign in and keep the token in an httpOnly cookie"""
        return await _issue_token(request, "/api/auth/login")

    @app.post("/api/auth/register")
    async def register(request: Request):
        return await _issue_token(request, "/api/auth/signup")

    @app.post("/api/auth/logout")
    async def logout():
        response = JSONResponse(content={"success": True})
        response.delete_cookie(config.auth_cookie_name(), path="/")
        return response

    @app.get("/api/auth/me")
    async def me(request: Request):
        token = _token(request)
        if token is None:
            return {"isLoggedIn": False}

        status_code, body = await backend.get_json("/api/auth/me", token=token)
        if status_code != 200:
            response = JSONResponse(content={"isLoggedIn": False})
            response.delete_cookie(config.auth_cookie_name(), path="/")
            return response
        return {"isLoggedIn": True, "user": body}

    # ============ API Proxy ============

    @app.api_route("/api/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    async def proxy(path: str, request: Request):
        """Forward to the API with the cookie token as a bearer credential"""
        headers = {
            name: value
            for name, value in request.headers.items()
            if name.lower() in FORWARDED_HEADERS
        }
        upstream = await backend.request(
            request.method,
            f"/api/{path}",
            token=_token(request),
            params=list(request.query_params.multi_items()),
            content=await request.body() or None,
            headers=headers,
        )
        return _relay(upstream)

    # ============ Pages ============

    @app.get("/")
    async def catalog_page(request: Request):
        status_code, body = await backend.get_json(
            "/api/archive/public", params=list(request.query_params.multi_items())
        )
        if status_code != 200:
            detail = body.get("detail") if isinstance(body, dict) else None
            return render(
                request,
                "catalog.html",
                {"items": [], "total": 0, "error": detail or "Could not load the archive"},
                status_code=status_code if status_code == 400 else status.HTTP_502_BAD_GATEWAY,
            )
        return render(
            request,
            "catalog.html",
            {
                "items": body["items"],
                "total": body["total"],
                "has_more": body["hasMore"],
                "params": dict(request.query_params),
                "error": None,
            },
        )

    async def _detail_page(request: Request, api_path: str, template: str, key: str):
        status_code, body = await backend.get_json(api_path, token=_token(request))
        if status_code in (400, 404):
            return render(request, "not_found.html", {}, status_code=status.HTTP_404_NOT_FOUND)
        if status_code != 200:
            return render(
                request,
                "error.html",
                {"message": "Something went wrong loading this page."},
                status_code=status.HTTP_502_BAD_GATEWAY,
            )
        return render(request, template, {key: body})

    @app.get("/profiles/{profile_id}")
    async def profile_page(profile_id: str, request: Request):
        return await _detail_page(request, f"/api/profiles/{profile_id}", "profile.html", "profile")

    @app.get("/posts/{post_id}")
    async def post_page(post_id: str, request: Request):
        return await _detail_page(request, f"/api/posts/{post_id}", "post.html", "post")

    @app.get("/collections/{collection_id}")
    async def collection_page(collection_id: str, request: Request):
        return await _detail_page(
            request, f"/api/collections/{collection_id}", "collection.html", "collection"
        )

    @app.get("/login")
    async def login_page(request: Request):
        return render(request, "login.html", {"error": None})

    @app.post("/login")
    async def login_form(request: Request, user: str = Form(...), password: str = Form(...)):
        upstream = await backend.request(
            "POST", "/api/auth/login", json={"user": user, "password": password}
        )
        if upstream.status_code != 200:
            return render(
                request,
                "login.html",
                {"error": "Invalid username, email or password."},
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
        _set_auth_cookie(response, upstream.json()["token"])
        return response

    @app.post("/logout")
    async def logout_form():
        response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
        response.delete_cookie(config.auth_cookie_name(), path="/")
        return response

    return app
