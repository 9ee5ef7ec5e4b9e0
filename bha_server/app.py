# -*- coding: utf-8 -*-
# @file app.py
# @brief FastAPI application factory for the archive API
# @author sailing-innocent
# @date 2025-04-21

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from bha_server import __version__, config
from bha_server.errors import register_error_handlers
from bha_server.router import (
    archive_router,
    auth_router,
    collection_authors_router,
    collection_editors_router,
    collections_router,
    comments_router,
    lookups_router,
    post_authors_router,
    post_editors_router,
    posts_router,
    profile_editors_router,
    profiles_router,
    uploads_router,
    users_router,
)


def configure_logging() -> None:
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="BHA Archive API",
        description="Backend API for the roleplay community archive",
        version=__version__,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Register routers
    app.include_router(auth_router)
    app.include_router(lookups_router)
    app.include_router(profiles_router)
    app.include_router(profile_editors_router)
    app.include_router(posts_router)
    app.include_router(post_authors_router)
    app.include_router(post_editors_router)
    app.include_router(comments_router)
    app.include_router(collections_router)
    app.include_router(collection_authors_router)
    app.include_router(collection_editors_router)
    app.include_router(archive_router)
    app.include_router(users_router)
    app.include_router(uploads_router)

    uploads_dir = config.uploads_dir()
    uploads_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=str(uploads_dir)), name="uploads")

    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "message": "Welcome to the BHA Archive API",
            "version": __version__,
            "docs": "/docs",
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    return app
