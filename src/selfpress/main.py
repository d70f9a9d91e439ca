"""
FastAPI application for SelfPress.

Run with:
    uvicorn selfpress.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from selfpress.api.errors import register_error_handlers
from selfpress.api.routes import admin, auth, books, contact, manuscripts, notifications, orders
from selfpress.core.config import settings
from selfpress.db.session import init_db

logger = logging.getLogger(__name__)


def create_app(init_database: bool = True) -> FastAPI:
    """
    Builds the application.

    Args:
        init_database (bool): Create missing tables on startup. Tests pass
            False and manage their own engine.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if init_database:
            init_db()
            logger.info("Database tables ready.")
        yield

    app = FastAPI(title="SelfPress API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.list_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    for module in (auth, books, manuscripts, orders, notifications, contact, admin):
        app.include_router(module.router)

    @app.get("/")
    def root():
        return {"message": "SelfPress API is running", "environment": settings.ENVIRONMENT}

    return app


app = create_app()
