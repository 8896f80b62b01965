"""
Postboard API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_exception_handlers, register_middleware
from api.routes import health_router
from api.routes import router as post_router
from auth.jwt import TokenSigner
from auth.password import PasswordHasher
from auth.routes import router as auth_router
from config.settings import Settings, config
from database.session import build_engine, build_session_factory, init_db

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "aiosqlite", "asyncio"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or config

    app = FastAPI(
        title="Postboard API",
        version="1.0.0",
        description="Users, token auth and ownership-scoped posts.",
    )

    # Process-wide, read-only after construction.
    app.state.settings = settings
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_signer = TokenSigner(
        settings.app_secret,
        expires_in=settings.token_expiry_seconds,
    )
    app.state.engine = build_engine(settings.database_url, echo=settings.debug)
    app.state.session_factory = build_session_factory(app.state.engine)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(post_router, prefix="/api/post")
    app.include_router(health_router, prefix="/api")

    @app.on_event("startup")
    async def on_startup():
        if settings.auto_create_tables:
            await init_db(app.state.engine)
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.engine.dispose()

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
