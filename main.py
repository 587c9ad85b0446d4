"""
Auth service — application entry point.
"""

from __future__ import annotations

import logging
import secrets
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_middleware
from auth.jwt import TokenIssuer
from auth.password import PasswordHasher
from auth.routes import router as auth_router
from auth.service import AuthService
from auth.store import CredentialStore, JsonFileCredentialStore
from config.settings import Settings, config

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


def build_auth_service(settings: Settings, store: Optional[CredentialStore] = None) -> AuthService:
    secret = settings.jwt_secret
    if not secret:
        logger.warning(
            "JWT_SECRET not set — using an ephemeral signing secret; "
            "issued tokens will not survive a restart."
        )
        secret = secrets.token_hex(64)

    return AuthService(
        store=store or JsonFileCredentialStore(settings.users_file),
        hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
        issuer=TokenIssuer(secret, expiry_seconds=settings.jwt_expiry_seconds),
    )


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[CredentialStore] = None,
) -> FastAPI:
    settings = settings or config

    app = FastAPI(
        title="Auth Service",
        version="1.0.0",
        description="Username / password signup and login with signed session tokens.",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)

    app.state.auth_service = build_auth_service(settings, store)

    # Routes
    app.include_router(auth_router, prefix="/api")

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    logger.info("Auth service ready (accounts: %s)", settings.users_file if store is None else type(store).__name__)
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
