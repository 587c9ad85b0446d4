"""
Application settings loaded from environment variables.
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # ── Server ───────────────────────────────────────────────────────────
    port: int = 4040
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: List[str] = ["http://localhost:5173"]

    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = ""                # HMAC secret for session tokens (empty → ephemeral)
    jwt_expiry_seconds: int = 3600      # 1 hour
    bcrypt_rounds: int = 10             # bcrypt work factor

    # ── Storage ──────────────────────────────────────────────────────────
    users_file: str = "users.json"      # JSON document holding every account

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }


config = Settings()
