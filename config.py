"""
Centralised settings loader (pydantic-settings).

Every field maps to the upper-case env var of the same name, e.g.
FIREBASE_PROJECT_ID or FUNCTIONS_REGION.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime ─────────────────────────────────────────────────────
    env_name: str = Field("local")
    log_level: str = Field("INFO")
    jwt_secret: str = Field("changeme")

    # ─── callable functions backend ──────────────────────────────────
    firebase_project_id: str | None = Field(None)
    functions_region: str = Field("us-west1")
    # e.g. http://127.0.0.1:5001 when running against the local emulator
    functions_emulator_origin: str | None = Field(None)
    # same default as the mobile callable SDKs
    functions_timeout_s: float = Field(70.0)

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
