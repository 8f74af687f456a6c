from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Protocol

import jwt

from config import settings

_LOG = logging.getLogger(__name__)

_ALGO = "HS256"

def create_token(user_id: str, ttl_minutes: int = 60) -> str:
    exp = datetime.now(timezone.utc) + timedelta(minutes=ttl_minutes)
    payload = {"sub": user_id, "exp": exp}
    return jwt.encode(payload, settings.jwt_secret, algorithm=_ALGO)

def verify_token(token: str) -> str:
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[_ALGO])
    return payload["sub"]


# ───────── current-user capability ──────────────────────────────────
class CurrentUserProvider(Protocol):
    def current_user_id(self) -> str | None: ...


class StaticUserProvider:
    """Fixed identity; `None` means signed out."""

    def __init__(self, user_id: str | None = None) -> None:
        self.user_id = user_id

    def current_user_id(self) -> str | None:
        return self.user_id


class TokenUserProvider:
    """
    Identity backed by a bearer token.  The token can be swapped when the
    caller refreshes it; an expired or forged token reads as signed out.
    """

    def __init__(self, token: str | None = None) -> None:
        self.token = token

    def current_user_id(self) -> str | None:
        if not self.token:
            return None
        try:
            return verify_token(self.token)
        except jwt.InvalidTokenError as exc:
            _LOG.info("rejecting bearer token: %s", exc)
            return None

    def id_token(self) -> str | None:
        return self.token
