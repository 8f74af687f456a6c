"""
services/functions.py
────────────────────────────────────────────────────────────────────────
Minimal client for HTTPS *callable* cloud functions.

Wire protocol:
* request   POST {"data": <payload>}  (+ optional Bearer ID token)
* success   200  {"result": <value>}   (legacy backends: {"data": <value>})
* failure   any  {"error": {"status": "...", "message": "..."}}
"""
from __future__ import annotations

import logging
from typing import Any

import httpx

from config import settings

_LOG = logging.getLogger(__name__)


class FunctionsError(Exception):
    """A callable invocation failed, either in transit or on the server."""

    def __init__(self, status: str, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message

    def __str__(self) -> str:
        return self.message


# ───────── URL helper ────────────────────────────────────────────────
def function_url(
    name: str,
    project_id: str | None,
    region: str,
    emulator_origin: str | None = None,
) -> str:
    if not project_id:
        raise RuntimeError("Set FIREBASE_PROJECT_ID env var")
    if emulator_origin:
        return f"{emulator_origin.rstrip('/')}/{project_id}/{region}/{name}"
    return f"https://{region}-{project_id}.cloudfunctions.net/{name}"


# ───────── callable ──────────────────────────────────────────────────
class CallableFunction:
    def __init__(
        self,
        name: str,
        *,
        project_id: str | None = None,
        region: str | None = None,
        emulator_origin: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.name = name
        self.region = region or settings.functions_region
        self.url = function_url(
            name,
            project_id or settings.firebase_project_id,
            self.region,
            emulator_origin or settings.functions_emulator_origin,
        )
        self.timeout = timeout if timeout is not None else settings.functions_timeout_s
        self._transport = transport

    async def call(self, data: Any, id_token: str | None = None) -> Any:
        """Invoke the function once and return the decoded `result` value."""
        headers = {"Content-Type": "application/json"}
        if id_token:
            headers["Authorization"] = f"Bearer {id_token}"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as http:
                resp = await http.post(self.url, json={"data": data}, headers=headers)
        except httpx.HTTPError as exc:
            raise FunctionsError("UNAVAILABLE", str(exc) or type(exc).__name__) from exc

        try:
            body = resp.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            raise FunctionsError("INTERNAL", "Response is not valid JSON object.")

        err = body.get("error")
        if err is not None or resp.status_code != 200:
            raise _error_from(resp.status_code, err)

        # older backends answer with "data" instead of "result"
        for key in ("result", "data"):
            if key in body:
                return body[key]
        raise FunctionsError("INTERNAL", "Response is missing data field.")


def _error_from(http_status: int, err: Any) -> FunctionsError:
    if isinstance(err, dict):
        status = str(err.get("status") or "INTERNAL")
        message = err.get("message") or status
        return FunctionsError(status, str(message))
    if isinstance(err, str) and err:
        return FunctionsError("INTERNAL", err)
    _LOG.debug("callable returned HTTP %s without an error body", http_status)
    return FunctionsError("INTERNAL", f"HTTP {http_status}")
