# services/advice.py
from __future__ import annotations

import logging
from typing import Callable

from config import settings
from core.models.advice import AdviceFailure, AdviceRequest, AdviceResult, AdviceSuccess
from core.plan_parser import extract_plan
from services.functions import CallableFunction, FunctionsError

_LOG = logging.getLogger(__name__)

# ───────────── Endpoint ─────────────
PLAN_FUNCTION = "generateWeightLossPlan"
UNEXPECTED_FORMAT = "unexpected response format"


def plan_function(**kwargs) -> CallableFunction:
    """`generateWeightLossPlan` bound to the configured project/region."""
    kwargs.setdefault("region", settings.functions_region)
    return CallableFunction(PLAN_FUNCTION, **kwargs)


class RemoteAdviceClient:
    """
    One-shot bridge to the plan generator.  Never raises: every outcome is
    folded into an `AdviceResult`.
    """

    def __init__(
        self,
        function: CallableFunction | None = None,
        token_source: Callable[[], str | None] | None = None,
    ) -> None:
        self._function = function or plan_function()
        self._token_source = token_source

    async def fetch_advice(self, user_id: str) -> AdviceResult:
        _LOG.info("Calling %s with userId: %s", self._function.name, user_id)
        token = self._token_source() if self._token_source else None

        try:
            data = await self._function.call(
                AdviceRequest.model_construct(user_id=user_id).wire(), id_token=token
            )
        except FunctionsError as exc:
            _LOG.warning("Error calling %s: [%s] %s", self._function.name, exc.status, exc)
            return AdviceFailure(reason=str(exc))

        _LOG.debug("Received result from %s: %r", self._function.name, data)
        if not isinstance(data, str):
            _LOG.error("Unexpected response format: %r", data)
            return AdviceFailure(reason=UNEXPECTED_FORMAT)

        return AdviceSuccess(text=extract_plan(data))
