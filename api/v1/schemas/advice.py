# api/v1/schemas/advice.py
from __future__ import annotations

from pydantic import BaseModel

from core.models.advice import AdviceState, AdviceStatus


class AdviceStateOut(BaseModel):
    advice: str
    is_loading: bool
    error: str | None = None
    status: AdviceStatus

    @classmethod
    def from_state(cls, state: AdviceState) -> "AdviceStateOut":
        return cls(**state.model_dump(), status=state.status)
