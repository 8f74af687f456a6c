from __future__ import annotations

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class AdviceRequest(BaseModel):
    """Payload of one `generateWeightLossPlan` call."""

    user_id: str = Field(..., min_length=1, serialization_alias="userId")

    def wire(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class AdviceSuccess(BaseModel):
    kind: Literal["success"] = "success"
    text: str


class AdviceFailure(BaseModel):
    kind: Literal["failure"] = "failure"
    reason: str


AdviceResult = Union[AdviceSuccess, AdviceFailure]


class AdviceStatus(str, Enum):
    idle = "idle"
    loading = "loading"
    loaded = "loaded"
    errored = "errored"


class AdviceState(BaseModel):
    advice: str = ""
    is_loading: bool = False
    error: str | None = None

    model_config = ConfigDict(validate_assignment=True)

    @property
    def status(self) -> AdviceStatus:
        # same precedence the advice screen renders with
        if self.is_loading:
            return AdviceStatus.loading
        if self.error is not None:
            return AdviceStatus.errored
        if self.advice:
            return AdviceStatus.loaded
        return AdviceStatus.idle
