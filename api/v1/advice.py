# api/v1/advice.py
"""
HTTP face of the advice screen.

Each signed-in user gets one long-lived `AdviceViewModel`; POST starts a
request cycle, GET renders whatever the view-model currently holds and
DELETE discards it when the screen closes.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from functools import lru_cache

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.advice_viewmodel import AdviceViewModel, LoopExecutor
from services.advice import RemoteAdviceClient, plan_function
from services.auth import TokenUserProvider, verify_token
from services.functions import CallableFunction
from api.v1.schemas import AdviceStateOut

router = APIRouter()
_bearer = HTTPBearer(auto_error=False)


@dataclass
class _Session:
    users: TokenUserProvider
    view_model: AdviceViewModel


_sessions: dict[str, _Session] = {}


# ───────────────────────── dependencies ─────────────────────
@lru_cache
def get_plan_function() -> CallableFunction:
    return plan_function()


@dataclass
class _Caller:
    user_id: str
    token: str


def get_caller(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> _Caller:
    if creds is None:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Missing bearer token")
    try:
        user_id = verify_token(creds.credentials)
    except jwt.InvalidTokenError:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid bearer token")
    return _Caller(user_id, creds.credentials)


# `caller` is declared first so a bad token is rejected before the
# backend function is built
async def get_view_model(
    caller: _Caller = Depends(get_caller),
    function: CallableFunction = Depends(get_plan_function),
) -> AdviceViewModel:
    session = _sessions.get(caller.user_id)
    if session is None:
        users = TokenUserProvider(caller.token)
        vm = AdviceViewModel(
            RemoteAdviceClient(function, token_source=users.id_token),
            users,
            LoopExecutor(asyncio.get_running_loop()),
        )
        session = _sessions[caller.user_id] = _Session(users, vm)
    else:
        # keep the freshest token for the next remote call
        session.users.token = caller.token
    return session.view_model


# ───────────────────────── read ─────────────────────────────
@router.get("", response_model=AdviceStateOut)
async def get_advice(
    vm: AdviceViewModel = Depends(get_view_model),
) -> AdviceStateOut:
    return AdviceStateOut.from_state(vm.state)


# ───────────────────────── trigger ──────────────────────────
@router.post("", response_model=AdviceStateOut, status_code=status.HTTP_202_ACCEPTED)
async def request_advice(
    vm: AdviceViewModel = Depends(get_view_model),
) -> AdviceStateOut:
    vm.request_advice()
    return AdviceStateOut.from_state(vm.state)


# ───────────────────────── discard ──────────────────────────
@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def close_advice(caller: _Caller = Depends(get_caller)) -> None:
    """Screen closed: drop the caller's view-model and its token."""
    _sessions.pop(caller.user_id, None)
