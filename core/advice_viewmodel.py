# core/advice_viewmodel.py
"""
State holder behind the weight-loss advice screen.

`AdviceViewModel` owns one `AdviceState` and exposes it to observers.  All
writes that follow a remote completion go through an injected `UIExecutor`,
so a UI toolkit that insists on a single writer thread only has to supply
an executor bound to that thread.
"""
from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, Callable, Protocol

from core.models.advice import AdviceFailure, AdviceResult, AdviceState, AdviceSuccess
from services.auth import CurrentUserProvider

_LOG = logging.getLogger(__name__)

UNAUTHENTICATED = "User not authenticated"
ERROR_PREFIX = "Failed to get weight loss advice: "

Listener = Callable[[AdviceState], None]


class AdviceSource(Protocol):
    async def fetch_advice(self, user_id: str) -> AdviceResult: ...


# ──────────────── executors ──────────────────
class UIExecutor(Protocol):
    def submit(self, fn: Callable[[], None]) -> None: ...


class LoopExecutor:
    """Runs callbacks on `loop`, whichever thread they are submitted from."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self.loop = loop

    def submit(self, fn: Callable[[], None]) -> None:
        self.loop.call_soon_threadsafe(fn)


class InlineExecutor:
    def submit(self, fn: Callable[[], None]) -> None:
        fn()


# ──────────────── view-model ──────────────────
class AdviceViewModel:
    def __init__(
        self,
        client: AdviceSource,
        users: CurrentUserProvider,
        ui: UIExecutor | None = None,
    ) -> None:
        self._client = client
        self._users = users
        self._ui = ui
        self._listeners: list[Listener] = []
        self._inflight: set[asyncio.Task[Any]] = set()
        self.state = AdviceState()

    # ─── observers ───
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`; returns a function that removes it again."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _update(self, **changes: Any) -> None:
        for field, value in changes.items():
            setattr(self.state, field, value)
        snapshot = self.state.model_copy()
        for listener in list(self._listeners):
            listener(snapshot)

    # ─── trigger ───
    def request_advice(self) -> asyncio.Task[AdviceResult] | None:
        """
        Start one request cycle.  Must be called from a running event loop.

        Returns the in-flight task, or None when nobody is signed in (no
        remote call is made in that case).
        """
        user_id = self._users.current_user_id()
        if not user_id:
            _LOG.warning("advice requested without a signed-in user")
            self._update(is_loading=False, error=UNAUTHENTICATED)
            return None

        loop = asyncio.get_running_loop()
        if self._ui is None:
            self._ui = LoopExecutor(loop)

        self._update(is_loading=True, error=None)
        task = loop.create_task(self._client.fetch_advice(user_id))
        self._inflight.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[AdviceResult]) -> None:
        self._inflight.discard(task)
        if task.cancelled():
            result: AdviceResult = AdviceFailure(reason="request cancelled")
        elif task.exception() is not None:
            exc = task.exception()
            _LOG.error("advice request crashed", exc_info=exc)
            result = AdviceFailure(reason=str(exc) or type(exc).__name__)
        else:
            result = task.result()
        self._ui.submit(functools.partial(self._complete, result))

    def _complete(self, result: AdviceResult) -> None:
        if isinstance(result, AdviceSuccess):
            self._update(is_loading=False, advice=result.text)
        else:
            self._update(is_loading=False, error=ERROR_PREFIX + result.reason)
