"""Component run callbacks: start / end / error hooks."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunInfo:
    """Identifies the component run a callback refers to."""

    name: str
    type: str
    component: str


class CallbackHandler:
    """Override any subset of the hooks; the defaults do nothing."""

    async def on_start(self, info: RunInfo, payload: Any) -> None:
        return None

    async def on_end(self, info: RunInfo, payload: Any) -> None:
        return None

    async def on_error(self, info: RunInfo, error: BaseException) -> None:
        return None


async def _dispatch(handlers: Optional[Sequence[CallbackHandler]], hook: str, info: RunInfo, arg: Any) -> None:
    for handler in handlers or ():
        try:
            await getattr(handler, hook)(info, arg)
        except Exception:
            logger.exception("Callback %s.%s failed for %s/%s", type(handler).__name__, hook, info.component, info.type)


async def run_on_start(handlers: Optional[Sequence[CallbackHandler]], info: RunInfo, payload: Any) -> None:
    await _dispatch(handlers, "on_start", info, payload)


async def run_on_end(handlers: Optional[Sequence[CallbackHandler]], info: RunInfo, payload: Any) -> None:
    await _dispatch(handlers, "on_end", info, payload)


async def run_on_error(handlers: Optional[Sequence[CallbackHandler]], info: RunInfo, error: BaseException) -> None:
    await _dispatch(handlers, "on_error", info, error)
