from __future__ import annotations

from collections import deque
from collections.abc import Awaitable, Callable, Iterable
from datetime import timedelta
from typing import TYPE_CHECKING

import anyio

from .errors import TelegramError
from .logging import get_logger
from .requests import GetUpdates
from .types import Update

if TYPE_CHECKING:
    from .api import Api

__all__ = ["UpdatesStream"]

logger = get_logger(__name__)

DEFAULT_TIMEOUT_S = 5
DEFAULT_LIMIT = 100
DEFAULT_ERROR_DELAY_S = 0.5
REQUEST_MARGIN_S = 1.0


def _whole_seconds(value: float | timedelta) -> int:
    if isinstance(value, timedelta):
        value = value.total_seconds()
    if value < 0:
        raise ValueError("timeout must not be negative")
    return int(value)


class UpdatesStream:
    """Long-polls ``getUpdates`` and yields updates one at a time.

    Failed polls raise from ``__anext__``; the stream stays usable and waits
    ``error_delay`` before polling again.
    """

    def __init__(
        self,
        api: Api,
        *,
        sleep: Callable[[float], Awaitable[None]] = anyio.sleep,
    ) -> None:
        self._api = api.clone()
        self._sleep = sleep
        self._buffer: deque[Update] = deque()
        self._offset: int | None = None
        self._timeout_s = DEFAULT_TIMEOUT_S
        self._limit = DEFAULT_LIMIT
        self._allowed_updates: list[str] | None = None
        self._error_delay_s = DEFAULT_ERROR_DELAY_S
        self._failed = False

    @property
    def offset(self) -> int | None:
        return self._offset

    def timeout(self, value: float | timedelta) -> UpdatesStream:
        self._timeout_s = _whole_seconds(value)
        return self

    def limit(self, value: int) -> UpdatesStream:
        if not 1 <= value <= 100:
            raise ValueError("limit must be between 1 and 100")
        self._limit = value
        return self

    def allowed_updates(self, kinds: Iterable[str] | None) -> UpdatesStream:
        self._allowed_updates = list(kinds) if kinds is not None else None
        return self

    def error_delay(self, value: float | timedelta) -> UpdatesStream:
        if isinstance(value, timedelta):
            value = value.total_seconds()
        if value < 0:
            raise ValueError("error_delay must not be negative")
        self._error_delay_s = value
        return self

    def __aiter__(self) -> UpdatesStream:
        return self

    async def __anext__(self) -> Update:
        while not self._buffer:
            await self._poll()
        return self._buffer.popleft()

    async def _poll(self) -> None:
        if self._failed:
            self._failed = False
            await self._sleep(self._error_delay_s)
        request = GetUpdates(
            offset=self._offset,
            limit=self._limit,
            timeout=self._timeout_s,
            allowed_updates=self._allowed_updates,
        )
        try:
            updates = await self._api.send_timeout(
                request, self._timeout_s + REQUEST_MARGIN_S
            )
        except TelegramError as exc:
            self._failed = True
            logger.warning(
                "stream.poll_failed",
                offset=self._offset,
                error=str(exc),
                error_type=exc.__class__.__name__,
            )
            raise
        if updates is None:
            logger.debug("stream.poll_timeout", offset=self._offset)
            return
        for update in updates:
            next_offset = update.update_id + 1
            if self._offset is None or next_offset > self._offset:
                self._offset = next_offset
            self._buffer.append(update)
        if updates:
            logger.debug("stream.updates", count=len(updates), offset=self._offset)
