from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Any, TypeVar

import anyio

from .connector import Connector, default_connector
from .errors import TelegramError
from .requests import Request
from .responses import ResponseType
from .stream import UpdatesStream
from .wire import HttpRequest

if TYPE_CHECKING:
    from types import TracebackType

__all__ = ["Api"]

T = TypeVar("T")


@dataclass(frozen=True, slots=True, repr=False)
class _ApiInner:
    token: str
    connector: Connector


def _seconds(duration: float | timedelta) -> float:
    if isinstance(duration, timedelta):
        seconds = duration.total_seconds()
    else:
        seconds = float(duration)
    if seconds < 0:
        raise ValueError("duration must not be negative")
    return seconds


async def _raise(error: TelegramError) -> Any:
    raise error


class Api:
    """Entry point for sending requests to the Telegram Bot API.

    Handles are cheap to copy: :meth:`clone` returns a handle sharing the same
    token and connector, so one ``Api`` can be handed to any number of tasks.

    ::

        api = Api(token)
        me = await api.send(GetMe())
        update = await api.send_timeout(GetUpdates(timeout=5), 10)
    """

    __slots__ = ("_inner",)

    def __init__(self, token: object) -> None:
        self._inner = self._make_inner(token, default_connector())

    @classmethod
    def with_connector(cls, token: object, connector: Connector) -> Api:
        api = cls.__new__(cls)
        api._inner = cls._make_inner(token, connector)
        return api

    @staticmethod
    def _make_inner(token: object, connector: Connector) -> _ApiInner:
        if token is None:
            value = ""
        elif isinstance(token, (bytes, bytearray)):
            value = bytes(token).decode()
        else:
            value = str(token)
        if not value:
            raise ValueError("Telegram token is empty")
        return _ApiInner(token=value, connector=connector)

    def clone(self) -> Api:
        api = type(self).__new__(type(self))
        api._inner = self._inner
        return api

    def __copy__(self) -> Api:
        return self.clone()

    def __deepcopy__(self, memo: dict[int, Any]) -> Api:
        return self.clone()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Api):
            return NotImplemented
        return self._inner is other._inner

    def __hash__(self) -> int:
        return id(self._inner)

    def __repr__(self) -> str:
        return f"Api(connector={self._inner.connector.__class__.__name__})"

    @property
    def connector(self) -> Connector:
        return self._inner.connector

    def stream(self) -> UpdatesStream:
        return UpdatesStream(self)

    def send(self, request: Request[T]) -> Awaitable[T]:
        """Send ``request`` and wait for its typed response.

        The request is serialized before this returns; a serialization error
        is raised when the result is awaited, and the connector is never
        called for it.
        """
        try:
            http_request = request.serialize()
        except TelegramError as exc:
            return _raise(exc)
        return self._dispatch(http_request, request.response)

    def send_timeout(
        self, request: Request[T], duration: float | timedelta
    ) -> Awaitable[T | None]:
        """Like :meth:`send`, but resolve to ``None`` once ``duration`` elapses.

        The deadline starts when the result is first awaited. Expiry is not
        an error; every other failure propagates as in :meth:`send`.
        """
        seconds = _seconds(duration)
        try:
            http_request = request.serialize()
        except TelegramError as exc:
            return _raise(exc)
        return self._dispatch_with_deadline(http_request, request.response, seconds)

    async def _dispatch_with_deadline(
        self,
        http_request: HttpRequest,
        response_type: ResponseType[T],
        seconds: float,
    ) -> T | None:
        with anyio.move_on_after(seconds):
            return await self._dispatch(http_request, response_type)
        return None

    async def _dispatch(
        self, http_request: HttpRequest, response_type: ResponseType[T]
    ) -> T:
        inner = self._inner
        http_response = await inner.connector.request(inner.token, http_request)
        return response_type.deserialize(http_response)

    async def close(self) -> None:
        aclose = getattr(self._inner.connector, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> Api:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
