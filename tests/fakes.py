from __future__ import annotations

import json
from typing import Any

import anyio

from tgbot.errors import SerializeError, TransportError
from tgbot.requests import GetMe
from tgbot.responses import JsonResponse
from tgbot.types import User
from tgbot.wire import HttpRequest, HttpResponse

TOKEN = "123:abcDEF_ghij"

ME_BODY = {
    "ok": True,
    "result": {"id": 42, "is_bot": True, "first_name": "x", "username": "x"},
}


def json_response(payload: Any, status: int = 200) -> HttpResponse:
    return HttpResponse(status=status, body=json.dumps(payload).encode())


class FakeConnector:
    def __init__(
        self,
        response: HttpResponse | None = None,
        *,
        delay: float = 0,
        error: str | None = None,
    ) -> None:
        self.response = response or json_response(ME_BODY)
        self.delay = delay
        self.error = error
        self.calls: list[tuple[str, HttpRequest]] = []
        self._started: anyio.Event | None = None
        self.completed = 0
        self.cancelled = 0
        self.closed = False

    @property
    def started(self) -> anyio.Event:
        if self._started is None:
            self._started = anyio.Event()
        return self._started

    async def request(self, token: str, request: HttpRequest) -> HttpResponse:
        self.calls.append((token, request))
        self.started.set()
        try:
            if self.delay:
                await anyio.sleep(self.delay)
        except anyio.get_cancelled_exc_class():
            self.cancelled += 1
            raise
        if self.error is not None:
            raise TransportError(self.error)
        self.completed += 1
        return self.response

    async def aclose(self) -> None:
        self.closed = True


class ScriptedConnector:
    """Answers each call with the next scripted response or error."""

    def __init__(self, script: list[HttpResponse | Exception]) -> None:
        self.script = list(script)
        self.calls: list[HttpRequest] = []

    async def request(self, token: str, request: HttpRequest) -> HttpResponse:
        _ = token
        self.calls.append(request)
        await anyio.sleep(0)
        if not self.script:
            raise TransportError("script exhausted")
        item = self.script.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class CountingResponse:
    def __init__(self) -> None:
        self.calls = 0
        self._inner = JsonResponse(User)

    def deserialize(self, response: HttpResponse) -> User:
        self.calls += 1
        return self._inner.deserialize(response)


class CountingRequest:
    def __init__(self, response: CountingResponse) -> None:
        self.response = response

    def serialize(self) -> HttpRequest:
        return GetMe().serialize()


class BrokenRequest:
    response = JsonResponse(User)

    def __init__(self) -> None:
        self.serialize_calls = 0

    def serialize(self) -> HttpRequest:
        self.serialize_calls += 1
        raise SerializeError("bad request")
