import json

import pytest

from tests.fakes import TOKEN, ScriptedConnector, json_response
from tgbot import Api
from tgbot.errors import ApiError, TransportError
from tgbot.stream import UpdatesStream


def _batch(*update_ids: int):
    return json_response(
        {"ok": True, "result": [{"update_id": update_id} for update_id in update_ids]}
    )


def _payload(request) -> dict:
    return json.loads(request.body.content)


class _Sleeps:
    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)


@pytest.mark.anyio
async def test_stream_yields_updates_and_advances_offset() -> None:
    connector = ScriptedConnector([_batch(10, 11), _batch(12)])
    stream = Api.with_connector(TOKEN, connector).stream()

    ids = [(await anext(stream)).update_id for _ in range(3)]

    assert ids == [10, 11, 12]
    assert stream.offset == 13
    assert len(connector.calls) == 2
    first, second = (_payload(call) for call in connector.calls)
    assert "offset" not in first
    assert first["timeout"] == 5
    assert first["limit"] == 100
    assert second["offset"] == 12


@pytest.mark.anyio
async def test_stream_polls_again_after_empty_batch() -> None:
    connector = ScriptedConnector([_batch(), _batch(1)])
    stream = Api.with_connector(TOKEN, connector).stream()

    update = await anext(stream)

    assert update.update_id == 1
    assert len(connector.calls) == 2


@pytest.mark.anyio
async def test_stream_recovers_after_error() -> None:
    sleeps = _Sleeps()
    connector = ScriptedConnector([TransportError("down"), _batch(3)])
    stream = UpdatesStream(
        Api.with_connector(TOKEN, connector), sleep=sleeps
    ).error_delay(2)

    with pytest.raises(TransportError):
        await anext(stream)
    assert sleeps.calls == []

    update = await anext(stream)

    assert update.update_id == 3
    assert sleeps.calls == [2]


@pytest.mark.anyio
async def test_stream_surfaces_api_errors() -> None:
    connector = ScriptedConnector(
        [
            json_response(
                {"ok": False, "error_code": 409, "description": "Conflict"},
                status=409,
            )
        ]
    )
    stream = Api.with_connector(TOKEN, connector).stream()

    with pytest.raises(ApiError) as exc:
        await anext(stream)
    assert exc.value.code == 409


@pytest.mark.anyio
async def test_stream_is_async_iterable() -> None:
    connector = ScriptedConnector([_batch(1, 2, 3)])
    stream = Api.with_connector(TOKEN, connector).stream()

    seen: list[int] = []
    async for update in stream:
        seen.append(update.update_id)
        if len(seen) == 3:
            break

    assert seen == [1, 2, 3]


@pytest.mark.anyio
async def test_stream_builder_options_reach_request() -> None:
    connector = ScriptedConnector([_batch(1)])
    stream = (
        Api.with_connector(TOKEN, connector)
        .stream()
        .timeout(30)
        .limit(10)
        .allowed_updates(["message", "callback_query"])
    )

    await anext(stream)

    payload = _payload(connector.calls[0])
    assert payload["timeout"] == 30
    assert payload["limit"] == 10
    assert payload["allowed_updates"] == ["message", "callback_query"]


def test_stream_builder_validation() -> None:
    stream = Api.with_connector(TOKEN, ScriptedConnector([])).stream()
    with pytest.raises(ValueError):
        stream.limit(0)
    with pytest.raises(ValueError):
        stream.limit(101)
    with pytest.raises(ValueError):
        stream.timeout(-1)
    with pytest.raises(ValueError):
        stream.error_delay(-0.5)
