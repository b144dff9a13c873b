import pytest

from tests.fakes import json_response
from tgbot.errors import ApiError, DeserializeError, HttpError
from tgbot.responses import FileResponse, JsonResponse, TrueResponse
from tgbot.types import Message, Update, User
from tgbot.wire import HttpResponse


def test_json_response_decodes_result() -> None:
    response = json_response(
        {
            "ok": True,
            "result": {
                "message_id": 5,
                "date": 1700000000,
                "chat": {"id": 1, "type": "private"},
                "from": {"id": 2, "is_bot": False, "first_name": "Ann"},
                "text": "hello",
            },
        }
    )
    message = JsonResponse(Message).deserialize(response)
    assert message.message_id == 5
    assert message.from_ is not None
    assert message.from_.first_name == "Ann"
    assert message.text == "hello"


def test_json_response_decodes_lists() -> None:
    response = json_response(
        {"ok": True, "result": [{"update_id": 1}, {"update_id": 2, "extra": 1}]}
    )
    updates = JsonResponse(list[Update]).deserialize(response)
    assert [update.update_id for update in updates] == [1, 2]


def test_api_error_keeps_parameters() -> None:
    response = json_response(
        {
            "ok": False,
            "error_code": 429,
            "description": "Too Many Requests: retry after 3",
            "parameters": {"retry_after": 3},
        },
        status=429,
    )
    with pytest.raises(ApiError) as exc:
        JsonResponse(User).deserialize(response)
    assert exc.value.code == 429
    assert exc.value.retry_after == 3.0
    assert exc.value.migrate_to_chat_id is None


def test_api_error_migrated_chat() -> None:
    response = json_response(
        {
            "ok": False,
            "error_code": 400,
            "description": "Bad Request: group chat was upgraded",
            "parameters": {"migrate_to_chat_id": -100123},
        },
        status=400,
    )
    with pytest.raises(ApiError) as exc:
        TrueResponse().deserialize(response)
    assert exc.value.migrate_to_chat_id == -100123


def test_api_error_on_success_status() -> None:
    with pytest.raises(ApiError) as exc:
        JsonResponse(User).deserialize(json_response({"ok": False}))
    assert exc.value.code is None
    assert exc.value.description == "unknown error"


def test_http_error_without_envelope() -> None:
    response = HttpResponse(status=502, body=b"<html>Bad Gateway</html>")
    with pytest.raises(HttpError) as exc:
        JsonResponse(User).deserialize(response)
    assert exc.value.status == 502
    assert exc.value.body == b"<html>Bad Gateway</html>"


def test_garbage_on_success_is_deserialize_error() -> None:
    with pytest.raises(DeserializeError):
        JsonResponse(User).deserialize(HttpResponse(status=200, body=b"nope"))
    with pytest.raises(DeserializeError):
        JsonResponse(User).deserialize(json_response(["not", "an", "envelope"]))


def test_result_shape_mismatch() -> None:
    response = json_response({"ok": True, "result": {"username": "bot-only"}})
    with pytest.raises(DeserializeError):
        JsonResponse(User).deserialize(response)


def test_true_response() -> None:
    assert TrueResponse().deserialize(json_response({"ok": True, "result": True}))
    with pytest.raises(DeserializeError):
        TrueResponse().deserialize(json_response({"ok": True, "result": {"a": 1}}))


def test_file_response() -> None:
    assert FileResponse().deserialize(HttpResponse(status=200, body=b"x")) == b"x"
    with pytest.raises(HttpError) as exc:
        FileResponse().deserialize(HttpResponse(status=404, body=b"missing"))
    assert exc.value.status == 404
