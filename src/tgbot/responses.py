from __future__ import annotations

from typing import Any, Generic, Protocol, TypeVar

import msgspec

from .errors import ApiError, DeserializeError, HttpError
from .types import ResponseParameters
from .wire import HttpResponse

__all__ = [
    "FileResponse",
    "JsonResponse",
    "ResponseType",
    "TrueResponse",
]

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class ResponseType(Protocol[T_co]):
    def deserialize(self, response: HttpResponse) -> T_co: ...


class _Envelope(msgspec.Struct, forbid_unknown_fields=False):
    ok: bool
    result: Any = None
    description: str | None = None
    error_code: int | None = None
    parameters: ResponseParameters | None = None


_ENVELOPE_DECODER = msgspec.json.Decoder(_Envelope)


def _decode_envelope(response: HttpResponse) -> _Envelope:
    try:
        envelope = _ENVELOPE_DECODER.decode(response.body)
    except msgspec.DecodeError as exc:
        if not response.is_success:
            raise HttpError(response.status, response.body) from exc
        raise DeserializeError(f"invalid Bot API envelope: {exc}") from exc
    if not envelope.ok:
        params = envelope.parameters
        raise ApiError(
            envelope.error_code,
            envelope.description or "unknown error",
            retry_after=params.retry_after if params is not None else None,
            migrate_to_chat_id=(
                params.migrate_to_chat_id if params is not None else None
            ),
        )
    return envelope


class JsonResponse(Generic[T]):
    """Decodes the ``result`` of a successful envelope into ``model``."""

    __slots__ = ("_model",)

    def __init__(self, model: Any) -> None:
        self._model = model

    def __repr__(self) -> str:
        return f"JsonResponse({self._model!r})"

    def deserialize(self, response: HttpResponse) -> T:
        envelope = _decode_envelope(response)
        try:
            return msgspec.convert(envelope.result, self._model)
        except msgspec.ValidationError as exc:
            raise DeserializeError(str(exc)) from exc


class TrueResponse:
    """For methods documented to return ``True`` on success."""

    __slots__ = ()

    def deserialize(self, response: HttpResponse) -> bool:
        envelope = _decode_envelope(response)
        if envelope.result is not True:
            raise DeserializeError(f"expected true, got {envelope.result!r}")
        return True


class FileResponse:
    """Raw file content served from the file download endpoint."""

    __slots__ = ()

    def deserialize(self, response: HttpResponse) -> bytes:
        if not response.is_success:
            raise HttpError(response.status, response.body)
        return response.body
