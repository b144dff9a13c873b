"""Typed Bot API requests.

Every request knows the Bot API method it targets and the response type that
decodes its answer; ``serialize()`` turns it into a self-contained
:class:`~tgbot.wire.HttpRequest` or raises :class:`~tgbot.errors.SerializeError`.
"""

from __future__ import annotations

from typing import Any, ClassVar, Protocol, TypeVar

import msgspec

from .errors import SerializeError
from .responses import FileResponse, JsonResponse, ResponseType, TrueResponse
from .types import BotCommand, Chat, ChatMember, File, Message, MessageEntity, Update, User
from .wire import (
    EmptyBody,
    HttpRequest,
    InputFile,
    JsonBody,
    MultipartBody,
    RequestUrl,
)

__all__ = [
    "AnswerCallbackQuery",
    "DeleteMessage",
    "DownloadFile",
    "EditMessageText",
    "ForwardMessage",
    "GetChat",
    "GetChatMember",
    "GetFile",
    "GetMe",
    "GetUpdates",
    "JsonRequest",
    "Request",
    "SendChatAction",
    "SendDocument",
    "SendMessage",
    "SetMyCommands",
]

T_co = TypeVar("T_co", covariant=True)

MAX_TEXT_LENGTH = 4096
MAX_CAPTION_LENGTH = 1024
CHAT_ACTIONS = frozenset(
    {
        "typing",
        "upload_photo",
        "record_video",
        "upload_video",
        "record_voice",
        "upload_voice",
        "upload_document",
        "choose_sticker",
        "find_location",
        "record_video_note",
        "upload_video_note",
    }
)

_ENCODER = msgspec.json.Encoder()


class Request(Protocol[T_co]):
    @property
    def response(self) -> ResponseType[T_co]: ...

    def serialize(self) -> HttpRequest: ...


def _check_text(field: str, value: str, limit: int) -> None:
    if not value.strip():
        raise SerializeError(f"{field} must not be empty")
    if len(value) > limit:
        raise SerializeError(f"{field} is longer than {limit} characters")


def _typecheck(request: msgspec.Struct) -> None:
    # structs do not check field types on construction
    name = getattr(request, "method", type(request).__name__)
    try:
        msgspec.convert(
            msgspec.to_builtins(request, builtin_types=(bytes, bytearray)),
            type(request),
        )
    except (msgspec.ValidationError, TypeError) as exc:
        raise SerializeError(f"{name}: {exc}") from exc


def _form_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    return _ENCODER.encode(value).decode()


class JsonRequest(msgspec.Struct, omit_defaults=True, frozen=True):
    """A Bot API method call sent as a JSON body; ``None`` fields are omitted."""

    method: ClassVar[str]

    def validate(self) -> None:
        return None

    def serialize(self) -> HttpRequest:
        _typecheck(self)
        self.validate()
        try:
            content = _ENCODER.encode(self)
        except (msgspec.EncodeError, TypeError, OverflowError) as exc:
            raise SerializeError(f"{self.method}: {exc}") from exc
        return HttpRequest(
            method="POST",
            url=RequestUrl.method(self.method),
            body=JsonBody(content),
        )


class GetMe(JsonRequest):
    method: ClassVar[str] = "getMe"
    response: ClassVar[ResponseType[User]] = JsonResponse(User)


class GetUpdates(JsonRequest):
    method: ClassVar[str] = "getUpdates"
    response: ClassVar[ResponseType[list[Update]]] = JsonResponse(list[Update])

    offset: int | None = None
    limit: int | None = None
    timeout: int | None = None
    allowed_updates: list[str] | None = None

    def validate(self) -> None:
        if self.limit is not None and not 1 <= self.limit <= 100:
            raise SerializeError("limit must be between 1 and 100")
        if self.timeout is not None and self.timeout < 0:
            raise SerializeError("timeout must not be negative")


class SendMessage(JsonRequest):
    method: ClassVar[str] = "sendMessage"
    response: ClassVar[ResponseType[Message]] = JsonResponse(Message)

    chat_id: int | str
    text: str
    message_thread_id: int | None = None
    parse_mode: str | None = None
    entities: list[MessageEntity] | None = None
    disable_notification: bool | None = None
    reply_to_message_id: int | None = None
    reply_markup: dict[str, Any] | None = None
    link_preview_options: dict[str, Any] | None = None

    def validate(self) -> None:
        _check_text("text", self.text, MAX_TEXT_LENGTH)


class EditMessageText(JsonRequest):
    method: ClassVar[str] = "editMessageText"
    response: ClassVar[ResponseType[Message]] = JsonResponse(Message)

    chat_id: int | str
    message_id: int
    text: str
    parse_mode: str | None = None
    entities: list[MessageEntity] | None = None
    reply_markup: dict[str, Any] | None = None
    link_preview_options: dict[str, Any] | None = None

    def validate(self) -> None:
        _check_text("text", self.text, MAX_TEXT_LENGTH)


class DeleteMessage(JsonRequest):
    method: ClassVar[str] = "deleteMessage"
    response: ClassVar[ResponseType[bool]] = TrueResponse()

    chat_id: int | str
    message_id: int


class ForwardMessage(JsonRequest):
    method: ClassVar[str] = "forwardMessage"
    response: ClassVar[ResponseType[Message]] = JsonResponse(Message)

    chat_id: int | str
    from_chat_id: int | str
    message_id: int
    message_thread_id: int | None = None
    disable_notification: bool | None = None


class SendChatAction(JsonRequest):
    method: ClassVar[str] = "sendChatAction"
    response: ClassVar[ResponseType[bool]] = TrueResponse()

    chat_id: int | str
    action: str
    message_thread_id: int | None = None

    def validate(self) -> None:
        if self.action not in CHAT_ACTIONS:
            raise SerializeError(f"unknown chat action: {self.action}")


class AnswerCallbackQuery(JsonRequest):
    method: ClassVar[str] = "answerCallbackQuery"
    response: ClassVar[ResponseType[bool]] = TrueResponse()

    callback_query_id: str
    text: str | None = None
    show_alert: bool | None = None
    url: str | None = None
    cache_time: int | None = None


class GetChat(JsonRequest):
    method: ClassVar[str] = "getChat"
    response: ClassVar[ResponseType[Chat]] = JsonResponse(Chat)

    chat_id: int | str


class GetChatMember(JsonRequest):
    method: ClassVar[str] = "getChatMember"
    response: ClassVar[ResponseType[ChatMember]] = JsonResponse(ChatMember)

    chat_id: int | str
    user_id: int


class SetMyCommands(JsonRequest):
    method: ClassVar[str] = "setMyCommands"
    response: ClassVar[ResponseType[bool]] = TrueResponse()

    commands: list[BotCommand]
    scope: dict[str, Any] | None = None
    language_code: str | None = None

    def validate(self) -> None:
        for command in self.commands:
            name = command.command
            if not 1 <= len(name) <= 32 or name != name.lower():
                raise SerializeError(f"invalid command name: {name!r}")
            if not 1 <= len(command.description) <= 256:
                raise SerializeError(f"invalid description for command {name!r}")


class GetFile(JsonRequest):
    method: ClassVar[str] = "getFile"
    response: ClassVar[ResponseType[File]] = JsonResponse(File)

    file_id: str


class SendDocument(msgspec.Struct, omit_defaults=True, frozen=True):
    """Uploads ``document`` as multipart form data."""

    method: ClassVar[str] = "sendDocument"
    response: ClassVar[ResponseType[Message]] = JsonResponse(Message)

    chat_id: int | str
    document: InputFile
    caption: str | None = None
    parse_mode: str | None = None
    message_thread_id: int | None = None
    disable_notification: bool | None = None
    reply_to_message_id: int | None = None

    def serialize(self) -> HttpRequest:
        _typecheck(self)
        if not self.document.content:
            raise SerializeError("document content is empty")
        if self.caption is not None:
            _check_text("caption", self.caption, MAX_CAPTION_LENGTH)
        fields: list[tuple[str, str]] = []
        try:
            for name in self.__struct_fields__:
                if name == "document":
                    continue
                value = getattr(self, name)
                if value is None:
                    continue
                fields.append((name, _form_value(value)))
        except (msgspec.EncodeError, TypeError) as exc:
            raise SerializeError(f"{self.method}: {exc}") from exc
        return HttpRequest(
            method="POST",
            url=RequestUrl.method(self.method),
            body=MultipartBody(
                fields=tuple(fields),
                files=(("document", self.document),),
            ),
        )


class DownloadFile(msgspec.Struct, frozen=True):
    """Fetches the content behind a ``File.file_path``."""

    response: ClassVar[ResponseType[bytes]] = FileResponse()

    file_path: str

    def serialize(self) -> HttpRequest:
        _typecheck(self)
        if not self.file_path.strip("/ "):
            raise SerializeError("file_path must not be empty")
        return HttpRequest(
            method="GET",
            url=RequestUrl.file(self.file_path),
            body=EmptyBody(),
        )
