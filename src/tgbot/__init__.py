"""Async client facade for the Telegram Bot API."""

from .api import Api
from .connector import Connector, ConnectorConfig, HttpxConnector, default_connector
from .errors import (
    ApiError,
    DeserializeError,
    HttpError,
    SerializeError,
    TelegramError,
    TransportError,
)
from .requests import (
    AnswerCallbackQuery,
    DeleteMessage,
    DownloadFile,
    EditMessageText,
    ForwardMessage,
    GetChat,
    GetChatMember,
    GetFile,
    GetMe,
    GetUpdates,
    Request,
    SendChatAction,
    SendDocument,
    SendMessage,
    SetMyCommands,
)
from .stream import UpdatesStream
from .wire import HttpRequest, HttpResponse, InputFile

__version__ = "0.4.0"

__all__ = [
    "AnswerCallbackQuery",
    "Api",
    "ApiError",
    "Connector",
    "ConnectorConfig",
    "DeleteMessage",
    "DeserializeError",
    "DownloadFile",
    "EditMessageText",
    "ForwardMessage",
    "GetChat",
    "GetChatMember",
    "GetFile",
    "GetMe",
    "GetUpdates",
    "HttpError",
    "HttpRequest",
    "HttpResponse",
    "HttpxConnector",
    "InputFile",
    "Request",
    "SendChatAction",
    "SendDocument",
    "SendMessage",
    "SerializeError",
    "SetMyCommands",
    "TelegramError",
    "TransportError",
    "UpdatesStream",
    "default_connector",
]
