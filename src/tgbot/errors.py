"""Failure kinds surfaced by :class:`tgbot.Api`."""

from __future__ import annotations

__all__ = [
    "ApiError",
    "DeserializeError",
    "HttpError",
    "SerializeError",
    "TelegramError",
    "TransportError",
]


class TelegramError(Exception):
    pass


class SerializeError(TelegramError):
    """The typed request could not be turned into a wire request."""


class TransportError(TelegramError):
    """The connector failed to complete the HTTP exchange."""


class HttpError(TelegramError):
    """Non-success HTTP status without a Bot API envelope."""

    def __init__(self, status: int, body: bytes = b"") -> None:
        self.status = status
        self.body = body
        super().__init__(f"HTTP {status}")


class ApiError(TelegramError):
    """The Bot API answered with ``ok: false``."""

    def __init__(
        self,
        code: int | None,
        description: str,
        *,
        retry_after: float | None = None,
        migrate_to_chat_id: int | None = None,
    ) -> None:
        self.code = code
        self.description = description
        self.retry_after = retry_after
        self.migrate_to_chat_id = migrate_to_chat_id
        super().__init__(f"{code}: {description}" if code is not None else description)


class DeserializeError(TelegramError):
    """The response body did not match the expected type."""
