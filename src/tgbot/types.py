"""Msgspec models for Telegram Bot API payloads (subset).

Unknown fields are ignored so newer Bot API versions keep decoding.
"""

from __future__ import annotations

import msgspec

__all__ = [
    "BotCommand",
    "CallbackQuery",
    "Chat",
    "ChatMember",
    "Document",
    "File",
    "Message",
    "MessageEntity",
    "PhotoSize",
    "ResponseParameters",
    "Sticker",
    "Update",
    "User",
    "Video",
    "Voice",
]


class User(msgspec.Struct, forbid_unknown_fields=False):
    id: int
    is_bot: bool
    first_name: str
    last_name: str | None = None
    username: str | None = None
    language_code: str | None = None


class Chat(msgspec.Struct, forbid_unknown_fields=False):
    id: int
    type: str
    title: str | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    is_forum: bool | None = None


class MessageEntity(msgspec.Struct, forbid_unknown_fields=False, omit_defaults=True):
    type: str
    offset: int
    length: int
    url: str | None = None
    language: str | None = None


class PhotoSize(msgspec.Struct, forbid_unknown_fields=False):
    file_id: str
    file_unique_id: str
    width: int
    height: int
    file_size: int | None = None


class Document(msgspec.Struct, forbid_unknown_fields=False):
    file_id: str
    file_unique_id: str
    file_name: str | None = None
    mime_type: str | None = None
    file_size: int | None = None


class Video(msgspec.Struct, forbid_unknown_fields=False):
    file_id: str
    file_unique_id: str
    width: int
    height: int
    duration: int
    file_name: str | None = None
    mime_type: str | None = None
    file_size: int | None = None


class Voice(msgspec.Struct, forbid_unknown_fields=False):
    file_id: str
    file_unique_id: str
    duration: int
    mime_type: str | None = None
    file_size: int | None = None


class Sticker(msgspec.Struct, forbid_unknown_fields=False):
    file_id: str
    file_unique_id: str
    emoji: str | None = None
    file_size: int | None = None


class Message(msgspec.Struct, forbid_unknown_fields=False):
    message_id: int
    date: int
    chat: Chat
    message_thread_id: int | None = None
    from_: User | None = msgspec.field(default=None, name="from")
    text: str | None = None
    entities: list[MessageEntity] | None = None
    caption: str | None = None
    reply_to_message: Message | None = None
    edit_date: int | None = None
    media_group_id: str | None = None
    document: Document | None = None
    photo: list[PhotoSize] | None = None
    sticker: Sticker | None = None
    video: Video | None = None
    voice: Voice | None = None


class CallbackQuery(msgspec.Struct, forbid_unknown_fields=False):
    id: str
    from_: User = msgspec.field(name="from")
    chat_instance: str | None = None
    message: Message | None = None
    data: str | None = None


class Update(msgspec.Struct, forbid_unknown_fields=False):
    update_id: int
    message: Message | None = None
    edited_message: Message | None = None
    channel_post: Message | None = None
    edited_channel_post: Message | None = None
    callback_query: CallbackQuery | None = None


class File(msgspec.Struct, forbid_unknown_fields=False):
    file_id: str
    file_unique_id: str
    file_size: int | None = None
    file_path: str | None = None


class ChatMember(msgspec.Struct, forbid_unknown_fields=False):
    status: str
    user: User
    can_manage_topics: bool | None = None


class BotCommand(msgspec.Struct):
    command: str
    description: str


class ResponseParameters(msgspec.Struct, forbid_unknown_fields=False):
    migrate_to_chat_id: int | None = None
    retry_after: float | None = None
