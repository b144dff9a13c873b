"""Transport-level request and response values.

A typed request serializes into an :class:`HttpRequest`; a connector turns it
into an :class:`HttpResponse`. Both are immutable and carry no reference to
the typed values they came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

__all__ = [
    "Body",
    "EmptyBody",
    "FormBody",
    "HttpRequest",
    "HttpResponse",
    "InputFile",
    "JsonBody",
    "MultipartBody",
    "RequestUrl",
]

HttpMethod = Literal["GET", "POST"]


@dataclass(frozen=True, slots=True)
class RequestUrl:
    """Path relative to the API root; the token is inserted by the connector."""

    kind: Literal["method", "file"]
    path: str

    @classmethod
    def method(cls, name: str) -> RequestUrl:
        return cls(kind="method", path=name)

    @classmethod
    def file(cls, path: str) -> RequestUrl:
        return cls(kind="file", path=path.lstrip("/"))

    def render(self, base_url: str, token: str) -> str:
        base = base_url.rstrip("/")
        if self.kind == "file":
            return f"{base}/file/bot{token}/{self.path}"
        return f"{base}/bot{token}/{self.path}"


@dataclass(frozen=True, slots=True)
class InputFile:
    name: str
    content: bytes
    mime_type: str | None = None


@dataclass(frozen=True, slots=True)
class EmptyBody:
    pass


@dataclass(frozen=True, slots=True)
class JsonBody:
    content: bytes


@dataclass(frozen=True, slots=True)
class FormBody:
    fields: tuple[tuple[str, str], ...]


@dataclass(frozen=True, slots=True)
class MultipartBody:
    fields: tuple[tuple[str, str], ...]
    files: tuple[tuple[str, InputFile], ...]


Body = EmptyBody | JsonBody | FormBody | MultipartBody


@dataclass(frozen=True, slots=True)
class HttpRequest:
    method: HttpMethod
    url: RequestUrl
    body: Body = field(default_factory=EmptyBody)
    headers: tuple[tuple[str, str], ...] = ()

    @property
    def name(self) -> str:
        return self.url.path


@dataclass(frozen=True, slots=True)
class HttpResponse:
    status: int
    body: bytes
    headers: tuple[tuple[str, str], ...] = ()

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300
