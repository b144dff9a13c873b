from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import TransportError
from .logging import get_logger, redact_token
from .wire import (
    EmptyBody,
    FormBody,
    HttpRequest,
    HttpResponse,
    JsonBody,
    MultipartBody,
)

__all__ = [
    "Connector",
    "ConnectorConfig",
    "HttpxConnector",
    "default_connector",
]

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.telegram.org"


@runtime_checkable
class Connector(Protocol):
    async def request(self, token: str, request: HttpRequest) -> HttpResponse: ...


class ConnectorConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = Field(default=120, gt=0)
    connect_timeout_s: float = Field(default=10, gt=0)

    @field_validator("base_url")
    @classmethod
    def _validate_base_url(cls, value: str) -> str:
        if not value.startswith(("https://", "http://")):
            raise ValueError("base_url must be an http(s) URL")
        return value.rstrip("/")


def _form_data(
    fields: tuple[tuple[str, str], ...],
) -> dict[str, str | list[str]]:
    # repeated keys are sent as repeated form fields
    data: dict[str, str | list[str]] = {}
    for key, value in fields:
        existing = data.get(key)
        if existing is None:
            data[key] = value
        elif isinstance(existing, list):
            existing.append(value)
        else:
            data[key] = [existing, value]
    return data


class HttpxConnector:
    def __init__(
        self,
        config: ConnectorConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or ConnectorConfig()
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def config(self) -> ConnectorConfig:
        return self._config

    def _http_client(self) -> httpx.AsyncClient:
        # created on first use so construction does no I/O
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(
                    self._config.timeout_s,
                    connect=self._config.connect_timeout_s,
                )
            )
        return self._client

    async def aclose(self) -> None:
        client = self._client
        if client is None or not self._owns_client:
            return
        self._client = None
        await client.aclose()

    def _request_kwargs(self, request: HttpRequest) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        headers = dict(request.headers)
        match request.body:
            case EmptyBody():
                pass
            case JsonBody(content=content):
                headers.setdefault("Content-Type", "application/json")
                kwargs["content"] = content
            case FormBody(fields=fields):
                kwargs["data"] = _form_data(fields)
            case MultipartBody(fields=fields, files=files):
                kwargs["data"] = _form_data(fields)
                kwargs["files"] = [
                    (
                        key,
                        (item.name, item.content, item.mime_type)
                        if item.mime_type is not None
                        else (item.name, item.content),
                    )
                    for key, item in files
                ]
        if headers:
            kwargs["headers"] = headers
        return kwargs

    async def request(self, token: str, request: HttpRequest) -> HttpResponse:
        url = request.url.render(self._config.base_url, token)
        client = self._http_client()
        logger.debug(
            "telegram.request",
            method=request.name,
            http_method=request.method,
        )
        try:
            resp = await client.request(
                request.method, url, **self._request_kwargs(request)
            )
        except httpx.HTTPError as exc:
            message = redact_token(str(exc)) or exc.__class__.__name__
            logger.error(
                "telegram.transport_error",
                method=request.name,
                error=message,
                error_type=exc.__class__.__name__,
            )
            raise TransportError(message) from None
        logger.debug(
            "telegram.response",
            method=request.name,
            status=resp.status_code,
            size=len(resp.content),
        )
        return HttpResponse(
            status=resp.status_code,
            body=resp.content,
            headers=tuple(resp.headers.items()),
        )


def default_connector(config: ConnectorConfig | None = None) -> Connector:
    return HttpxConnector(config)
