"""Request building and dispatch for the Service Desk REST API."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import IO, Any, Iterable, Mapping, Union

import httpx

from .config import ClientConfig
from .exceptions import ServiceDeskNetworkError, ServiceDeskTimeoutError, ServiceDeskValidationError
from .models import coerce_payload
from .security import sanitize_headers

logger = logging.getLogger(__name__)

API_PREFIX = "rest/servicedeskapi/"
EXPERIMENTAL_HEADER = "X-ExperimentalApi"
EXPERIMENTAL_VALUE = "opt-in"

PartContents = Union[bytes, str, IO[bytes]]


class HttpMethod(str, enum.Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def coerce(cls, value: "HttpMethod | str") -> "HttpMethod":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.upper())
            except ValueError:
                pass
        raise ServiceDeskValidationError(f"Unsupported HTTP method: {value!r}")


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def build_query(params: Mapping[str, Any] | None) -> tuple[tuple[str, str], ...]:
    """Flatten query params into ordered pairs, dropping absent values.

    ``None`` and empty strings never reach the wire. Sequences repeat their
    key; an empty sequence is dropped.
    """
    if not params:
        return ()
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None or value == "":
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _query_value(item)) for item in value if item is not None and item != "")
            continue
        pairs.append((key, _query_value(value)))
    return tuple(pairs)


@dataclass(frozen=True)
class MultipartPart:
    name: str
    contents: PartContents
    filename: str | None = None
    content_type: str | None = None

    @classmethod
    def coerce(cls, part: "MultipartPart | Mapping[str, Any]") -> "MultipartPart":
        if isinstance(part, MultipartPart):
            return part
        if isinstance(part, Mapping) and "name" in part and "contents" in part:
            return cls(
                name=str(part["name"]),
                contents=part["contents"],
                filename=part.get("filename"),
                content_type=part.get("content_type"),
            )
        raise ServiceDeskValidationError("multipart parts need a name and contents")

    def as_file_field(self) -> tuple[str, tuple[str | None, PartContents, str | None]]:
        filename = self.filename
        if filename is None and not isinstance(self.contents, (bytes, str)):
            stream_name = getattr(self.contents, "name", None)
            if isinstance(stream_name, str):
                filename = Path(stream_name).name
        return self.name, (filename, self.contents, self.content_type)


@dataclass(frozen=True)
class PendingRequest:
    """A fully resolved request, validated when constructed."""

    method: HttpMethod
    url: str
    query: tuple[tuple[str, str], ...] = ()
    json: Any = None
    content: bytes | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    multipart: tuple[MultipartPart, ...] = ()
    experimental: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", HttpMethod.coerce(self.method))
        if not self.url:
            raise ServiceDeskValidationError("request URL is required")
        if self.json is not None and self.content is not None:
            raise ServiceDeskValidationError("a request carries either a JSON body or raw content, not both")
        if self.multipart and (self.json is not None or self.content is not None):
            raise ServiceDeskValidationError("multipart requests cannot also carry a body")
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def full_url(self) -> str:
        if not self.query:
            return self.url
        return f"{self.url}?{httpx.QueryParams(list(self.query))}"

    def final_headers(self) -> httpx.Headers:
        headers = httpx.Headers(dict(self.headers))
        if self.experimental:
            headers[EXPERIMENTAL_HEADER] = EXPERIMENTAL_VALUE
        return headers


class Response:
    """Transport response handed back untouched, whatever its status."""

    def __init__(self, raw: httpx.Response) -> None:
        self.raw = raw

    @property
    def status_code(self) -> int:
        return self.raw.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.raw.headers

    @property
    def body(self) -> bytes:
        return self.raw.content

    @property
    def text(self) -> str:
        return self.raw.text

    @property
    def is_success(self) -> bool:
        return self.raw.is_success

    def json(self) -> Any:
        return self.raw.json()

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"


class Dispatcher:
    """Sends pending requests with the shared credentials, one call each."""

    def __init__(self, config: ClientConfig, *, http_client: httpx.Client | None = None) -> None:
        self.config = config
        self._owns_client = http_client is None
        self._httpx = http_client or httpx.Client(
            timeout=config.timeout,
            follow_redirects=True,
            trust_env=False,
        )

    def close(self) -> None:
        if self._owns_client:
            self._httpx.close()

    def new_request(self) -> "RequestBuilder":
        return RequestBuilder(self)

    def send(self, pending: PendingRequest) -> Response:
        headers = pending.final_headers()
        files = [part.as_file_field() for part in pending.multipart]
        logger.debug(
            "Dispatching %s %s headers=%s",
            pending.method.value,
            pending.full_url,
            sanitize_headers(dict(headers)),
        )
        try:
            response = self._httpx.request(
                pending.method.value,
                pending.url,
                params=list(pending.query) or None,
                headers=headers,
                json=pending.json,
                content=pending.content,
                files=files or None,
                auth=httpx.BasicAuth(self.config.username or "", self.config.password or ""),
                timeout=self.config.timeout,
            )
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out after %ss", pending.method.value, pending.url, self.config.timeout)
            raise ServiceDeskTimeoutError("Request timed out", timeout=self.config.timeout, cause=exc) from exc
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", pending.method.value, pending.url, exc)
            raise ServiceDeskNetworkError("Network error", cause=exc) from exc

        logger.debug("%s %s -> %d", pending.method.value, pending.full_url, response.status_code)
        return Response(response)


class RequestBuilder:
    """Collects one request's settings; facades create a fresh one per call."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher
        self._method: HttpMethod | None = None
        self._url: str | None = None
        self._query: dict[str, Any] = {}
        self._json: Any = None
        self._content: bytes | None = None
        self._headers: dict[str, str] = {}
        self._multipart: tuple[MultipartPart, ...] = ()
        self._experimental = False

    def set_method(self, method: HttpMethod | str) -> "RequestBuilder":
        self._method = HttpMethod.coerce(method)
        return self

    def set_path(self, relative_path: str) -> "RequestBuilder":
        host = self._dispatcher.config.host
        if not host:
            raise ServiceDeskValidationError("host is not configured")
        self._url = f"{host}{API_PREFIX}{relative_path}"
        return self

    def set_query(self, query: Mapping[str, Any]) -> "RequestBuilder":
        self._query.update(query)
        return self

    def set_body(self, payload: Any) -> "RequestBuilder":
        """Attach a body: bytes and str go out raw, anything else as JSON."""
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        if isinstance(payload, (bytes, bytearray)):
            self._content = bytes(payload)
            self._json = None
        else:
            self._json = coerce_payload(payload)
            self._content = None
        return self

    def set_headers(self, headers: Mapping[str, str]) -> "RequestBuilder":
        for key, value in headers.items():
            self._headers[str(key)] = str(value)
        return self

    def set_multipart(self, parts: Iterable[MultipartPart | Mapping[str, Any]]) -> "RequestBuilder":
        self._multipart = tuple(MultipartPart.coerce(part) for part in parts)
        return self

    def mark_experimental(self) -> "RequestBuilder":
        self._experimental = True
        return self

    def build(self) -> PendingRequest:
        if self._method is None:
            raise ServiceDeskValidationError("request method is not set")
        if self._url is None:
            raise ServiceDeskValidationError("request path is not set")
        return PendingRequest(
            method=self._method,
            url=self._url,
            query=build_query(self._query),
            json=self._json,
            content=self._content,
            headers=self._headers,
            multipart=self._multipart,
            experimental=self._experimental,
        )

    def dispatch(self) -> Response:
        return self._dispatcher.send(self.build())
