"""Simple, owning request and response types for HTTP-less endpoints."""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

__all__ = ["Status", "Body", "Request", "Response", "MapErr"]


class Status(enum.IntEnum):
    """The HTTP status codes a response can carry."""

    OK = 200
    REDIRECT = 302
    BAD_REQUEST = 400
    UNAUTHORIZED = 401


@dataclass(frozen=True)
class Body:
    """Response body content; JSON bodies are flagged with ``is_json``."""

    content: str
    is_json: bool = False

    def as_str(self) -> str:
        """The content of the body."""
        return self.content


@dataclass
class Request:
    """Query parameters, url-encoded body parameters and authorization header."""

    query: dict[str, str] = field(default_factory=dict)
    urlbody: dict[str, str] = field(default_factory=dict)
    auth: str | None = None

    def query_parameters(self) -> Mapping[str, str]:
        """A read-only view of the query parameters."""
        return MappingProxyType(self.query)

    def urlbody_parameters(self) -> Mapping[str, str]:
        """A read-only view of the ``x-www-form-urlencoded`` body parameters."""
        return MappingProxyType(self.urlbody)

    def authheader(self) -> str | None:
        """The authorization header, if one was provided."""
        return self.auth


@dataclass
class Response:
    """Status, location header, authentication challenge and body."""

    status: Status = Status.OK
    location: str | None = None
    www_authenticate: str | None = None
    body: Body | None = None

    def ok(self) -> None:
        """Set status 200."""
        self.status = Status.OK
        self.location = None
        self.www_authenticate = None

    def redirect(self, url: str) -> None:
        """Redirect the user agent to ``url``."""
        self.status = Status.REDIRECT
        self.location = url
        self.www_authenticate = None

    def client_error(self) -> None:
        """Set status 400."""
        self.status = Status.BAD_REQUEST
        self.location = None
        self.www_authenticate = None

    def unauthorized(self, header_value: str) -> None:
        """Set status 401 with a ``WWW-Authenticate`` header."""
        self.status = Status.UNAUTHORIZED
        self.location = None
        self.www_authenticate = header_value

    def body_text(self, text: str) -> None:
        """A plain text body."""
        self.body = Body(text)

    def body_json(self, data: str) -> None:
        """A JSON body, media type ``application/json``."""
        self.body = Body(data, is_json=True)


class MapErr:
    """Wraps a request or response, mapping the errors its methods raise."""

    def __init__(self, inner: Any, mapper: Callable[[Exception], BaseException]) -> None:
        self._inner = inner
        self._mapper = mapper

    def into_inner(self) -> Any:
        """The wrapped request or response."""
        return self._inner

    def call(self, method: str, *args: Any) -> Any:
        """Call a public method of the inner object, mapping any error it raises."""
        if method.startswith("_"):
            raise AttributeError(f"{method!r} is not a public method")
        bound = getattr(self._inner, method)
        try:
            return bound(*args)
        except Exception as err:
            raise self._mapper(err) from err