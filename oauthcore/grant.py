"""Grants and the extension data attached to them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime

from .scope import Scope

__all__ = ["GrantExtension", "Value", "Extensions", "Grant"]


class GrantExtension(ABC):
    """Names an extension type for parsing and storing its data."""

    @abstractmethod
    def identifier(self) -> str:
        """A unique identifier distinguishing this extension type."""


@dataclass(frozen=True)
class Value:
    """Extension data with an access restriction: public or private."""

    content: str | None = None
    is_private: bool = False

    @classmethod
    def public(cls, content: str | None = None) -> Value:
        """Data the token holder may read and interpret."""
        return cls(content, False)

    @classmethod
    def private(cls, content: str | None = None) -> Value:
        """Data whose content and existence must stay secret."""
        return cls(content, True)

    def as_public(self) -> str | None:
        """Return the content, raising ValueError if the value is private."""
        if self.is_private:
            raise ValueError("extension value is private")
        return self.content

    def as_private(self) -> str | None:
        """Return the content, raising ValueError if the value is public."""
        if not self.is_private:
            raise ValueError("extension value is public")
        return self.content


class Extensions:
    """Maps extension identifiers to their stored values."""

    def __init__(self) -> None:
        self._extensions: dict[str, Value] = {}

    def set(self, extension: GrantExtension, content: Value) -> None:
        """Store content for an extension instance."""
        self._extensions[extension.identifier()] = content

    def set_raw(self, identifier: str, content: Value) -> None:
        """Store content under an identifier without an extension instance."""
        self._extensions[identifier] = content

    def remove(self, extension: GrantExtension) -> Value | None:
        """Take out and return the data of an extension, or None if absent."""
        return self._extensions.pop(extension.identifier(), None)

    def public(self) -> Iterator[tuple[str, str | None]]:
        """Yield (identifier, content) of the public extensions."""
        for name, value in self._extensions.items():
            if not value.is_private:
                yield name, value.content

    def private(self) -> Iterator[tuple[str, str | None]]:
        """Yield (identifier, content) of the private extensions."""
        for name, value in self._extensions.items():
            if value.is_private:
                yield name, value.content

    def copy(self) -> Extensions:
        duplicate = Extensions()
        duplicate._extensions = dict(self._extensions)
        return duplicate

    def __len__(self) -> int:
        return len(self._extensions)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._extensions

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Extensions):
            return NotImplemented
        return self._extensions == other._extensions

    def __repr__(self) -> str:
        return f"Extensions({self._extensions!r})"


@dataclass
class Grant:
    """All information bound to an authorization code or token."""

    owner_id: str
    client_id: str
    scope: Scope
    redirect_uri: str
    until: datetime
    extensions: Extensions = field(default_factory=Extensions)