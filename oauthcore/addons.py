"""Simple extension system: addons taking part in authorization and token requests."""

from __future__ import annotations

import enum
from abc import abstractmethod
from dataclasses import dataclass
from typing import Any

from .grant import Extensions, GrantExtension, Value

__all__ = [
    "AddonError",
    "AddonKind",
    "AddonResult",
    "AuthorizationAddon",
    "AccessTokenAddon",
    "AddonList",
]


class AddonError(Exception):
    """An addon refused to permit the request."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"request denied by extension {identifier!r}")
        self.identifier = identifier


class AddonKind(enum.Enum):
    """The outcome of an addon processing a request."""

    OK = "ok"
    DATA = "data"
    ERR = "err"


@dataclass(frozen=True)
class AddonResult:
    """Outcome of an addon: allow, allow with data attached, or deny."""

    kind: AddonKind
    value: Value | None = None

    @classmethod
    def ok(cls) -> AddonResult:
        """Allow the request unchanged."""
        return cls(AddonKind.OK)

    @classmethod
    def data(cls, value: Value) -> AddonResult:
        """Allow the request and attach ``value`` to the grant."""
        return cls(AddonKind.DATA, value)

    @classmethod
    def err(cls) -> AddonResult:
        """Do not permit the request."""
        return cls(AddonKind.ERR)


class AuthorizationAddon(GrantExtension):
    """An extension reacting to an initial authorization code request."""

    @abstractmethod
    def execute(self, request: Any) -> AddonResult:
        """Provide data for this request or signal faulty data."""


class AccessTokenAddon(GrantExtension):
    """An extension reacting to an access token request."""

    @abstractmethod
    def execute(self, request: Any, code_data: Value | None) -> AddonResult:
        """Process the request, given the data stored during authorization, if any."""


def _apply(addon: GrantExtension, result: AddonResult, collected: Extensions) -> None:
    if result.kind is AddonKind.DATA:
        if result.value is None:
            raise ValueError("a data result must carry a value")
        collected.set(addon, result.value)
    elif result.kind is AddonKind.ERR:
        raise AddonError(addon.identifier())


class AddonList:
    """A list of authorization and access token addons, run in order of addition."""

    def __init__(self) -> None:
        self._authorization: list[AuthorizationAddon] = []
        self._access_token: list[AccessTokenAddon] = []

    @property
    def authorization(self) -> tuple[AuthorizationAddon, ...]:
        """The addons run for authorization requests."""
        return tuple(self._authorization)

    @property
    def access_token(self) -> tuple[AccessTokenAddon, ...]:
        """The addons run for access token requests."""
        return tuple(self._access_token)

    def push_authorization(self, addon: AuthorizationAddon) -> None:
        """Add an addon that only applies to authorization."""
        if not isinstance(addon, AuthorizationAddon):
            raise TypeError("addon must be an AuthorizationAddon")
        self._authorization.append(addon)

    def push_access_token(self, addon: AccessTokenAddon) -> None:
        """Add an addon that only applies to access token requests."""
        if not isinstance(addon, AccessTokenAddon):
            raise TypeError("addon must be an AccessTokenAddon")
        self._access_token.append(addon)

    def push_code(self, addon: Any) -> None:
        """Add an addon to both the authorization and the access token addons."""
        if not (isinstance(addon, AuthorizationAddon) and isinstance(addon, AccessTokenAddon)):
            raise TypeError("addon must be both an AuthorizationAddon and an AccessTokenAddon")
        self._authorization.append(addon)
        self._access_token.append(addon)

    def extend_authorization(self, request: Any) -> Extensions:
        """Run the authorization addons, collecting their data; raise AddonError on denial."""
        collected = Extensions()
        for addon in self._authorization:
            _apply(addon, addon.execute(request), collected)
        return collected

    def extend_access_token(self, request: Any, data: Extensions) -> Extensions:
        """Run the access token addons on the grant's data; raise AddonError on denial."""
        remaining = data.copy()
        collected = Extensions()
        for addon in self._access_token:
            stored = remaining.remove(addon)
            _apply(addon, addon.execute(request, stored), collected)
        return collected

    def __repr__(self) -> str:
        authorization = [addon.identifier() for addon in self._authorization]
        access_token = [addon.identifier() for addon in self._access_token]
        return f"AddonList(authorization={authorization!r}, access_token={access_token!r})"