"""Issuers of bearer and refresh tokens.

``TokenMap`` keeps issued grants in memory and can revoke them.
``TokenSigner`` signs grants into the tokens themselves and keeps no state.
"""

from __future__ import annotations

import dataclasses
import itertools
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .generator import Assertion, TagGrant, TokenError
from .grant import Grant

__all__ = ["Issuer", "IssuedToken", "TokenMap", "TokenSigner"]

_U64_MASK = (1 << 64) - 1


def _copy_grant(grant: Grant) -> Grant:
    return dataclasses.replace(grant, extensions=grant.extensions.copy())


def _apply_duration(grant: Grant, duration: timedelta | None) -> Grant:
    grant = _copy_grant(grant)
    if duration is not None:
        grant.until = datetime.now(timezone.utc) + duration
    return grant


@dataclass(frozen=True)
class IssuedToken:
    """Token parameters returned to a client."""

    token: str
    refresh: str
    until: datetime


class Issuer(ABC):
    """Creates bearer tokens and recovers the grants behind them."""

    @abstractmethod
    def issue(self, grant: Grant) -> IssuedToken:
        """Create a token authorizing the grant."""

    @abstractmethod
    def recover_token(self, token: str) -> Grant | None:
        """The grant of a bearer token, or None if the token is unknown."""

    @abstractmethod
    def recover_refresh(self, token: str) -> Grant | None:
        """The grant of a refresh token, or None if the token is unknown."""


class TokenMap(Issuer):
    """Keeps track of access and refresh tokens in dictionaries.

    The generator is assumed never to produce the same token for two
    different (usage, grant) pairs during their overlapping lifetime.
    """

    def __init__(self, generator: TagGrant) -> None:
        self._generator = generator
        self._duration: timedelta | None = None
        self._usage = 0
        self._access: dict[str, Grant] = {}
        self._refresh: dict[str, Grant] = {}

    def valid_for(self, duration: timedelta) -> None:
        """Make all grants issued from now on valid for ``duration``."""
        self._duration = duration

    def valid_for_default(self) -> None:
        """Keep the expiry time each grant comes with."""
        self._duration = None

    def revoke(self, token: str) -> None:
        """Forget the grant of a token, whether access or refresh token."""
        self._access.pop(token, None)
        self._refresh.pop(token, None)

    def import_grant(self, token: str, grant: Grant) -> None:
        """Associate an access token with a grant directly, applying the duration."""
        self._access[token] = _apply_duration(grant, self._duration)

    def issue(self, grant: Grant) -> IssuedToken:
        grant = _apply_duration(grant, self._duration)
        usage = self._usage
        token = self._generator.tag(usage, grant)
        refresh = self._generator.tag((usage + 1) & _U64_MASK, grant)
        self._access[token] = _copy_grant(grant)
        self._refresh[refresh] = grant
        self._usage = (usage + 2) & _U64_MASK
        return IssuedToken(token=token, refresh=refresh, until=grant.until)

    def recover_token(self, token: str) -> Grant | None:
        grant = self._access.get(token)
        return None if grant is None else _copy_grant(grant)

    def recover_refresh(self, token: str) -> Grant | None:
        grant = self._refresh.get(token)
        return None if grant is None else _copy_grant(grant)


class TokenSigner(Issuer):
    """Signs grants instead of storing them; issued tokens cannot be revoked."""

    def __init__(self, secret: Assertion | bytes) -> None:
        self._signer = secret if isinstance(secret, Assertion) else Assertion(secret)
        self._duration: timedelta | None = None
        self._counter = itertools.count()
        self._lock = threading.Lock()

    @classmethod
    def ephemeral(cls) -> TokenSigner:
        """A signer with a random key whose tokens live only for this process."""
        return cls(Assertion.ephemeral())

    def valid_for(self, duration: timedelta) -> None:
        """Make all tokens issued from now on valid for ``duration``."""
        self._duration = duration

    def valid_for_default(self) -> None:
        """Keep the expiry time each grant comes with."""
        self._duration = None

    def _next_counter(self) -> int:
        with self._lock:
            return next(self._counter) & _U64_MASK

    def issue(self, grant: Grant) -> IssuedToken:
        grant = _apply_duration(grant, self._duration)
        first = self._next_counter()
        second = self._next_counter()
        token = self._signer.tagged("token").sign(first, grant)
        refresh = self._signer.tagged("refresh").sign(second, grant)
        return IssuedToken(token=token, refresh=refresh, until=grant.until)

    def recover_token(self, token: str) -> Grant | None:
        try:
            return self._signer.tagged("token").extract(token)
        except TokenError:
            return None

    def recover_refresh(self, token: str) -> Grant | None:
        try:
            return self._signer.tagged("refresh").extract(token)
        except TokenError:
            return None