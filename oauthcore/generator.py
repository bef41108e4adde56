"""Generators producing code grant, bearer and refresh tokens for a grant.

``RandomGenerator`` relies on the entropy of its tokens to make guessing
infeasible. ``Assertion`` signs the grant itself with an HMAC key. It needs no
storage, but its tokens cannot be revoked.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import math
import secrets
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

import msgpack

from .grant import Extensions, Grant, Value
from .scope import ParseScopeError, parse_scope

__all__ = ["TokenError", "TagGrant", "RandomGenerator", "Assertion", "TaggedAssertion"]

_U64_LIMIT = 1 << 64
_KEY_LENGTH = 32


class TokenError(Exception):
    """A token could not be produced for a grant or could not be recovered."""


class TagGrant(ABC):
    """Produces a token string for a grant.

    For distinct ``usage`` values the result must be indistinguishable from a
    random function, so that one token reveals nothing about another.
    """

    @abstractmethod
    def tag(self, usage: int, grant: Grant) -> str:
        """Sign the grant or produce a random token for it."""


class RandomGenerator(TagGrant):
    """Produces base64 encoded tokens of random bytes, ignoring the grant."""

    def __init__(self, length: int) -> None:
        if length < 0:
            raise ValueError("token length must not be negative")
        self.length = length

    def tag(self, usage: int, grant: Grant) -> str:
        return base64.b64encode(secrets.token_bytes(self.length)).decode("ascii")


def _timestamp(moment: datetime) -> int:
    return math.floor(moment.timestamp())


def _check_counter(counter: int) -> int:
    if not 0 <= counter < _U64_LIMIT:
        raise ValueError("counter must be an unsigned 64-bit integer")
    return counter


def _serialize_grant(grant: Grant) -> list[Any]:
    if any(True for _ in grant.extensions.private()):
        raise TokenError("grants with private extensions cannot be encoded in a token")
    return [
        grant.owner_id,
        grant.client_id,
        str(grant.scope),
        str(grant.redirect_uri),
        _timestamp(grant.until),
        dict(grant.extensions.public()),
    ]


def _deserialize_grant(data: Any) -> Grant:
    if not isinstance(data, list) or len(data) != 6:
        raise TokenError("malformed grant in token")
    owner_id, client_id, scope, redirect_uri, until, public = data
    if not all(isinstance(item, str) for item in (owner_id, client_id, scope, redirect_uri)):
        raise TokenError("malformed grant in token")
    if not isinstance(until, int) or not isinstance(public, dict):
        raise TokenError("malformed grant in token")
    try:
        parsed_scope = parse_scope(scope)
    except ParseScopeError as err:
        raise TokenError(str(err)) from err
    extensions = Extensions()
    for name, content in public.items():
        if not isinstance(name, str) or not (content is None or isinstance(content, str)):
            raise TokenError("malformed extension in token")
        extensions.set_raw(name, Value.public(content))
    try:
        expiry = datetime.fromtimestamp(until, timezone.utc)
    except (OverflowError, OSError, ValueError) as err:
        raise TokenError("expiry time out of range") from err
    return Grant(
        owner_id=owner_id,
        client_id=client_id,
        scope=parsed_scope,
        redirect_uri=redirect_uri,
        until=expiry,
        extensions=extensions,
    )


def _pack(data: Any) -> bytes:
    return msgpack.packb(data, use_bin_type=True)


def _unpack(data: bytes) -> Any:
    try:
        return msgpack.unpackb(data, raw=False)
    except (ValueError, TypeError, msgpack.UnpackException) as err:
        raise TokenError("token is not a valid encoding") from err


class Assertion(TagGrant):
    """Signs grants with an HMAC-SHA256 key.

    Tokens from ``tagged(...).sign`` hold the serialized grant followed by its
    signature. Since the data is not encrypted, grants with private extensions
    are refused.
    """

    def __init__(self, secret: bytes) -> None:
        self._secret = bytes(secret)

    @classmethod
    def ephemeral(cls) -> Assertion:
        """An assertion with a fresh random key, valid for this process only."""
        return cls(secrets.token_bytes(_KEY_LENGTH))

    def tagged(self, tag: str) -> TaggedAssertion:
        """A signer bound to a usage tag."""
        return TaggedAssertion(self, tag)

    def tag(self, usage: int, grant: Grant) -> str:
        payload = _pack([_serialize_grant(grant), _check_counter(usage)])
        return base64.b64encode(self._signature(payload)).decode("ascii")

    def _signature(self, data: bytes) -> bytes:
        return hmac.new(self._secret, data, hashlib.sha256).digest()

    def _generate_tagged(self, counter: int, grant: Grant, tag: str) -> str:
        payload = _pack([_check_counter(counter), _serialize_grant(grant), tag])
        envelope = _pack([payload, self._signature(payload)])
        return base64.b64encode(envelope).decode("ascii")

    def _extract(self, token: str) -> tuple[Grant, str]:
        try:
            decoded = base64.b64decode(token, validate=True)
        except (binascii.Error, ValueError) as err:
            raise TokenError("token is not valid base64") from err
        envelope = _unpack(decoded)
        if (
            not isinstance(envelope, list)
            or len(envelope) != 2
            or not all(isinstance(part, bytes) for part in envelope)
        ):
            raise TokenError("malformed token")
        payload, signature = envelope
        if not hmac.compare_digest(self._signature(payload), signature):
            raise TokenError("token signature is invalid")
        content = _unpack(payload)
        if not isinstance(content, list) or len(content) != 3:
            raise TokenError("malformed token payload")
        counter, grant_data, tag = content
        if not isinstance(counter, int) or not isinstance(tag, str):
            raise TokenError("malformed token payload")
        return _deserialize_grant(grant_data), tag


class TaggedAssertion:
    """Binds a usage tag to an assertion; signatures depend on both."""

    def __init__(self, assertion: Assertion, tag: str) -> None:
        self.assertion = assertion
        self.tag = tag

    def sign(self, counter: int, grant: Grant) -> str:
        """Sign the grant for this usage; ``counter`` should differ per call."""
        return self.assertion._generate_tagged(counter, grant, self.tag)

    def extract(self, token: str) -> Grant:
        """Recover the signed grant, raising TokenError if invalid or of another usage."""
        grant, tag = self.assertion._extract(token)
        if tag != self.tag:
            raise TokenError("token was issued for a different usage")
        return grant