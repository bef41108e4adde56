"""Scopes of grants and resources: sets of scope-tokens separated by spaces."""

from __future__ import annotations

from collections.abc import Iterable

__all__ = ["ParseScopeError", "Scope", "parse_scope"]


def _is_valid_scope_char(ch: str) -> bool:
    return ch == "\x21" or ch == " " or "\x23" <= ch <= "\x5b" or "\x5d" <= ch <= "\x7e"


class ParseScopeError(ValueError):
    """A character that may not appear in a scope string was found."""

    def __init__(self, character: str) -> None:
        super().__init__(f"Encountered invalid character in scope: {character}")
        self.character = character


class Scope:
    """A conjunction of scope-tokens, partially ordered by set inclusion.

    A token with scope ``B`` may access a resource requiring scope ``A`` iff ``A <= B``.
    """

    __slots__ = ("_tokens",)

    def __init__(self, tokens: Iterable[str] = ()) -> None:
        collected = set()
        for token in tokens:
            for ch in token:
                if ch == " " or not _is_valid_scope_char(ch):
                    raise ParseScopeError(ch)
            if token:
                collected.add(token)
        self._tokens = frozenset(collected)

    @property
    def tokens(self) -> frozenset[str]:
        """The scope-tokens of this scope."""
        return self._tokens

    def partial_cmp(self, rhs: Scope) -> int | None:
        """Compare by inclusion: -1, 0, 1, or None when incomparable."""
        common = len(self._tokens & rhs._tokens)
        if common == len(self._tokens) and common == len(rhs._tokens):
            return 0
        if common == len(self._tokens):
            return -1
        if common == len(rhs._tokens):
            return 1
        return None

    def privileged_to(self, rhs: Scope) -> bool:
        """Whether this scope suffices to access a resource requiring ``rhs``."""
        return rhs <= self

    def allow_access(self, rhs: Scope) -> bool:
        """Whether a resource protected by this scope admits a grant with scope ``rhs``."""
        return self <= rhs

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scope):
            return NotImplemented
        return self._tokens == other._tokens

    def __hash__(self) -> int:
        return hash(self._tokens)

    def __le__(self, other: Scope) -> bool:
        if not isinstance(other, Scope):
            return NotImplemented
        return self._tokens <= other._tokens

    def __lt__(self, other: Scope) -> bool:
        if not isinstance(other, Scope):
            return NotImplemented
        return self._tokens < other._tokens

    def __ge__(self, other: Scope) -> bool:
        if not isinstance(other, Scope):
            return NotImplemented
        return self._tokens >= other._tokens

    def __gt__(self, other: Scope) -> bool:
        if not isinstance(other, Scope):
            return NotImplemented
        return self._tokens > other._tokens

    def __iter__(self):
        return iter(sorted(self._tokens))

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, token: object) -> bool:
        return token in self._tokens

    def __str__(self) -> str:
        return " ".join(sorted(self._tokens))

    def __repr__(self) -> str:
        return f"Scope({sorted(self._tokens)!r})"


def parse_scope(string: str) -> Scope:
    """Parse a space separated scope string, rejecting invalid characters."""
    for ch in string:
        if not _is_valid_scope_char(ch):
            raise ParseScopeError(ch)
    return Scope(part for part in string.split(" ") if part)