from datetime import datetime, timezone

import pytest

from oauthcore.grant import Extensions, Grant, GrantExtension, Value
from oauthcore.scope import parse_scope


class _Named(GrantExtension):
    def __init__(self, name):
        self._name = name

    def identifier(self):
        return self._name


def _filled():
    extensions = Extensions()
    extensions.set_raw("pub", Value.public("content"))
    extensions.set_raw("pub_none", Value.public(None))
    extensions.set_raw("priv", Value.private("private"))
    extensions.set_raw("priv_none", Value.private(None))
    return extensions


def test_iteration():
    extensions = _filled()
    public = list(extensions.public())
    private = list(extensions.private())

    assert sum(1 for n, v in public if n == "pub" and v == "content") == 1
    assert sum(1 for n, v in public if n == "pub_none" and v is None) == 1
    assert len(public) == 2

    assert sum(1 for n, v in private if n == "priv" and v == "private") == 1
    assert sum(1 for n, v in private if n == "priv_none" and v is None) == 1
    assert len(private) == 2


def test_value_access_checks():
    assert Value.public("content").as_public() == "content"
    assert Value.private("private").as_private() == "private"
    with pytest.raises(ValueError):
        Value.public("content").as_private()
    with pytest.raises(ValueError):
        Value.private("private").as_public()


def test_set_and_remove_by_extension():
    extensions = Extensions()
    ext = _Named("pkce")
    extensions.set(ext, Value.public("content"))
    assert "pkce" in extensions
    assert extensions.remove(ext) == Value.public("content")
    assert extensions.remove(ext) is None
    assert len(extensions) == 0


def test_set_overwrites():
    extensions = Extensions()
    extensions.set_raw("pub", Value.public("content"))
    extensions.set_raw("pub", Value.private(None))
    assert list(extensions.public()) == []
    assert list(extensions.private()) == [("pub", None)]


def test_copy_and_equality():
    original = _filled()
    duplicate = original.copy()
    assert duplicate == original
    duplicate.set_raw("extra", Value.public(None))
    assert duplicate != original
    assert len(original) == 4


def test_grant_equality():
    until = datetime(2030, 1, 1, tzinfo=timezone.utc)
    first = Grant("Owner", "Client", parse_scope("default"), "https://example.com", until)
    second = Grant("Owner", "Client", parse_scope("default"), "https://example.com", until)
    assert first == second
    second.extensions.set_raw("pub", Value.public(None))
    assert first != second
    assert len(first.extensions) == 0