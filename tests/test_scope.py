import pytest

from oauthcore.scope import ParseScopeError, Scope, parse_scope


def test_parsing_round_trip():
    scope = Scope(["default", "password", "email"])
    formatted = str(scope)
    assert parse_scope(formatted) == scope
    assert parse_scope("email password default") == scope


def test_compare():
    scope_base = parse_scope("cap1 cap2")
    scope_less = parse_scope("cap1")
    scope_uncmp = parse_scope("cap1 cap3")

    assert scope_base.partial_cmp(scope_less) == 1
    assert scope_less.partial_cmp(scope_base) == -1
    assert scope_base.partial_cmp(scope_uncmp) is None
    assert scope_uncmp.partial_cmp(scope_base) is None
    assert scope_base.partial_cmp(scope_base) == 0

    assert scope_base.privileged_to(scope_less)
    assert scope_base.privileged_to(scope_base)
    assert scope_less.allow_access(scope_base)
    assert scope_base.allow_access(scope_base)

    assert not scope_less.privileged_to(scope_base)
    assert not scope_base.allow_access(scope_less)

    assert not scope_less.privileged_to(scope_uncmp)
    assert not scope_base.privileged_to(scope_uncmp)
    assert not scope_uncmp.allow_access(scope_less)
    assert not scope_uncmp.allow_access(scope_base)


def test_documented_example():
    grant_scope = parse_scope("some_scope other_scope")
    resource_scope = parse_scope("some_scope")
    uncomparable = parse_scope("some_scope third_scope")

    assert resource_scope <= grant_scope
    assert resource_scope.allow_access(grant_scope)
    assert not (uncomparable <= grant_scope)
    assert not uncomparable.allow_access(grant_scope)
    assert not (grant_scope <= uncomparable)
    assert not grant_scope.allow_access(uncomparable)


def test_multiple_spaces_are_ignored():
    assert parse_scope("  a   b ") == parse_scope("a b")
    assert len(parse_scope("   ")) == 0


@pytest.mark.parametrize("bad", ['"', "\\", "\t", "é"])
def test_invalid_characters_rejected(bad):
    with pytest.raises(ParseScopeError) as info:
        parse_scope(f"ok{bad}scope")
    assert info.value.character == bad
    assert str(info.value) == f"Encountered invalid character in scope: {bad}"


def test_constructor_rejects_space_in_token():
    with pytest.raises(ParseScopeError):
        Scope(["two words"])


def test_strict_ordering_and_hash():
    small = parse_scope("a")
    big = parse_scope("a b")
    assert small < big
    assert big > small
    assert not small < small
    assert {parse_scope("b a"), big} == {big}