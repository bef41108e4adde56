# oauthcore

Building blocks for the server side of OAuth2. The package has no web framework dependency. Its one third-party dependency is `msgpack`, which encodes signed tokens.

## Modules

### `oauthcore.scope`

- `Scope` is a set of scope tokens.
- `parse_scope(string)` splits a string on spaces. It raises `ParseScopeError`, a `ValueError`, when the string holds a character outside `!`, `#`–`[`, `]`–`~` and the space.
- Scopes are ordered by set inclusion, so `<=`, `<`, `>=` and `>` work on them.
- `partial_cmp` returns `-1`, `0` or `1`, or `None` when neither scope contains the other.
- `allow_access(rhs)` is `self <= rhs`. `privileged_to(rhs)` is `rhs <= self`.
- `str(scope)` joins the tokens in sorted order.

### `oauthcore.grant`

- `Grant` is a dataclass with these fields: `owner_id`, `client_id`, `scope`, `redirect_uri`, `until` (a `datetime`) and `extensions`.
- `Extensions` maps identifiers to `Value` entries:
  - `set` stores an entry for a `GrantExtension` instance.
  - `set_raw` stores an entry under a plain identifier.
  - `remove` takes an entry out and returns it.
  - `public()` and `private()` yield `(identifier, content)` pairs.
- `Value.public(content)` and `Value.private(content)` build entries. `as_public()` and `as_private()` raise `ValueError` when the kind does not match.

### `oauthcore.generator`

- `TagGrant` is the interface for token generators. Its one method is `tag(usage, grant)`.
- `RandomGenerator(length)` returns base64 text made from `length` random bytes. It ignores the grant.
- `Assertion(secret)` signs with HMAC-SHA256. `Assertion.ephemeral()` makes one with a random key.
  - `tag(usage, grant)` returns a base64 signature of the grant and the usage counter.
  - `tagged(tag)` returns a `TaggedAssertion` bound to one usage tag.
- `TaggedAssertion` has two methods:
  - `sign(counter, grant)` returns a token. The token is msgpack-encoded and then base64-encoded, and it holds the grant, the counter, the tag and the signature.
  - `extract(token)` returns the grant from a token.
- Signing and extraction raise `TokenError` in these cases:
  - the grant has private extensions;
  - the token is malformed;
  - the signature is wrong;
  - the token carries a different tag.
- Counters must fit in an unsigned 64-bit integer, otherwise `ValueError` is raised.
- The expiry time in a signed token is kept to whole seconds.

### `oauthcore.issuer`

- `Issuer` is the interface for issuers. Its methods are `issue(grant)`, `recover_token(token)` and `recover_refresh(token)`.
- `issue` returns an `IssuedToken` with the fields `token`, `refresh` and `until`.
- The recover methods return the grant, or `None` when the token is unknown or invalid.
- `TokenMap(generator)` keeps issued grants in in-memory dictionaries:
  - `revoke(token)` forgets a grant.
  - `import_grant(token, grant)` registers an access token directly.
- `TokenSigner(secret)` stores nothing, because every token is signed by an `Assertion`. `secret` may be key bytes or an `Assertion`. `TokenSigner.ephemeral()` uses a random key.
- For both issuers, `valid_for(timedelta)` sets each newly issued grant to expire that long from now. `valid_for_default()` keeps the expiry the grant came with.

### `oauthcore.request`

These types are for endpoints that do not speak HTTP, and for tests.

- `Request` holds the `query` and `urlbody` dictionaries and an optional `auth` header.
- `Response` holds a `status`, a `location`, a `www_authenticate` value and a `body`:
  - `status` is a `Status` value: `OK`, `REDIRECT`, `BAD_REQUEST` or `UNAUTHORIZED`.
  - `body` is a `Body`, or `None` when not set.
  - Its methods `ok`, `redirect`, `client_error`, `unauthorized`, `body_text` and `body_json` set these fields.
- `MapErr(inner, mapper)` wraps a request or a response. `call(method, *args)` runs a public method of the wrapped object and passes any exception it raises through `mapper`.

### `oauthcore.addons`

- An `AddonList` holds `AuthorizationAddon` and `AccessTokenAddon` instances. Add them with `push_authorization`, `push_access_token` or `push_code`; `push_code` adds the addon to both lists.
- Each addon returns an `AddonResult`, made with `ok()`, `data(value)` or `err()`.
- `extend_authorization(request)` runs the addons in the order they were added and returns the collected `Extensions`.
- `extend_access_token(request, data)` does the same. It also hands each addon the value it stored earlier in `data`.
- When an addon denies the request, both methods raise `AddonError`.

## Example

```python
from datetime import datetime, timedelta, timezone

from oauthcore.generator import RandomGenerator
from oauthcore.grant import Extensions, Grant
from oauthcore.issuer import TokenMap, TokenSigner
from oauthcore.scope import parse_scope

grant = Grant(
    owner_id="Owner",
    client_id="Client",
    scope=parse_scope("default"),
    redirect_uri="https://example.com",
    until=datetime.now(timezone.utc) + timedelta(hours=1),
    extensions=Extensions(),
)

issuer = TokenMap(RandomGenerator(16))
issued = issuer.issue(grant)
assert issuer.recover_token(issued.token).client_id == "Client"

issuer.revoke(issued.token)
assert issuer.recover_token(issued.token) is None

signer = TokenSigner.ephemeral()
signed = signer.issue(grant)
assert signer.recover_refresh(signed.refresh).owner_id == "Owner"
assert signer.recover_token(signed.refresh) is None
```

### Scope comparison

```python
from oauthcore.scope import parse_scope

grant_scope = parse_scope("some_scope other_scope")
resource_scope = parse_scope("some_scope")

assert resource_scope.allow_access(grant_scope)
assert grant_scope.privileged_to(resource_scope)
assert parse_scope("some_scope third_scope").partial_cmp(grant_scope) is None
```

## What this package does not do

The package supplies primitives only. It does not provide:

- authorization-code, access-token or resource flows;
- client registration or authorization-code storage;
- an HTTP server or bindings to a web framework;
- any concrete addon, such as PKCE.

Token state lives only in memory (`TokenMap`), or inside the tokens themselves (`TokenSigner`). There is no persistent storage.

## Running the tests

```
pip install ".[test]"
pytest
```