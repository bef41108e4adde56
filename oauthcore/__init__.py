"""OAuth2 server primitives: scopes, grants, token generators, issuers, simple request types and addons."""

__version__ = "0.1.0"

__all__ = ["addons", "generator", "grant", "issuer", "request", "scope"]