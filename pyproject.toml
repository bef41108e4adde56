[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oauthcore"
version = "0.1.0"
description = "Primitives for OAuth2 servers: scopes, grants, token generators, issuers, simple request/response types and addons."
requires-python = ">=3.10"
keywords = ["oauth2", "oauth", "authorization", "tokens", "scope", "grant", "hmac"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Session",
    "Topic :: Security",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "msgpack",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["oauthcore"]

[tool.pytest.ini_options]
addopts = "-ra"
