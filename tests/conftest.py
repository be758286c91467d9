"""Shared fixtures."""

import os

import pytest

from ghgate.auth.reauth import ESSENTIALS_CONNECT, GITHUB_CONNECT
from ghgate.config import reset_settings
from ghgate.host.dispatch import CommandRegistry


class FakeTokenSource:
    """Credential store stand-in holding a single token."""

    def __init__(self, token: str | None = None, target: str = "https://github.com"):
        self.token = token
        self.target = target
        self.lookups = 0

    def lookup_token(self) -> str | None:
        self.lookups += 1
        return self.token


class FakeLoginProvider:
    """Re-authentication handler that writes the next token into the store."""

    def __init__(self, store: FakeTokenSource, tokens: list[str | None]):
        self.store = store
        self.tokens = list(tokens)
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1
        if self.tokens:
            self.store.token = self.tokens.pop(0)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep user config and environment out of the tests."""
    for key in list(os.environ):
        if key.startswith("GHGATE_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr("ghgate.config.CONFIG_PATH", tmp_path / "config.yaml")
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def registry():
    """Empty host command registry."""
    return CommandRegistry()


@pytest.fixture
def endpoints():
    """Default endpoint order."""
    return (ESSENTIALS_CONNECT, GITHUB_CONNECT)
