"""Pytest configuration and shared fixtures."""

import io
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

import pytest
import structlog

from registry_keychain.exceptions import KeyNotPresentError
from registry_keychain.helper import KeychainHelper
from registry_keychain.store.backend import StoredEntry


class InMemoryStore:
    """Dict-backed CredentialStore that records trusted application paths."""

    def __init__(self) -> None:
        self.entries: dict[tuple[str, str], StoredEntry] = {}
        self.trusted: dict[tuple[str, str], list[str] | None] = {}
        self.calls: list[tuple] = []

    def get(self, id: str, host: str) -> StoredEntry | None:
        self.calls.append(("get", id, host))
        return self.entries.get((id, host))

    def save(
        self,
        id: str,
        host: str,
        user: str,
        token: str,
        trusted_application_paths: Sequence[str] | None = None,
    ) -> None:
        self.calls.append(("save", id, host, user, trusted_application_paths))
        self.entries[(id, host)] = StoredEntry(account=user, data=token)
        self.trusted[(id, host)] = trusted_application_paths

    def delete(self, id: str, host: str) -> None:
        self.calls.append(("delete", id, host))
        if (id, host) not in self.entries:
            raise KeyNotPresentError(f"{id}/{host}")
        del self.entries[(id, host)]
        self.trusted.pop((id, host), None)


class FakeTerminal:
    """Terminal stand-in that records echo changes."""

    def __init__(self, fail_disable: bool = False) -> None:
        self.fail_disable = fail_disable
        self.echo = True
        self.events: list[str] = []

    def disable_echo(self) -> None:
        self.events.append("disable_echo")
        if self.fail_disable:
            raise RuntimeError("tcsetattr failed")
        self.echo = False

    def try_reset(self) -> None:
        self.events.append("reset")
        self.echo = True

    @contextmanager
    def echo_disabled(self) -> Iterator["FakeTerminal"]:
        try:
            self.disable_echo()
            yield self
        finally:
            self.try_reset()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop logging configuration made by a test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def store() -> InMemoryStore:
    """Empty in-memory credential store."""
    return InMemoryStore()


@pytest.fixture
def terminal() -> FakeTerminal:
    """Fake terminal with echo enabled."""
    return FakeTerminal()


@pytest.fixture
def failing_terminal() -> FakeTerminal:
    """Fake terminal whose echo cannot be disabled."""
    return FakeTerminal(fail_disable=True)


@pytest.fixture
def stdout() -> io.StringIO:
    """Captured prompt output."""
    return io.StringIO()


@pytest.fixture
def make_helper(store, terminal, stdout):
    """Build a KeychainHelper wired to the in-memory store and fake terminal."""

    def _make(stdin_text: str = "", id: str = "test-id") -> KeychainHelper:
        return KeychainHelper(
            id,
            store=store,
            terminal_factory=lambda: terminal,
            stdin=io.StringIO(stdin_text),
            stdout=stdout,
        )

    return _make
