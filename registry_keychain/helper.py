"""Registry credential lookup, persistence and interactive capture.

``KeychainHelper`` wraps a ``CredentialStore`` for one namespace id. ``lookup``
translates store failures into the helper taxonomy (``KeyNotFoundError``,
``QueryError``); ``save`` and ``delete`` let store errors through untouched,
so their callers must be ready for ``StoreError`` and its subclasses.

Nothing is cached: every call round-trips to the store, so changes made by
other processes are seen on the next call.

Example:
    >>> helper = KeychainHelper("registry-keychain")
    >>> try:
    ...     auth = helper.lookup("ghcr.io")
    ... except KeyNotFoundError:
    ...     auth = helper.credential_prompt("ghcr.io")
    ...     helper.save("ghcr.io", auth.username, auth.password)
"""

import sys
from collections.abc import Callable, Sequence
from typing import TextIO

from registry_keychain.auth import Authentication, BasicAuthentication
from registry_keychain.exceptions import (
    InvalidInputError,
    KeyNotFoundError,
    KeyNotPresentError,
    QueryError,
    StoreError,
)
from registry_keychain.store.backend import CredentialStore
from registry_keychain.store.keyring_store import KeyringStore
from registry_keychain.terminal import Terminal


class KeychainHelper:
    """Looks up, saves and deletes registry credentials for one namespace id.

    Attributes:
        id: Namespace identifier passed to every store call.
        store: The credential store adapter.
    """

    def __init__(
        self,
        id: str,
        store: CredentialStore | None = None,
        terminal_factory: Callable[[], Terminal] | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        """Initialize the helper.

        Args:
            id: Namespace identifier for stored entries.
            store: Store adapter. Defaults to ``KeyringStore()``.
            terminal_factory: Returns the terminal whose echo is turned off
                for password entry. Raises when no terminal is attached.
                Defaults to the terminal behind the input stream actually
                read, so an injected ``stdin`` never mutes ``sys.stdin``.
            stdin: Input stream. Defaults to ``sys.stdin`` at call time.
            stdout: Prompt output stream. Defaults to ``sys.stdout`` at call time.
        """
        self.id = id
        self.store = store if store is not None else KeyringStore()
        self._terminal_factory = terminal_factory
        self._stdin = stdin
        self._stdout = stdout

    def lookup(self, domain: str) -> Authentication:
        """Look up the credential stored for ``domain``.

        Raises:
            KeyNotFoundError: If nothing is stored for the domain
            QueryError: If the store fails for any other reason
        """
        try:
            entry = self.store.get(self.id, domain)
        except KeyNotPresentError as e:
            raise KeyNotFoundError(domain) from e
        except StoreError as e:
            raise QueryError(f"query failure: {e!r}") from e

        if entry is None:
            raise KeyNotFoundError(domain)
        return BasicAuthentication(username=entry.account, password=entry.data)

    def delete(self, domain: str) -> None:
        """Delete the credential stored for ``domain``.

        Store errors, including ``KeyNotPresentError``, propagate unchanged.
        """
        self.store.delete(self.id, domain)

    def save(
        self,
        domain: str,
        username: str,
        password: str,
        trusted_application_paths: Sequence[str] | None = None,
    ) -> None:
        """Save a credential for ``domain``, replacing any existing one.

        Args:
            domain: Registry domain.
            username: Registry account name.
            password: Registry password or token.
            trusted_application_paths: Applications allowed to read the entry
                without prompting. None or empty keeps the store's default
                access policy.

        Store errors propagate unchanged.
        """
        paths = list(trusted_application_paths) if trusted_application_paths else None
        self.store.save(self.id, domain, username, password, trusted_application_paths=paths)

    def credential_prompt(self, domain: str) -> Authentication:
        """Prompt for a username and then a password.

        The password is read with terminal echo disabled. The result is not
        saved.
        """
        username = self.user_prompt(domain)
        password = self.password_prompt()
        return BasicAuthentication(username=username, password=password)

    def user_prompt(self, domain: str) -> str:
        """Prompt on stdout and read a username line from stdin.

        Raises:
            InvalidInputError: If stdin is exhausted
        """
        self._write(f"Provide registry username {domain}: ")
        return self._read_line()

    def password_prompt(self) -> str:
        """Prompt on stdout and read a password line with echo disabled.

        Raises:
            NoControllingTerminalError: If no terminal is attached; raised
                before echo is changed or stdin is read
            InvalidInputError: If stdin is exhausted
        """
        self._write("Provide registry password: ")
        if self._terminal_factory is not None:
            console = self._terminal_factory()
        else:
            console = Terminal.current(self._stdin or sys.stdin)
        with console.echo_disabled():
            return self._read_line()

    def _write(self, text: str) -> None:
        stream = self._stdout or sys.stdout
        stream.write(text)
        stream.flush()

    def _read_line(self) -> str:
        stream = self._stdin or sys.stdin
        line = stream.readline()
        if not line:
            raise InvalidInputError()
        return line.removesuffix("\n").removesuffix("\r")
