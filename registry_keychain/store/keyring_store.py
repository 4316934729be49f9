"""OS-level credential store using the system keyring.

Platform Support (POSIX only, the package needs ``termios``):
- macOS: Keychain
- Linux: Secret Service API (GNOME Keyring, KWallet)

Each entry is stored under keyring service ``id`` and keyring username
``host``. The password slot holds the JSON-encoded ``StoredEntry`` so the
registry account name survives on every keyring backend.
"""

import subprocess
import sys
from collections.abc import Sequence

import keyring
from keyring.backends import fail
from keyring.errors import KeyringError, PasswordDeleteError
from pydantic import ValidationError

from registry_keychain.exceptions import KeyNotPresentError, StoreError, StoreUnavailableError
from registry_keychain.store.backend import StoredEntry
from registry_keychain.utils.logging_config import get_logger

log = get_logger(__name__)

DEFAULT_SECURITY_TOOL = "/usr/bin/security"


class KeyringStore:
    """Credential store backed by the ``keyring`` library.

    Example:
        >>> store = KeyringStore()
        >>> store.save("registry-keychain", "ghcr.io", "alice", "s3cr3t")
        >>> store.get("registry-keychain", "ghcr.io").account
        'alice'
        >>> store.delete("registry-keychain", "ghcr.io")
    """

    def __init__(
        self,
        security_tool: str = DEFAULT_SECURITY_TOOL,
        use_security_tool: bool | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            security_tool: Path to the macOS ``security`` command, used when
                trusted application paths are supplied to ``save``.
            use_security_tool: Whether trusted application paths can be
                applied through ``security_tool``. Defaults to True on macOS.
        """
        self.security_tool = security_tool
        if use_security_tool is None:
            use_security_tool = sys.platform == "darwin"
        self.use_security_tool = use_security_tool

    @property
    def available(self) -> bool:
        """Check if a functional keyring backend is configured.

        Returns False on headless systems where keyring falls back to its
        ``fail`` backend, or when the backend fails to initialize.
        """
        try:
            backend = keyring.get_keyring()
        except Exception as e:
            log.debug("keyring_unavailable", error=str(e))
            return False
        return not isinstance(backend, fail.Keyring)

    def get(self, id: str, host: str) -> StoredEntry | None:
        """Retrieve an entry from the OS keyring.

        Returns:
            The stored entry or None if not found

        Raises:
            StoreUnavailableError: If keyring is not available
            StoreError: If the keyring operation fails or the entry is malformed
        """
        self._require_available()
        reference = _reference(id, host)

        try:
            payload = keyring.get_password(id, host)
        except KeyringError as e:
            raise StoreError(f"Keyring operation failed: {e}", reference=reference) from e

        if payload is None:
            return None

        try:
            entry = StoredEntry.model_validate_json(payload)
        except ValidationError as e:
            raise StoreError("Stored entry is malformed", reference=reference) from e

        log.debug("entry_retrieved", reference=reference)
        return entry

    def save(
        self,
        id: str,
        host: str,
        user: str,
        token: str,
        trusted_application_paths: Sequence[str] | None = None,
    ) -> None:
        """Store an entry in the OS keyring, replacing any existing one.

        Raises:
            StoreUnavailableError: If keyring is not available
            StoreError: If the keyring operation fails
        """
        self._require_available()
        reference = _reference(id, host)
        payload = StoredEntry(account=user, data=token).model_dump_json()

        if trusted_application_paths:
            if self.use_security_tool:
                self._save_with_trusted_applications(id, host, payload, trusted_application_paths)
                log.info(
                    "entry_stored",
                    reference=reference,
                    trusted_applications=len(trusted_application_paths),
                )
                return
            log.warning(
                "trusted_applications_unsupported",
                reference=reference,
                backend=type(keyring.get_keyring()).__name__,
            )

        try:
            keyring.set_password(id, host, payload)
        except KeyringError as e:
            raise StoreError(f"Failed to store entry: {e}", reference=reference) from e

        log.info("entry_stored", reference=reference)

    def delete(self, id: str, host: str) -> None:
        """Delete an entry from the OS keyring.

        Raises:
            StoreUnavailableError: If keyring is not available
            KeyNotPresentError: If no entry exists
            StoreError: If the keyring operation fails
        """
        self._require_available()
        reference = _reference(id, host)

        try:
            keyring.delete_password(id, host)
        except PasswordDeleteError as e:
            raise KeyNotPresentError(reference) from e
        except KeyringError as e:
            raise StoreError(f"Failed to delete entry: {e}", reference=reference) from e

        log.info("entry_deleted", reference=reference)

    def _require_available(self) -> None:
        if not self.available:
            raise StoreUnavailableError(
                "Keyring backend is not available",
                suggestion="Configure a keyring backend (see `keyring --list-backends`)",
            )

    def _save_with_trusted_applications(
        self,
        id: str,
        host: str,
        payload: str,
        trusted_application_paths: Sequence[str],
    ) -> None:
        """Write a generic password item granting silent access to the given apps.

        The item is readable by keyring's macOS backend under the same
        (service, account) pair. ``-w`` goes last with no value so the tool
        prompts for the secret, which is answered on stdin (entry and
        confirmation) and never appears in the argument list. The child runs
        in a new session so the prompt cannot fall through to a terminal.
        """
        cmd = [self.security_tool, "add-generic-password", "-U", "-s", id, "-a", host]
        for path in trusted_application_paths:
            cmd.extend(["-T", path])
        cmd.append("-w")

        reference = _reference(id, host)
        try:
            result = subprocess.run(  # nosec B603
                cmd,
                input=f"{payload}\n{payload}\n",
                capture_output=True,
                text=True,
                timeout=30,
                start_new_session=True,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise StoreError(f"Cannot run {self.security_tool}: {e}", reference=reference) from e

        if result.returncode != 0:
            raise StoreError(
                f"security exited with status {result.returncode}: {result.stderr.strip()}",
                reference=reference,
            )


def _reference(id: str, host: str) -> str:
    return f"{id}/{host}"
