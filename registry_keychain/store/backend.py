"""Abstract store protocol for registry credentials."""

from collections.abc import Sequence
from typing import Protocol

from pydantic import BaseModel, ConfigDict


class StoredEntry(BaseModel):
    """An (account, secret) pair held by the store for one (id, host) key."""

    model_config = ConfigDict(frozen=True)

    account: str
    data: str


class CredentialStore(Protocol):
    """Protocol defining the interface for credential stores.

    Entries are addressed by a namespace ``id`` and a registry ``host``. Any
    store implementing these methods can back a ``KeychainHelper``.
    """

    def get(self, id: str, host: str) -> StoredEntry | None:
        """Retrieve an entry.

        Args:
            id: Namespace identifier of the helper
            host: Registry domain

        Returns:
            The stored entry, or None if not found

        Raises:
            KeyNotPresentError: If the store signals absence by raising
            StoreError: If the store operation fails
        """
        ...

    def save(
        self,
        id: str,
        host: str,
        user: str,
        token: str,
        trusted_application_paths: Sequence[str] | None = None,
    ) -> None:
        """Create or overwrite an entry.

        Args:
            id: Namespace identifier of the helper
            host: Registry domain
            user: Account name
            token: Secret to store
            trusted_application_paths: Applications granted silent access,
                or None for the store's default access policy

        Raises:
            StoreError: If the store operation fails
        """
        ...

    def delete(self, id: str, host: str) -> None:
        """Remove an entry.

        Args:
            id: Namespace identifier of the helper
            host: Registry domain

        Raises:
            KeyNotPresentError: If no entry exists
            StoreError: If the store operation fails
        """
        ...
