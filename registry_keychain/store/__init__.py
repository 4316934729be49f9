"""Credential store adapters.

Key Exports:
    CredentialStore: Protocol every store adapter implements.
    StoredEntry: Account and secret held under one (id, host) key.
    KeyringStore: Adapter over the OS keyring.
"""

from registry_keychain.store.backend import CredentialStore, StoredEntry
from registry_keychain.store.keyring_store import KeyringStore

__all__ = ["CredentialStore", "StoredEntry", "KeyringStore"]
