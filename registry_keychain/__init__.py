"""registry-keychain: registry credentials in the OS keychain.

Key Exports:
    KeychainHelper: Look up, save and delete registry credentials, and prompt
        for them interactively.
    Authentication, BasicAuthentication: Credential values for registry clients.
    KeyringStore: Store adapter over the OS keyring.
"""

from registry_keychain.auth import Authentication, BasicAuthentication
from registry_keychain.exceptions import (
    InvalidInputError,
    KeychainHelperError,
    KeyNotFoundError,
    KeyNotPresentError,
    NoControllingTerminalError,
    QueryError,
    RegistryKeychainError,
    StoreError,
    StoreUnavailableError,
    TerminalError,
)
from registry_keychain.helper import KeychainHelper
from registry_keychain.store import CredentialStore, KeyringStore, StoredEntry
from registry_keychain.terminal import Terminal

__version__ = "0.1.0"

__all__ = [
    "Authentication",
    "BasicAuthentication",
    "CredentialStore",
    "InvalidInputError",
    "KeychainHelper",
    "KeychainHelperError",
    "KeyNotFoundError",
    "KeyNotPresentError",
    "KeyringStore",
    "NoControllingTerminalError",
    "QueryError",
    "RegistryKeychainError",
    "StoreError",
    "StoreUnavailableError",
    "StoredEntry",
    "Terminal",
    "TerminalError",
]
