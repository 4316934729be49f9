"""Configuration for registry-keychain.

Example:
    >>> from registry_keychain.config import KeychainSettings
    >>> settings = KeychainSettings.from_yaml("registry-keychain.yaml")
    >>> settings.helper_id
    'registry-keychain'
"""

from registry_keychain.config.settings import KeychainSettings

__all__ = ["KeychainSettings"]
