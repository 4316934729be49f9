"""Custom exception hierarchy for registry-keychain.

The helper exposes a small, stable taxonomy to its callers. Errors raised by
the credential store adapter and the terminal controller live in their own
subtrees and are never translated into the helper taxonomy by ``save`` or
``delete``.

Exception Hierarchy:
    RegistryKeychainError (base)
    ├── ConfigurationError
    ├── KeychainHelperError
    │   ├── KeyNotFoundError
    │   ├── InvalidInputError
    │   └── QueryError
    ├── StoreError
    │   ├── KeyNotPresentError
    │   └── StoreUnavailableError
    └── TerminalError
        └── NoControllingTerminalError

Example Usage:
    >>> from registry_keychain.exceptions import KeyNotFoundError
    >>> try:
    ...     auth = helper.lookup("registry.example.com")
    ... except KeyNotFoundError:
    ...     auth = helper.credential_prompt("registry.example.com")
"""


class RegistryKeychainError(Exception):
    """Base exception for all registry-keychain errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(RegistryKeychainError):
    """Configuration-related errors.

    Examples:
        - Configuration file not found
        - Invalid YAML syntax
        - Invalid configuration values
    """

    pass


class KeychainHelperError(RegistryKeychainError):
    """Errors surfaced by ``KeychainHelper.lookup`` and the interactive prompts."""

    pass


class KeyNotFoundError(KeychainHelperError):
    """No credential is stored for the helper id and domain."""

    def __init__(self, domain: str | None = None) -> None:
        self.domain = domain
        message = "No credential found"
        if domain:
            message = f"No credential found for {domain}"
        super().__init__(message)


class InvalidInputError(KeychainHelperError):
    """An interactive read from standard input returned no line."""

    def __init__(self, message: str = "No input could be read") -> None:
        super().__init__(message)


class QueryError(KeychainHelperError):
    """The credential store failed while answering a lookup.

    The message embeds a description of the underlying store failure; the
    original exception is also available as ``__cause__``.
    """

    pass


class StoreError(RegistryKeychainError):
    """Failure reported by a credential store adapter.

    Attributes:
        message: Human-readable error description
        reference: The store key that failed (e.g., "registry-keychain/ghcr.io")
        suggestion: Optional suggestion for resolution
    """

    def __init__(
        self,
        message: str,
        reference: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            reference: The store key that failed
            suggestion: Optional suggestion for resolution
        """
        self.reference = reference
        self.suggestion = suggestion

        full_message = message
        if reference:
            full_message = f"{message} (reference: {reference})"
        if suggestion:
            full_message = f"{full_message}\nSuggestion: {suggestion}"

        super().__init__(full_message)
        # Preserve original message (super sets self.message to full_message)
        self.message = message


class KeyNotPresentError(StoreError):
    """The store holds no entry under the requested key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__("Entry not present", reference=key)


class StoreUnavailableError(StoreError):
    """The native credential store cannot be used on this system."""

    pass


class TerminalError(RegistryKeychainError):
    """Terminal attribute manipulation failed."""

    pass


class NoControllingTerminalError(TerminalError):
    """Standard input is not attached to an interactive terminal."""

    pass
