"""CLI commands for registry-keychain.

The CLI is built using Click with the entry point ``registry-keychain``
(see ``registry_keychain.main``).

Key Commands:
    login, logout, lookup (registry_keychain.cli.registry):
        Manage the registry credentials stored in the OS keychain.
"""

from registry_keychain.cli.registry import login_command, logout_command, lookup_command

__all__ = ["login_command", "logout_command", "lookup_command"]
