"""CLI commands for registry credentials.

Commands:
    - login: Store credentials for a registry domain, prompting if needed
    - logout: Remove the stored credentials for a registry domain
    - lookup: Show the stored credentials for a registry domain (masked)

Example:
    Log in, inspect and log out::

        $ registry-keychain login ghcr.io
        Provide registry username ghcr.io: alice
        Provide registry password:
        Login succeeded
        $ registry-keychain lookup ghcr.io
        $ registry-keychain logout ghcr.io
"""

import sys

import click

from registry_keychain.auth import BasicAuthentication
from registry_keychain.config.settings import KeychainSettings
from registry_keychain.exceptions import (
    InvalidInputError,
    KeyNotFoundError,
    KeyNotPresentError,
    RegistryKeychainError,
    StoreError,
)
from registry_keychain.helper import KeychainHelper
from registry_keychain.store.keyring_store import KeyringStore
from registry_keychain.utils.logging_config import get_logger

log = get_logger(__name__)


@click.command(name="login")
@click.argument("domain")
@click.option("--username", "-u", help="Registry username (will prompt if not provided)")
@click.option("--password-stdin", is_flag=True, help="Read the password from stdin")
@click.option(
    "--trusted-app",
    "trusted_apps",
    multiple=True,
    type=click.Path(),
    help="Application allowed to read the credential without prompting (repeatable)",
)
@click.pass_context
def login_command(
    ctx: click.Context,
    domain: str,
    username: str | None,
    password_stdin: bool,
    trusted_apps: tuple[str, ...],
) -> None:
    """Store credentials for a registry DOMAIN.

    Examples:

        registry-keychain login ghcr.io

        echo "$TOKEN" | registry-keychain login ghcr.io -u alice --password-stdin
    """
    settings = _settings(ctx)
    helper = _build_helper(settings)

    if password_stdin and not username:
        click.echo(click.style("Error: --password-stdin requires --username", fg="red"), err=True)
        sys.exit(1)

    try:
        if username is None:
            username = helper.user_prompt(domain)

        if password_stdin:
            password = _read_password_stdin()
        else:
            password = helper.password_prompt()
            click.echo()

        paths = list(trusted_apps) or settings.trusted_application_paths
        helper.save(domain, username, password, paths)

    except RegistryKeychainError as e:
        log.debug("login_failed", domain=domain, error=str(e))
        _report_error(e)
        sys.exit(1)

    log.info("login_succeeded", domain=domain, username=username)
    click.echo(click.style("Login succeeded", fg="green"))


@click.command(name="logout")
@click.argument("domain")
@click.pass_context
def logout_command(ctx: click.Context, domain: str) -> None:
    """Remove stored credentials for a registry DOMAIN."""
    helper = _build_helper(_settings(ctx))

    try:
        helper.delete(domain)
    except KeyNotPresentError:
        click.echo(click.style(f"Not logged in to {domain}", fg="yellow"), err=True)
        sys.exit(1)
    except StoreError as e:
        log.debug("logout_failed", domain=domain, error=str(e))
        _report_error(e)
        sys.exit(1)

    log.info("logout_succeeded", domain=domain)
    click.echo(click.style(f"Removed login credentials for {domain}", fg="green"))


@click.command(name="lookup")
@click.argument("domain")
@click.option("--show-password", is_flag=True, help="Show full password (default: masked)")
@click.option(
    "--prompt-if-missing",
    is_flag=True,
    help="Prompt for credentials when none are stored (they are not saved)",
)
@click.pass_context
def lookup_command(ctx: click.Context, domain: str, show_password: bool, prompt_if_missing: bool) -> None:
    """Show the stored credentials for a registry DOMAIN."""
    helper = _build_helper(_settings(ctx))

    try:
        try:
            auth = helper.lookup(domain)
        except KeyNotFoundError:
            if not prompt_if_missing:
                raise
            log.debug("lookup_prompt_fallback", domain=domain)
            auth = helper.credential_prompt(domain)
            click.echo()
    except RegistryKeychainError as e:
        _report_error(e)
        sys.exit(1)

    if not isinstance(auth, BasicAuthentication):
        click.echo(f"Token: {_mask(auth.token())}")
        return

    click.echo(f"Username: {auth.username}")
    if show_password:
        click.echo(f"Password: {auth.password}")
    else:
        click.echo(f"Password: {_mask(auth.password)}")
        click.echo(click.style("Use --show-password to display the full password", fg="yellow"))


# Helper functions


def _settings(ctx: click.Context) -> KeychainSettings:
    if ctx.obj and ctx.obj.get("settings") is not None:
        return ctx.obj["settings"]
    return KeychainSettings()


def _build_helper(settings: KeychainSettings) -> KeychainHelper:
    """Create a helper backed by the OS keyring for the configured namespace."""
    store = KeyringStore(security_tool=settings.security_tool)
    return KeychainHelper(settings.helper_id, store=store)


def _read_password_stdin() -> str:
    """Read a single password line from stdin.

    Raises:
        InvalidInputError: If stdin is empty
    """
    line = sys.stdin.readline()
    password = line.rstrip("\r\n")
    if not password:
        raise InvalidInputError("No password provided on stdin")
    return password


def _mask(value: str) -> str:
    """Mask all but the first and last four characters of long values.

    Example:
        >>> _mask("ghp_abcdefgh1234")
        'ghp_********1234'
    """
    if len(value) > 8:
        return value[:4] + "*" * (len(value) - 8) + value[-4:]
    return "*" * len(value)


def _report_error(e: RegistryKeychainError) -> None:
    click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
    suggestion = getattr(e, "suggestion", None)
    if suggestion:
        click.echo(click.style(f"Suggestion: {suggestion}", fg="yellow"), err=True)
