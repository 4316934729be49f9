"""CLI entry point for registry-keychain."""

import sys

import click

from registry_keychain.cli.registry import login_command, logout_command, lookup_command
from registry_keychain.config.settings import KeychainSettings
from registry_keychain.exceptions import ConfigurationError
from registry_keychain.utils.logging_config import configure_logging, get_logger

log = get_logger(__name__)


@click.group()
@click.option("--config", type=click.Path(), default=None, help="Path to YAML configuration file")
@click.option("--log-level", default=None, help="Logging level (overrides configuration)")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON")
@click.option("--id", "helper_id", default=None, help="Credential namespace id (overrides configuration)")
@click.pass_context
def cli(
    ctx: click.Context,
    config: str | None,
    log_level: str | None,
    json_logs: bool,
    helper_id: str | None,
) -> None:
    """registry-keychain: registry credentials in the OS keychain."""
    try:
        settings = KeychainSettings.from_yaml(config) if config else KeychainSettings()
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        sys.exit(1)

    overrides = {}
    if log_level:
        overrides["log_level"] = log_level.upper()
    if helper_id:
        overrides["helper_id"] = helper_id
    if overrides:
        settings = settings.model_copy(update=overrides)

    try:
        configure_logging(settings.log_level, json_logs=json_logs)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    log.debug("settings_loaded", helper_id=settings.helper_id, config=config)
    ctx.obj = {"settings": settings}


cli.add_command(login_command)
cli.add_command(logout_command)
cli.add_command(lookup_command)


if __name__ == "__main__":
    cli()
