"""CLI interface for keygate"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
import yaml

from keygate.application.readiness_service import ReadinessService
from keygate.domain.models.poll_result import PollOutcome, PollResult
from keygate.domain.models.target import CheckTarget
from keygate.infrastructure.config.config_manager import ConfigManager, ConfigurationError
from keygate.infrastructure.marker_gate import MarkerGate
from keygate.infrastructure.store.factory import StoreClientFactory

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger().setLevel(level)


def _die(message: str, verbose: bool = False, exc: Optional[Exception] = None) -> None:
    """Exit with a user-friendly error message"""
    if exc is not None:
        logger.error(message, exc_info=verbose)
    else:
        logger.error(message)
    raise click.ClickException(message)


def _load_config(ctx: click.Context, overrides: Optional[dict] = None) -> ConfigManager:
    """Load configuration, turning validation errors into CLI errors"""
    verbose = ctx.obj.get("verbose", False)
    try:
        return ConfigManager(config_path=ctx.obj.get("config_path"), overrides=overrides)
    except ConfigurationError as e:
        _die(str(e), verbose=verbose, exc=e)


def _create_service(config_manager: ConfigManager, verbose: bool) -> ReadinessService:
    """Create readiness service from config

    Args:
        config_manager: Configuration manager
        verbose: Verbose mode for error reporting

    Returns:
        ReadinessService instance
    """
    store_config = config_manager.get_store_config()
    marker_config = config_manager.get_marker_config()

    try:
        client = StoreClientFactory.create(
            store_config.client,
            {"timeout": store_config.timeout, "binary": store_config.binary},
        )
    except ValueError as e:
        _die(str(e), verbose=verbose, exc=e)

    marker_gate = None
    if marker_config.enabled:
        marker_gate = MarkerGate(marker_config.path, prefix=marker_config.prefix)
    else:
        logger.debug("Marker gate disabled, check always runs")

    return ReadinessService(client, marker_gate=marker_gate)


def _report(ctx: click.Context, result: PollResult) -> int:
    """Report result and map it to an exit code"""
    if result.outcome == PollOutcome.MISSING_CONFIG:
        click.echo(f"ERROR: {result.reason}.", err=True)
        click.echo(ctx.get_help(), err=True)
    elif not result.success:
        click.echo(f"ERROR: {result.reason}", err=True)
    else:
        logger.debug(f"Check finished: {result.outcome.value} after {result.attempt_count} attempt(s)")
    return result.exit_code


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to .keygate.yml config file",
)
@click.pass_context
def cli(ctx, verbose: bool, config: Path):
    """keygate - wait until a Redis key holds an expected value"""
    ctx.ensure_object(dict)
    setup_logging(verbose)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose


@cli.command(context_settings=CONTEXT_SETTINGS)
@click.option("--host", "-H", type=str, help="Redis host or comma-separated hosts (or REDIS_HOST / REDIS_HOSTS)")
@click.option("--port", "-P", type=int, help="Redis port (or REDIS_PORT)")
@click.option("--password", "-a", type=str, help="Redis password (or REDIS_PASSWORD)")
@click.option("--db", "-n", type=int, help="Redis database number (or REDIS_DB)")
@click.option("--key", "-k", type=str, help="Key to check (or KEY)")
@click.option("--expected", "-e", type=str, help="Expected value (or EXPECTED)")
@click.option("--retries", "-r", type=int, help="Number of attempts, default 1 (or RETRIES)")
@click.option("--interval", "-i", type=float, help="Seconds between attempts, default 1 (or INTERVAL)")
@click.option("--timeout", type=float, help="Seconds before a single lookup is abandoned (or KEYGATE_TIMEOUT)")
@click.option("--marker-path", type=str, help="Marker directory gating the check (or CONFIG_MAP_PATH)")
@click.option("--marker-prefix", type=str, help="Required file name prefix in the marker directory")
@click.option("--no-marker", is_flag=True, help="Always run the check, ignoring the marker directory")
@click.option(
    "--client",
    type=click.Choice(["redis-cli", "redis", "mock"], case_sensitive=False),
    help="Store client backend (or KEYGATE_CLIENT). Overrides config.",
)
@click.pass_context
def check(
    ctx,
    host: str,
    port: int,
    password: str,
    db: int,
    key: str,
    expected: str,
    retries: int,
    interval: float,
    timeout: float,
    marker_path: str,
    marker_prefix: str,
    no_marker: bool,
    client: str,
):
    """Check that a key holds the expected value.

    Exits 0 if the value matches, or if the marker directory says the check
    is not required. Exits 1 if attempts run out, required inputs are
    missing, or redis-cli is not installed.
    """
    verbose = ctx.obj.get("verbose", False)
    overrides = {
        "store": {
            "hosts": host,
            "port": port,
            "password": password,
            "db": db,
            "client": client,
            "timeout": timeout,
        },
        "check": {
            "key": key,
            "expected": expected,
            "retries": retries,
            "interval": interval,
        },
        "marker": {
            "path": marker_path,
            "prefix": marker_prefix,
            "enabled": False if no_marker else None,
        },
    }
    config_manager = _load_config(ctx, overrides)

    try:
        service = _create_service(config_manager, verbose)
        target = CheckTarget.from_config(
            config_manager.get_store_config(), config_manager.get_check_config()
        )
        result = service.check(target)
    except click.ClickException:
        raise
    except Exception as e:
        _die(f"Fatal error: {e}", verbose=verbose, exc=e)

    ctx.exit(_report(ctx, result))


@cli.command("show-config", context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Print the effective configuration as YAML (password redacted)."""
    config_manager = _load_config(ctx)
    click.echo(yaml.safe_dump(config_manager.redacted_dump(), sort_keys=False), nl=False)


def main():
    """Main entry point

    Usage errors exit with 1 rather than click's default of 2.
    """
    try:
        code = cli.main(obj={}, standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(EXIT_FAILURE)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(EXIT_FAILURE)
    sys.exit(code or EXIT_SUCCESS)


if __name__ == "__main__":
    main()
