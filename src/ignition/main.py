import asyncio
import dataclasses
from typing import Optional

import typer

from ignition import __version__
from ignition.application import run_application
from ignition.config import AppConfig, CacheSettings
from ignition.exceptions import IgnitionError, ShutdownError, classify_startup_error
from ignition.logging_config import logger, setup_logging
from ignition.output import echo_json, get_console, users_table
from ignition.validator import validate_config

app = typer.Typer()
console = get_console()

# Exit codes per startup error kind
EXIT_CODES = {
    "configuration": 2,
    "database": 3,
    "unknown": 1,
}
EXIT_SHUTDOWN_FAILED = 4


@app.callback()
def global_options(
    human: bool = typer.Option(
        False,
        "--human",
        "-H",
        help="Enable human mode: console logging (also via IGNITION_MACHINE_MODE=0)"
    ),
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Console log level when human mode is enabled"
    ),
):
    """
    Ignition: validate, connect, register shutdown hooks, load initial data.

    Machine mode is DEFAULT (no console logs). Use --human/-H to see them.
    """
    setup_logging(level=log_level.upper(), suppress_console=not human, force=True)


def _build_config(
    database_url: Optional[str],
    cache: Optional[bool],
    ttl: Optional[int],
) -> AppConfig:
    """Environment defaults, overridden by whatever was given on the command line."""
    config = AppConfig.from_env()
    cache_settings = config.cache_settings
    if cache is not None:
        cache_settings = dataclasses.replace(cache_settings, enabled=cache)
    if ttl is not None:
        cache_settings = dataclasses.replace(cache_settings, ttl=ttl)
    return AppConfig(
        database_url=database_url if database_url is not None else config.database_url,
        cache_settings=cache_settings,
    )


def _fail(e: Exception, json_output: bool) -> None:
    kind = classify_startup_error(e)
    if json_output:
        echo_json({
            "status": "failed",
            "error_kind": kind,
            "error": str(e),
        })
    else:
        console.print(f"[red]✗[/red] Startup failed ({kind}): {e}")
    raise typer.Exit(code=EXIT_CODES[kind])


def _fail_shutdown(e: ShutdownError, json_output: bool) -> None:
    # Startup succeeded; only the shutdown hooks failed
    if json_output:
        echo_json({"status": "shutdown_failed", "error": str(e)})
    else:
        console.print(f"[red]✗[/red] {e}")
    raise typer.Exit(code=EXIT_SHUTDOWN_FAILED)


DATABASE_URL_OPTION = typer.Option(
    None, "--database-url", "-d", help="Storage URL (default: IGNITION_DATABASE_URL or http://localhost)"
)
CACHE_OPTION = typer.Option(
    None, "--cache/--no-cache", help="Enable or disable the cache (default: IGNITION_CACHE_ENABLED or on)"
)
TTL_OPTION = typer.Option(
    None, "--ttl", help="Cache TTL in seconds (default: IGNITION_CACHE_TTL or 300)"
)
JSON_OPTION = typer.Option(False, "--json", help="Output as JSON")


@app.command("start")
def start_cmd(
    database_url: Optional[str] = DATABASE_URL_OPTION,
    cache: Optional[bool] = CACHE_OPTION,
    ttl: Optional[int] = TTL_OPTION,
    wait: bool = typer.Option(
        False,
        "--wait",
        "-w",
        help="Keep running until SIGTERM/SIGINT, then shut down gracefully",
    ),
    json_output: bool = JSON_OPTION,
):
    """
    Start the application and load the active users.
    """
    config = _build_config(database_url, cache, ttl)
    logger.info(f"Starting with database {config.database_url}")

    try:
        users = asyncio.run(run_application(config, wait=wait))
    except ShutdownError as e:
        _fail_shutdown(e, json_output)
    except IgnitionError as e:
        _fail(e, json_output)

    if json_output:
        echo_json({
            "status": "stopped" if wait else "started",
            "config": config.to_dict(),
            "count": len(users),
            "users": [u.to_dict() for u in users],
        })
        return

    console.print(f"[green]✓[/green] Loaded {len(users)} users")
    console.print(users_table(users))


@app.command("validate")
def validate_cmd(
    database_url: Optional[str] = DATABASE_URL_OPTION,
    cache: Optional[bool] = CACHE_OPTION,
    ttl: Optional[int] = TTL_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Check a configuration without connecting to anything.
    """
    config = _build_config(database_url, cache, ttl)
    try:
        validate_config(config)
    except IgnitionError as e:
        _fail(e, json_output)

    if json_output:
        echo_json({"status": "valid", "config": config.to_dict()})
    else:
        console.print(f"[green]✓[/green] Configuration valid")


@app.command()
def version():
    """
    Prints the current version of Ignition.
    """
    typer.echo(f"Ignition v{__version__}")


if __name__ == "__main__":
    app()
