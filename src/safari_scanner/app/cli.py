"""Command-line interface for Safari Storage Scanner."""

from __future__ import annotations

from pathlib import Path

import click

from safari_scanner.config import ConfigError, suggest_config_fix

__all__ = ["cli"]


def validate_config_path(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: Path | None,
) -> Path | None:
    """Validate configuration file path.

    Raises:
        click.BadParameter: If the path is a directory or not a YAML file
    """
    if value is None:
        return value

    if value.exists() and value.is_dir():
        raise click.BadParameter("Configuration path must be a file, not a directory")

    if value.suffix.lower() not in {".yaml", ".yml"}:
        raise click.BadParameter("Configuration file must have a .yaml or .yml extension")

    return value


def validate_log_level(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: str | None,
) -> str | None:
    """Validate and normalize log level.

    Raises:
        click.BadParameter: If the level is unknown
    """
    if value is None:
        return value

    normalized_value = value.upper().strip()
    valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if normalized_value not in valid_levels:
        raise click.BadParameter(
            f'Invalid log level "{value}". Valid options: {", ".join(sorted(valid_levels))}'
        )

    return normalized_value


def _config_failure(error: ConfigError) -> click.ClickException:
    message = str(error)
    suggestion = suggest_config_fix(error)
    if suggestion:
        message = f"{message}\n{suggestion}"
    return click.ClickException(message)


def _package_version() -> str:
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("safari-scanner")
    except PackageNotFoundError:
        return "unknown"


@click.group(invoke_without_command=True)
@click.option(
    "--config", "-c",
    type=click.Path(path_type=Path),
    default=None,
    callback=validate_config_path,
    help="Configuration file path (.yaml or .yml). If not specified, searches standard locations.",
)
@click.option(
    "--log-level", "-l",
    type=str,
    default=None,
    callback=validate_log_level,
    help="Logging verbosity level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
)
@click.version_option(version=_package_version(), prog_name="Safari Storage Scanner")
@click.pass_context
def cli(ctx: click.Context, config: Path | None, log_level: str | None) -> None:
    """Safari Storage Scanner - measure Safari browser data on disk.

    Walks the Safari cookie, cache, history, local storage and database
    directories and reports how much space each one uses.

    Examples:

        # Scan and print a summary table
        safari-scanner

        # Print the results as JSON
        safari-scanner scan --json

        # Serve live scans over HTTP
        safari-scanner serve --port 3001
    """
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["log_level"] = log_level

    if ctx.invoked_subcommand is None:
        ctx.invoke(scan)


@cli.command()
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON instead of a table")
@click.pass_context
def scan(ctx: click.Context, json_output: bool) -> None:
    """Scan all configured locations and print a summary."""
    from safari_scanner.app.runner import ApplicationRunner

    runner = ApplicationRunner(
        config_path=ctx.obj["config"],
        log_level=ctx.obj["log_level"],
    )
    try:
        exit_code = runner.run_scan(json_output=json_output)
    except ConfigError as e:
        raise _config_failure(e) from e
    except KeyboardInterrupt:
        click.echo("\nScan interrupted.", err=True)
        ctx.exit(130)
    ctx.exit(exit_code)


@cli.command()
@click.option("--host", "-h", type=str, default=None, help="Interface to bind (default: localhost)")
@click.option("--port", "-p", type=click.IntRange(1, 65535), default=None, help="Port to listen on (default: 3001)")
@click.option(
    "--static-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory of static files to serve at /",
)
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None, static_dir: Path | None) -> None:
    """Serve scans over HTTP with live Server-Sent Events."""
    from safari_scanner.app.runner import ApplicationRunner

    server_overrides: dict[str, object] = {}
    if host is not None:
        server_overrides["host"] = host
    if port is not None:
        server_overrides["port"] = port
    if static_dir is not None:
        server_overrides["static_dir"] = str(static_dir)

    runner = ApplicationRunner(
        config_path=ctx.obj["config"],
        log_level=ctx.obj["log_level"],
        overrides={"server": server_overrides} if server_overrides else None,
    )
    try:
        exit_code = runner.serve()
    except ConfigError as e:
        raise _config_failure(e) from e
    ctx.exit(exit_code)
