"""Command line interface for the auth service startup gate."""

import json
from pathlib import Path
from typing import Optional

import typer
import yaml

from .app import run_app
from .config import CONFIG_FILE, load_settings
from .env import REQUIRED_VARIABLES, Reconciler, SchemaRegistry
from .errors import AppError, ConfigError
from .logging import setup_logging
from .utils.redaction import redact_mapping

app = typer.Typer(help="Auth service environment validation")

DEFAULT_PREFIX = "APP_"

# Template for initial config.toml
INIT_CONFIG_TEMPLATE = f"""# Auth service configuration
# Non-sensitive settings only - secrets belong in the environment file

[app]
env = "development"
prefix = "{DEFAULT_PREFIX}"
env_file_path = ".env"

[validation]
# Fail instead of warning on undeclared {DEFAULT_PREFIX}* variables
strict_unknown = false
# Let the environment file replace variables already set in the process
override_existing = false

[logging]
level = "INFO"
"""


def env_template(prefix: str) -> str:
    """Render an ``.env.example`` listing every required variable."""
    lines = ["# Required environment variables", ""]
    for spec in REQUIRED_VARIABLES:
        lines.append(f"# {spec.description} ({spec.type})")
        lines.append(f"{SchemaRegistry.name(spec, prefix)}=")
    return "\n".join(lines) + "\n"


@app.command()
def run(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file path"
    ),
):
    """Load the configuration and validate the environment before startup."""
    try:
        validated = run_app(config)
    except AppError as e:
        typer.echo(f"[ERROR] {e}", err=True)
        raise typer.Exit(1)

    typer.echo(
        f"[OK] Environment is valid ({len(validated.values)} variables, "
        f"prefix '{validated.prefix}')"
    )


@app.command()
def check(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file path"
    ),
    env_file: Optional[Path] = typer.Option(
        None, "--env-file", "-e", help="Environment file (overrides configuration)"
    ),
    prefix: Optional[str] = typer.Option(
        None, "--prefix", "-p", help="Variable prefix (overrides configuration)"
    ),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--no-strict", help="Fail on undeclared prefixed variables"
    ),
    show: bool = typer.Option(False, "--show", help="Print validated values"),
):
    """Validate an environment file, optionally overriding the configuration."""
    try:
        try:
            settings = load_settings(config)
        except ConfigError:
            # Both overrides given: the configuration file is optional
            if env_file is None or prefix is None:
                raise
            settings = None

        setup_logging(settings.logging.level if settings else "INFO")
        if settings is not None:
            env_file = env_file or Path(settings.app.env_file_path)
            prefix = prefix if prefix is not None else settings.app.prefix
            if strict is None:
                strict = settings.validation.strict_unknown

        override = settings.validation.override_existing if settings else False
        reconciler = Reconciler(strict=bool(strict), override=override)
        validated = reconciler.load_and_validate(env_file, prefix)
    except AppError as e:
        typer.echo(f"[ERROR] {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"[OK] {env_file} is valid")
    if validated.unknown:
        typer.echo("[WARN] Undeclared variables:")
        for name in validated.unknown:
            typer.echo(f"    - {name}")

    if show:
        for name, value in validated.masked().items():
            typer.echo(f"{prefix}{name}={value}")


@app.command()
def schema(
    prefix: str = typer.Option(
        DEFAULT_PREFIX, "--prefix", "-p", help="Variable prefix to display"
    ),
    format: str = typer.Option(
        "table", "--format", "-f", help="Output format (table/json/env)"
    ),
):
    """Show the required environment variables."""
    if format == "json":
        entries = [
            {
                "name": SchemaRegistry.name(spec, prefix),
                "type": str(spec.type),
                "description": spec.description,
                "secret": spec.secret,
            }
            for spec in REQUIRED_VARIABLES
        ]
        typer.echo(json.dumps(entries, indent=2))
    elif format == "env":
        typer.echo(env_template(prefix), nl=False)
    elif format == "table":
        width = max(len(SchemaRegistry.name(spec, prefix)) for spec in REQUIRED_VARIABLES)
        for spec in REQUIRED_VARIABLES:
            name = SchemaRegistry.name(spec, prefix)
            typer.echo(f"{name:<{width}}  {spec.type}")
    else:
        typer.echo(f"[ERROR] Unknown format: {format}", err=True)
        raise typer.Exit(1)


@app.command()
def show(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file path"
    ),
    format: str = typer.Option(
        "yaml", "--format", "-f", help="Output format (yaml/json)"
    ),
):
    """Show the resolved configuration with sensitive values masked."""
    try:
        settings = load_settings(config)
    except AppError as e:
        typer.echo(f"[ERROR] {e}", err=True)
        raise typer.Exit(1)

    masked = redact_mapping(settings.model_dump())
    if format == "json":
        typer.echo(json.dumps(masked, indent=2))
    else:
        typer.echo(yaml.safe_dump(masked, default_flow_style=False, sort_keys=False))


@app.command()
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing files"),
):
    """Initialize configuration files (config.toml and .env.example)."""
    config_file = CONFIG_FILE.with_suffix(".toml")
    example_file = Path(".env.example")

    try:
        if config_file.exists() and not force:
            typer.echo(f"[SKIP] Skipping {config_file.name} (already exists)")
        else:
            config_file.write_text(INIT_CONFIG_TEMPLATE)
            typer.echo(f"[OK] Created {config_file.name}")

        if example_file.exists() and not force:
            typer.echo(f"[SKIP] Skipping {example_file.name} (already exists)")
        else:
            example_file.write_text(env_template(DEFAULT_PREFIX))
            typer.echo(f"[OK] Created {example_file.name}")

        gitignore = Path(".gitignore")
        if gitignore.exists() and ".env" not in gitignore.read_text().splitlines():
            typer.echo("[WARN] Add '.env' to .gitignore to prevent committing secrets!")
    except OSError as e:
        typer.echo(f"[ERROR] Failed to initialize configuration: {e}", err=True)
        raise typer.Exit(1)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
