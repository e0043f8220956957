"""Settings management CLI commands."""

import json

import click

from cwlflow.core.settings import CwlflowSettings, SettingsManager


@click.group()
def settings() -> None:
    """Manage cwlflow settings."""
    pass


@settings.command()
def init() -> None:
    """Initialize settings file with defaults.

    Creates ~/.cwlflow/settings.json with default configuration.
    """
    manager = SettingsManager()

    if manager.settings_path.exists():
        click.confirm(f"Settings file already exists at {manager.settings_path}. Overwrite?", abort=True)

    default_settings = CwlflowSettings()
    manager.save(default_settings)

    click.echo(f"Created settings file at: {manager.settings_path}")
    click.echo("\nDefault settings:")
    click.echo(json.dumps(default_settings.model_dump(), indent=2))


@settings.command()
def show() -> None:
    """Show current settings, including environment overrides."""
    manager = SettingsManager()
    current = manager.load()

    click.echo(f"Settings file: {manager.settings_path}")
    click.echo("\nCurrent settings:")
    click.echo(json.dumps(current.model_dump(), indent=2))
