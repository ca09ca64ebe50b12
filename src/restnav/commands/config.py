"""``restnav config``: the global settings file and saved profiles."""

from __future__ import annotations

import typer

from restnav.exit_codes import EXIT_INVALID_USAGE
from restnav.output import error, format_response, info, print_data, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Print the global configuration.

    The config directory goes to stderr, the settings to stdout::

        restnav --json config show
    """
    from restnav.config import get_config_dir, load_global_config

    info(f"Config directory: {get_config_dir()}")
    format_response(load_global_config().model_dump(mode="json"))


@config_app.command("profiles")
def config_profiles() -> None:
    """List saved profile names, one per line."""
    from restnav.config import list_profiles

    for name in list_profiles():
        print_data(name)


@config_app.command("delete-profile")
def config_delete_profile(
    name: str = typer.Argument(help="Profile to delete."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
) -> None:
    """Delete a saved profile."""
    from restnav.config import delete_profile

    if not yes and not typer.confirm(f'Delete profile "{name}"?'):
        info("Cancelled.")
        raise typer.Exit()
    delete_profile(name)
    success(f'Profile "{name}" deleted.')


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Dotted key, e.g. 'output.format'."),
    value: str = typer.Argument(help="New value, coerced to the field's type."),
) -> None:
    """Set one global setting.

    Example::

        restnav config set default_profile prod
        restnav config set auto_select_single_profile false
    """
    from restnav.config import set_global_value
    from restnav.exceptions import ConfigError

    try:
        set_global_value(key, value)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None
    success(f"Set {key} = {value}")


@config_app.command("reset")
def config_reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
) -> None:
    """Restore the global configuration defaults. Profiles are kept."""
    from restnav.config import save_global_config
    from restnav.models import GlobalConfig

    if not yes and not typer.confirm("Reset all config to defaults?"):
        info("Cancelled.")
        raise typer.Exit()
    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
