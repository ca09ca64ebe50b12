"""Init command -- create a connection profile.

Implements the ``restnav init`` top-level command: it writes a
:class:`~restnav.models.Profile` to the profiles directory and, unless told
otherwise, pins it as the default for the current directory through a
project-local ``restnav.json``.
"""

from __future__ import annotations

from typing import Optional

import typer

from restnav.output import info, success


def init_command(
    name: str = typer.Argument(help="Profile name."),
    base_url: str = typer.Option(
        ..., "--base-url", help="Scheme and host of the API, e.g. https://api.example.com."
    ),
    account_sid: Optional[str] = typer.Option(
        None, "--account-sid", help="Account identifier used for auth and the account shortcut."
    ),
    token_source: Optional[str] = typer.Option(
        None,
        "--token-source",
        help="Where to read the auth token: env:VAR, file:/path, or prompt.",
    ),
    api_version: str = typer.Option(
        "2010-04-01", "--api-version", help="First path segment of every resource."
    ),
    no_project: bool = typer.Option(
        False, "--no-project", help="Do not write ./restnav.json."
    ),
) -> None:
    """Create a connection profile.

    Example::

        restnav init prod --base-url https://api.example.com \\
            --account-sid AC123 --token-source env:RESTNAV_AUTH_TOKEN
    """
    from restnav.config import pin_project_profile, profile_exists, save_profile
    from restnav.models import Profile

    if profile_exists(name):
        info(f'Profile "{name}" already exists and will be overwritten.')

    profile = Profile(
        name=name,
        base_url=base_url,
        api_version=api_version,
        account_sid=account_sid,
        auth_token_source=token_source,
    )
    path = save_profile(profile)
    info(f"Saved {path}")

    if not no_project:
        pin_project_profile(name)

    success(f'Profile "{name}" created.')
