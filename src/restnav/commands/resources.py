"""Resource commands -- list, fetch, and modify resources by path.

Every command takes a resource path relative to the API version root, for
example ``/Accounts/AC123/SIP/Domains``. Paths go through the generic
:meth:`~restnav.rest.Client.collection` and
:meth:`~restnav.rest.Client.instance` handles, so any endpoint of the tree
is reachable without a dedicated command.
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from restnav.exceptions import InvalidUsageError


def _open_client(ctx: typer.Context) -> Any:
    """Build a :class:`~restnav.rest.Client` from the resolved profile.

    Raises:
        ConfigError: If no profile can be resolved.
    """
    from restnav.config import resolve_config
    from restnav.exceptions import ConfigError
    from restnav.output import debug
    from restnav.rest import Client

    obj = ctx.obj or {}
    _, profile = resolve_config(
        cli_profile=obj.get("profile"),
        cli_base_url=obj.get("base_url"),
    )
    if profile is None:
        raise ConfigError(
            "No profile configured. Run 'restnav init <name> --base-url <url>' first."
        )
    debug(f"Using profile: {profile.name} ({profile.base_url})")
    return Client.from_profile(profile)


def _parse_params(pairs: Optional[list[str]]) -> dict[str, str]:
    """Turn ``KEY=VALUE`` strings into a dict.

    Raises:
        InvalidUsageError: If an entry has no ``=`` or an empty key.
    """
    params: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise InvalidUsageError(f"Expected KEY=VALUE, got: {pair!r}")
        params[key] = value
    return params


def _split_columns(columns: Optional[str]) -> Optional[list[str]]:
    if not columns:
        return None
    return [c.strip() for c in columns.split(",") if c.strip()]


# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #


def list_command(
    ctx: typer.Context,
    path: str = typer.Argument(help="Collection path, e.g. /Accounts/AC123/Calls."),
    param: Optional[list[str]] = typer.Option(
        None, "--param", "-P", help="Filter as KEY=VALUE. Repeatable."
    ),
    page_size: Optional[int] = typer.Option(
        None, "--page-size", min=1, help="Items per page requested from the server."
    ),
    limit: Optional[int] = typer.Option(
        None, "--limit", min=1, help="Stop after this many items."
    ),
    all_pages: bool = typer.Option(
        False, "--all", help="Follow next-page links until the collection is exhausted."
    ),
    columns: Optional[str] = typer.Option(
        None, "--columns", "-c", help="Comma-separated fields to show."
    ),
    list_key: Optional[str] = typer.Option(
        None, "--list-key", help="Envelope key holding the items."
    ),
) -> None:
    """List a collection.

    Without ``--all`` or ``--limit`` only the first page is fetched and the
    server-reported total is shown alongside it.

    Example::

        restnav list /Accounts/AC123/Calls -P Status=completed --limit 100
    """
    from restnav.output import info, print_records

    params = _parse_params(param)
    if page_size is not None:
        params["page_size"] = str(page_size)

    with _open_client(ctx) as client:
        collection = client.collection(path, list_key=list_key)
        if all_pages or limit is not None:
            items = list(collection.stream(params, limit=limit))
            total = None
        else:
            page = collection.list(params)
            items = list(page)
            total = page.total

        records = [dict(item.properties) for item in items]
        print_records(records, _split_columns(columns), title=str(collection.path))
        if total is not None:
            info(f"Showing {len(records)} of {total}.")


def fetch_command(
    ctx: typer.Context,
    path: str = typer.Argument(help="Item path, e.g. /Accounts/AC123/Calls/CA1."),
) -> None:
    """Fetch one resource and print its fields."""
    from restnav.output import format_response

    with _open_client(ctx) as client:
        format_response(dict(client.instance(path).properties))


def total_command(
    ctx: typer.Context,
    path: str = typer.Argument(help="Collection path."),
) -> None:
    """Print the number of items in a collection."""
    from restnav.output import print_data

    with _open_client(ctx) as client:
        total = client.collection(path).total()
        print_data("unknown" if total is None else str(total))


def create_command(
    ctx: typer.Context,
    path: str = typer.Argument(help="Collection path."),
    param: Optional[list[str]] = typer.Option(
        None, "--param", "-P", help="Field as KEY=VALUE. Repeatable."
    ),
) -> None:
    """Create a resource in a collection."""
    from restnav.output import format_response, success

    params = _parse_params(param)
    with _open_client(ctx) as client:
        created = client.collection(path).create(params)
        format_response(dict(created.properties))
        success(f"Created {created.uri}")


def update_command(
    ctx: typer.Context,
    path: str = typer.Argument(help="Item path."),
    param: Optional[list[str]] = typer.Option(
        None, "--param", "-P", help="Field as KEY=VALUE. Repeatable."
    ),
) -> None:
    """Update fields of a resource."""
    from restnav.output import format_response

    params = _parse_params(param)
    if not params:
        raise InvalidUsageError("Nothing to update: pass at least one --param KEY=VALUE")
    with _open_client(ctx) as client:
        updated = client.instance(path).update(params)
        format_response(dict(updated.properties))


def delete_command(
    ctx: typer.Context,
    path: str = typer.Argument(help="Item path."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
) -> None:
    """Delete a resource."""
    from restnav.output import info, success

    force = yes or (ctx.obj or {}).get("force", False)
    if not force and not typer.confirm(f"Delete {path}?"):
        info("Cancelled.")
        raise typer.Exit()

    with _open_client(ctx) as client:
        handle = client.instance(path)
        handle.delete()
        success(f"Deleted {handle.uri}")
