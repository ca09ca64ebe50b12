"""Name derivation rules for resource classes, path segments and payload keys.

A collection class such as ``IncomingPhoneNumbers`` is paired with its
instance class by stripping one plural marker (``IncomingPhoneNumber``).
Names that do not pluralize regularly go through :data:`INSTANCE_NAME_OVERRIDES`,
and names without a trailing ``s`` get an ``Instance`` suffix so that the
instance class can never collide with the collection class.

Accessor names (``incoming_phone_numbers``) become URL segments
(``IncomingPhoneNumbers``) by CamelCase conversion, except for the
abbreviations in :data:`SEGMENT_OVERRIDES`.

Example::

    >>> instance_name("Calls")
    'Call'
    >>> instance_name("IpAddresses")
    'IpAddress'
    >>> instance_name("Sip")
    'SipInstance'
    >>> path_segment("sip")
    'SIP'
"""

from __future__ import annotations

import re
from typing import Any, Mapping

PLURAL_MARKER = "s"
INSTANCE_SUFFIX = "Instance"

INSTANCE_NAME_OVERRIDES: dict[str, str] = {
    "Media": "MediaInstance",
    "IpAddresses": "IpAddress",
    "Feedback": "FeedbackInstance",
    "Sms": "SmsInstance",
}
"""Collection names whose instance name does not follow the plural rule."""

SEGMENT_OVERRIDES: dict[str, str] = {
    "sms": "SMS",
    "sip": "SIP",
}
"""Accessor names whose URL segment is not the CamelCase form."""

_CAMEL_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_BOUNDARY_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")


def instance_name(collection_name: str) -> str:
    """Return the instance class name paired with *collection_name*.

    Args:
        collection_name: CamelCase collection name (e.g. ``"Calls"``).

    Returns:
        The override from :data:`INSTANCE_NAME_OVERRIDES` when present,
        otherwise *collection_name* with one trailing ``s`` removed, or with
        ``Instance`` appended when it has no trailing ``s``.

    Raises:
        ValueError: If *collection_name* is empty.
    """
    if not collection_name:
        raise ValueError("collection name must not be empty")
    override = INSTANCE_NAME_OVERRIDES.get(collection_name)
    if override is not None:
        return override
    if collection_name.endswith(PLURAL_MARKER) and len(collection_name) > 1:
        return collection_name[: -len(PLURAL_MARKER)]
    return collection_name + INSTANCE_SUFFIX


def path_segment(name: str) -> str:
    """Return the URL segment for the sub-resource accessor *name*."""
    return SEGMENT_OVERRIDES.get(name, camelize(name))


def camelize(name: str) -> str:
    """Convert ``snake_case`` to ``CamelCase``.

    Names that already start with an upper-case letter are returned
    unchanged, so the function is safe to apply twice.

    Example::

        >>> camelize("incoming_phone_numbers")
        'IncomingPhoneNumbers'
        >>> camelize("PageSize")
        'PageSize'
    """
    if not name or name[0].isupper():
        return name
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def underscore(name: str) -> str:
    """Convert ``CamelCase`` to ``snake_case``.

    Example::

        >>> underscore("IncomingPhoneNumbers")
        'incoming_phone_numbers'
        >>> underscore("SMSMessages")
        'sms_messages'
        >>> underscore("date_created")
        'date_created'
    """
    result = _ACRONYM_BOUNDARY_RE.sub(r"\1_\2", name)
    result = _CAMEL_BOUNDARY_RE.sub(r"\1_\2", result)
    return result.replace("-", "_").lower()


def camelize_keys(params: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *params* with every key passed through :func:`camelize`."""
    return {camelize(key): value for key, value in params.items()}


def underscore_keys(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *payload* with every key passed through :func:`underscore`."""
    return {underscore(key): value for key, value in payload.items()}
