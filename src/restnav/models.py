"""Canonical Pydantic models shared across restnav modules.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`RequestConfig`, :class:`OutputConfig`, :class:`GlobalConfig`,
    and :class:`Profile`.

**Wire models** -- parsed from API responses:
    :class:`PageMetadata`, the pagination part of a list envelope.

All models use Pydantic v2. ``Profile`` accepts unknown keys so that older
or newer config files load without losing fields.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Config ---


class RequestConfig(BaseModel):
    """HTTP settings handed to :class:`~restnav.client.RestClient`."""

    timeout: float = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/restnav/config.json``.

    Fields here have the lowest precedence and can be overridden by project
    config, environment variables, or CLI flags. See
    :func:`~restnav.config.resolve_config` for the full precedence chain.
    """

    default_profile: Optional[str] = None
    auto_select_single_profile: bool = True
    output: OutputConfig = Field(default_factory=OutputConfig)


class Profile(BaseModel):
    """Per-API connection profile stored under the ``profiles/`` config directory.

    Example::

        Profile(
            name="prod",
            base_url="https://api.example.com",
            account_sid="AC123",
            auth_token_source="env:RESTNAV_AUTH_TOKEN",
        )
    """

    model_config = ConfigDict(extra="allow")

    name: str
    base_url: str = Field(description="Scheme and host of the API, without a path")
    api_version: str = Field(
        default="2010-04-01", description="First path segment of every resource"
    )
    account_sid: Optional[str] = Field(
        default=None, description="Account used by the client's `account` shortcut"
    )
    auth_token_source: Optional[str] = Field(
        default=None,
        description="Credential source for the auth token: env:VAR, file:/path, prompt",
    )
    format_suffix: str = Field(
        default=".json", description="Suffix appended to every relative request path"
    )
    request: RequestConfig = Field(default_factory=RequestConfig)


# --- Wire ---


class PageMetadata(BaseModel):
    """Pagination fields of one list response envelope.

    ``next_page_uri`` is set if and only if the server has more items
    beyond this page. ``total`` is whatever the server reported for the
    whole collection, which is usually larger than the page itself.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    total: Optional[int] = None
    next_page_uri: Optional[str] = None
    previous_page_uri: Optional[str] = None
    first_page_uri: Optional[str] = None
    page: Optional[int] = None
    page_size: Optional[int] = None

    @classmethod
    def from_envelope(cls, envelope: Mapping[str, Any]) -> PageMetadata:
        """Build metadata from a raw list response, ignoring the item array."""
        return cls.model_validate(dict(envelope))

    @property
    def has_next_page(self) -> bool:
        return bool(self.next_page_uri)
