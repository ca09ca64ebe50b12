"""Synchronous HTTP client backing the resource tree.

This module provides :class:`RestClient`, a thin layer over
:class:`httpx.Client` that speaks the conventions the resource engine
expects:

- **Relative paths** get the format suffix (``.json``) appended and are
  resolved against ``base_url``.
- **Absolute URIs** (``absolute=True``) such as a server-issued next-page
  URI are requested as-is, query string included.
- **Parameter keys** are camelized (``page_size`` -> ``PageSize``) and
  POST bodies are form-encoded.
- **Error mapping** -- 4xx/5xx responses raise typed
  :class:`~restnav.exceptions.RequestError` subclasses; network failures
  raise :class:`~restnav.exceptions.ConnectionError_`.

No request is ever retried: a failure surfaces to the caller of the
operation that triggered it.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx

from restnav import __version__
from restnav.exceptions import (
    AuthError,
    ConnectionError_,
    NotFoundError,
    RequestError,
    ServerError,
)
from restnav.models import Profile
from restnav.naming import camelize_keys
from restnav.output import get_output


class RestClient:
    """Blocking HTTP client for a REST API.

    The underlying :class:`httpx.Client` is opened on first use or when the
    client is entered as a context manager, and closed by :meth:`close`.

    Args:
        base_url: Scheme and host of the API (``https://api.example.com``).
        auth: Passed through to httpx unchanged (e.g. a ``(user, password)``
            tuple or an :class:`httpx.Auth`).
        suffix: Appended to every relative request path.
        timeout: Request timeout in seconds.
        verify_ssl: Verify TLS certificates.
        transport: Optional httpx transport, mostly for tests.

    Example::

        with RestClient("https://api.example.com", auth=("AC123", token)) as http:
            http.get("/2010-04-01/Accounts/AC123/Calls", {"status": "busy"})
    """

    def __init__(
        self,
        base_url: str,
        auth: Any = None,
        suffix: str = ".json",
        timeout: float = 30,
        verify_ssl: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._auth = auth
        self._suffix = suffix
        self._timeout = timeout
        self._verify_ssl = verify_ssl
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @classmethod
    def from_profile(cls, profile: Profile, auth: Any = None, **kwargs: Any) -> RestClient:
        """Build a client from a :class:`~restnav.models.Profile`."""
        return cls(
            profile.base_url,
            auth=auth,
            suffix=profile.format_suffix,
            timeout=profile.request.timeout,
            verify_ssl=profile.request.verify_ssl,
            **kwargs,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> RestClient:
        self._ensure_client()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # HttpClient interface
    # ------------------------------------------------------------------ #

    def get(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        absolute: bool = False,
    ) -> dict[str, Any]:
        """GET a resource and return its decoded JSON body."""
        response = self.request("GET", path, params=params, absolute=absolute)
        return response.json()

    def post(self, path: str, params: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        """POST form-encoded *params* and return the decoded JSON body."""
        response = self.request("POST", path, data=params)
        return response.json()

    def delete(self, path: str) -> bool:
        """DELETE a resource. Returns ``True`` on HTTP 204."""
        response = self.request("DELETE", path)
        return response.status_code == 204

    # ------------------------------------------------------------------ #
    # Request execution
    # ------------------------------------------------------------------ #

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
        absolute: bool = False,
    ) -> httpx.Response:
        """Send one request and map error statuses to exceptions.

        Args:
            method: HTTP method (GET, POST, DELETE).
            path: Resource path, or a complete URI when *absolute* is set.
            params: Query parameters; keys are camelized.
            data: Form body; keys are camelized.
            absolute: Use *path* verbatim instead of appending the suffix.

        Returns:
            The :class:`httpx.Response` from the server.

        Raises:
            AuthError: On 401 / 403.
            NotFoundError: On 404.
            ServerError: On 5xx.
            RequestError: On any other 4xx.
            ConnectionError_: On network / timeout errors.
        """
        client = self._ensure_client()
        url = path if absolute else f"{path}{self._suffix}"

        kwargs: dict[str, Any] = {
            "method": method,
            "url": url,
            "headers": {"Accept": "application/json"},
        }
        if params:
            kwargs["params"] = _encode(params)
        if data is not None:
            kwargs["data"] = _encode(data)

        get_output().debug(f"{method} {url}")
        try:
            response = client.request(**kwargs)
        except httpx.TransportError as exc:
            raise ConnectionError_(f"Connection failed for {method} {url}: {exc}") from exc

        self._map_response_error(response)
        return response

    def _ensure_client(self) -> httpx.Client:
        if self._client is None:
            kwargs: dict[str, Any] = {
                "base_url": self._base_url,
                "timeout": self._timeout,
                "verify": self._verify_ssl,
                "follow_redirects": True,
                "headers": {"User-Agent": f"restnav/{__version__}"},
            }
            if self._auth is not None:
                kwargs["auth"] = self._auth
            if self._transport is not None:
                kwargs["transport"] = self._transport
            self._client = httpx.Client(**kwargs)
        return self._client

    def _map_response_error(self, response: httpx.Response) -> None:
        """Raise a typed exception for error HTTP status codes."""
        status = response.status_code
        if status < 400:
            return

        # Try to extract an error message and API error code from the body.
        code: Optional[int] = None
        try:
            detail = response.json()
            if isinstance(detail, dict):
                msg = detail.get("message") or detail.get("error") or detail.get("detail") or ""
                code = detail.get("code")
            else:
                msg = str(detail)
        except ValueError:
            msg = response.text[:200] if response.text else ""

        prefix = f"HTTP {status}"
        full_msg = f"{prefix}: {msg}" if msg else prefix
        uri = str(response.request.url)

        if status in (401, 403):
            raise AuthError(full_msg, status=status, code=code, uri=uri)
        if status == 404:
            raise NotFoundError(full_msg, status=status, code=code, uri=uri)
        if status >= 500:
            raise ServerError(full_msg, status=status, code=code, uri=uri)
        raise RequestError(full_msg, status=status, code=code, uri=uri)


def _encode(values: Mapping[str, Any]) -> dict[str, Any]:
    """Camelize keys and render booleans the way the API expects them."""
    encoded = camelize_keys(values)
    for key, value in encoded.items():
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
    return encoded
