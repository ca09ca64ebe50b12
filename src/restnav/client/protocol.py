"""The interface the resource engine expects from an HTTP client.

Anything with these three methods can back a resource tree:
:class:`~restnav.client.sync_client.RestClient` in production, or a small
recording double in tests.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class HttpClient(Protocol):
    """Blocking HTTP collaborator used by resource handles.

    Implementations raise :class:`~restnav.exceptions.RequestError`
    subclasses for error responses and
    :class:`~restnav.exceptions.ConnectionError_` for network failures.
    """

    def get(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        absolute: bool = False,
    ) -> dict[str, Any]:
        """GET *path* and return the decoded JSON body.

        With ``absolute=True`` the path is a complete URI (query string
        included) as handed out by the server, e.g. a next-page URI.
        """
        ...

    def post(self, path: str, params: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        """POST *params* to *path* and return the decoded JSON body."""
        ...

    def delete(self, path: str) -> bool:
        """DELETE *path*; ``True`` when the server confirms the deletion."""
        ...
