"""Exception hierarchy for restnav.

All exceptions inherit from :class:`RestnavError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`restnav.exit_codes`.
The CLI entry point in :func:`restnav.app.main` catches ``RestnavError`` and
exits with the appropriate code; library callers simply catch the class they
care about.

Errors fall into three families:

* **Configuration** -- :class:`UnresolvedTypeError` means a collection class
  has no sibling instance class. It is a generation defect and is never
  retried.
* **Precondition** -- :class:`NoClientError` is raised when an operation
  that needs an HTTP collaborator runs on a handle built without one.
* **Remote** -- :class:`RequestError` and its subclasses, plus
  :class:`ConnectionError_`, are raised by the HTTP client and propagate
  unchanged through the resource layer.

Subclass hierarchy::

    RestnavError (exit 1)
    +-- InvalidUsageError     (exit 2)
    +-- ConfigError           (exit 1)
    +-- NoClientError         (exit 1)
    +-- UnresolvedTypeError   (exit 7)
    +-- ConnectionError_      (exit 6)
    +-- RequestError          (exit 8)
        +-- AuthError         (exit 3)
        +-- NotFoundError     (exit 4)
        +-- ServerError       (exit 5)
"""

from __future__ import annotations

from typing import Optional

from restnav.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_REQUEST_ERROR,
    EXIT_RESOURCE_TREE_ERROR,
    EXIT_SERVER_ERROR,
)


class RestnavError(Exception):
    """Base exception for all restnav errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(RestnavError):
    """Raised for invalid CLI arguments (e.g. a malformed ``--param``)."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(RestnavError):
    """Raised for configuration problems (missing profiles, invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE


class NoClientError(RestnavError):
    """Raised when an operation needs an HTTP client but the handle has none."""

    exit_code = EXIT_GENERIC_FAILURE


class UnresolvedTypeError(RestnavError):
    """Raised when a resource name has no registered class in its namespace.

    Args:
        namespace: Module the lookup was scoped to.
        name: Class name that was looked up.
    """

    exit_code = EXIT_RESOURCE_TREE_ERROR

    def __init__(self, namespace: str, name: str):
        super().__init__(f"No resource class named '{name}' in {namespace}")
        self.namespace = namespace
        self.name = name


class ConnectionError_(RestnavError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class RequestError(RestnavError):
    """Raised when the API answers with an HTTP error status.

    Args:
        message: Error description, usually taken from the response body.
        status: HTTP status code of the response.
        code: API-specific error code from the response body, if any.
        uri: The request URI that failed.
    """

    exit_code = EXIT_REQUEST_ERROR

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        code: Optional[int] = None,
        uri: Optional[str] = None,
    ):
        super().__init__(message)
        self.status = status
        self.code = code
        self.uri = uri


class AuthError(RequestError):
    """Raised when the API returns HTTP 401 or 403."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(RequestError):
    """Raised when the API returns HTTP 404.

    For handles obtained through ``get(sid)`` this surfaces on the first
    field access, not when the handle is built.
    """

    exit_code = EXIT_NOT_FOUND


class ServerError(RequestError):
    """Raised when the API returns an HTTP 5xx server error."""

    exit_code = EXIT_SERVER_ERROR
