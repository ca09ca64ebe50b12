"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~restnav.exceptions.RestnavError` subclass.
Shell scripts wrapping the ``restnav`` CLI can inspect the exit code to
tell a missing resource from a rejected credential without parsing stderr.

Example::

    $ restnav fetch /Accounts/AC123/Calls/CA404
    $ echo $?
    4   # EXIT_NOT_FOUND -- the call does not exist
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_AUTH_FAILURE = 3
"""The API rejected the credentials (HTTP 401 / 403)."""

EXIT_NOT_FOUND = 4
"""The addressed resource does not exist (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The remote API returned an HTTP 5xx server error."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_RESOURCE_TREE_ERROR = 7
"""A resource class could not be resolved to its instance type."""

EXIT_REQUEST_ERROR = 8
"""The API rejected the request with a 4xx status other than 401, 403 or 404."""
