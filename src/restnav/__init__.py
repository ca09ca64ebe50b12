"""restnav -- navigate tree-shaped REST APIs with lazy handles and pagination.

Collections are addressed by hierarchical paths, list endpoints return
paginated pages of instance resources, and instances expose nested
collections of their own. Handles are cheap: building one never performs
I/O, fields are fetched on first read, and further pages are fetched only
when asked for.

Typical use::

    from restnav import Client

    client = Client("AC123", token)
    page = client.account.sip.domains.list()
    page.total, page.next_page()

Modules:
    rest: The API client and the declared resource tree.
    resources: The generic collection / instance / page engine.
    registry: Name-based resolution of resource classes.
    naming, paths: Name derivation and path composition.
    client: The httpx-backed HTTP client.
    config, models: Profiles and configuration.
    app: The ``restnav`` command line.
"""

__version__ = "0.3.0"

from restnav.exceptions import (  # noqa: E402
    NoClientError,
    NotFoundError,
    RequestError,
    RestnavError,
    UnresolvedTypeError,
)
from restnav.rest import Client  # noqa: E402

__all__ = [
    "Client",
    "NoClientError",
    "NotFoundError",
    "RequestError",
    "RestnavError",
    "UnresolvedTypeError",
    "__version__",
]
