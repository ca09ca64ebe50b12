"""HTTP client module for restnav.

Classes:
    :class:`HttpClient` -- the protocol resource handles depend on.
    :class:`RestClient` -- the httpx-backed implementation.

Example::

    from restnav.client import RestClient

    with RestClient("https://api.example.com", auth=("AC123", token)) as http:
        envelope = http.get("/2010-04-01/Accounts")
"""

from restnav.client.protocol import HttpClient
from restnav.client.sync_client import RestClient

__all__ = ["HttpClient", "RestClient"]
