"""The API client: root of the resource tree.

:class:`Client` is the entry point library users start from::

    from restnav.rest import Client

    client = Client("AC123", token)
    for call in client.account.calls.stream({"status": "completed"}):
        print(call.sid, call.duration)

    domain = client.account.sip.domains("SD1")   # no request yet
    domain.friendly_name                         # GET .../SIP/Domains/SD1

Creating a client walks the whole declared tree once and fails with
:class:`~restnav.exceptions.UnresolvedTypeError` if any collection lacks its
instance class or any sub-resource names a missing class.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from restnav.client.protocol import HttpClient
from restnav.client.sync_client import RestClient
from restnav.config import resolve_auth_token
from restnav.exceptions import ConfigError
from restnav.models import Profile
from restnav.paths import ResourcePath
from restnav.resources import (
    InstanceResource,
    ListResource,
    ResourceNode,
    Subresource,
    validate_resource_tree,
)
from restnav.rest.accounts import Account, Accounts

DEFAULT_BASE_URL = "https://api.twilio.com"
DEFAULT_API_VERSION = "2010-04-01"


class Client(ResourceNode):
    """Root node of the API, addressed at ``/<api_version>``.

    Args:
        account_sid: Account used by :attr:`account`; also the basic-auth
            user name of the default HTTP client.
        auth_token: Basic-auth password of the default HTTP client.
        base_url: Scheme and host of the API.
        api_version: First path segment of every resource.
        http_client: Any :class:`~restnav.client.HttpClient`. When omitted a
            :class:`~restnav.client.RestClient` is built from the other
            arguments.
        **http_kwargs: Extra arguments for the default
            :class:`~restnav.client.RestClient` (``timeout``, ``suffix``,
            ``transport``, ...).
    """

    accounts = Subresource(Accounts)

    _validated: set[type] = set()

    def __init__(
        self,
        account_sid: Optional[str] = None,
        auth_token: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        http_client: Optional[HttpClient] = None,
        **http_kwargs: Any,
    ) -> None:
        cls = type(self)
        if cls not in Client._validated:
            validate_resource_tree(cls)
            Client._validated.add(cls)

        if http_client is None:
            auth = (account_sid, auth_token) if account_sid and auth_token else None
            http_client = RestClient(base_url, auth=auth, **http_kwargs)
        super().__init__(ResourcePath((api_version,)), http_client)
        self.account_sid = account_sid

    @classmethod
    def from_profile(cls, profile: Profile, **http_kwargs: Any) -> Client:
        """Build a client from a saved :class:`~restnav.models.Profile`.

        The auth token is read from ``profile.auth_token_source`` through
        :func:`~restnav.config.resolve_auth_token`.
        """
        token = resolve_auth_token(profile)
        auth = (profile.account_sid, token) if profile.account_sid and token else None
        http = RestClient.from_profile(profile, auth=auth, **http_kwargs)
        return cls(
            profile.account_sid,
            api_version=profile.api_version,
            http_client=http,
        )

    @property
    def account(self) -> Account:
        """Hollow handle for the configured account. No I/O."""
        if not self.account_sid:
            raise ConfigError("No account sid configured for this client")
        return self.accounts(self.account_sid)

    def collection(self, path: Union[str, ResourcePath], list_key: Optional[str] = None) -> ListResource:
        """Generic collection handle for any path below the API root.

        Items come back as plain :class:`InstanceResource` objects. The
        envelope key and solution key derive from the last segment
        (``Queues`` -> ``queues`` and ``queue_sid``).
        """
        full = self._resolve(path)
        if not full.segments:
            raise ValueError("Collection path must not be empty")
        return ListResource(
            full,
            self._client,
            list_key=list_key,
            instance_class=InstanceResource,
        )

    def instance(self, path: Union[str, ResourcePath]) -> InstanceResource:
        """Generic hollow handle for any item path below the API root."""
        return InstanceResource(self._resolve(path), self._client)

    def close(self) -> None:
        """Close the HTTP client if it holds open connections."""
        close = getattr(self._client, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _resolve(self, path: Union[str, ResourcePath]) -> ResourcePath:
        parsed = path if isinstance(path, ResourcePath) else ResourcePath.parse(path)
        root = self._path.segments
        if parsed.segments[: len(root)] == root:
            return parsed
        return ResourcePath(root + parsed.segments)

    def __repr__(self) -> str:
        return f"<Client {self.uri}>"


__all__ = ["Client", "DEFAULT_API_VERSION", "DEFAULT_BASE_URL"]
