"""Instance resources: one addressed item of a collection.

An :class:`InstanceResource` is built either *hollow* (path and client only)
or *hydrated* (with the item's fields from a list or create response).
Reading any field of a hollow instance issues exactly one GET to the
instance's own path; every later read is served from the cached fields
until :meth:`InstanceResource.refresh` is called.

Because :meth:`~restnav.resources.ListResource.get` never performs I/O, a
missing item is only reported when one of its fields is first read::

    call = client.account.calls.get("CA404")   # no request yet
    call.status                                # GET -> NotFoundError
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from restnav.naming import underscore_keys
from restnav.output import debug
from restnav.paths import ResourcePath
from restnav.registry import registry
from restnav.resources.base import ResourceNode

if TYPE_CHECKING:
    from restnav.client.protocol import HttpClient


class InstanceResource(ResourceNode):
    """A single item of a collection, with lazily fetched fields.

    Field names are normalised to ``snake_case`` and exposed as attributes.
    Fields whose name clashes with a method (``update``, ``path``, ...) are
    still reachable through indexing: ``instance["path"]``.

    Args:
        path: The item's own path (``.../Calls/CA123``).
        client: HTTP collaborator used for the deferred fetch.
        properties: Fields already known from a response. When given, the
            instance starts hydrated and no fetch happens on field access.
        solution: Owning identifiers of the item.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        registry.register(cls)

    def __init__(
        self,
        path: Union[ResourcePath, str],
        client: Optional[HttpClient] = None,
        properties: Optional[Mapping[str, Any]] = None,
        solution: Optional[Mapping[str, str]] = None,
    ) -> None:
        super().__init__(path, client, solution)
        self._properties: Optional[dict[str, Any]] = None
        if properties is not None:
            self._hydrate(properties)

    @property
    def identifier(self) -> Optional[str]:
        """The item's identifier, taken from its path without any I/O."""
        return self._path.identifier

    @property
    def is_hydrated(self) -> bool:
        return self._properties is not None

    @property
    def properties(self) -> Mapping[str, Any]:
        """All fields of the item, fetching them first if the instance is hollow."""
        return MappingProxyType(self._ensure_hydrated())

    def refresh(self) -> InstanceResource:
        """Re-fetch the item's fields, replacing any cached state."""
        client = self._require_client("refresh a resource")
        payload = client.get(self.uri)
        with self._lock:
            self._hydrate(payload)
        return self

    def update(self, params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> InstanceResource:
        """POST new field values to the item and hydrate from the response."""
        client = self._require_client("update a resource")
        payload = client.post(self.uri, {**(params or {}), **kwargs})
        with self._lock:
            self._hydrate(payload)
        return self

    def delete(self) -> bool:
        """DELETE the item. Returns ``True`` when the server confirms."""
        client = self._require_client("delete a resource")
        return client.delete(self.uri)

    def _ensure_hydrated(self) -> dict[str, Any]:
        props = self._properties
        if props is not None:
            return props
        with self._lock:
            if self._properties is None:
                client = self._require_client("fetch a resource")
                debug(f"Hydrating {self.uri}")
                self._hydrate(client.get(self.uri))
            assert self._properties is not None
            return self._properties

    def _hydrate(self, payload: Mapping[str, Any]) -> None:
        self._properties = underscore_keys(payload)

    def __getattr__(self, name: str) -> Any:
        # Only reached for names not found through normal lookup.
        if name.startswith("_"):
            raise AttributeError(name)
        props = self._ensure_hydrated()
        try:
            return props[name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__} at {self.uri} has no field '{name}'"
            ) from None

    def __getitem__(self, name: str) -> Any:
        return self._ensure_hydrated()[name]

    def __repr__(self) -> str:
        state = "hydrated" if self.is_hydrated else "hollow"
        return f"<{type(self).__name__} {self.uri} ({state})>"
