"""List resources: collection endpoints of the resource tree.

A :class:`ListResource` subclass stands for one collection endpoint. Its
instance class is found by name in the same module (``Calls`` -> ``Call``,
see :func:`~restnav.naming.instance_name`), and the envelope key holding
the items is the ``snake_case`` form of the class name (``calls``).

Operations:

* :meth:`ListResource.list` -- one GET, returns a lazily paginated
  :class:`~restnav.resources.page.ResourceList`.
* :meth:`ListResource.stream` -- iterate over every item, fetching pages on
  demand.
* :meth:`ListResource.total` -- one GET with ``page_size=1``.
* :meth:`ListResource.get` -- a hollow instance handle, no I/O.
* :meth:`ListResource.create` -- one POST, returns a hydrated instance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator, Mapping, Optional, Union

from restnav.naming import INSTANCE_SUFFIX, instance_name, underscore
from restnav.output import debug
from restnav.paths import ResourcePath
from restnav.registry import registry
from restnav.resources.base import ResourceNode
from restnav.resources.page import Page, ResourceList

if TYPE_CHECKING:
    from restnav.client.protocol import HttpClient
    from restnav.resources.instance import InstanceResource


class ListResource(ResourceNode):
    """A collection endpoint.

    Class attributes customise the generated subclasses:

    Attributes:
        resource_name: Collection name used for instance-name derivation.
            Defaults to the class name.
        instance_class: Explicit instance class, bypassing the registry.
        list_key: Envelope key of the item array. Defaults to
            ``underscore(resource_name)``.
        id_key: Item field holding the identifier.

    Args:
        path: Collection path.
        client: HTTP collaborator.
        solution: Owning identifiers, passed down to children and items.
        uri: Absolute URI to fetch instead of :attr:`path`. Set on the
            collections built for following pages.
        list_key: Per-instance override of the class attribute.
        instance_class: Per-instance override of the class attribute.
        resource_name: Per-instance override of the class attribute. A
            bare ``ListResource`` defaults to its last path segment.
    """

    resource_name: Optional[str] = None
    instance_class: Optional[type] = None
    list_key: Optional[str] = None
    id_key: str = "sid"

    _resolved_instance_class: Optional[type] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._resolved_instance_class = None
        registry.register(cls)

    def __init__(
        self,
        path: Union[ResourcePath, str],
        client: Optional[HttpClient] = None,
        solution: Optional[Mapping[str, str]] = None,
        uri: Optional[str] = None,
        list_key: Optional[str] = None,
        instance_class: Optional[type] = None,
        resource_name: Optional[str] = None,
    ) -> None:
        super().__init__(path, client, solution)
        if resource_name is None and type(self) is ListResource:
            resource_name = self._path.identifier
        self._resource_name = resource_name or self.get_resource_name()
        self._uri = uri
        self._list_key = list_key or type(self).list_key or underscore(self._resource_name)
        self._instance_class = instance_class

    # ------------------------------------------------------------------ #
    # Class-level resolution
    # ------------------------------------------------------------------ #

    @classmethod
    def get_resource_name(cls) -> str:
        return cls.resource_name or cls.__name__

    @classmethod
    def get_list_key(cls) -> str:
        return cls.list_key or underscore(cls.get_resource_name())

    @classmethod
    def get_instance_class(cls) -> type:
        """Return the instance class paired with this collection class.

        Resolved through the registry in the class's own module on first
        call and cached on the class afterwards.

        Raises:
            UnresolvedTypeError: If no sibling instance class is registered.
        """
        if cls.instance_class is not None:
            return cls.instance_class
        if cls._resolved_instance_class is None:
            cls._resolved_instance_class = registry.resolve(
                cls.__module__, instance_name(cls.get_resource_name())
            )
        return cls._resolved_instance_class

    @classmethod
    def solution_key(cls, resource_name: Optional[str] = None) -> str:
        """Key under which an item's identifier joins its solution (``call_sid``)."""
        name = instance_name(resource_name or cls.get_resource_name())
        if name.endswith(INSTANCE_SUFFIX) and name != INSTANCE_SUFFIX:
            name = name[: -len(INSTANCE_SUFFIX)]
        return f"{underscore(name)}_{cls.id_key}"

    # ------------------------------------------------------------------ #
    # Operations
    # ------------------------------------------------------------------ #

    def list(self, params: Optional[Mapping[str, Any]] = None, absolute: bool = False) -> ResourceList:
        """Fetch one page of the collection.

        The returned :class:`~restnav.resources.page.ResourceList` carries
        ``total`` from the same response, so reading it costs nothing. Its
        ``next_page()`` fetches the following page through a fresh
        collection bound to the server's next-page URI.

        Args:
            params: Filters sent as query parameters (``{"status": "busy"}``).
            absolute: Treat the collection's URI as complete (query string
                and format extension included) instead of a relative path.

        Raises:
            NoClientError: If the collection has no HTTP client.
        """
        client = self._require_client("get a resource list")
        target = (self._uri or self.uri) if absolute else self.uri
        payload = client.get(target, dict(params or {}), absolute=absolute)
        page = self._build_page(payload)
        next_uri = page.meta.next_page_uri
        debug(f"Listed {len(page.records)} of {page.meta.total} from {target}")

        def next_page() -> ResourceList:
            return self._spawn(next_uri).list({}, absolute=True)

        return page.to_resource_list(next_page)

    def stream(
        self,
        params: Optional[Mapping[str, Any]] = None,
        limit: Optional[int] = None,
    ) -> Iterator[InstanceResource]:
        """Yield every item of the collection, fetching pages only as needed.

        Args:
            params: Filters for the first request.
            limit: Stop after this many items.
        """
        if limit is not None and limit <= 0:
            return
        count = 0
        page = self.list(params)
        while True:
            for item in page:
                yield item
                count += 1
                if limit is not None and count >= limit:
                    return
            if not page.has_next_page:
                return
            page = page.next_page()

    def total(self) -> Optional[int]:
        """Ask the server for the collection size.

        Issues a GET with a page size of 1 so that almost nothing but the
        count crosses the wire. Prefer ``list().total`` when the items are
        needed anyway.

        Raises:
            NoClientError: If the collection has no HTTP client.
        """
        client = self._require_client("get a resource total")
        return client.get(self.uri, {"page_size": 1}).get("total")

    def get(self, sid: Union[str, int]) -> InstanceResource:
        """Return a hollow handle for item *sid* without any I/O.

        A missing item is reported only when a field of the handle is read.
        """
        return self._instance(self._path.child(sid), sid)

    find = get

    def __call__(self, sid: Union[str, int]) -> InstanceResource:
        return self.get(sid)

    def create(self, params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> InstanceResource:
        """POST a new item and return it hydrated from the response.

        Raises:
            NoClientError: If the collection has no HTTP client.
        """
        client = self._require_client("create a resource")
        payload = client.post(self.uri, {**(params or {}), **kwargs})
        sid = payload[self.id_key]
        return self._instance(self._path.child(sid), sid, properties=payload)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _resolve_instance_class(self) -> type:
        return self._instance_class or self.get_instance_class()

    def _instance(
        self,
        path: ResourcePath,
        sid: Union[str, int],
        properties: Optional[Mapping[str, Any]] = None,
    ) -> InstanceResource:
        solution = {**self._solution, self.solution_key(self._resource_name): str(sid)}
        return self._resolve_instance_class()(
            path, self._client, properties=properties, solution=solution
        )

    def _build_page(self, payload: Mapping[str, Any]) -> Page:
        return Page(
            payload,
            path=self._path,
            client=self._client,
            instance_class=self._resolve_instance_class(),
            list_key=self._list_key,
            id_key=self.id_key,
            solution=self._solution,
            solution_key=self.solution_key(self._resource_name),
        )

    def _spawn(self, uri: str) -> ListResource:
        """A collection of the same class bound to *uri*, for the next page."""
        return type(self)(
            ResourcePath.parse(uri, strip_extension=True),
            self._client,
            solution=self._solution,
            uri=uri,
            list_key=self._list_key,
            instance_class=self._instance_class,
            resource_name=self._resource_name,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.uri}>"
