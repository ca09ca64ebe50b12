"""Pages of list results and the lazily paginated sequence built from them.

A :class:`Page` adapts one raw list response into instances. It remembers
only what is needed to address each item: the collection path, the client,
the instance class and the owning identifiers.

A :class:`ResourceList` is what :meth:`~restnav.resources.ListResource.list`
returns: an immutable sequence of instances plus the
:class:`~restnav.models.PageMetadata` of the response that produced it.
Its :meth:`~ResourceList.next_page` thunk fetches the following page only
when called::

    calls = client.account.calls.list()
    calls.total          # free, read from the response just fetched
    more = calls.next_page()   # one GET, or [] when there is no next page
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterator, Mapping, Optional, Sequence, Union, overload

from restnav.models import PageMetadata
from restnav.paths import ResourcePath

if TYPE_CHECKING:
    from restnav.client.protocol import HttpClient
    from restnav.resources.instance import InstanceResource


class Page:
    """One fetched page of a collection.

    Args:
        payload: The raw response envelope.
        path: Collection path the items live under.
        client: HTTP client handed on to each instance.
        instance_class: Class used to build each item.
        list_key: Envelope key holding the item array.
        id_key: Item field holding the identifier.
        solution: Owning identifiers of the collection.
        solution_key: Key under which each item's identifier is added to
            its own solution (e.g. ``"call_sid"``).
    """

    def __init__(
        self,
        payload: Mapping[str, Any],
        path: ResourcePath,
        client: Optional[HttpClient],
        instance_class: type,
        list_key: str,
        id_key: str = "sid",
        solution: Optional[Mapping[str, str]] = None,
        solution_key: Optional[str] = None,
    ) -> None:
        self._payload = payload
        self._path = path
        self._client = client
        self._instance_class = instance_class
        self._list_key = list_key
        self._id_key = id_key
        self._solution = dict(solution or {})
        self._solution_key = solution_key
        self.meta = PageMetadata.from_envelope(payload)

    @property
    def records(self) -> list[Mapping[str, Any]]:
        return list(self._payload.get(self._list_key) or [])

    def build_instance(self, item: Mapping[str, Any]) -> InstanceResource:
        """Build a hydrated instance for one raw *item* of this page."""
        sid = item[self._id_key]
        solution = dict(self._solution)
        if self._solution_key:
            solution[self._solution_key] = str(sid)
        return self._instance_class(
            self._path.child(sid),
            self._client,
            properties=item,
            solution=solution,
        )

    def to_resource_list(
        self, next_page: Optional[Callable[[], ResourceList]] = None
    ) -> ResourceList:
        return ResourceList(
            [self.build_instance(item) for item in self.records],
            self.meta,
            next_page if self.meta.has_next_page else None,
        )

    def __repr__(self) -> str:
        return f"<Page {self._path} items={len(self.records)} total={self.meta.total}>"


class ResourceList(Sequence["InstanceResource"]):
    """Instances from one page, with that page's own pagination metadata.

    Compares equal to a plain ``list`` with the same items, so an exhausted
    listing satisfies ``page.next_page() == []``.

    Args:
        items: The instances of this page.
        meta: Metadata of the response that produced *items*.
        next_page: Zero-argument callable returning the following page, or
            ``None`` when the server reported no next page.
    """

    def __init__(
        self,
        items: Sequence[InstanceResource],
        meta: PageMetadata,
        next_page: Optional[Callable[[], ResourceList]] = None,
    ) -> None:
        self._items = tuple(items)
        self._meta = meta
        self._next_page = next_page

    @property
    def meta(self) -> PageMetadata:
        return self._meta

    @property
    def total(self) -> Optional[int]:
        """Server-reported size of the whole collection. No request is made."""
        return self._meta.total

    @property
    def next_page_uri(self) -> Optional[str]:
        return self._meta.next_page_uri

    @property
    def has_next_page(self) -> bool:
        return self._next_page is not None

    def next_page(self) -> ResourceList:
        """Fetch the following page, or return an empty list without I/O."""
        if self._next_page is None:
            return ResourceList([], PageMetadata(total=self._meta.total))
        return self._next_page()

    @overload
    def __getitem__(self, index: int) -> InstanceResource: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[InstanceResource]: ...

    def __getitem__(self, index: Union[int, slice]) -> Any:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[InstanceResource]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ResourceList):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return list(self._items) == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<ResourceList items={len(self._items)} total={self.total}>"
