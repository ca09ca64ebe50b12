"""Shared plumbing for every node of the resource tree.

:class:`ResourceNode` holds what collections, instances and the root client
have in common: a path, an optional HTTP client, the owning identifiers
collected on the way down (the *solution*), and a cache of child
collections.

:class:`Subresource` is the descriptor that declares a named child
collection on a node class::

    class Sip(ListResource):
        domains = Subresource()
        credential_lists = Subresource()

``sip.domains`` returns the same ``Domains`` collection on every access, and
because collections are callable, ``sip.domains("DM1")`` builds a fresh
``Domain`` handle at ``.../SIP/Domains/DM1`` without any I/O.
"""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from restnav.exceptions import NoClientError, UnresolvedTypeError
from restnav.naming import camelize, path_segment
from restnav.paths import ResourcePath
from restnav.registry import registry

if TYPE_CHECKING:
    from restnav.client.protocol import HttpClient
    from restnav.resources.list_resource import ListResource


class ResourceNode:
    """Base class for anything addressable in the resource tree.

    Args:
        path: Where the node lives, as a :class:`~restnav.paths.ResourcePath`
            or a string.
        client: The HTTP collaborator used for I/O. May be ``None`` for
            handles that are only used to build paths.
        solution: Owning identifiers, e.g. ``{"account_sid": "AC1"}``.
    """

    def __init__(
        self,
        path: Union[ResourcePath, str],
        client: Optional[HttpClient] = None,
        solution: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._path = path if isinstance(path, ResourcePath) else ResourcePath.parse(path)
        self._client = client
        self._solution = dict(solution or {})
        self._children: dict[str, ListResource] = {}
        self._lock = threading.RLock()

    @property
    def path(self) -> ResourcePath:
        return self._path

    @property
    def uri(self) -> str:
        return str(self._path)

    @property
    def client(self) -> Optional[HttpClient]:
        return self._client

    @property
    def solution(self) -> Mapping[str, str]:
        """Read-only view of the identifiers that scope this node."""
        return MappingProxyType(self._solution)

    @classmethod
    def subresources(cls) -> dict[str, Subresource]:
        """Return every :class:`Subresource` declared on the class or its bases."""
        found: dict[str, Subresource] = {}
        for klass in reversed(cls.__mro__):
            for name, value in vars(klass).items():
                if isinstance(value, Subresource):
                    found[name] = value
        return found

    def _require_client(self, action: str) -> HttpClient:
        if self._client is None:
            raise NoClientError(f"Can't {action} without a REST client")
        return self._client

    def _child(self, sub: Subresource) -> ListResource:
        """Return the memoized child collection for *sub*, building it once."""
        with self._lock:
            child = self._children.get(sub.name)
            if child is None:
                child = sub.resolve()(
                    self._path.child(sub.segment),
                    self._client,
                    solution=self._solution,
                )
                self._children[sub.name] = child
            return child


class Subresource:
    """Descriptor declaring a named child collection on a :class:`ResourceNode`.

    Args:
        target: The collection class, or its class name. Defaults to the
            CamelCase form of the attribute name.
        segment: URL segment of the child. Defaults to
            :func:`~restnav.naming.path_segment` of the attribute name.
        namespace: Module to resolve a string *target* in. Defaults to the
            module of the class declaring the attribute.
    """

    def __init__(
        self,
        target: Union[type, str, None] = None,
        segment: Optional[str] = None,
        namespace: Optional[str] = None,
    ) -> None:
        self._target = target
        self._segment = segment
        self._namespace = namespace
        self._resolved: Optional[type] = target if isinstance(target, type) else None
        self.name = ""
        self.owner: Optional[type] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self.owner = owner

    @property
    def segment(self) -> str:
        return self._segment or path_segment(self.name)

    @property
    def namespace(self) -> str:
        if self._namespace:
            return self._namespace
        assert self.owner is not None, "Subresource used outside a class body"
        return self.owner.__module__

    @property
    def target_name(self) -> str:
        if isinstance(self._target, type):
            return self._target.__name__
        return self._target or camelize(self.name)

    def resolve(self) -> type:
        """Return the child collection class, looking it up on first use.

        Raises:
            UnresolvedTypeError: If the name is not registered, or names a
                class that is not a collection.
        """
        if self._resolved is None:
            from restnav.resources.list_resource import ListResource

            cls = registry.resolve(self.namespace, self.target_name)
            if not issubclass(cls, ListResource):
                raise UnresolvedTypeError(self.namespace, self.target_name)
            self._resolved = cls
        return self._resolved

    def __get__(self, obj: Optional[ResourceNode], objtype: Optional[type] = None) -> Any:
        if obj is None:
            return self
        return obj._child(self)

    def __repr__(self) -> str:
        return f"<Subresource {self.name} -> {self.target_name}>"
