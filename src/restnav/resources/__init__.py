"""Generic resource engine: collections, instances, pages and sub-resources.

Classes:
    :class:`ListResource` -- a collection endpoint.
    :class:`InstanceResource` -- one item, fetched lazily.
    :class:`ResourceList` -- one page of items plus pagination metadata.
    :class:`Page` -- adapter from a raw list response to instances.
    :class:`Subresource` -- descriptor declaring a named child collection.

:func:`validate_resource_tree` resolves every relationship reachable from a
root class up front, so that a missing class is reported at start-up rather
than on the first request that needs it.
"""

from __future__ import annotations

from restnav.resources.base import ResourceNode, Subresource
from restnav.resources.instance import InstanceResource
from restnav.resources.list_resource import ListResource
from restnav.resources.page import Page, ResourceList


def validate_resource_tree(root: type) -> list[type]:
    """Resolve every instance class and sub-resource reachable from *root*.

    Args:
        root: A :class:`ResourceNode` subclass, usually the API client.

    Returns:
        Every class visited, *root* first.

    Raises:
        UnresolvedTypeError: On the first relationship that cannot be resolved.
    """
    seen: list[type] = []
    pending = [root]
    while pending:
        cls = pending.pop(0)
        if cls in seen:
            continue
        seen.append(cls)
        if issubclass(cls, ListResource):
            pending.append(cls.get_instance_class())
        if issubclass(cls, ResourceNode):
            pending.extend(sub.resolve() for sub in cls.subresources().values())
    return seen


__all__ = [
    "InstanceResource",
    "ListResource",
    "Page",
    "ResourceList",
    "ResourceNode",
    "Subresource",
    "validate_resource_tree",
]
