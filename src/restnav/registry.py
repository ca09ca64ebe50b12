"""Static registry of resource classes keyed by ``(namespace, name)``.

Every :class:`~restnav.resources.ListResource` and
:class:`~restnav.resources.InstanceResource` subclass registers itself here
when its class statement runs. A collection then finds its instance class
by looking up a sibling name inside its own module, which lets two modules
each define a ``Messages`` / ``Message`` pair without clashing.

Lookups depend only on the namespace and the name, never on request data,
so callers resolve once and cache the result.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterator, Optional

from restnav.exceptions import UnresolvedTypeError

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Maps ``(namespace, class name)`` to a resource class.

    Example::

        registry = TypeRegistry()
        registry.register(Call)
        registry.resolve("restnav.rest.calls", "Call")  # -> Call
    """

    def __init__(self) -> None:
        self._types: dict[tuple[str, str], type] = {}
        self._lock = threading.Lock()

    def register(
        self,
        cls: type,
        namespace: Optional[str] = None,
        name: Optional[str] = None,
    ) -> type:
        """Register *cls* and return it, so the method doubles as a decorator.

        Args:
            cls: The class to register.
            namespace: Defaults to ``cls.__module__``.
            name: Defaults to ``cls.__name__``.
        """
        key = (namespace or cls.__module__, name or cls.__name__)
        with self._lock:
            previous = self._types.get(key)
            if previous is not None and previous is not cls:
                logger.warning("Replacing resource class %s.%s", *key)
            self._types[key] = cls
        return cls

    def resolve(self, namespace: str, name: str) -> type:
        """Return the class registered as *name* in *namespace*.

        Raises:
            UnresolvedTypeError: If nothing is registered under that key.
        """
        try:
            return self._types[(namespace, name)]
        except KeyError:
            raise UnresolvedTypeError(namespace, name) from None

    def unregister(self, cls: type) -> None:
        """Remove every entry pointing at *cls*."""
        with self._lock:
            for key in [k for k, v in self._types.items() if v is cls]:
                del self._types[key]

    def __contains__(self, key: object) -> bool:
        return key in self._types

    def __iter__(self) -> Iterator[type]:
        with self._lock:
            return iter(list(self._types.values()))

    def __len__(self) -> int:
        return len(self._types)


registry = TypeRegistry()
"""The process-wide registry populated by resource class definitions."""
