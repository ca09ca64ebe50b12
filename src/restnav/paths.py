"""Immutable resource paths and their composition.

A :class:`ResourcePath` is a tuple of segments. Descending into a
sub-resource or addressing an item builds a new path and leaves the parent
untouched, so handles can share their parent's path safely.

Example::

    >>> base = ResourcePath.parse("/2010-04-01/Accounts/AC1/SIP")
    >>> str(compose(base, "Domains", "DM1"))
    '/2010-04-01/Accounts/AC1/SIP/Domains/DM1'
    >>> str(base)
    '/2010-04-01/Accounts/AC1/SIP'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import quote, unquote, urlsplit


def _split_segments(path: str) -> list[str]:
    """Split a path into non-empty segments.

    ``"/api/v1/users"`` -> ``["api", "v1", "users"]``
    ``"/"``             -> ``[]``
    """
    return [s for s in path.split("/") if s]


@dataclass(frozen=True)
class ResourcePath:
    """An ordered, immutable sequence of URL path segments.

    The trailing identifier of an item path is simply its last segment;
    see :attr:`identifier`.
    """

    segments: tuple[str, ...] = ()

    @classmethod
    def parse(cls, path: str, strip_extension: bool = False) -> ResourcePath:
        """Build a path from a string.

        Scheme, host, query string and fragment are discarded, and
        repeated or trailing slashes collapse. Only a string containing
        ``://`` is read as a full URI, so ``//Accounts`` stays a path.

        Args:
            path: A path (``/Accounts/AC1``) or a full URI
                (``https://host/2010-04-01/Calls.json?Page=2``).
            strip_extension: Drop a format extension such as ``.json``
                from the last segment. Used to map a next-page URI back to
                the collection path it pages over.
        """
        if "://" in path:
            raw = urlsplit(path).path
        else:
            raw = path.split("?", 1)[0].split("#", 1)[0]
        segments = _split_segments(raw)
        if strip_extension and segments:
            head, dot, _ = segments[-1].rpartition(".")
            if dot and head:
                segments[-1] = head
        return cls(tuple(segments))

    def child(self, segment: Union[str, int], identifier: Union[str, int, None] = None) -> ResourcePath:
        """Return a new path with *segment* (and *identifier*) appended.

        Each value becomes exactly one percent-encoded segment, so an
        identifier holding ``/``, ``?`` or ``#`` cannot reshape the path.

        Raises:
            ValueError: If *segment* or *identifier* is empty.
        """
        added = (_encode(segment),)
        if identifier is not None:
            added += (_encode(identifier),)
        return ResourcePath(self.segments + added)

    @property
    def identifier(self) -> Optional[str]:
        """The decoded last segment, or ``None`` for the root path."""
        return unquote(self.segments[-1]) if self.segments else None

    @property
    def parent(self) -> ResourcePath:
        return ResourcePath(self.segments[:-1])

    def __truediv__(self, segment: Union[str, int]) -> ResourcePath:
        return self.child(segment)

    def __str__(self) -> str:
        return "/" + "/".join(self.segments)


def _encode(value: Union[str, int]) -> str:
    text = str(value)
    if not text.strip("/"):
        raise ValueError(f"Path segment must not be empty: {value!r}")
    return quote(text, safe="")


def compose(
    base: ResourcePath,
    segment: Union[str, int],
    identifier: Union[str, int, None] = None,
) -> ResourcePath:
    """Append *segment* and, when given, *identifier* to *base*.

    ``compose(compose(b, s), i) == compose(b, s, i)`` holds for any
    path, segment and identifier.
    """
    return base.child(segment, identifier)
