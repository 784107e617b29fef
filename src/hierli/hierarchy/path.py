"""Typed URL path templates.

An OpenAPI path template such as ``/groups/{groupId}/users`` is split into
:class:`Constant` segments (``groups``, ``users``) and :class:`Parameter`
placeholders (``groupId``). Only constant segments take part in placing
operations in the hierarchy; parameters become positional arguments of the
rendered command instead.

Segments are totally ordered so they can be sorted deterministically: every
parameter sorts before every constant, and segments of the same kind compare
by their text.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Iterator, Optional, Union


@functools.total_ordering
class _Segment:
    """Ordering shared by both segment kinds."""

    _rank = 0

    def _sort_key(self) -> tuple[int, str]:
        raise NotImplementedError

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, _Segment):
            return NotImplemented
        return self._sort_key() < other._sort_key()


@dataclass(frozen=True)
class Parameter(_Segment):
    """A ``{name}`` placeholder segment."""

    name: str

    _rank = 0

    def _sort_key(self) -> tuple[int, str]:
        return (self._rank, self.name)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Constant(_Segment):
    """A literal path segment."""

    text: str

    _rank = 1

    def _sort_key(self) -> tuple[int, str]:
        return (self._rank, self.text)

    def __str__(self) -> str:
        return self.text


PathSegment = Union[Constant, Parameter]


@dataclass(frozen=True)
class Path:
    """A non-empty sequence of path segments."""

    segments: tuple[PathSegment, ...]

    def constants(self) -> Iterator[str]:
        """Yield the text of each constant segment in order, skipping parameters."""
        for segment in self.segments:
            if isinstance(segment, Constant):
                yield segment.text

    def parameters(self) -> Iterator[str]:
        """Yield the name of each parameter segment in order."""
        for segment in self.segments:
            if isinstance(segment, Parameter):
                yield segment.name

    def __iter__(self) -> Iterator[PathSegment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return "/".join(str(segment) for segment in self.segments)


def parse_segment(fragment: str) -> Optional[PathSegment]:
    """Parse one ``/``-delimited fragment, or return ``None`` when it is empty.

    One leading ``{`` and one trailing ``}`` are stripped; only when both are
    present is the fragment a :class:`Parameter`. Anything else is kept
    verbatim as a :class:`Constant`.

    Example::

        >>> parse_segment("{id}")
        Parameter(name='id')
        >>> parse_segment("{id")
        Constant(text='{id')
    """
    if not fragment:
        return None
    if fragment.startswith("{") and fragment.endswith("}"):
        return Parameter(fragment[1:-1])
    return Constant(fragment)


def parse_path(template: str) -> Optional[Path]:
    """Parse a URL path template into a :class:`Path`.

    Args:
        template: A path template such as ``"groups/{groupId}/users"``.
            Leading, trailing and repeated slashes are ignored.

    Returns:
        The parsed :class:`Path`, or ``None`` if the template contains no
        segments at all (e.g. ``""`` or ``"/"``).

    Example::

        >>> list(parse_path("/groups/{groupId}/users").constants())
        ['groups', 'users']
        >>> parse_path("/") is None
        True
    """
    segments = [
        segment
        for segment in (parse_segment(fragment) for fragment in template.split("/"))
        if segment is not None
    ]
    if not segments:
        return None
    return Path(tuple(segments))
