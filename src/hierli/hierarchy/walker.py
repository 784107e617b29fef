"""Walk an OpenAPI document into a raw trie of operation identifiers.

The trie is keyed by the *constant* segments of each path below the
configured prefix. Path parameters never create nodes, so
``/groups/{id}`` and ``/groups`` land on the same ``groups`` node, while
``/groups/{id}/users`` lands on ``groups -> users``.

Paths outside the prefix, paths with no segments after the prefix,
``$ref`` path items and operations without an ``operationId`` are skipped
with a debug log line; none of them is an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from hierli.exceptions import SpecParseError
from hierli.hierarchy.path import parse_path

logger = logging.getLogger(__name__)

# Operation keys of an OpenAPI Path Item Object.
HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


@dataclass
class RawEntry:
    """Trie node holding the operation identifiers attached at one path."""

    children: dict[str, RawEntry] = field(default_factory=dict)
    operation_ids: set[str] = field(default_factory=set)

    def child(self, segment: str) -> RawEntry:
        """Return the child for *segment*, creating it if necessary."""
        if segment not in self.children:
            self.children[segment] = RawEntry()
        return self.children[segment]

    def is_empty(self) -> bool:
        return not self.children and not self.operation_ids


@dataclass
class WalkResult:
    """Everything collected in one pass over a spec's ``paths`` object.

    Attributes:
        root: The trie root. Operations attached to the root itself (a path
            made only of parameters) are not placed in the hierarchy.
        operation_ids: Every operation identifier found under the prefix.
        segments: Every constant path segment found under the prefix.
    """

    root: RawEntry = field(default_factory=RawEntry)
    operation_ids: set[str] = field(default_factory=set)
    segments: set[str] = field(default_factory=set)


def walk_spec(raw_spec: dict[str, Any], prefix: str) -> WalkResult:
    """Build the raw trie for every path of *raw_spec* starting with *prefix*.

    Args:
        raw_spec: An OpenAPI document as a plain dict (see
            :func:`~hierli.parser.loader.load_spec`).
        prefix: Path prefix marking the API root, e.g. ``"/api/atlas/v2/"``.
            It is removed before the remainder is parsed.

    Returns:
        A :class:`WalkResult` with the trie and the identifier and segment
        sets needed by :func:`~hierli.hierarchy.inference.infer_verbs`.

    Raises:
        SpecParseError: If ``paths`` is present but is not a mapping.
    """
    paths = raw_spec.get("paths") or {}
    if not isinstance(paths, dict):
        raise SpecParseError(
            f"'paths' must be an object (got {type(paths).__name__})"
        )

    result = WalkResult()
    for template in sorted(paths):
        if not template.startswith(prefix):
            logger.debug("Skipping %s: outside prefix %s", template, prefix)
            continue

        path = parse_path(template[len(prefix):])
        if path is None:
            logger.debug("Skipping %s: no segments below prefix", template)
            continue

        item = paths[template]
        if not isinstance(item, dict) or "$ref" in item:
            logger.debug("Skipping %s: not an inline path item", template)
            continue

        node = result.root
        for segment in path.constants():
            node = node.child(segment)
            result.segments.add(segment)

        for method in HTTP_METHODS:
            operation = item.get(method)
            if not isinstance(operation, dict):
                continue
            operation_id = operation.get("operationId")
            if not isinstance(operation_id, str) or not operation_id.strip():
                logger.debug("Skipping %s %s: no operationId", method.upper(), template)
                continue
            operation_id = operation_id.strip()
            node.operation_ids.add(operation_id)
            result.operation_ids.add(operation_id)

    return result
