"""Build the entity hierarchy from the raw trie.

This is the core algorithm of hierli. It takes the trie produced by
:func:`~hierli.hierarchy.walker.walk_spec` and the verb set produced by
:func:`~hierli.hierarchy.inference.infer_verbs` and produces a
:class:`~hierli.models.Hierarchy`.

**Algorithm summary**

1. At every trie node, match each operation identifier against every known
   verb. The remainder after the verb is a candidate entity name and the
   identifier becomes that verb's operation.
2. The lexicographically-first candidate is the node's entity. Entity names
   already resolved by ancestors are stripped from its front, so a
   ``GroupMember`` below ``Group`` becomes ``Member``.
3. Children are built recursively, in key order. A child whose entity equals
   that of an already placed sibling is merged into the sibling instead of
   being added under its own key. This is what folds ``/groups/{id}/users``
   and ``/groups/{id}/members`` into one ``Member`` entry. Two siblings
   without an entity are equal too, so ``/groups/{id}/members`` and
   ``/orgs/{id}/members`` collapse when neither parent resolves an entity.
   Top-level entries are never merged; each keeps its path segment.
4. Entries with neither verbs nor children are pruned.

Any conflict aborts the whole build with a
:class:`~hierli.exceptions.HierarchyError`; no partial hierarchy is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Optional

from hierli.exceptions import EntityMismatchError, VerbCollisionError
from hierli.hierarchy.inference import infer_verbs
from hierli.hierarchy.walker import RawEntry, walk_spec
from hierli.models import DEFAULT_SEED_VERBS, Hierarchy, HierarchyEntry

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def build_hierarchy(
    raw_spec: dict[str, Any],
    prefix: str,
    seed_verbs: Iterable[str] = DEFAULT_SEED_VERBS,
) -> Hierarchy:
    """Infer the command hierarchy of an OpenAPI document.

    Args:
        raw_spec: The OpenAPI document as a plain dict, already loaded and
            version-checked (see :mod:`hierli.parser.loader`).
        prefix: Only paths starting with this string are considered, and it
            is removed before the path is split into segments.
        seed_verbs: Verbs assumed to prefix operation identifiers.

    Returns:
        The complete :class:`~hierli.models.Hierarchy`.

    Raises:
        VerbCollisionError: If two identifiers claim the same verb on one
            entry, either at a single path or after merging siblings.
        EntityMismatchError: If a merge meets same-key children whose
            entity names differ.

    Example::

        raw = load_spec("openapi.yaml")
        validate_openapi_version(raw)
        hierarchy = build_hierarchy(raw, "/api/atlas/v2/")
        print(hierarchy.model_dump_json(indent=2))
    """
    walk = walk_spec(raw_spec, prefix)
    inference = infer_verbs(walk.operation_ids, seed_verbs)

    if walk.root.operation_ids:
        logger.debug(
            "Ignoring %d operation(s) attached directly to %s",
            len(walk.root.operation_ids),
            prefix,
        )

    hierarchy = hierarchy_from_trie(walk.root, inference.verbs)
    logger.debug(
        "Built hierarchy with %d top-level entries from %d operation ids",
        len(hierarchy.entries),
        len(walk.operation_ids),
    )
    return hierarchy


def hierarchy_from_trie(root: RawEntry, verbs: Iterable[str]) -> Hierarchy:
    """Convert the children of *root* into a :class:`~hierli.models.Hierarchy`.

    The trie is consumed: converted children are removed from *root*.
    Each top-level entry is keyed by its own path segment; siblings are not
    merged at this level.
    """
    verb_set = frozenset(verbs)
    entries: dict[str, HierarchyEntry] = {}
    for key in sorted(root.children):
        entry = build_entry(root.children.pop(key), (), verb_set)
        if entry is not None:
            entries[key] = entry
    return Hierarchy(entries=entries)


def build_entry(
    node: RawEntry,
    prefix: tuple[str, ...],
    verbs: Iterable[str],
) -> Optional[HierarchyEntry]:
    """Convert one trie node (and its subtree) into a hierarchy entry.

    Args:
        node: The trie node to consume.
        prefix: Entity names resolved by the node's ancestors, outermost
            first.
        verbs: The full verb set from inference.

    Returns:
        The built entry, or ``None`` when the node yields neither verbs nor
        children.
    """
    verb_set = frozenset(verbs)
    if node.is_empty():
        return None

    entity_name, verb_map = _resolve_node(node.operation_ids, prefix, verb_set)

    child_prefix = prefix if entity_name is None else prefix + (entity_name,)
    entries = _build_children(node, child_prefix, verb_set)

    if not entries and not verb_map:
        if node.operation_ids:
            logger.debug(
                "Dropping %s: no known verb prefixes them",
                ", ".join(sorted(node.operation_ids)),
            )
        return None

    return HierarchyEntry(entity_name=entity_name, entries=entries, verbs=verb_map)


def merge_entries(target: HierarchyEntry, source: HierarchyEntry) -> None:
    """Merge *source* into *target* in place.

    Verbs of *source* are added to *target*; children are merged
    recursively by key, or added when *target* has no child under that key.
    Where keys differ the content is the same whichever entry is the target.

    On error *target* may be left partially merged; the builder discards it.

    Raises:
        EntityMismatchError: If the two entity names differ.
        VerbCollisionError: If both entries define the same verb.
    """
    if target.entity_name != source.entity_name:
        raise EntityMismatchError(target.entity_name, source.entity_name)

    for verb, operation_id in source.verbs.items():
        existing = target.verbs.get(verb)
        if existing is not None:
            raise VerbCollisionError(verb, existing, operation_id, target.entity_name)
        target.verbs[verb] = operation_id

    for key, child in source.entries.items():
        if key in target.entries:
            merge_entries(target.entries[key], child)
        else:
            target.entries[key] = child

    target.verbs = dict(sorted(target.verbs.items()))
    target.entries = dict(sorted(target.entries.items()))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve_node(
    operation_ids: set[str],
    prefix: tuple[str, ...],
    verbs: frozenset[str],
) -> tuple[Optional[str], dict[str, str]]:
    """Resolve the entity name and verb map of a single node.

    An identifier equal to a verb is still mapped under that verb, but its
    empty remainder is not an entity candidate.
    """
    matches: list[tuple[str, str]] = []
    candidates: set[str] = set()
    for operation_id in sorted(operation_ids):
        for verb in sorted(verbs):
            if verb and operation_id.startswith(verb):
                matches.append((verb, operation_id))
                remainder = operation_id[len(verb):]
                if remainder:
                    candidates.add(remainder)

    entity_name = _strip_ancestors(min(candidates), prefix) if candidates else None

    verb_map: dict[str, str] = {}
    for verb, operation_id in matches:
        existing = verb_map.get(verb)
        if existing is not None:
            raise VerbCollisionError(verb, existing, operation_id, entity_name)
        verb_map[verb] = operation_id

    return entity_name, dict(sorted(verb_map.items()))


def _strip_ancestors(entity_name: str, prefix: tuple[str, ...]) -> str:
    """Strip each ancestor entity, outermost first, from the front of *entity_name*."""
    for ancestor in prefix:
        if ancestor and entity_name.startswith(ancestor):
            entity_name = entity_name[len(ancestor):]
    return entity_name


def _build_children(
    node: RawEntry,
    prefix: tuple[str, ...],
    verbs: frozenset[str],
) -> dict[str, HierarchyEntry]:
    """Build and place every child of *node*, consuming them in key order."""
    entries: dict[str, HierarchyEntry] = {}
    for key in sorted(node.children):
        entry = build_entry(node.children.pop(key), prefix, verbs)
        if entry is None:
            continue

        sibling = _find_sibling(entries, entry.entity_name)
        if sibling is not None:
            logger.debug("Merging '%s' into sibling entity %r", key, entry.entity_name)
            merge_entries(sibling, entry)
        else:
            entries[key] = entry
    return entries


def _find_sibling(
    entries: dict[str, HierarchyEntry], entity_name: Optional[str]
) -> Optional[HierarchyEntry]:
    """Return the first placed sibling resolving to *entity_name*.

    ``None`` matches ``None``: unnamed siblings merge with each other.
    """
    for entry in entries.values():
        if entry.entity_name == entity_name:
            return entry
    return None
