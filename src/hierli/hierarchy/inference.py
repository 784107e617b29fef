"""Infer entity names and verbs from operation identifiers.

Operation identifiers in most OpenAPI documents follow a ``<verb><Entity>``
naming convention (``listGroups``, ``getGroup``, ``addOrgMember``). This
module recovers both halves with two passes of plain string-set algebra over
every identifier in the document:

1. **Entity discovery** -- strip each seed verb from the identifiers it
   prefixes and singularise the remainder (``listGroups`` -> ``Group``).
2. **Verb discovery** -- strip the longest known entity from the end of each
   identifier and treat what is left as a verb (``pauseGroup`` -> ``pause``).

The result is computed once per document and handed, read-only, to the builder.
Nothing here is meant to be linguistically correct; it only needs to be
deterministic.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable
from dataclasses import dataclass

import inflect

from hierli.models import DEFAULT_SEED_VERBS

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=1)
def _engine() -> inflect.engine:
    return inflect.engine()


def singularize(word: str) -> str:
    """Return the singular form of *word*, or *word* itself if it already is one.

    Uses :mod:`inflect`; casing of regular plurals is preserved
    (``"Groups"`` -> ``"Group"``). The empty string is returned unchanged.
    """
    if not word:
        return word
    singular = _engine().singular_noun(word)
    return singular or word


@dataclass(frozen=True)
class Inference:
    """Entities and verbs inferred from one set of operation identifiers.

    Attributes:
        entities: Every candidate entity name found in pass one.
        verbs: The seed verbs plus every verb found in pass two.
    """

    entities: frozenset[str]
    verbs: frozenset[str]


def discover_entities(
    operation_ids: Iterable[str], seed_verbs: Iterable[str]
) -> set[str]:
    """Collect candidate entity names from identifiers prefixed by a seed verb.

    An identifier contributes one candidate per seed verb it starts with, so
    ``updateGroup`` with seeds ``up`` and ``update`` yields both
    ``dateGroup`` and ``Group``. All candidates are kept.

    An identifier that is exactly a seed verb (``list``) has no remainder and
    contributes nothing; the empty string is never an entity, so
    :func:`discover_verbs` never treats a whole identifier as a verb.

    Example::

        >>> sorted(discover_entities(["listGroups", "getGroup"], ["get", "list"]))
        ['Group']
    """
    seeds = sorted(verb for verb in set(seed_verbs) if verb)
    entities: set[str] = set()
    for operation_id in sorted(set(operation_ids)):
        for verb in seeds:
            if operation_id.startswith(verb) and operation_id != verb:
                entities.add(singularize(operation_id[len(verb):]))
    return entities


def discover_verbs(operation_ids: Iterable[str], entities: Iterable[str]) -> set[str]:
    """Derive additional verbs by stripping the longest entity suffix.

    For each identifier, the entity that is a suffix of it and leaves the
    shortest remainder wins; the remainder is registered as a verb. Entities
    are scanned in ascending order and only a strictly shorter remainder
    replaces an earlier one, which keeps the outcome reproducible.

    An entity equal to the whole identifier is not a suffix match; an empty
    verb is never registered.
    """
    candidates = sorted(set(entities))
    verbs: set[str] = set()
    for operation_id in sorted(set(operation_ids)):
        shortest: str | None = None
        for entity in candidates:
            if entity == operation_id or not operation_id.endswith(entity):
                continue
            verb = operation_id[: len(operation_id) - len(entity)]
            if shortest is None or len(verb) < len(shortest):
                shortest = verb
        if shortest is not None:
            verbs.add(shortest)
    return verbs


def infer_verbs(
    operation_ids: Iterable[str],
    seed_verbs: Iterable[str] = DEFAULT_SEED_VERBS,
) -> Inference:
    """Run entity discovery then verb discovery over *operation_ids*.

    Args:
        operation_ids: Every operation identifier collected from the document.
        seed_verbs: Verbs assumed to prefix identifiers. Defaults to
            :data:`~hierli.models.DEFAULT_SEED_VERBS`.

    Returns:
        An :class:`Inference` whose ``verbs`` always contains every seed verb.
    """
    ids = set(operation_ids)
    seeds = {verb for verb in seed_verbs if verb}
    entities = discover_entities(ids, seeds)
    discovered = discover_verbs(ids, entities)
    logger.debug(
        "Inferred %d entities and %d new verbs from %d operation ids",
        len(entities),
        len(discovered - seeds),
        len(ids),
    )
    return Inference(entities=frozenset(entities), verbs=frozenset(seeds | discovered))
