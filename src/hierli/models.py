"""Canonical Pydantic models shared across all hierli modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`HierarchyConfig`, :class:`OutputConfig` and :class:`GlobalConfig`.

**Hierarchy models** -- produced by :func:`~hierli.hierarchy.build_hierarchy`
and consumed by the command-tree generator and the ``inspect`` commands:
    :class:`HierarchyEntry` and :class:`Hierarchy`.
"""

from __future__ import annotations

from typing import Iterator, Optional

from pydantic import BaseModel, Field

DEFAULT_SEED_VERBS: tuple[str, ...] = (
    "add",
    "create",
    "delete",
    "get",
    "list",
    "update",
    "upgrade",
    "verify",
)
"""Verbs assumed to prefix operation identifiers before any inference runs."""


# --- Config ---


class HierarchyConfig(BaseModel):
    """Settings that control how a hierarchy is inferred from a spec.

    Example::

        HierarchyConfig(prefix="/api/atlas/v2/", seed_verbs=["get", "list"])
    """

    prefix: str = Field(
        default="/", description="Only paths starting with this prefix are considered"
    )
    seed_verbs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SEED_VERBS),
        description="Verbs used to discover entity names in operation identifiers",
    )


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/hierli/config.json``.

    Loaded and saved by :func:`~hierli.config.load_global_config` and
    :func:`~hierli.config.save_global_config`. Fields here have the
    lowest precedence and can be overridden by project config, environment
    variables, or CLI flags. See :func:`~hierli.config.resolve_config`
    for the full precedence chain.
    """

    hierarchy: HierarchyConfig = Field(default_factory=HierarchyConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Hierarchy ---


class HierarchyEntry(BaseModel):
    """One node of the inferred command hierarchy.

    An entry groups the operations that act on a single entity. ``verbs``
    maps each inferred verb to the one operation identifier realising it,
    and ``entries`` holds the nested resources keyed by the URL path segment
    they were first found under. ``entity_name`` is ``None`` when no
    operation at this node matched a known verb.

    Both mappings are kept in ascending key order.
    """

    entity_name: Optional[str] = None
    entries: dict[str, HierarchyEntry] = Field(default_factory=dict)
    verbs: dict[str, str] = Field(default_factory=dict)

    def walk(
        self, key_path: tuple[str, ...] = ()
    ) -> Iterator[tuple[tuple[str, ...], HierarchyEntry]]:
        """Yield ``(key_path, entry)`` for this entry and every descendant.

        Traversal is depth-first, parents before children, alphabetical by
        key at every level.
        """
        yield key_path, self
        for key in sorted(self.entries):
            yield from self.entries[key].walk(key_path + (key,))


class Hierarchy(BaseModel):
    """The complete entity tree inferred from one OpenAPI spec.

    Built once by :func:`~hierli.hierarchy.build_hierarchy` and treated as
    read-only afterwards. Serialise with ``model_dump()`` or
    ``model_dump_json()``; key order is alphabetical at every level, so two
    builds of the same spec serialise identically.

    See Also:
        :func:`~hierli.generator.build_command_tree`: Renders a hierarchy
        into a Typer application.
    """

    entries: dict[str, HierarchyEntry] = Field(default_factory=dict)

    def walk(self) -> Iterator[tuple[tuple[str, ...], HierarchyEntry]]:
        """Yield ``(key_path, entry)`` for every entry in the hierarchy.

        Example::

            for key_path, entry in hierarchy.walk():
                print("/".join(key_path), sorted(entry.verbs))
        """
        for key in sorted(self.entries):
            yield from self.entries[key].walk((key,))

    def operation_ids(self) -> set[str]:
        """Return every operation identifier referenced by the hierarchy."""
        return {
            operation_id
            for _, entry in self.walk()
            for operation_id in entry.verbs.values()
        }
