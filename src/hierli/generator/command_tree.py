"""Render a :class:`~hierli.models.Hierarchy` as a Typer command tree.

Every :class:`~hierli.models.HierarchyEntry` becomes a command group and every
verb on it becomes a leaf command, so an entry ``groups`` with entity
``Group`` and verbs ``get``/``list`` renders as::

    api group get
    api group list

**Naming**

* Groups are named after the entry's entity, or after its path segment when
  no entity was inferred, converted to camelCase (``OrgMember`` ->
  ``orgMember``, ``api-keys`` -> ``apiKeys``).
* Verbs keep their inferred spelling.
* Within one group a name that is already taken gets a numeric suffix
  (``member-2``), because Click silently replaces duplicate names.

Leaf commands do not call the API. They pass the operation identifier to an
optional callback, or print it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import typer

from hierli.models import Hierarchy, HierarchyEntry

_WORD_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")


@dataclass
class CommandNode:
    """One planned command: a group when ``operation_id`` is ``None``."""

    name: str
    help: str
    operation_id: Optional[str] = None
    children: list[CommandNode] = field(default_factory=list)

    @property
    def is_group(self) -> bool:
        return self.operation_id is None


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def plan_commands(hierarchy: Hierarchy) -> list[CommandNode]:
    """Turn *hierarchy* into a list of top-level :class:`CommandNode` groups.

    The plan is what :func:`build_command_tree` materialises, and what
    ``hierli tree`` prints. Order is alphabetical by entry key, verbs before
    nested groups.
    """
    used: set[str] = set()
    return [
        _plan_entry(key, hierarchy.entries[key], used)
        for key in sorted(hierarchy.entries)
    ]


def build_command_tree(
    hierarchy: Hierarchy,
    name: str = "api",
    operation_callback: Optional[Callable[[str], Any]] = None,
) -> typer.Typer:
    """Build a nested :class:`typer.Typer` app from *hierarchy*.

    Args:
        hierarchy: The hierarchy to render.
        name: Name of the returned root app.
        operation_callback: Called with the operation identifier when a leaf
            command runs. When ``None`` the identifier is printed instead.

    Returns:
        A :class:`typer.Typer` app with one sub-app per top-level entry.

    Example::

        app = build_command_tree(build_hierarchy(raw, "/api/v1/"))
        app(["group", "list"])
    """
    app = typer.Typer(name=name, help="Commands inferred from the API spec.", no_args_is_help=True)

    @app.callback()
    def _root() -> None:
        """Commands inferred from the API spec."""

    for node in plan_commands(hierarchy):
        app.add_typer(_materialise(node, operation_callback))
    return app


def to_camel_case(text: str) -> str:
    """Convert *text* to camelCase, splitting on case changes and punctuation.

    Example::

        >>> to_camel_case("OrgMember")
        'orgMember'
        >>> to_camel_case("api-keys")
        'apiKeys'
        >>> to_camel_case("APIKey")
        'apiKey'
    """
    words = _WORD_RE.findall(text)
    if not words:
        return text
    first, rest = words[0], words[1:]
    return first.lower() + "".join(word[:1].upper() + word[1:].lower() for word in rest)


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


def _plan_entry(key: str, entry: HierarchyEntry, used: set[str]) -> CommandNode:
    base = to_camel_case(entry.entity_name) if entry.entity_name else ""
    name = _unique_name(base or key, used)

    if entry.entity_name:
        help_text = f"Operations on {entry.entity_name} (/{key})."
    else:
        help_text = f"Commands under /{key}."

    node = CommandNode(name=name, help=help_text)
    taken: set[str] = set()
    for verb, operation_id in entry.verbs.items():
        node.children.append(
            CommandNode(
                name=_unique_name(verb, taken),
                help=f"Run operation {operation_id}.",
                operation_id=operation_id,
            )
        )
    for child_key in sorted(entry.entries):
        node.children.append(_plan_entry(child_key, entry.entries[child_key], taken))
    return node


def _unique_name(name: str, used: set[str]) -> str:
    """Return *name*, or *name* with the first free ``-N`` suffix, and reserve it."""
    candidate = name
    counter = 2
    while candidate in used:
        candidate = f"{name}-{counter}"
        counter += 1
    used.add(candidate)
    return candidate


# ---------------------------------------------------------------------------
# Typer materialisation
# ---------------------------------------------------------------------------


def _materialise(
    node: CommandNode,
    operation_callback: Optional[Callable[[str], Any]],
) -> typer.Typer:
    """Create the Typer sub-app for group *node* and everything below it."""
    sub = typer.Typer(name=node.name, help=node.help, no_args_is_help=True)
    for child in node.children:
        if child.is_group:
            sub.add_typer(_materialise(child, operation_callback))
        else:
            sub.command(name=child.name, help=child.help)(
                _leaf_function(child.operation_id, operation_callback)
            )
    return sub


def _leaf_function(
    operation_id: Optional[str],
    operation_callback: Optional[Callable[[str], Any]],
) -> Callable[[], None]:
    def _run() -> None:
        if operation_callback is not None:
            operation_callback(operation_id)
        else:
            typer.echo(operation_id)

    return _run
