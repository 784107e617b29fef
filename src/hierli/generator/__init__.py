"""CLI generator -- render an inferred hierarchy as a Typer command tree.

This sub-package is the consumer end of the hierli pipeline: it performs a
read-only, alphabetical traversal of a :class:`~hierli.models.Hierarchy` and
creates one command group per entry and one leaf command per verb.

Typical usage::

    from hierli.generator import build_command_tree

    app = build_command_tree(hierarchy)
    app()  # invoke the CLI

Sub-modules:

* :mod:`~hierli.generator.command_tree` -- naming rules, the command plan,
  and its Typer materialisation.
"""

from hierli.generator.command_tree import (
    CommandNode,
    build_command_tree,
    plan_commands,
    to_camel_case,
)

__all__ = ["CommandNode", "build_command_tree", "plan_commands", "to_camel_case"]
