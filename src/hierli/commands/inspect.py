"""Inspect commands -- infer and display the hierarchy of an API spec.

Provides the read-only commands registered on the root app:

* ``hierli hierarchy`` -- print the inferred hierarchy as JSON or YAML.
* ``hierli verbs`` -- list the inferred entities and verbs.
* ``hierli tree`` -- print the command tree the hierarchy renders to.
* ``hierli run`` -- render the command tree and dispatch arguments to it.

Every command loads the OpenAPI document, resolves the prefix and seed verbs through
:func:`~hierli.config.resolve_config`, and maps
:class:`~hierli.exceptions.HierliError` to its exit code.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import typer
import yaml

from hierli.exceptions import HierliError, InvalidUsageError
from hierli.models import GlobalConfig, Hierarchy
from hierli.output import debug, error, print_data, print_table, print_tree

SPEC_ARGUMENT = typer.Argument(help="OpenAPI spec: file path, URL, or '-' for stdin.")
PREFIX_OPTION = typer.Option(
    None, "--prefix", "-P", help="Only consider paths under this prefix."
)
SEED_VERB_OPTION = typer.Option(
    None, "--seed-verb", "-s", help="Seed verb (repeatable). Replaces the configured list."
)


def _load(
    spec: str,
    prefix: Optional[str],
    seed_verbs: Optional[list[str]],
) -> tuple[dict[str, Any], GlobalConfig]:
    """Load and version-check *spec* and resolve the effective config."""
    from hierli.config import resolve_config
    from hierli.parser import load_spec, validate_openapi_version

    config = resolve_config(cli_prefix=prefix, cli_seed_verbs=seed_verbs)
    raw = load_spec(spec)
    version = validate_openapi_version(raw)
    debug(f"Loaded OpenAPI {version} spec from {spec}")
    return raw, config


def _build(
    spec: str,
    prefix: Optional[str],
    seed_verbs: Optional[list[str]],
) -> Hierarchy:
    """Load *spec* and build its hierarchy, exiting with the error's code on failure."""
    from hierli.hierarchy import build_hierarchy

    try:
        raw, config = _load(spec, prefix, seed_verbs)
        return build_hierarchy(
            raw, config.hierarchy.prefix, config.hierarchy.seed_verbs
        )
    except HierliError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def hierarchy_command(
    spec: str = SPEC_ARGUMENT,
    prefix: Optional[str] = PREFIX_OPTION,
    seed_verb: Optional[list[str]] = SEED_VERB_OPTION,
    format: str = typer.Option(
        "json", "--format", "-f", help="Document format: json or yaml."
    ),
) -> None:
    """Print the inferred hierarchy.

    Keys are sorted at every level, so the output of two runs over the same
    spec is byte-identical.

    Example::

        hierli hierarchy openapi.yaml --prefix /api/atlas/v2/
        hierli hierarchy openapi.yaml -P /api/v1/ --format yaml
    """
    if format not in ("json", "yaml"):
        error(f"Unknown format '{format}'. Expected json or yaml.")
        raise typer.Exit(code=InvalidUsageError.exit_code)

    data = _build(spec, prefix, seed_verb).model_dump(mode="json")
    if format == "yaml":
        print_data(yaml.safe_dump(data, sort_keys=True, allow_unicode=True).rstrip("\n"))
    else:
        print_data(json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False))


def verbs_command(
    spec: str = SPEC_ARGUMENT,
    prefix: Optional[str] = PREFIX_OPTION,
    seed_verb: Optional[list[str]] = SEED_VERB_OPTION,
) -> None:
    """List the entities and verbs inferred from operation identifiers.

    Seed verbs are marked ``seed``; verbs found by stripping entity names
    are marked ``inferred``.

    Example::

        hierli verbs openapi.yaml --prefix /api/v1/ --plain
    """
    from hierli.hierarchy import infer_verbs, walk_spec

    try:
        raw, config = _load(spec, prefix, seed_verb)
        walk = walk_spec(raw, config.hierarchy.prefix)
    except HierliError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    seeds = set(config.hierarchy.seed_verbs)
    inference = infer_verbs(walk.operation_ids, seeds)

    rows: list[list[str]] = []
    for verb in sorted(inference.verbs):
        rows.append(["verb", verb, "seed" if verb in seeds else "inferred"])
    for entity in sorted(inference.entities):
        rows.append(["entity", entity, "inferred"])

    print_table(
        ["Kind", "Name", "Source"],
        rows,
        title=f"{len(walk.operation_ids)} operations",
    )


def tree_command(
    spec: str = SPEC_ARGUMENT,
    prefix: Optional[str] = PREFIX_OPTION,
    seed_verb: Optional[list[str]] = SEED_VERB_OPTION,
) -> None:
    """Print the command tree the hierarchy renders to.

    Leaf commands are shown with the operation identifier they run.

    Example::

        hierli tree openapi.yaml --prefix /api/atlas/v2/
    """
    from hierli.generator import CommandNode, plan_commands

    def _outline(nodes: list[CommandNode]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for node in nodes:
            if node.is_group:
                result[node.name] = _outline(node.children)
            else:
                result[f"{node.name} ({node.operation_id})"] = {}
        return result

    print_tree("api", _outline(plan_commands(_build(spec, prefix, seed_verb))))


def run_command(
    spec: str = SPEC_ARGUMENT,
    args: Optional[list[str]] = typer.Argument(
        None, help="Arguments for the generated command tree (after '--')."
    ),
    prefix: Optional[str] = PREFIX_OPTION,
    seed_verb: Optional[list[str]] = SEED_VERB_OPTION,
) -> None:
    """Render the command tree and dispatch ARGS to it.

    Leaf commands print the operation identifier they map to; no request is
    sent to the API.

    Example::

        hierli run openapi.yaml -P /api/v1/ -- group list
    """
    from hierli.generator import build_command_tree

    command = typer.main.get_command(build_command_tree(_build(spec, prefix, seed_verb)))
    command.main(args=list(args or []), prog_name="api", standalone_mode=True)
