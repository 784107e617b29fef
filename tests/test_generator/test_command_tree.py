"""Tests for hierli.generator.command_tree.

Covers:
- camelCase naming of groups
- plan order: verbs before nested groups, alphabetical
- duplicate names within a group get a numeric suffix
- build_command_tree produces an invocable Typer app
- leaf commands echo or forward their operation identifier
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
import typer
from typer.testing import CliRunner

from hierli.generator import CommandNode, build_command_tree, plan_commands, to_camel_case
from hierli.hierarchy import build_hierarchy
from hierli.models import Hierarchy, HierarchyEntry

runner = CliRunner()


@pytest.fixture
def groups_hierarchy(groups_api_raw: dict[str, Any]) -> Hierarchy:
    return build_hierarchy(groups_api_raw, "/api/v1/")


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


class TestToCamelCase:

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Group", "group"),
            ("OrgMember", "orgMember"),
            ("api-keys", "apiKeys"),
            ("APIKey", "apiKey"),
            ("private_endpoints", "privateEndpoints"),
            ("v2", "v2"),
            ("", ""),
            ("--", "--"),
        ],
    )
    def test_to_camel_case(self, text: str, expected: str) -> None:
        assert to_camel_case(text) == expected


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


class TestPlanCommands:

    def test_groups_named_after_entities(self, groups_hierarchy: Hierarchy) -> None:
        plan = plan_commands(groups_hierarchy)
        assert [node.name for node in plan] == ["group", "orgs"]
        assert all(node.is_group for node in plan)

    def test_verbs_before_nested_groups(self, groups_hierarchy: Hierarchy) -> None:
        group = plan_commands(groups_hierarchy)[0]
        assert [child.name for child in group.children] == [
            "create",
            "delete",
            "get",
            "list",
            "pause",
            "update",
            "member",
        ]
        member = group.children[-1]
        assert member.is_group
        assert [(c.name, c.operation_id) for c in member.children] == [
            ("add", "addGroupMember"),
            ("invite", "inviteGroupMember"),
            ("list", "listGroupMembers"),
        ]

    def test_unnamed_entry_uses_key(self) -> None:
        hierarchy = Hierarchy(
            entries={
                "api-keys": HierarchyEntry(
                    entries={"keys": HierarchyEntry(entity_name="Key", verbs={"get": "getKey"})}
                )
            }
        )
        node = plan_commands(hierarchy)[0]
        assert node.name == "apiKeys"
        assert node.help == "Commands under /api-keys."

    def test_help_mentions_entity_and_key(self, groups_hierarchy: Hierarchy) -> None:
        node = plan_commands(groups_hierarchy)[0]
        assert node.help == "Operations on Group (/groups)."

    def test_duplicate_names_get_suffix(self) -> None:
        hierarchy = Hierarchy(
            entries={
                "groups": HierarchyEntry(entity_name="Group", verbs={"get": "getGroup"}),
                "teams": HierarchyEntry(entity_name="group", verbs={"list": "listTeams"}),
            }
        )
        assert [node.name for node in plan_commands(hierarchy)] == ["group", "group-2"]

    def test_child_group_named_like_verb(self) -> None:
        hierarchy = Hierarchy(
            entries={
                "jobs": HierarchyEntry(
                    entity_name="Job",
                    verbs={"list": "listJobs"},
                    entries={"list": HierarchyEntry(entity_name="List", verbs={"get": "getList"})},
                )
            }
        )
        job = plan_commands(hierarchy)[0]
        assert [child.name for child in job.children] == ["list", "list-2"]

    def test_empty_hierarchy(self) -> None:
        assert plan_commands(Hierarchy()) == []

    def test_command_node_is_group(self) -> None:
        assert CommandNode(name="x", help="").is_group
        assert not CommandNode(name="x", help="", operation_id="getX").is_group


# ---------------------------------------------------------------------------
# Typer materialisation
# ---------------------------------------------------------------------------


class TestBuildCommandTree:

    def test_returns_typer_app(self, groups_hierarchy: Hierarchy) -> None:
        assert isinstance(build_command_tree(groups_hierarchy), typer.Typer)

    def test_help_lists_groups(self, groups_hierarchy: Hierarchy) -> None:
        result = runner.invoke(build_command_tree(groups_hierarchy), ["--help"])
        assert result.exit_code == 0
        assert "group" in result.output
        assert "orgs" in result.output

    def test_leaf_echoes_operation_id(self, groups_hierarchy: Hierarchy) -> None:
        app = build_command_tree(groups_hierarchy)
        result = runner.invoke(app, ["group", "list"])
        assert result.exit_code == 0
        assert result.output.strip() == "listGroups"

    def test_nested_leaf(self, groups_hierarchy: Hierarchy) -> None:
        app = build_command_tree(groups_hierarchy)
        result = runner.invoke(app, ["group", "member", "invite"])
        assert result.exit_code == 0
        assert result.output.strip() == "inviteGroupMember"

    def test_single_group_app_still_nests(self) -> None:
        hierarchy = Hierarchy(
            entries={"groups": HierarchyEntry(entity_name="Group", verbs={"get": "getGroup"})}
        )
        result = runner.invoke(build_command_tree(hierarchy), ["group", "get"])
        assert result.exit_code == 0
        assert result.output.strip() == "getGroup"

    def test_callback_receives_operation_id(self, groups_hierarchy: Hierarchy) -> None:
        callback = MagicMock()
        app = build_command_tree(groups_hierarchy, operation_callback=callback)
        result = runner.invoke(app, ["orgs", "list"])
        assert result.exit_code == 0
        callback.assert_called_once_with("listOrgs")

    def test_unknown_command_fails(self, groups_hierarchy: Hierarchy) -> None:
        result = runner.invoke(build_command_tree(groups_hierarchy), ["group", "explode"])
        assert result.exit_code != 0
