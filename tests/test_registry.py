"""Tests for tools/registry.py — catalogue contents, lookup, filtering."""
import pytest

from voice_agent.tools.registry import (
    ToolDefinition, ToolNotFound, ToolParam, ToolRegistry, ToolResult, input_text,
)

EXPECTED_ORDER = [
    "send_email",
    "create_calendar_event",
    "send_slack_message",
    "create_github_issue",
    "create_notion_page",
]


class TestBuiltinCatalogue:
    def test_registration_order(self, registry):
        assert [t.name for t in registry.list()] == EXPECTED_ORDER

    def test_send_email_schema(self, registry):
        tool = registry.get("send_email")
        assert tool.description == "Send an email via Gmail"
        assert tool.required_fields == ["to", "subject", "body"]

    def test_calendar_required_fields(self, registry):
        tool = registry.get("create_calendar_event")
        assert tool.required_fields == ["title", "startTime", "endTime"]
        assert "description" in tool.input_schema()["properties"]

    def test_slack_required_fields(self, registry):
        assert registry.get("send_slack_message").required_fields == ["channel", "message"]

    def test_github_required_fields(self, registry):
        assert registry.get("create_github_issue").required_fields == ["owner", "repo", "title"]

    def test_notion_properties_is_object(self, registry):
        schema = registry.get("create_notion_page").input_schema()
        assert schema["properties"]["properties"]["type"] == "object"
        assert schema["required"] == ["databaseId", "title"]

    def test_to_dict_wire_shape(self, registry):
        data = registry.get("send_slack_message").to_dict()
        assert data == {
            "name": "send_slack_message",
            "description": "Send a message to Slack",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "channel": {"type": "string", "description": "Slack channel ID or name"},
                    "message": {"type": "string", "description": "Message text"},
                },
                "required": ["channel", "message"],
            },
        }


class TestLookup:
    def test_get_missing_raises(self, registry):
        with pytest.raises(ToolNotFound) as exc:
            registry.get("does_not_exist")
        assert str(exc.value) == "Tool 'does_not_exist' not found"

    def test_get_is_exact_match(self, registry):
        with pytest.raises(ToolNotFound):
            registry.get("SEND_EMAIL")

    def test_contains(self, registry):
        assert "send_email" in registry
        assert "nope" not in registry

    def test_list_is_a_copy(self, registry):
        tools = registry.list()
        tools.clear()
        assert len(registry) == 5

    def test_definitions_are_frozen(self, registry):
        with pytest.raises(AttributeError):
            registry.get("send_email").name = "other"

    def test_duplicate_names_rejected(self):
        tool = ToolDefinition("a", "first")
        with pytest.raises(ValueError):
            ToolRegistry([tool, ToolDefinition("a", "second")])


class TestFilter:
    def test_empty_means_all(self, registry):
        assert [t.name for t in registry.filter([])] == EXPECTED_ORDER
        assert [t.name for t in registry.filter(None)] == EXPECTED_ORDER

    def test_follows_registry_order(self, registry):
        names = [t.name for t in registry.filter(["create_notion_page", "send_email"])]
        assert names == ["send_email", "create_notion_page"]

    def test_unknown_names_ignored(self, registry):
        assert registry.filter(["nope"]) == []


class TestToolResult:
    def test_ok_to_dict(self):
        assert ToolResult.ok("done").to_dict() == {"success": True, "result": "done"}

    def test_fail_to_dict(self):
        assert ToolResult.fail("boom").to_dict() == {"success": False, "error": "boom"}


class TestInputText:
    def test_present(self):
        assert input_text({"to": "a@b.com"}, "to") == "a@b.com"

    def test_missing_renders_empty(self):
        assert input_text({"request": "hi"}, "to") == ""

    def test_non_string(self):
        assert input_text({"n": 3}, "n") == "3"


class TestToolParam:
    def test_defaults(self):
        p = ToolParam("x")
        assert p.type == "string"
        assert p.required is True
