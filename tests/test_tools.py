"""
Unit tests for the tool registry and executor.
"""

import json
from unittest.mock import Mock

import pytest

from player_chat.agent.tools import (
    DATA_KEYS,
    TOOL_REGISTRY,
    ToolExecutor,
    ToolResult,
    ToolStatus,
    get_tool,
    get_tool_schemas,
    get_tools_description,
)
from player_chat.config import SourceConfig
from player_chat.errors import FormatError, TransportError
from player_chat.sources import TheSportsDBClient, WikipediaClient
from helpers import MESSI_SPORTS, StubSource


class TestToolRegistry:
    """Tests for the fixed tool registry."""

    def test_tool_names_are_unique(self):
        names = [tool.name for tool in TOOL_REGISTRY]
        assert len(names) == len(set(names))

    def test_registry_order(self):
        assert [tool.name for tool in TOOL_REGISTRY] == ["search_thesportsdb", "search_wikipedia"]
        assert DATA_KEYS == ("sports", "wiki")

    def test_schema_format(self):
        """Schemas should use the function-calling layout."""
        schemas = get_tool_schemas()
        assert len(schemas) == 2
        for schema in schemas:
            assert schema["type"] == "function"
            params = schema["function"]["parameters"]
            assert params["required"] == ["player_name"]
            assert params["properties"]["player_name"]["type"] == "string"

    def test_get_tool(self):
        assert get_tool("search_wikipedia").data_key == "wiki"
        assert get_tool("search_google") is None

    def test_description_lists_every_tool(self):
        description = get_tools_description()
        for tool in TOOL_REGISTRY:
            assert tool.name in description

    def test_descriptors_are_immutable(self):
        with pytest.raises(Exception):
            TOOL_REGISTRY[0].name = "renamed"


class TestToolResult:
    """Tests for ToolResult formatting."""

    def test_ok_result_serializes_data(self):
        result = ToolResult("search_thesportsdb", ToolStatus.OK, data={"strPlayer": "Pelé"})
        assert result.success
        assert result.data_key == "sports"
        # Non-ASCII names are kept readable for the model
        assert "Pelé" in result.to_string()

    def test_error_result_serializes_status(self):
        result = ToolResult("search_wikipedia", ToolStatus.NOT_FOUND, error="No information found")
        assert not result.success
        parsed = json.loads(result.to_string())
        assert parsed == {"status": "not_found", "error": "No information found"}

    def test_unknown_tool_has_no_data_key(self):
        result = ToolResult("search_google", ToolStatus.UNKNOWN_TOOL, error="Unknown tool")
        assert result.data_key is None


class TestToolExecutor:
    """Tests for dispatching tool calls to data sources."""

    def test_dispatches_to_bound_source(self):
        sportsdb, wikipedia = StubSource(MESSI_SPORTS), StubSource({"title": "x"})
        executor = ToolExecutor(sportsdb, wikipedia)

        result = executor.execute("search_thesportsdb", {"player_name": "Lionel Messi"})

        assert result.status == ToolStatus.OK
        assert result.data == MESSI_SPORTS
        assert sportsdb.calls == ["Lionel Messi"]
        assert wikipedia.calls == []

    def test_no_match_is_not_found(self, make_executor):
        executor = make_executor(wikipedia=StubSource(None))
        result = executor.execute("search_wikipedia", {"player_name": "Nobody"})
        assert result.status == ToolStatus.NOT_FOUND
        assert result.data is None
        assert "Nobody" in result.error

    def test_transport_error_is_absorbed(self, make_executor):
        executor = make_executor(sportsdb=StubSource(error=TransportError("timed out")))
        result = executor.execute("search_thesportsdb", {"player_name": "Lionel Messi"})
        assert result.status == ToolStatus.ERROR
        assert result.data is None
        assert "timed out" in result.error

    def test_format_error_is_absorbed(self, make_executor):
        executor = make_executor(wikipedia=StubSource(error=FormatError("bad json")))
        result = executor.execute("search_wikipedia", {"player_name": "Lionel Messi"})
        assert result.status == ToolStatus.ERROR

    def test_unknown_tool(self, make_executor):
        result = make_executor().execute("search_google", {"player_name": "Lionel Messi"})
        assert result.status == ToolStatus.UNKNOWN_TOOL
        assert "search_google" in result.error
        assert "search_thesportsdb" in result.error

    def test_missing_player_name(self, make_executor):
        sportsdb = StubSource(MESSI_SPORTS)
        result = make_executor(sportsdb=sportsdb).execute("search_thesportsdb", {})
        assert result.status == ToolStatus.ERROR
        assert sportsdb.calls == []

    def test_unexpected_arguments_pass_through(self, make_executor):
        """Extra arguments are ignored rather than rejected."""
        sportsdb = StubSource(MESSI_SPORTS)
        result = make_executor(sportsdb=sportsdb).execute(
            "search_thesportsdb", {"player_name": "  Lionel Messi ", "season": 2024}
        )
        assert result.success
        assert sportsdb.calls == ["Lionel Messi"]


class TestExecutorWithMalformedSources:
    """Malformed source payloads come back tagged, never as exceptions."""

    @staticmethod
    def session_returning(*payloads):
        responses = []
        for payload in payloads:
            response = Mock(status_code=200, ok=True)
            response.json.return_value = payload
            responses.append(response)
        session = Mock()
        session.get.side_effect = responses
        return session

    @pytest.mark.parametrize("payload", [
        {"player": [None]},
        {"player": {"strPlayer": "Lionel Messi"}},
    ])
    def test_sportsdb_payload_is_tagged_error(self, payload):
        sportsdb = TheSportsDBClient(SourceConfig(), session=self.session_returning(payload))
        executor = ToolExecutor(sportsdb, StubSource(None))

        result = executor.execute("search_thesportsdb", {"player_name": "Lionel Messi"})

        assert result.status == ToolStatus.ERROR
        assert result.data is None

    @pytest.mark.parametrize("payloads", [
        ({"query": "oops"},),
        ({"query": {"search": [{"title": "Lionel Messi"}]}}, {"query": {"pages": [None]}}),
    ])
    def test_wikipedia_payload_is_tagged_error(self, payloads):
        wikipedia = WikipediaClient(SourceConfig(), session=self.session_returning(*payloads))
        executor = ToolExecutor(StubSource(MESSI_SPORTS), wikipedia)

        result = executor.execute("search_wikipedia", {"player_name": "Lionel Messi"})

        assert result.status == ToolStatus.ERROR
        # The other tool is unaffected
        assert executor.execute("search_thesportsdb", {"player_name": "Lionel Messi"}).success
