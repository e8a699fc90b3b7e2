"""Tests for the indicator tool dispatcher."""

import logging
import os
from unittest.mock import patch

import pytest

from pinesage.core.indicators import IndicatorStore
from pinesage.mcp import tools as tools_module
from pinesage.mcp.tools import TOOL_SPECS, IndicatorTools, ToolResult


@pytest.fixture
def tools(config):
    """Dispatcher over the shared indicators directory."""
    return IndicatorTools(config)


@pytest.fixture
def outside_file(tmp_path_factory):
    """A readable script living outside the indicators directory."""
    path = tmp_path_factory.mktemp("outside") / "secret.txt"
    path.write_text("plot(secret)")
    return path


class TestToolSpecs:
    """Tests for the advertised tool definitions."""

    def test_exactly_four_tools(self):
        """Test the tool list and its order."""
        assert [s.name for s in TOOL_SPECS] == [
            "list_indicators",
            "analyze_indicator",
            "search_indicators",
            "extract_functions",
        ]

    def test_schemas_use_wire_names(self):
        """Test input schemas use camelCase argument names."""
        schemas = {s.name: s.input_schema for s in TOOL_SPECS}

        assert schemas["analyze_indicator"]["required"] == ["indicatorName"]
        assert schemas["extract_functions"]["required"] == ["indicatorName"]
        assert schemas["search_indicators"]["required"] == ["searchTerm"]
        props = schemas["search_indicators"]["properties"]
        assert props["caseInsensitive"]["default"] is True
        assert "required" not in schemas["list_indicators"]


class TestToolResult:
    """Tests for the tool result type."""

    def test_failure_is_flagged(self):
        """Test failures carry the error prefix and flag."""
        result = ToolResult.failure("boom")
        assert result.is_error
        assert result.text == "Error: boom"

    def test_success(self):
        """Test successes are not flagged."""
        assert not ToolResult.success("ok").is_error


class TestDispatch:
    """Tests for dispatching tool calls."""

    def test_list_indicators(self, tools):
        """Test listing all indicators."""
        result = tools.dispatch("list_indicators", {})
        assert not result.is_error
        assert result.text == "Found 2 indicator files:\n\n1. MACD Cross\n2. rsi_divergence.pine"

    def test_list_indicators_with_pattern(self, tools):
        """Test listing with a name pattern."""
        result = tools.dispatch("list_indicators", {"pattern": "rsi"})
        assert result.text == "Found 1 indicator files:\n\n1. rsi_divergence.pine"

    def test_list_indicators_without_arguments(self, tools):
        """Test missing arguments are treated as empty."""
        assert not tools.dispatch("list_indicators", None).is_error

    def test_analyze_indicator(self, tools):
        """Test analyzing an indicator."""
        result = tools.dispatch("analyze_indicator", {"indicatorName": "rsi_divergence.pine"})

        assert not result.is_error
        assert "# Analysis of rsi_divergence.pine" in result.text
        assert "- **Lines of Code**: 13" in result.text
        assert "- **Complexity**: Low" in result.text
        assert "- **Functions**: 5 found" in result.text
        assert "- f_signal" in result.text

    def test_analyze_missing_file_is_error(self, tools):
        """Test a missing file gives an error result."""
        result = tools.dispatch("analyze_indicator", {"indicatorName": "ghost.pine"})

        assert result.is_error
        assert result.text.startswith("Error: ")
        assert "ghost.pine" in result.text
        assert "No such file" in result.text

    @pytest.mark.parametrize("tool", ["analyze_indicator", "extract_functions"])
    def test_absolute_path_outside_directory_is_error(self, tools, outside_file, tool):
        """Test an absolute name cannot read files outside the directory."""
        result = tools.dispatch(tool, {"indicatorName": str(outside_file)})

        assert result.is_error
        assert "outside the indicators directory" in result.text
        assert "plot(secret)" not in result.text

    @pytest.mark.parametrize("tool", ["analyze_indicator", "extract_functions"])
    def test_parent_traversal_is_error(self, tools, indicators_dir, outside_file, tool):
        """Test a .. name cannot read files outside the directory."""
        name = os.path.relpath(outside_file, indicators_dir)
        result = tools.dispatch(tool, {"indicatorName": name})

        assert result.is_error
        assert "outside the indicators directory" in result.text

    def test_server_keeps_working_after_error(self, tools):
        """Test a failed call does not affect later calls."""
        tools.dispatch("analyze_indicator", {"indicatorName": "ghost.pine"})
        assert not tools.dispatch("list_indicators", {}).is_error

    def test_search_indicators(self, tools):
        """Test searching across indicators."""
        result = tools.dispatch("search_indicators", {"searchTerm": "RSI"})

        assert not result.is_error
        assert result.text.startswith('Found "RSI" in 1 files:')
        assert "**rsi_divergence.pine**:" in result.text
        assert '  Line 2: indicator("RSI Divergence", overlay=false)' in result.text

    def test_search_case_sensitive(self, tools):
        """Test case-sensitive search."""
        result = tools.dispatch(
            "search_indicators", {"searchTerm": "rsi divergence", "caseInsensitive": False}
        )
        assert result.text == 'No matches found for "rsi divergence"'

    def test_search_accepts_python_names(self, tools):
        """Test snake_case argument names are accepted."""
        result = tools.dispatch("search_indicators", {"search_term": "macd"})
        assert "**MACD Cross**:" in result.text

    def test_extract_functions(self, tools):
        """Test extracting function bodies."""
        result = tools.dispatch("extract_functions", {"indicatorName": "rsi_divergence.pine"})

        assert not result.is_error
        assert "Found 5 functions:" in result.text
        assert "## f_signal\n**Lines**: 6-9" in result.text
        assert "```pinescript\nf_signal(x) {" in result.text

    def test_unknown_tool(self, tools):
        """Test an unknown tool gives an error result."""
        result = tools.dispatch("delete_everything", {})
        assert result.is_error
        assert result.text == "Error: Unknown tool: delete_everything"

    @pytest.mark.parametrize(
        "name, arguments",
        [
            ("analyze_indicator", {}),
            ("analyze_indicator", {"indicatorName": 42}),
            ("search_indicators", {"caseInsensitive": True}),
            ("search_indicators", {"searchTerm": "x", "caseInsensitive": "maybe"}),
            ("extract_functions", {"name": "rsi.pine"}),
        ],
    )
    def test_invalid_arguments(self, tools, name, arguments):
        """Test invalid arguments give a validation error result."""
        result = tools.dispatch(name, arguments)
        assert result.is_error
        assert f"Invalid arguments for {name}" in result.text

    def test_unexpected_exception_becomes_error(self, config):
        """Test unexpected exceptions are turned into error results."""

        class BrokenStore(IndicatorStore):
            def list(self, pattern=None):
                raise RuntimeError("disk on fire")

        tools = IndicatorTools(config, store=BrokenStore(config.indicators_path))
        result = tools.dispatch("list_indicators", {})
        assert result.is_error
        assert "disk on fire" in result.text

    def test_missing_directory_is_error(self, config, tmp_path):
        """Test an unreadable directory gives an error result."""
        tools = IndicatorTools(config, store=IndicatorStore(tmp_path / "gone"))
        result = tools.dispatch("search_indicators", {"searchTerm": "x"})
        assert result.is_error
        assert "Failed to read directory" in result.text

    def test_uses_configured_lookahead(self, config, indicators_dir):
        """Test extraction uses the configured lookahead."""
        (indicators_dir / "long").write_text("f() {\n  a\n  b\n}")
        config.analysis.function_lookahead = 2
        result = IndicatorTools(config).dispatch("extract_functions", {"indicatorName": "long"})
        assert "**Lines**: 1-1" in result.text


class TestDispatchLogging:
    """Tests for how failed tool calls are logged."""

    @pytest.mark.parametrize(
        "name, arguments",
        [
            ("analyze_indicator", {"indicatorName": "ghost.pine"}),
            ("analyze_indicator", {}),
            ("delete_everything", {}),
        ],
    )
    def test_failure_logged_once_at_error(self, tools, name, arguments):
        """Test each failed call produces exactly one ERROR record."""
        logger = tools_module.logger

        with patch.object(logger, "log") as mock_log, patch.object(
            logger, "error"
        ) as mock_error, patch.object(logger, "exception") as mock_exception:
            assert tools.dispatch(name, arguments).is_error

        errors = [c for c in mock_log.call_args_list if c[0][0] == logging.ERROR]
        assert len(errors) == 1
        assert f"tool {name} failed" in errors[0][0][1]
        mock_error.assert_not_called()
        mock_exception.assert_not_called()

    def test_success_logs_nothing_at_error(self, tools):
        """Test a successful call logs no errors."""
        logger = tools_module.logger

        with patch.object(logger, "log") as mock_log:
            tools.dispatch("list_indicators", {})

        assert all(c[0][0] != logging.ERROR for c in mock_log.call_args_list)
