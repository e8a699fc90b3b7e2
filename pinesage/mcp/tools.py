"""Indicator tool handlers and dispatcher.

Each handler validates its arguments, runs the analysis engine and returns
a ToolResult. ``IndicatorTools.dispatch`` is the single place where errors
are turned into error-flagged results, so no exception ever reaches the
transport.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pinesage.analysis import analyze, extract_functions, search
from pinesage.analysis.output import (
    render_analysis,
    render_error,
    render_functions,
    render_indicator_list,
    render_search,
)
from pinesage.core.indicators import IndicatorStore
from pinesage.errors import PineSageError, ToolValidationError, UnknownToolError
from pinesage.utils.config import Config
from pinesage.utils.logging import get_logger, log_operation

logger = get_logger("mcp.tools")


# =============================================================================
# Argument schemas
# =============================================================================


class _ToolArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ListIndicatorsArgs(_ToolArgs):
    pattern: Optional[str] = Field(
        default=None, description="Optional pattern to filter indicators"
    )


class AnalyzeIndicatorArgs(_ToolArgs):
    indicator_name: str = Field(
        alias="indicatorName", description="Name of the indicator file to analyze"
    )


class SearchIndicatorsArgs(_ToolArgs):
    search_term: str = Field(
        alias="searchTerm", description="Term to search for in indicator files"
    )
    case_insensitive: bool = Field(
        default=True,
        alias="caseInsensitive",
        description="Whether search should be case insensitive",
    )


class ExtractFunctionsArgs(_ToolArgs):
    indicator_name: str = Field(
        alias="indicatorName",
        description="Name of the indicator file to extract functions from",
    )


@dataclass(frozen=True)
class ToolResult:
    """Text payload of a tool call, flagged when it describes an error."""

    text: str
    is_error: bool = False

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(text=text)

    @classmethod
    def failure(cls, message: str) -> "ToolResult":
        return cls(text=render_error(message), is_error=True)


@dataclass(frozen=True)
class ToolSpec:
    """Static description of an exposed tool."""

    name: str
    description: str
    args_model: Type[_ToolArgs]

    @property
    def input_schema(self) -> Dict[str, Any]:
        return self.args_model.model_json_schema(by_alias=True)


TOOL_SPECS: List[ToolSpec] = [
    ToolSpec(
        name="list_indicators",
        description="List all available TradingView indicator files in the indicators directory",
        args_model=ListIndicatorsArgs,
    ),
    ToolSpec(
        name="analyze_indicator",
        description="Analyze a TradingView indicator file and extract key components",
        args_model=AnalyzeIndicatorArgs,
    ),
    ToolSpec(
        name="search_indicators",
        description="Search for specific terms across all indicator files",
        args_model=SearchIndicatorsArgs,
    ),
    ToolSpec(
        name="extract_functions",
        description="Extract and list all functions from an indicator file",
        args_model=ExtractFunctionsArgs,
    ),
]


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ())) or "arguments"
        parts.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "; ".join(parts)


class IndicatorTools:
    """The four indicator tools bound to one indicators directory."""

    def __init__(self, config: Config, store: Optional[IndicatorStore] = None):
        self.config = config
        self.store = store or IndicatorStore(config.indicators_path, config.exclude)
        self._handlers: Dict[str, Callable[[Any], ToolResult]] = {
            "list_indicators": self._list_indicators,
            "analyze_indicator": self._analyze_indicator,
            "search_indicators": self._search_indicators,
            "extract_functions": self._extract_functions,
        }
        self._specs = {spec.name: spec for spec in TOOL_SPECS}

    @property
    def specs(self) -> List[ToolSpec]:
        return list(TOOL_SPECS)

    def dispatch(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        """Run a tool by name; every failure becomes an error-flagged result."""
        # log_operation reports the failure at ERROR; only the traceback is added here
        try:
            with log_operation(logger, f"tool {name}"):
                spec = self._specs.get(name)
                if spec is None:
                    raise UnknownToolError(name)
                args = self._validate(spec, arguments or {})
                return self._handlers[name](args)
        except PineSageError as e:
            return ToolResult.failure(str(e))
        except Exception as e:
            logger.debug(f"Tool {name} traceback", exc_info=True)
            return ToolResult.failure(str(e))

    @staticmethod
    def _validate(spec: ToolSpec, arguments: Dict[str, Any]) -> _ToolArgs:
        try:
            return spec.args_model.model_validate(arguments)
        except ValidationError as e:
            raise ToolValidationError(spec.name, _format_validation_error(e)) from e

    # =========================================================================
    # Tool handlers
    # =========================================================================

    def _list_indicators(self, args: ListIndicatorsArgs) -> ToolResult:
        return ToolResult.success(render_indicator_list(self.store.list(args.pattern)))

    def _analyze_indicator(self, args: AnalyzeIndicatorArgs) -> ToolResult:
        content = self.store.read(args.indicator_name)
        report = analyze(content)
        return ToolResult.success(render_analysis(args.indicator_name, report))

    def _search_indicators(self, args: SearchIndicatorsArgs) -> ToolResult:
        matches = search(
            self.store.list(),
            args.search_term,
            case_insensitive=args.case_insensitive,
            reader=self.store.read,
            max_matches=self.config.analysis.max_search_matches,
        )
        return ToolResult.success(render_search(args.search_term, matches))

    def _extract_functions(self, args: ExtractFunctionsArgs) -> ToolResult:
        content = self.store.read(args.indicator_name)
        spans = extract_functions(content, lookahead=self.config.analysis.function_lookahead)
        return ToolResult.success(render_functions(args.indicator_name, spans))
