"""Configuration management for PineSage."""

import os
from pathlib import Path
from typing import Optional, List
from dataclasses import dataclass, field
import yaml
import json

from pinesage import __version__

CONFIG_DIR_NAME = ".pinesage"


@dataclass
class ExcludeConfig:
    """Names that are never treated as indicator files."""

    prefixes: List[str] = field(default_factory=lambda: ["."])
    name_substrings: List[str] = field(
        default_factory=lambda: [
            # Package manifests and lock files
            "package",
            # TypeScript compiler config
            "tsconfig",
            # Container build files
            "Dockerfile",
            "node_modules",
        ]
    )
    extensions: List[str] = field(
        default_factory=lambda: [
            # Script-host sources
            ".js",
            ".ts",
            # Data and markup
            ".json",
            ".md",
            # Archives
            ".rar",
        ]
    )


@dataclass
class AnalysisConfig:
    """Bounds applied by the analysis engine."""

    function_lookahead: int = 50  # Lines searched for a closing brace
    max_search_matches: int = 3  # Matching lines kept per file

    def validate(self) -> None:
        """Validate analysis bounds."""
        if self.function_lookahead <= 0:
            raise ValueError("function_lookahead must be positive")
        if self.max_search_matches <= 0:
            raise ValueError("max_search_matches must be positive")


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    json_format: bool = False
    log_file: Optional[str] = None

    def __post_init__(self):
        # Environment overrides saved config
        env_level = os.getenv("PINESAGE_LOG_LEVEL")
        if env_level:
            self.level = env_level.upper()


@dataclass
class ServerConfig:
    """MCP server configuration."""

    name: str = "tradingview-indicator-mcp"
    version: str = __version__
    transport: str = "stdio"  # stdio, sse
    host: str = "localhost"
    port: int = 8080

    def validate(self) -> None:
        if self.transport not in ("stdio", "sse"):
            raise ValueError(f"Invalid transport: {self.transport}. Must be 'stdio' or 'sse'.")
        if not (0 < self.port < 65536):
            raise ValueError("port must be between 1 and 65535")


@dataclass
class Config:
    """PineSage configuration."""

    project_name: str
    indicators_path: Path
    exclude: ExcludeConfig = field(default_factory=ExcludeConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    def __post_init__(self):
        """Post-initialization processing."""
        self.indicators_path = Path(self.indicators_path).resolve()

    @property
    def pinesage_dir(self) -> Path:
        """Get .pinesage directory path."""
        return self.indicators_path / CONFIG_DIR_NAME

    @property
    def config_file(self) -> Path:
        return self.pinesage_dir / "config.yaml"

    def validate(self) -> None:
        """Validate all sections."""
        self.analysis.validate()
        self.server.validate()

    @classmethod
    def load(cls, indicators_path: Path) -> "Config":
        """Load configuration from .pinesage/config.yaml or config.json."""
        indicators_path = Path(indicators_path).resolve()
        config_yaml = indicators_path / CONFIG_DIR_NAME / "config.yaml"
        config_json = indicators_path / CONFIG_DIR_NAME / "config.json"

        if config_yaml.exists():
            with open(config_yaml) as f:
                data = yaml.safe_load(f) or {}
        elif config_json.exists():
            with open(config_json) as f:
                data = json.load(f)
        else:
            raise FileNotFoundError(
                f"Config not found in {indicators_path}. Run 'pinesage init' first."
            )

        # Location on disk always wins over a stale saved path
        data.pop("indicators_path", None)

        exclude_data = data.pop("exclude", {}) or {}
        analysis_data = data.pop("analysis", {}) or {}
        logging_data = data.pop("logging", {}) or {}
        server_data = data.pop("server", {}) or {}

        config = cls(
            indicators_path=indicators_path,
            project_name=data.pop("project_name", indicators_path.name),
            exclude=ExcludeConfig(**exclude_data),
            analysis=AnalysisConfig(**analysis_data),
            logging=LoggingConfig(**logging_data),
            server=ServerConfig(**server_data),
            **data,
        )
        config.validate()
        return config

    @classmethod
    def load_or_default(cls, indicators_path: Path) -> "Config":
        """Load saved configuration, or defaults when none was saved."""
        try:
            return cls.load(indicators_path)
        except FileNotFoundError:
            indicators_path = Path(indicators_path).resolve()
            return cls(project_name=indicators_path.name, indicators_path=indicators_path)

    def save(self) -> None:
        """Save configuration to .pinesage/config.yaml."""
        self.pinesage_dir.mkdir(parents=True, exist_ok=True)

        data = {
            "project_name": self.project_name,
            "exclude": {
                "prefixes": self.exclude.prefixes,
                "name_substrings": self.exclude.name_substrings,
                "extensions": self.exclude.extensions,
            },
            "analysis": {
                "function_lookahead": self.analysis.function_lookahead,
                "max_search_matches": self.analysis.max_search_matches,
            },
            "logging": {
                "level": self.logging.level,
                "json_format": self.logging.json_format,
                "log_file": self.logging.log_file,
            },
            "server": {
                "name": self.server.name,
                "transport": self.server.transport,
                "host": self.server.host,
                "port": self.server.port,
            },
        }

        with open(self.config_file, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def initialize_project(indicators_path: Path, project_name: Optional[str] = None) -> Config:
    """Initialize PineSage in an indicators directory.

    Args:
        indicators_path: Directory holding the indicator files
        project_name: Name shown by the server (default: directory name)

    Returns:
        Initialized Config object
    """
    indicators_path = Path(indicators_path).resolve()
    indicators_path.mkdir(parents=True, exist_ok=True)

    config = Config(
        project_name=project_name or indicators_path.name,
        indicators_path=indicators_path,
    )
    config.save()

    return config
