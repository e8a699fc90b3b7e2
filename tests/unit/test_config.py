"""Tests for configuration system."""

import json

import pytest
import yaml

from pinesage.utils.config import (
    AnalysisConfig,
    Config,
    ExcludeConfig,
    LoggingConfig,
    ServerConfig,
    initialize_project,
)


class TestSectionDefaults:
    """Tests for configuration section defaults."""

    def test_exclude_defaults(self):
        """Test default exclusion rules."""
        exclude = ExcludeConfig()
        assert exclude.prefixes == ["."]
        assert "package" in exclude.name_substrings
        assert "Dockerfile" in exclude.name_substrings
        assert exclude.extensions == [".js", ".ts", ".json", ".md", ".rar"]

    def test_analysis_defaults(self):
        """Test default analysis bounds."""
        analysis = AnalysisConfig()
        assert analysis.function_lookahead == 50
        assert analysis.max_search_matches == 3

    def test_analysis_validation(self):
        """Test non-positive bounds are rejected."""
        with pytest.raises(ValueError):
            AnalysisConfig(function_lookahead=0).validate()
        with pytest.raises(ValueError):
            AnalysisConfig(max_search_matches=-1).validate()

    def test_server_validation(self):
        """Test invalid transport and port are rejected."""
        with pytest.raises(ValueError):
            ServerConfig(transport="websocket").validate()
        with pytest.raises(ValueError):
            ServerConfig(port=0).validate()

    def test_log_level_env_override(self, monkeypatch):
        """Test PINESAGE_LOG_LEVEL overrides the configured level."""
        monkeypatch.setenv("PINESAGE_LOG_LEVEL", "debug")
        assert LoggingConfig(level="WARNING").level == "DEBUG"

    def test_log_level_default(self, monkeypatch):
        """Test the default log level."""
        monkeypatch.delenv("PINESAGE_LOG_LEVEL", raising=False)
        assert LoggingConfig().level == "INFO"


class TestConfig:
    """Tests for main configuration."""

    def test_config_creation(self, tmp_path):
        """Test creating a new config."""
        config = Config(project_name="test-project", indicators_path=tmp_path)

        assert config.project_name == "test-project"
        assert config.indicators_path == tmp_path.resolve()
        assert config.pinesage_dir == tmp_path.resolve() / ".pinesage"
        assert config.server.transport == "stdio"

    def test_config_save_load(self, tmp_path):
        """Test saving and loading config."""
        config = Config(
            project_name="test-project",
            indicators_path=tmp_path,
            analysis=AnalysisConfig(function_lookahead=80),
            exclude=ExcludeConfig(extensions=[".txt"]),
        )
        config.save()

        assert (tmp_path / ".pinesage" / "config.yaml").exists()

        loaded = Config.load(tmp_path)
        assert loaded.project_name == "test-project"
        assert loaded.analysis.function_lookahead == 80
        assert loaded.exclude.extensions == [".txt"]

    def test_load_json(self, tmp_path):
        """Test loading a JSON config file."""
        config_dir = tmp_path / ".pinesage"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(
            json.dumps({"project_name": "json-project", "server": {"port": 9000}})
        )

        loaded = Config.load(tmp_path)
        assert loaded.project_name == "json-project"
        assert loaded.server.port == 9000

    def test_load_missing_raises(self, tmp_path):
        """Test loading without a config file raises."""
        with pytest.raises(FileNotFoundError):
            Config.load(tmp_path)

    def test_load_invalid_values(self, tmp_path):
        """Test invalid values are rejected on load."""
        config_dir = tmp_path / ".pinesage"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("analysis:\n  function_lookahead: 0\n")
        with pytest.raises(ValueError):
            Config.load(tmp_path)

    def test_load_or_default(self, tmp_path):
        """Test defaults are used when no config exists."""
        config = Config.load_or_default(tmp_path)
        assert config.project_name == tmp_path.name
        assert config.analysis.function_lookahead == 50


class TestInitializeProject:
    """Tests for project initialization."""

    def test_initialize_creates_config(self, tmp_path):
        """Test initialization creates the config file."""
        initialize_project(tmp_path)
        assert (tmp_path / ".pinesage" / "config.yaml").exists()

    def test_initialize_with_name(self, tmp_path):
        """Test initialization with a custom name."""
        config = initialize_project(tmp_path, project_name="my-indicators")
        assert config.project_name == "my-indicators"

    def test_config_yaml_content(self, tmp_path):
        """Test the saved YAML content."""
        initialize_project(tmp_path)

        with open(tmp_path / ".pinesage" / "config.yaml") as f:
            data = yaml.safe_load(f)

        assert data["project_name"] == tmp_path.name
        assert data["analysis"]["function_lookahead"] == 50
        assert data["server"]["transport"] == "stdio"
        assert "indicators_path" not in data
