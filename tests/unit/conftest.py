"""Shared fixtures for PineSage unit tests."""

import textwrap
from pathlib import Path

import pytest

from pinesage.core.indicators import IndicatorStore
from pinesage.utils.config import Config

RSI_SCRIPT = textwrap.dedent(
    """\
    //@version=5
    indicator("RSI Divergence", overlay=false)
    length = input.int(14, "Length")
    src = input(close, "Source")
    rsi_value = ta.rsi(src, length)
    f_signal(x) {
        y = x * 2
        y
    }
    plot(rsi_value, color=color.blue)
    plotshape(rsi_value > 70, style=shape.triangledown)
    alertcondition(rsi_value > 70, "Overbought")
    """
)

MACD_SCRIPT = textwrap.dedent(
    """\
    //@version=5
    indicator("MACD")
    fast = input.int(12)
    [macdLine, signalLine, _] = ta.macd(close, fast, 26, 9)
    plot(macdLine)
    """
)


@pytest.fixture
def indicators_dir(tmp_path: Path) -> Path:
    """Directory with two indicators and a set of non-indicator files."""
    (tmp_path / "rsi_divergence.pine").write_text(RSI_SCRIPT)
    (tmp_path / "MACD Cross").write_text(MACD_SCRIPT)

    # Files that must never be listed
    (tmp_path / ".hidden").write_text("plot(close)")
    (tmp_path / "package.json").write_text("{}")
    (tmp_path / "package-lock").write_text("{}")
    (tmp_path / "tsconfig.base").write_text("{}")
    (tmp_path / "Dockerfile").write_text("FROM node")
    (tmp_path / "index.js").write_text("plot(close)")
    (tmp_path / "server.ts").write_text("plot(close)")
    (tmp_path / "README.md").write_text("# plot(")
    (tmp_path / "archive.rar").write_text("")
    (tmp_path / "subdir").mkdir()

    return tmp_path


@pytest.fixture
def config(indicators_dir: Path) -> Config:
    """Config pointing at the shared indicators directory."""
    return Config(project_name="test-indicators", indicators_path=indicators_dir)


@pytest.fixture
def store(indicators_dir: Path) -> IndicatorStore:
    """Store over the shared indicators directory."""
    return IndicatorStore(indicators_dir)
