"""Exception hierarchy for PineSage."""

from pathlib import Path
from typing import Union


class PineSageError(Exception):
    """Base exception for PineSage errors."""
    pass


class FileReadError(PineSageError):
    """An indicator file is missing, unreadable or not valid text."""

    def __init__(self, name: str, reason: Union[str, Exception]):
        self.name = name
        self.reason = str(reason)
        super().__init__(f'Failed to read indicator file "{name}": {self.reason}')


class IndicatorDirectoryError(PineSageError):
    """The indicators directory cannot be listed."""

    def __init__(self, path: Union[str, Path], reason: Union[str, Exception]):
        self.path = Path(path)
        self.reason = str(reason)
        super().__init__(f"Failed to read directory {self.path}: {self.reason}")


class ToolValidationError(PineSageError):
    """Tool arguments do not match the tool's input schema."""

    def __init__(self, tool: str, message: str):
        self.tool = tool
        super().__init__(f"Invalid arguments for {tool}: {message}")


class UnknownToolError(PineSageError):
    """The dispatcher received a tool name it does not expose."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")
