from __future__ import annotations

from pathlib import Path
from typing import Optional


class InterfaceExtractorError(Exception):
    """Base exception for every failure that aborts a generation run."""


class SourceNotFoundError(InterfaceExtractorError):
    def __init__(self, path: Path):
        super().__init__(f"Source path '{path}' does not exist or is not accessible")
        self.path = path


class GoParseError(InterfaceExtractorError):
    def __init__(self, path: Path, detail: str, line: Optional[int] = None, column: Optional[int] = None):
        location = f"{path}:{line}:{column}" if line is not None else str(path)
        super().__init__(f"Failed to parse {location}: {detail}")
        self.path = path
        self.detail = detail
        self.line = line
        self.column = column


class FormatError(InterfaceExtractorError):
    def __init__(self, path: Path, detail: str):
        super().__init__(f"Failed to format {path}: {detail}")
        self.path = path
        self.detail = detail


class UnknownFormatterError(InterfaceExtractorError):
    def __init__(self, name: str, known: list[str]):
        super().__init__(f"Unknown formatter '{name}'. Expected one of: {', '.join(known)}")
        self.name = name
        self.known = known


class DuplicateDeclarationError(InterfaceExtractorError):
    pass
