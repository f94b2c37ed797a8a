from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Type

from .config.settings import settings
from .errors import FormatError, UnknownFormatterError

logger = logging.getLogger(__name__)


class SourceFormatter(ABC):
    """Port for the import-normalization and formatting pass over generated code."""

    name: str = ""

    @abstractmethod
    def format(self, path: Path, source: str) -> str:
        """Return the formatted text for a file about to be written at path.

        Raises:
            FormatError: If the source cannot be formatted
        """
        ...


class NoopFormatter(SourceFormatter):
    name = "none"

    def format(self, path: Path, source: str) -> str:
        return source


class _SubprocessFormatter(SourceFormatter):
    """Pipe the source through a Go tool on stdin and read the result from stdout."""

    def __init__(self, binary: str, timeout_s: Optional[int] = None) -> None:
        self.binary = binary
        self.timeout_s = timeout_s if timeout_s is not None else settings.FORMAT_TIMEOUT_S

    def command(self, path: Path) -> List[str]:
        return [self.binary]

    def format(self, path: Path, source: str) -> str:
        cmd = self.command(path)
        logger.debug(f"Running {' '.join(cmd)} for {path}")
        try:
            result = subprocess.run(
                cmd,
                input=source,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout_s,
            )
        except FileNotFoundError as e:
            raise FormatError(path, f"'{self.binary}' not found on PATH") from e
        except subprocess.TimeoutExpired as e:
            raise FormatError(path, f"'{self.binary}' timed out after {self.timeout_s}s") from e
        if result.returncode != 0:
            raise FormatError(path, result.stderr.strip() or f"'{self.binary}' exited with {result.returncode}")
        return result.stdout


class GoimportsFormatter(_SubprocessFormatter):
    name = "goimports"

    def __init__(self, binary: Optional[str] = None, timeout_s: Optional[int] = None) -> None:
        super().__init__(binary or settings.GOIMPORTS_BIN, timeout_s)

    def command(self, path: Path) -> List[str]:
        # Resolve imports as if the file already lived in its target package
        return [self.binary, "-srcdir", str(path.parent)]


class GofmtFormatter(_SubprocessFormatter):
    name = "gofmt"

    def __init__(self, binary: Optional[str] = None, timeout_s: Optional[int] = None) -> None:
        super().__init__(binary or settings.GOFMT_BIN, timeout_s)


FORMATTERS: Dict[str, Type[SourceFormatter]] = {
    GoimportsFormatter.name: GoimportsFormatter,
    GofmtFormatter.name: GofmtFormatter,
    NoopFormatter.name: NoopFormatter,
}


def get_formatter(name: str) -> SourceFormatter:
    formatter_cls = FORMATTERS.get(name.lower())
    if formatter_cls is None:
        raise UnknownFormatterError(name, sorted(FORMATTERS))
    return formatter_cls()
