from __future__ import annotations

from pathlib import Path
from typing import List

from .errors import SourceNotFoundError


GO_SUFFIX = ".go"


def resolve_source_dir(path: Path) -> Path:
    """Return the directory to scan for ``path``.

    A file argument selects its containing directory, so pointing the tool at any
    file of a package processes the whole package.
    """
    if not path.exists():
        raise SourceNotFoundError(path)
    if path.is_file():
        return path.parent
    return path


def is_go_source(path: Path) -> bool:
    return path.suffix == GO_SUFFIX and path.is_file()


def discover_go_files(source_dir: Path) -> List[Path]:
    """Return the Go source files directly inside source_dir.

    The scan is not recursive: one directory holds one build unit. Files are
    returned in sorted order for determinism.
    """
    return sorted(p for p in source_dir.iterdir() if is_go_source(p))
