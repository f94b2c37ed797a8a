"""Pytest fixtures for interface_extractor tests."""

from pathlib import Path
from textwrap import dedent
from typing import Callable

import pytest

from interface_extractor.formatter import NoopFormatter
from interface_extractor.parser import TreeSitterGoParser


@pytest.fixture
def go_parser() -> TreeSitterGoParser:
    return TreeSitterGoParser()


@pytest.fixture
def noop_formatter() -> NoopFormatter:
    return NoopFormatter()


@pytest.fixture
def write_go(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a dedented Go source file into tmp_path and return its path."""

    def _write(name: str, source: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dedent(source).lstrip("\n"), encoding="utf-8")
        return path

    return _write
