"""
Pytest configuration and fixtures for syntax_stats tests.
"""
import os
import sys
import tempfile
from pathlib import Path

# Keep log files out of the working tree; must happen before syntax_stats is imported
os.environ.setdefault("SYNTAX_STATS_LOG_DIR", tempfile.mkdtemp(prefix="syntax_stats_logs_"))
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from syntax_stats.cpp_parser import CppParser


@pytest.fixture
def scenario_b_source():
    """A switch with two case labels and a default label."""
    return "void f(){ switch(x){case 1: break; case 2: break; default: break;} }\n"


@pytest.fixture(scope="session")
def cpp_parser():
    """One tree-sitter parser for the whole session."""
    return CppParser()


@pytest.fixture
def write_source(tmp_path):
    """Write a source file into tmp_path and return its path as a string."""
    def _write(name: str, content: str) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def parse_source(cpp_parser, write_source):
    """Parse a snippet into a unit; every unit is disposed at teardown."""
    units = []

    def _parse(content: str, name: str = "main.cpp", include_dirs=()):
        path = write_source(name, content)
        unit = cpp_parser.parse_unit(path, include_dirs=include_dirs)
        units.append(unit)
        return unit, path

    yield _parse

    for unit in units:
        unit.dispose()


class FakeLocation:
    def __init__(self, is_from_main_file: bool):
        self.is_from_main_file = is_from_main_file


class FakeCursor:
    """Hand-built AST node for exercising traversals without a parser."""

    def __init__(self, kind_name, children=(), kind=None, spelling="", main_file=True):
        from syntax_stats.translation_unit import CursorKind

        self.kind_name = kind_name
        self.kind = kind or CursorKind.OTHER
        self.spelling = spelling
        self.children = list(children)
        self.location = FakeLocation(main_file)

    def __repr__(self):
        return f"FakeCursor({self.kind_name!r})"


@pytest.fixture
def fake_cursor():
    return FakeCursor
