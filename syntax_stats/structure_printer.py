"""
Structural trace of the main file's AST.

Each node becomes one line ``"<depth dashes> <kind name> (<spelling>)"``,
in depth-first pre-order.
"""
from functools import partial
from typing import Callable, List

from .translation_unit import Cursor
from .visitor import ChildVisitResult, visit_children


def format_node(cursor: Cursor, depth: int) -> str:
    """Render one trace line."""
    return f"{'-' * depth} {cursor.kind_name} ({cursor.spelling})"


def _emit_node(emit: Callable[[str], None], cursor: Cursor, depth: int) -> ChildVisitResult:
    emit(format_node(cursor, depth))
    return ChildVisitResult.RECURSE


def print_structure(root: Cursor, emit: Callable[[str], None] = print) -> None:
    """Emit the trace of every main-file node below ``root``, line by line."""
    visit_children(root, partial(_emit_node, emit), main_file_only=True)


def format_structure(root: Cursor) -> List[str]:
    """Return the trace as a list of lines."""
    lines: List[str] = []
    print_structure(root, lines.append)
    return lines
