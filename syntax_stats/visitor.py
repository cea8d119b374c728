"""
Generic depth-first AST traversal.

``visit_children`` walks the children of a cursor (never the cursor
itself) and asks a per-node callback what to do next. The depth is passed
down by value: direct children of the starting cursor are at depth 0,
their children at depth 1, and so on.
"""
from enum import Enum
from typing import Callable

from .translation_unit import Cursor


class ChildVisitResult(Enum):
    """Verdict returned by a per-node callback."""

    # Do not descend into this node; go on with its next sibling
    CONTINUE = "continue"

    # Descend into this node's children (depth + 1), then go on with its next sibling
    RECURSE = "recurse"

    # Stop visiting the remaining siblings at this level
    SKIP_SIBLINGS = "skip_siblings"


NodeCallback = Callable[[Cursor, int], ChildVisitResult]


def visit_children(cursor: Cursor, on_node: NodeCallback, depth: int = 0,
                   main_file_only: bool = False) -> None:
    """
    Visit the children of ``cursor`` depth-first, in document order.

    Args:
        cursor: Node whose children are visited
        on_node: Called as ``on_node(child, depth)`` for every accepted child
        depth: Depth reported for the direct children of ``cursor``
        main_file_only: Drop nodes located outside the main file, together
            with their whole subtree, before ``on_node`` ever sees them
    """
    for child in cursor.children:
        if main_file_only and not child.location.is_from_main_file:
            continue

        verdict = on_node(child, depth)
        if verdict is ChildVisitResult.SKIP_SIBLINGS:
            break
        if verdict is ChildVisitResult.RECURSE:
            visit_children(child, on_node, depth + 1, main_file_only)
