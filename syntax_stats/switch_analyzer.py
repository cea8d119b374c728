"""
Switch statement analysis.

Two passes over the AST:

1. ``collect_switches`` walks the whole main-file tree once and returns
   every switch statement, nested ones included, in document order.
2. ``count_cases`` looks at one switch: it finds the switch's compound
   body and counts the case labels that are direct children of it.
   ``default:`` labels and case labels nested in inner blocks are not
   counted. A switch without a compound body counts 0.

The returned cursors are borrowed from the unit and are only valid while
it is alive.
"""
from dataclasses import dataclass
from functools import partial
from typing import List

from .logger import get_logger
from .translation_unit import Cursor, CursorKind
from .visitor import ChildVisitResult, visit_children

logger = get_logger()


@dataclass
class CaseTally:
    """Case-label counter for a single switch body."""
    count: int = 0


def _collect_switch(switches: List[Cursor], cursor: Cursor, depth: int) -> ChildVisitResult:
    if cursor.kind is CursorKind.SWITCH_STMT:
        switches.append(cursor)
    return ChildVisitResult.RECURSE


def collect_switches(root: Cursor) -> List[Cursor]:
    """Return every main-file switch statement below ``root``, depth-first."""
    switches: List[Cursor] = []
    visit_children(root, partial(_collect_switch, switches), main_file_only=True)
    return switches


def _tally_case_label(tally: CaseTally, cursor: Cursor, depth: int) -> ChildVisitResult:
    if cursor.kind is CursorKind.CASE_STMT:
        tally.count += 1
    return ChildVisitResult.CONTINUE


def _scan_switch_child(tally: CaseTally, cursor: Cursor, depth: int) -> ChildVisitResult:
    if cursor.kind is CursorKind.COMPOUND_STMT:
        visit_children(cursor, partial(_tally_case_label, tally))
        # a switch has a single compound body
        return ChildVisitResult.SKIP_SIBLINGS
    return ChildVisitResult.CONTINUE


def count_cases(switch: Cursor) -> int:
    """Count the case labels directly inside the switch's compound body."""
    tally = CaseTally()
    visit_children(switch, partial(_scan_switch_child, tally))
    return tally.count


def count_all_cases(switches: List[Cursor]) -> List[int]:
    """Case counts aligned index-for-index with ``switches``."""
    counts = [count_cases(switch) for switch in switches]
    for switch, count in zip(switches, counts):
        location = switch.location
        logger.debug(f"switch at line {location.line}: {count} case(s)")
    return counts
