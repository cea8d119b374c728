"""
syntax_stats - structural metrics for a single C/C++ source file

Walks a tree-sitter AST and token stream to produce a structure trace,
a keyword count, a switch count and per-switch case counts.
"""

__version__ = "1.0.0"

from .analyzer import SyntaxAnalyzer, AnalysisResult
from .analysis_levels import AnalysisLevel, get_level_from_string

__all__ = [
    "SyntaxAnalyzer",
    "AnalysisResult",
    "AnalysisLevel",
    "get_level_from_string",
]
