"""
Main syntax analyzer - integrates all components.
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .analysis_levels import AnalysisLevel, get_level_config
from .cpp_parser import CppParser
from .keyword_counter import count_keywords, format_tokens, tokenize
from .logger import get_logger
from .settings import get_settings
from .source_locator import resolve_range
from .structure_printer import format_structure
from .switch_analyzer import collect_switches, count_all_cases
from .translation_unit import TranslationUnit

logger = get_logger()


@dataclass
class AnalysisResult:
    """Complete analysis result for one source file."""
    target_file: str
    level: AnalysisLevel
    trace_lines: List[str]
    token_lines: List[str] = field(default_factory=list)
    keyword_count: Optional[int] = None  # None when the level does not count keywords
    switch_count: Optional[int] = None  # None when the level does not count switches
    case_counts: List[int] = field(default_factory=list)  # aligned with the switches found

    def report_lines(self) -> List[str]:
        """The report exactly as the CLI prints it."""
        lines = list(self.trace_lines)
        lines.extend(self.token_lines)
        if self.keyword_count is not None:
            lines.append(f"keywords: {self.keyword_count}")
        if self.switch_count is not None:
            lines.append(f"switch: {self.switch_count}")
            if self.switch_count:
                lines.append("case:" + "".join(f" {count}" for count in self.case_counts))
        return lines

    def format_report(self) -> str:
        return "\n".join(self.report_lines())


class SyntaxAnalyzer:
    """Runs the structural trace, keyword count and switch/case analysis."""

    def __init__(self, include_dirs: Optional[Iterable[str]] = None,
                 parser: Optional[CppParser] = None):
        if include_dirs is None:
            include_dirs = get_settings().include_dirs
        self.include_dirs = list(include_dirs)
        self.parser = parser or CppParser()

    def analyze_file(self, file_path: str, level: AnalysisLevel = AnalysisLevel.ULTIMATE,
                     show_tokens: bool = False) -> AnalysisResult:
        """
        Parse and analyze one file.

        Args:
            file_path: Main source file
            level: Requested analysis level
            show_tokens: Also produce the token dump

        Returns:
            AnalysisResult: counts and trace; holds no cursors, so it stays
            valid after the unit is disposed

        Raises:
            ParseFailure, LocationResolutionError, RangeConstructionError
        """
        logger.info(f"Analyzing {file_path} at level {AnalysisLevel(level).name}")
        with self.parser.parse_unit(file_path, self.include_dirs) as unit:
            return self.analyze_unit(unit, file_path, level, show_tokens)

    def analyze_unit(self, unit: TranslationUnit, file_name: str,
                     level: AnalysisLevel = AnalysisLevel.ULTIMATE,
                     show_tokens: bool = False) -> AnalysisResult:
        """Analyze an already parsed unit; ``file_name`` must be one of its files."""
        config = get_level_config(level)
        logger.info(f"Level {config.level.name}: {config.description}")

        # Resolve first, so an unknown file fails before anything is reported
        source_range = resolve_range(unit, file_name)

        root = unit.cursor
        result = AnalysisResult(
            target_file=file_name,
            level=config.level,
            trace_lines=format_structure(root),
        )
        logger.info(f"Structure trace: {len(result.trace_lines)} node(s)")

        if show_tokens or config.count_keywords:
            with tokenize(unit, source_range) as tokens:
                if show_tokens:
                    result.token_lines = format_tokens(tokens)
                if config.count_keywords:
                    result.keyword_count = count_keywords(tokens)
                    logger.info(f"Keywords: {result.keyword_count}")

        if config.count_switches:
            switches = collect_switches(root)
            result.switch_count = len(switches)
            result.case_counts = count_all_cases(switches)
            logger.info(f"Switches: {result.switch_count}, cases: {result.case_counts}")

        return result
