"""
Tests for the SyntaxAnalyzer facade.
"""
import logging
import os

import pytest

from syntax_stats import AnalysisLevel, SyntaxAnalyzer
from syntax_stats.settings import AnalyzerSettings, set_settings
from syntax_stats.analysis_levels import get_level_config
from syntax_stats.analyzer import AnalysisResult
from syntax_stats.errors import LocationResolutionError, ParseFailure


@pytest.fixture
def analyzer(cpp_parser):
    return SyntaxAnalyzer(include_dirs=[], parser=cpp_parser)


def test_advanced_level(analyzer, write_source, scenario_b_source):
    path = write_source("b.cpp", scenario_b_source)
    result = analyzer.analyze_file(path, level=AnalysisLevel.ADVANCED)
    assert result.keyword_count == 8
    assert result.switch_count == 1
    assert result.case_counts == [2]
    assert result.report_lines()[-3:] == ["keywords: 8", "switch: 1", "case: 2"]


def test_basic_level_skips_switches(analyzer, write_source, scenario_b_source):
    path = write_source("b.cpp", scenario_b_source)
    result = analyzer.analyze_file(path, level=AnalysisLevel.BASIC)
    assert result.keyword_count == 8
    assert result.switch_count is None
    assert result.report_lines()[-1] == "keywords: 8"


def test_no_switch_has_no_case_line(analyzer, write_source):
    path = write_source("a.cpp", "int main() { return 0; }\n")
    lines = analyzer.analyze_file(path, level=AnalysisLevel.ADVANCED).report_lines()
    assert lines[-1] == "switch: 0"
    assert not any(line.startswith("case:") for line in lines)


def test_token_dump_comes_before_counts(analyzer, write_source):
    path = write_source("t.cpp", "int a;\n")
    lines = analyzer.analyze_file(path, show_tokens=True).report_lines()
    dump_start = lines.index("=== show tokens ===")
    assert lines[0] == " declaration (a)"
    assert dump_start < lines.index("keywords: 1")


def test_headers_do_not_contribute(analyzer, write_source):
    write_source("lib.h", "int lib(int v) { switch (v) { case 0: return 1; } return 0; }\n")
    path = write_source("main.cpp", '#include "lib.h"\nint main() { return lib(0); }\n')
    result = analyzer.analyze_file(path)
    assert result.switch_count == 0
    assert result.case_counts == []
    # int, return from main.cpp only
    assert result.keyword_count == 2


def test_include_dirs_default_to_settings(cpp_parser, write_source, tmp_path):
    write_source("inc/lib.h", "int lib(int v) { switch (v) { case 0: return 1; } return 0; }\n")
    path = write_source("main.cpp", '#include "lib.h"\nint main() { return lib(0); }\n')
    set_settings(AnalyzerSettings(include_dirs=[str(tmp_path / "inc")]))
    try:
        analyzer = SyntaxAnalyzer(parser=cpp_parser)
    finally:
        set_settings(None)
    assert analyzer.include_dirs == [str(tmp_path / "inc")]
    with analyzer.parser.parse_unit(path, analyzer.include_dirs) as unit:
        assert len(unit.files) == 2
    # the header switch is filtered out of the report
    assert analyzer.analyze_file(path).switch_count == 0


def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("SYNTAX_STATS_INCLUDE_DIRS", os.pathsep.join(["a", "", "b"]))
    monkeypatch.setenv("SYNTAX_STATS_LOG_DIR", str(tmp_path))
    settings = AnalyzerSettings.from_env()
    assert settings.include_dirs == ["a", "b"]
    assert settings.log_dir == str(tmp_path)


def test_parse_failure(analyzer, tmp_path):
    with pytest.raises(ParseFailure):
        analyzer.analyze_file(str(tmp_path / "missing.cpp"))


def test_unknown_file_fails_before_tracing(analyzer, cpp_parser, write_source):
    path = write_source("main.cpp", "int a;\n")
    other = write_source("other.cpp", "int b;\n")
    with cpp_parser.parse_unit(path) as unit:
        with pytest.raises(LocationResolutionError):
            analyzer.analyze_unit(unit, other)


def test_result_outlives_unit(analyzer, write_source, scenario_b_source):
    path = write_source("b.cpp", scenario_b_source)
    result = analyzer.analyze_file(path)
    assert isinstance(result, AnalysisResult)
    assert result.level is AnalysisLevel.ULTIMATE
    assert "case: 2" in result.format_report()


class _RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__(logging.DEBUG)
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


@pytest.fixture
def log_messages():
    handler = _RecordingHandler()
    lib_logger = logging.getLogger("syntax_stats")
    lib_logger.addHandler(handler)
    yield handler.messages
    lib_logger.removeHandler(handler)


def test_run_is_logged(analyzer, write_source, scenario_b_source, log_messages):
    path = write_source("b.cpp", scenario_b_source)
    analyzer.analyze_file(path, level=AnalysisLevel.ADVANCED)
    assert any(m.startswith("Parsing ") and m.endswith("b.cpp") for m in log_messages)
    config = get_level_config(AnalysisLevel.ADVANCED)
    assert f"Level ADVANCED: {config.description}" in log_messages


def test_missing_file_is_logged(cpp_parser, tmp_path, log_messages):
    missing = str(tmp_path / "missing.cpp")
    with pytest.raises(ParseFailure):
        cpp_parser.parse_unit(missing)
    assert f"File not found: {missing}" in log_messages
