"""
Tests for the structural trace.
"""
from syntax_stats.structure_printer import format_node, format_structure, print_structure


def _depth(line):
    return len(line) - len(line.lstrip("-"))


def test_format_node(fake_cursor):
    assert format_node(fake_cursor("function_definition", spelling="f"), 0) == " function_definition (f)"
    assert format_node(fake_cursor("compound_statement"), 3) == "--- compound_statement ()"


def test_trace_of_switch_function(parse_source, scenario_b_source):
    unit, _ = parse_source(scenario_b_source)
    lines = format_structure(unit.cursor)
    assert lines[0] == " function_definition (f)"
    assert "-- switch_statement ()" in lines
    assert "- compound_statement ()" in lines
    assert sum(1 for line in lines if line.endswith("case_statement ()")) == 3


def test_depth_grows_by_at_most_one(parse_source):
    unit, _ = parse_source(
        "struct Point { int x; int y; };\n"
        "int area(struct Point p) {\n"
        "  if (p.x > 0) { while (p.y) { p.y--; } }\n"
        "  return p.x * p.y;\n"
        "}\n"
    )
    lines = format_structure(unit.cursor)
    depths = [_depth(line) for line in lines]
    assert depths[0] == 0
    for previous, current in zip(depths, depths[1:]):
        assert current <= previous + 1


def test_header_nodes_are_not_traced(parse_source, write_source):
    write_source("decl.h", "int from_header(void);\n")
    unit, _ = parse_source('#include "decl.h"\nint in_main(void) { return 0; }\n')
    lines = format_structure(unit.cursor)
    assert " preproc_include (decl.h)" in lines
    assert not any("from_header" in line for line in lines)
    assert " function_definition (in_main)" in lines


def test_print_structure_streams_lines(fake_cursor):
    root = fake_cursor("root", [fake_cursor("a", [fake_cursor("b", spelling="x")]), fake_cursor("c")])
    emitted = []
    print_structure(root, emitted.append)
    assert emitted == [" a ()", "- b (x)", " c ()"]
