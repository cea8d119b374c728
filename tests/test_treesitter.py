"""Test tree-sitter C++ parser wrapper"""
from syntax_stats.cpp_parser import CppParser


def test_parse_string(cpp_parser):
    tree = cpp_parser.parse_string("int main() { return 0; }")
    assert tree.root_node.type == "translation_unit"
    assert not tree.root_node.has_error


def test_find_nodes_by_type(cpp_parser):
    code = b"void a() { switch (1) { } }\nvoid b() { switch (2) { case 2: switch (3) { } } }\n"
    tree = cpp_parser.parse_bytes(code)
    switches = CppParser.find_nodes_by_type(tree.root_node, "switch_statement")
    assert [CppParser.get_node_text(s, code).split("{")[0].strip() for s in switches] == [
        "switch (1)", "switch (2)", "switch (3)",
    ]


def test_get_declared_name(cpp_parser):
    code = b"static int *counter = 0;\nint Widget::size() const { return 0; }\nstruct Node { int v; };\n"
    tree = cpp_parser.parse_bytes(code)
    root = tree.root_node
    declaration = CppParser.find_nodes_by_type(root, "declaration")[0]
    method = CppParser.find_nodes_by_type(root, "function_definition")[0]
    struct = CppParser.find_nodes_by_type(root, "struct_specifier")[0]
    assert CppParser.get_declared_name(declaration, code) == "counter"
    assert CppParser.get_declared_name(method, code) == "Widget::size"
    assert CppParser.get_declared_name(struct, code) == "Node"
