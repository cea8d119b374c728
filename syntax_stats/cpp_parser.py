"""
Tree-sitter based C++ parser wrapper.
"""
from pathlib import Path
from typing import Iterable, List

import tree_sitter_cpp
from tree_sitter import Language, Parser, Node, Tree

from .errors import ParseFailure
from .logger import get_logger

logger = get_logger()


class CppParser:
    """Wrapper for tree-sitter C++ parser."""

    def __init__(self):
        self.parser = None
        self._init_parser()

    def _init_parser(self):
        """Initialize tree-sitter parser with C++ language."""
        try:
            cpp_language = Language(tree_sitter_cpp.language())
            self.parser = Parser(cpp_language)
        except Exception as e:
            raise RuntimeError(f"Failed to initialize C++ parser: {e}") from e

    def parse_bytes(self, source_code: bytes) -> Tree:
        """Parse raw C++ source bytes."""
        return self.parser.parse(source_code)

    def parse_string(self, source_code: str) -> Tree:
        """
        Parse C++ source code from string.

        Args:
            source_code: C++ source code as string

        Returns:
            Tree-sitter Tree object
        """
        return self.parser.parse(bytes(source_code, 'utf8'))

    def parse_unit(self, file_path: str,
                   include_dirs: Iterable[str] = ()) -> "TranslationUnit":
        """
        Parse a main file (plus the local headers it includes) into a unit.

        Args:
            file_path: Path to the main C/C++ file
            include_dirs: Extra directories searched for quoted includes

        Returns:
            TranslationUnit owning every parsed tree

        Raises:
            ParseFailure: the main file is missing or unreadable
        """
        from .translation_unit import TranslationUnit

        path = Path(file_path)
        if not path.is_file():
            logger.error(f"File not found: {file_path}")
            raise ParseFailure(f"Unable to parse translation unit: {file_path}")
        logger.info(f"Parsing {path}")
        try:
            return TranslationUnit(self, path, include_dirs=include_dirs)
        except OSError as e:
            logger.error(f"Error reading {file_path}: {e}")
            raise ParseFailure(f"Unable to parse translation unit: {e}") from e

    @staticmethod
    def get_node_text(node: Node, source_code: bytes) -> str:
        """Extract text content from a node."""
        return source_code[node.start_byte:node.end_byte].decode('utf8', errors='replace')

    @staticmethod
    def find_nodes_by_type(node: Node, node_type: str) -> List[Node]:
        """
        Recursively find all nodes of a specific type.

        Args:
            node: Root node to search from
            node_type: Type of node to find (e.g., 'preproc_include')

        Returns:
            List of matching nodes in document order
        """
        results = []

        if node.type == node_type:
            results.append(node)

        for child in node.children:
            results.extend(CppParser.find_nodes_by_type(child, node_type))

        return results

    @staticmethod
    def get_declared_name(node: Node, source_code: bytes) -> str:
        """
        Extract the declared name of a declaration-like node.

        Follows the ``declarator`` field chain (function_definition ->
        function_declarator -> identifier, pointer_declarator -> ..., etc.)
        down to the innermost name.
        """
        name_node = node.child_by_field_name('name')
        if name_node is not None:
            return CppParser.get_node_text(name_node, source_code)

        current = node.child_by_field_name('declarator')
        while current is not None:
            inner = current.child_by_field_name('declarator')
            if inner is None:
                break
            current = inner

        if current is not None and current.type in NAME_NODE_TYPES:
            return CppParser.get_node_text(current, source_code)
        return ""


# Node types that spell a declared name.
NAME_NODE_TYPES = {
    'identifier',
    'field_identifier',
    'type_identifier',
    'qualified_identifier',
    'destructor_name',
    'operator_name',
}
