"""
Parsed translation unit: files, locations, ranges, cursors and tokens.

A TranslationUnit owns the tree-sitter trees of the main file and of every
local header it expands. Cursors and tokens are borrowed views into those
trees and are only valid while the unit is alive.
"""
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from tree_sitter import Node, Tree

from .cpp_parser import CppParser
from .errors import RangeConstructionError, UnitDisposedError
from .logger import get_logger

logger = get_logger()


class CursorKind(Enum):
    """Node categories the analyses care about; everything else is OTHER."""
    TRANSLATION_UNIT = "translation_unit"
    SWITCH_STMT = "switch_statement"
    COMPOUND_STMT = "compound_statement"
    CASE_STMT = "case_statement"
    DEFAULT_STMT = "default_statement"
    INCLUSION = "preproc_include"
    OTHER = "other"


class TokenKind(Enum):
    """Lexical token classes."""
    PUNCTUATION = "punctuation"
    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    LITERAL = "literal"
    COMMENT = "comment"
    UNKNOWN = "unknown"


# Named nodes that are not AST cursors.
_NON_CURSOR_TYPES = {'comment'}

# Nodes emitted as one token even though tree-sitter gives them children.
_ATOMIC_TOKEN_TYPES = {
    'string_literal',
    'char_literal',
    'raw_string_literal',
    'number_literal',
    'user_defined_literal',
    'system_lib_string',
}

# Named leaves whose text may be a keyword. tree-sitter also folds typedef
# names (size_t, uint32_t, ...) and the macros NULL/TRUE/FALSE into these,
# so the text decides.
_WORD_LEAF_TYPES = {'primitive_type', 'true', 'false', 'this', 'nullptr', 'null', 'auto'}

# Keyword spellings of C and C++, as the clang lexer reports them.
CPP_KEYWORDS = frozenset("""
    alignas alignof and and_eq asm auto bitand bitor bool break case catch
    char char8_t char16_t char32_t class co_await co_return co_yield compl
    concept const consteval constexpr constinit const_cast continue decltype
    default delete do double dynamic_cast else enum explicit export extern
    false float for friend goto if inline int long mutable namespace new
    noexcept not not_eq nullptr operator or or_eq private protected public
    register reinterpret_cast requires restrict return short signed sizeof
    static static_assert static_cast struct switch template this
    thread_local throw true try typedef typeid typename union unsigned using
    virtual void volatile wchar_t while xor xor_eq
    _Alignas _Alignof _Atomic _Bool _Complex _Generic _Imaginary _Noreturn
    _Static_assert _Thread_local
    __asm __asm__ __attribute__ __declspec __extension__ __inline __inline__
    __restrict __restrict__ __typeof__ __volatile__ __int64
""".split())

_IDENTIFIER_LEAF_TYPES = {
    'identifier',
    'field_identifier',
    'type_identifier',
    'namespace_identifier',
    'statement_identifier',
}

_LITERAL_SPELLING_TYPES = _ATOMIC_TOKEN_TYPES | {'concatenated_string'}

_WORD_RE = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')

# Lexer for macro bodies, which tree-sitter keeps as one opaque preproc_arg leaf.
_MACRO_TOKEN_RE = re.compile(rb"""
    (?P<space>(?:\s|\\\n)+)
  | (?P<comment>//[^\n]*|/\*.*?\*/)
  | (?P<literal>(?:u8|[uUL])?(?:"(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*')
               |\.?\d(?:[eEpP][+-]|[\w.])*)
  | (?P<word>[A-Za-z_]\w*)
  | (?P<punct>\#\#|\.\.\.|->\*|<<=|>>=|<=>|::|\+\+|--|->|<<|>>|&&|\|\||[-+*/%&|^!=<>]=|.)
""", re.VERBOSE | re.DOTALL)

_MACRO_GROUP_KINDS = {
    'comment': TokenKind.COMMENT,
    'literal': TokenKind.LITERAL,
    'punct': TokenKind.PUNCTUATION,
}


class SourceFile:
    """One file parsed into a unit (the main file or an expanded header)."""

    def __init__(self, path: Path, source: bytes, tree: Tree):
        self.path = path
        self.source = source
        self.tree = tree
        # preproc_include node id -> header expanded at that directive
        self.includes: Dict[int, "SourceFile"] = {}

    @property
    def name(self) -> str:
        return str(self.path)

    @property
    def size(self) -> int:
        return len(self.source)

    def __repr__(self):
        return f"SourceFile({self.name!r})"


@dataclass(frozen=True)
class SourceLocation:
    """A resolved position: file, 1-based line and column, byte offset."""
    file: SourceFile
    line: int
    column: int
    offset: int
    is_from_main_file: bool

    def __str__(self):
        return f"{self.file.name}:{self.line}:{self.column}:{self.offset}"


@dataclass(frozen=True)
class SourceRange:
    """A pair of locations; null unless both resolve in the same file in order."""
    start: Optional[SourceLocation]
    end: Optional[SourceLocation]

    @property
    def is_null(self) -> bool:
        if self.start is None or self.end is None:
            return True
        if self.start.file is not self.end.file:
            return True
        return self.end.offset < self.start.offset


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    spelling: str
    location: SourceLocation


def cursor_kind_of(node: Node) -> CursorKind:
    """Map a tree-sitter node type onto a CursorKind."""
    if node.type == 'case_statement':
        # `default:` shares the node type but has no value field
        if node.child_by_field_name('value') is None:
            return CursorKind.DEFAULT_STMT
        return CursorKind.CASE_STMT
    try:
        return CursorKind(node.type)
    except ValueError:
        return CursorKind.OTHER


def word_kind(spelling: str) -> TokenKind:
    """Keyword or identifier, by spelling."""
    if spelling in CPP_KEYWORDS:
        return TokenKind.KEYWORD
    return TokenKind.IDENTIFIER


def token_kind_of(node: Node, spelling: str) -> TokenKind:
    """Classify a leaf (or atomic) node as a lexical token."""
    if node.type == 'comment':
        return TokenKind.COMMENT
    if node.type in _ATOMIC_TOKEN_TYPES:
        return TokenKind.LITERAL
    if node.type in _IDENTIFIER_LEAF_TYPES or node.type in _WORD_LEAF_TYPES or not node.is_named:
        if _WORD_RE.match(spelling):
            return word_kind(spelling)
        if not node.is_named:
            return TokenKind.PUNCTUATION
    return TokenKind.UNKNOWN


def lex_macro_body(text: bytes) -> Iterator[Tuple[int, TokenKind, bytes]]:
    """Split a macro body into ``(relative offset, kind, spelling)`` tokens."""
    for match in _MACRO_TOKEN_RE.finditer(text):
        group = match.lastgroup
        if group == 'space':
            continue
        spelling = match.group()
        if group == 'word':
            kind = word_kind(spelling.decode('utf8', errors='replace'))
        else:
            kind = _MACRO_GROUP_KINDS[group]
        yield match.start(), kind, spelling


def _spelling_of(node: Node, source: bytes) -> str:
    if node.type == 'preproc_include':
        path_node = node.child_by_field_name('path')
        if path_node is None:
            return ""
        return CppParser.get_node_text(path_node, source).strip('"<>')
    if node.type in _LITERAL_SPELLING_TYPES or node.child_count == 0:
        return CppParser.get_node_text(node, source)
    return CppParser.get_declared_name(node, source)


@dataclass(frozen=True)
class Cursor:
    """
    Borrowed handle to one AST node of a unit.

    Cursors own nothing. They may be stored (the switch collector keeps a
    list of them) but must not be used after the unit is disposed.
    """
    node: Node
    file: SourceFile
    unit: "TranslationUnit" = field(repr=False, compare=False)

    @property
    def kind(self) -> CursorKind:
        self.unit.check_alive()
        return cursor_kind_of(self.node)

    @property
    def kind_name(self) -> str:
        self.unit.check_alive()
        return self.node.type

    @property
    def spelling(self) -> str:
        self.unit.check_alive()
        return _spelling_of(self.node, self.file.source)

    @property
    def location(self) -> SourceLocation:
        self.unit.check_alive()
        row, column = self.node.start_point
        return SourceLocation(
            file=self.file,
            line=row + 1,
            column=column + 1,
            offset=self.node.start_byte,
            is_from_main_file=self.file is self.unit.main_file,
        )

    @property
    def children(self) -> List["Cursor"]:
        return self.unit.cursor_children(self)


class TokenBatch(Sequence):
    """
    Tokens produced for one range. Must be disposed exactly once, preferably
    through ``with``; indexing a disposed batch raises UnitDisposedError.
    """

    def __init__(self, unit: "TranslationUnit", tokens: Iterable[Token]):
        self._unit = unit
        self._tokens = list(tokens)
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _check_alive(self):
        if self._disposed:
            raise UnitDisposedError("token batch used after disposal")

    def __len__(self):
        self._check_alive()
        return len(self._tokens)

    def __getitem__(self, index):
        self._check_alive()
        return self._tokens[index]

    def dispose(self):
        if self._disposed:
            return
        self._tokens = []
        self._disposed = True
        self._unit._release_batch(self)

    def __enter__(self) -> "TokenBatch":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()
        return False


class TranslationUnit:
    """
    A main file parsed with tree-sitter, plus the local headers it includes.

    tree-sitter does not preprocess, so quoted ``#include "x.h"`` directives
    are expanded here: each resolvable header is parsed once and its
    top-level nodes become children of the directive that names it. Header
    nodes keep their own file, which is how main-file filtering sees them.
    """

    def __init__(self, parser: CppParser, main_path: Path,
                 include_dirs: Iterable[str] = ()):
        self.parser = parser
        self.include_dirs = [Path(d) for d in include_dirs]
        self._files: Dict[Path, SourceFile] = {}
        self._batches: List[TokenBatch] = []
        self._disposed = False
        self.main_file = self._load_file(Path(main_path).resolve())
        logger.info(f"Parsed unit {self.main_file.name} ({len(self._files)} file(s))")

    # -- lifetime -----------------------------------------------------------

    @property
    def disposed(self) -> bool:
        return self._disposed

    def check_alive(self):
        if self._disposed:
            raise UnitDisposedError("translation unit used after disposal")

    def dispose(self):
        if self._disposed:
            return
        for batch in list(self._batches):
            logger.warning("Token batch still alive when its unit was disposed; releasing it")
            batch.dispose()
        self._files.clear()
        self._disposed = True
        logger.debug(f"Disposed unit {self.main_file.name}")

    def __enter__(self) -> "TranslationUnit":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()
        return False

    # -- files, locations, ranges -------------------------------------------

    @property
    def files(self) -> List[SourceFile]:
        self.check_alive()
        return list(self._files.values())

    def get_file(self, name: str) -> Optional[SourceFile]:
        """Return the unit's file with this name, or None if it is not part of the unit."""
        self.check_alive()
        return self._files.get(Path(name).resolve())

    def get_location_for_offset(self, source_file: Optional[SourceFile],
                                offset: int) -> Optional[SourceLocation]:
        """Resolve a byte offset in a file; None when the offset is outside it."""
        self.check_alive()
        if source_file is None or offset < 0 or offset > source_file.size:
            return None
        return self._location_at(source_file, offset)

    def _location_at(self, source_file: SourceFile, offset: int) -> SourceLocation:
        source = source_file.source
        line = source.count(b"\n", 0, offset) + 1
        line_start = source.rfind(b"\n", 0, offset) + 1
        return SourceLocation(
            file=source_file,
            line=line,
            column=offset - line_start + 1,
            offset=offset,
            is_from_main_file=source_file is self.main_file,
        )

    def get_range(self, start: Optional[SourceLocation],
                  end: Optional[SourceLocation]) -> SourceRange:
        self.check_alive()
        return SourceRange(start, end)

    # -- AST ----------------------------------------------------------------

    @property
    def cursor(self) -> Cursor:
        """The root (translation_unit) cursor of the main file."""
        self.check_alive()
        return Cursor(self.main_file.tree.root_node, self.main_file, self)

    def cursor_children(self, cursor: Cursor) -> List[Cursor]:
        self.check_alive()
        children = [
            Cursor(child, cursor.file, self)
            for child in cursor.node.named_children
            if child.type not in _NON_CURSOR_TYPES
        ]
        header = cursor.file.includes.get(cursor.node.id)
        if header is not None:
            children.extend(
                Cursor(child, header, self)
                for child in header.tree.root_node.named_children
                if child.type not in _NON_CURSOR_TYPES
            )
        return children

    # -- tokens -------------------------------------------------------------

    def tokenize(self, source_range: SourceRange) -> TokenBatch:
        """Tokenize every token lying entirely inside the range, in document order."""
        self.check_alive()
        if source_range.is_null:
            raise RangeConstructionError("cannot tokenize a null range")
        source_file = source_range.start.file
        tokens = self._iter_tokens(source_file, source_range.start.offset,
                                   source_range.end.offset)
        batch = TokenBatch(self, tokens)
        self._batches.append(batch)
        return batch

    def _release_batch(self, batch: TokenBatch):
        if batch in self._batches:
            self._batches.remove(batch)

    def _iter_tokens(self, source_file: SourceFile, start: int, end: int) -> Iterator[Token]:
        stack = [source_file.tree.root_node]
        while stack:
            node = stack.pop()
            if node.end_byte <= start or node.start_byte >= end:
                continue
            if node.child_count == 0 or node.type in _ATOMIC_TOKEN_TYPES:
                # zero-width MISSING nodes and directive newlines are not tokens
                if not source_file.source[node.start_byte:node.end_byte].strip():
                    continue
                if node.type == 'preproc_arg':
                    yield from self._iter_macro_tokens(source_file, node, start, end)
                elif start <= node.start_byte and node.end_byte <= end:
                    yield self._make_token(source_file, node)
                continue
            stack.extend(reversed(node.children))

    def _iter_macro_tokens(self, source_file: SourceFile, node: Node,
                           start: int, end: int) -> Iterator[Token]:
        body = source_file.source[node.start_byte:node.end_byte]
        for relative, kind, spelling in lex_macro_body(body):
            offset = node.start_byte + relative
            if start <= offset and offset + len(spelling) <= end:
                yield Token(
                    kind=kind,
                    spelling=spelling.decode('utf8', errors='replace'),
                    location=self._location_at(source_file, offset),
                )

    def _make_token(self, source_file: SourceFile, node: Node) -> Token:
        spelling = CppParser.get_node_text(node, source_file.source)
        return Token(
            kind=token_kind_of(node, spelling),
            spelling=spelling,
            location=self._location_at(source_file, node.start_byte),
        )

    # -- loading ------------------------------------------------------------

    def _load_file(self, path: Path) -> SourceFile:
        source = path.read_bytes()
        tree = self.parser.parse_bytes(source)
        source_file = SourceFile(path, source, tree)
        self._files[path] = source_file

        for include in CppParser.find_nodes_by_type(tree.root_node, 'preproc_include'):
            header_path = self._resolve_include(include, source_file)
            if header_path is None or header_path in self._files:
                continue
            try:
                header = self._load_file(header_path)
            except OSError as e:
                logger.warning(f"Cannot read included header {header_path}: {e}")
                continue
            source_file.includes[include.id] = header
            logger.debug(f"Expanded {header_path} into {path}")

        return source_file

    def _resolve_include(self, include: Node, source_file: SourceFile) -> Optional[Path]:
        path_node = include.child_by_field_name('path')
        # <...> system headers are never expanded
        if path_node is None or path_node.type != 'string_literal':
            return None
        header_name = CppParser.get_node_text(path_node, source_file.source).strip('"')
        if not header_name:
            return None
        for directory in [source_file.path.parent] + self.include_dirs:
            candidate = directory / header_name
            if candidate.is_file():
                return candidate.resolve()
        logger.debug(f"Include not found, left unexpanded: {header_name}")
        return None
