"""
Token pass: tokenization adapter, keyword counting and the token dump.
"""
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Sequence

from .logger import get_logger
from .translation_unit import SourceRange, Token, TokenKind, TranslationUnit

logger = get_logger()

_TOKEN_KIND_SPELLINGS = {
    TokenKind.PUNCTUATION: "Punctuation",
    TokenKind.KEYWORD: "Keyword",
    TokenKind.IDENTIFIER: "Identifier",
    TokenKind.LITERAL: "Literal",
    TokenKind.COMMENT: "Comment",
}


@contextmanager
def tokenize(unit: TranslationUnit, source_range: SourceRange) -> Iterator[Sequence[Token]]:
    """
    Tokenize a range; the token batch is released when the block exits,
    whether normally or by an exception.
    """
    batch = unit.tokenize(source_range)
    logger.debug(f"Tokenized {len(batch)} token(s)")
    try:
        yield batch
    finally:
        batch.dispose()


def count_keywords(tokens: Iterable[Token]) -> int:
    """Number of tokens classified as keywords."""
    return sum(1 for token in tokens if token.kind is TokenKind.KEYWORD)


def token_kind_spelling(kind: TokenKind) -> str:
    return _TOKEN_KIND_SPELLINGS.get(kind, "Unknown")


def format_tokens(tokens: Sequence[Token]) -> List[str]:
    """Render the token dump, one block per token."""
    lines = ["=== show tokens ===", f"NumTokens: {len(tokens)}"]
    for i, token in enumerate(tokens):
        lines.append(f"Token: {i}")
        lines.append(f" Text: {token.spelling}")
        lines.append(f" Kind: {token_kind_spelling(token.kind)}")
        lines.append(f" Location: {token.location}")
        lines.append("")
    return lines
