"""ShobdoHub utilities: content parsers and reference tables."""

from .word_parser import parse_words, parse_word_blocks, merge_word_sources
from .passage_parser import parse_passages
from .grammar_parser import (
    parse_grammar,
    load_grammar_book,
    format_grammar_content,
    extract_bilingual_pairs,
)
from .id_checks import validate_sequence_ids
from .reference_loader import load_reference, get_chapter_reference

__all__ = [
    "parse_words",
    "parse_word_blocks",
    "merge_word_sources",
    "parse_passages",
    "parse_grammar",
    "load_grammar_book",
    "format_grammar_content",
    "extract_bilingual_pairs",
    "validate_sequence_ids",
    "load_reference",
    "get_chapter_reference",
]
