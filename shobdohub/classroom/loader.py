"""
ContentLoader - Load and parse the bundled content files.

Reads from a data directory:
- words.txt (pipe list) and optional words_detailed.txt (detailed blocks)
- passages.txt
- essential_grammar.json, or grammar.txt when no JSON is present

A failed load records an error message and leaves the previously loaded
collection untouched; nothing is partially published.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from shobdohub.config import (
    GRAMMAR_JSON_FILE,
    GRAMMAR_TEXT_FILE,
    PASSAGES_FILE,
    WORDS_DETAILED_FILE,
    WORDS_FILE,
)
from shobdohub.schemas import ParsedChapter, Passage, StructuredChapter, Word
from shobdohub.utils import (
    load_grammar_book,
    merge_word_sources,
    parse_grammar,
    parse_passages,
    parse_word_blocks,
    parse_words,
)

logger = logging.getLogger(__name__)

LOAD_ERRORS = (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError)

Chapter = Union[ParsedChapter, StructuredChapter]


class ContentLoader:
    """
    Load content collections from a data directory.

    Collections are replaced only after a load fully succeeds.
    """

    def __init__(self, data_dir: str | Path):
        """
        Initialize loader.

        Args:
            data_dir: Directory holding the content files
        """
        self.data_dir = Path(data_dir)
        self.words: list[Word] = []
        self.passages: list[Passage] = []
        self.chapters: list[Chapter] = []
        self.error: Optional[str] = None

    def _read_text(self, name: str) -> str:
        path = self.data_dir / name
        if not path.exists():
            raise FileNotFoundError(f"Content file not found: {path}")
        return path.read_text(encoding="utf-8")

    def _fail(self, what: str, exc: Exception) -> bool:
        self.error = f"Failed to load {what}: {exc}"
        logger.error(self.error)
        return False

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load_words(self) -> bool:
        """Load words.txt, merged with words_detailed.txt when present."""
        try:
            words = parse_words(self._read_text(WORDS_FILE))
            if (self.data_dir / WORDS_DETAILED_FILE).exists():
                words = merge_word_sources(words, parse_word_blocks(self._read_text(WORDS_DETAILED_FILE)))
        except LOAD_ERRORS as e:
            return self._fail("words", e)

        self.words = words
        logger.info(f"Loaded {len(words)} words")
        return True

    def load_passages(self) -> bool:
        """Load passages.txt."""
        try:
            passages = parse_passages(self._read_text(PASSAGES_FILE))
        except LOAD_ERRORS as e:
            return self._fail("passages", e)

        self.passages = passages
        logger.info(f"Loaded {len(passages)} passages")
        return True

    def load_grammar(self) -> bool:
        """Load the structured grammar JSON, or parse grammar.txt without it."""
        try:
            if (self.data_dir / GRAMMAR_JSON_FILE).exists():
                chapters = load_grammar_book(json.loads(self._read_text(GRAMMAR_JSON_FILE)))
            else:
                chapters = parse_grammar(self._read_text(GRAMMAR_TEXT_FILE))
        except LOAD_ERRORS as e:
            return self._fail("grammar", e)

        self.chapters = chapters
        logger.info(f"Loaded {len(chapters)} grammar chapters")
        return True

    def load_all(self) -> bool:
        """Load every collection. Returns True only if all loads succeeded."""
        self.error = None
        results = [self.load_words(), self.load_passages(), self.load_grammar()]
        return all(results)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get_passage(self, passage_id: int) -> Optional[Passage]:
        """First passage declaring the given id."""
        return next((p for p in self.passages if p.id == passage_id), None)
