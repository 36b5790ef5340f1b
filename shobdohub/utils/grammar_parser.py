"""
Grammar chapter parser for ShobdoHub.

Grammar source text is inconsistently structured prose split into
"Chapter-<n>" blocks. Inside a block, sections are extracted by an ordered
chain of strategies with decreasing specificity:

1. Rule-<n> / Shortcut Tip(s)-<n> markers
2. Numbered items (at most MAX_NUMBERED_ITEMS)
3. One catch-all content section, truncated to MAX_RAW_CONTENT_LENGTH

The first strategy that returns sections wins, so every chapter with any
text produces something renderable.

The pre-structured JSON grammar book needs no parsing and is validated by
load_grammar_book().
"""

import logging
import re
from typing import Any, Callable, Optional

from shobdohub.schemas import (
    DEFAULT_CHAPTER_DESCRIPTION,
    BilingualPair,
    GrammarBook,
    ParsedChapter,
    Section,
    SectionType,
    StructuredChapter,
)

from .id_checks import validate_sequence_ids
from .reference_loader import get_chapter_reference

logger = logging.getLogger(__name__)

MIN_CONTENT_LENGTH = 20
MAX_NUMBERED_ITEMS = 50
MAX_RAW_CONTENT_LENGTH = 5000
MAX_BENGALI_TITLE_LENGTH = 50

_CHAPTER_SPLIT = re.compile(r'(?=Chapter-\d+)')
_CHAPTER_HEADER = re.compile(r'\s*Chapter-(\d+)([^\n]*)')

_RULE_PATTERN = re.compile(
    r'Rule-\s*(\d+)(.*?)(?=Rule-\s*\d|Shortcut\s+Tips?\s*-\s*\d|Chapter-\d|\Z)',
    re.IGNORECASE | re.DOTALL,
)
_SHORTCUT_PATTERN = re.compile(
    r'Shortcut\s+Tips?\s*-\s*(\d+)(.*?)(?=Shortcut\s+Tips?\s*-\s*\d|Rule-\s*\d|Chapter-\d|\Z)',
    re.IGNORECASE | re.DOTALL,
)
_EXAMPLE_PATTERN = re.compile(r'Examples?\s*:\s*(.*)', re.IGNORECASE | re.DOTALL)
_NUMBERED_MARKER = re.compile(r'(?<!\w)(\d{1,3})(?:[.)]\s+|(?=[A-Z\u0980-\u09FF]))')

_LATIN_TITLE = re.compile(r'^\s*[-:]?\s*([A-Za-z][A-Za-z\s&]*)')
_BENGALI_RUN = re.compile(r'[\u0980-\u09FF][\u0980-\u09FF\s]*')
_SENTENCE_BREAK = re.compile(r'([.!?\u0964])\s+(?=[A-Z\u0980-\u09FF])')
_BILINGUAL_PATTERN = re.compile(
    r'^[ \t]*([\u0980-\u09FF][^\n]*?)[ \t]*\n[ \t]*([A-Z][^\n\u0964]*[.?!])',
    re.MULTILINE,
)

SectionStrategy = Callable[[int, str], Optional[list[Section]]]


# -----------------------------------------------------------------------------
# Section strategies
# -----------------------------------------------------------------------------


def _lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def _scan_rules(chapter_id: int, text: str) -> list[tuple[int, Section]]:
    found = []
    for match in _RULE_PATTERN.finditer(text):
        rule_id = match.group(1)
        body = match.group(2).strip()
        english_content = None
        examples: list[str] = []

        example = _EXAMPLE_PATTERN.search(body)
        if example:
            english_content = example.group(1).strip() or None
            examples = _lines(example.group(1))
            body = body[:example.start()].strip()

        if not body and not english_content:
            continue

        found.append((match.start(), Section(
            id=f"rule-{chapter_id}-{rule_id}",
            type=SectionType.RULE,
            title=f"Rule {rule_id}",
            content=body,
            examples=examples,
            english_content=english_content,
        )))
    return found


def _scan_shortcuts(chapter_id: int, text: str) -> list[tuple[int, Section]]:
    found = []
    for match in _SHORTCUT_PATTERN.finditer(text):
        tip_id = match.group(1)
        body = match.group(2).strip()
        if not body:
            continue
        found.append((match.start(), Section(
            id=f"shortcut-{chapter_id}-{tip_id}",
            type=SectionType.SHORTCUT,
            title=f"Shortcut Tip {tip_id}",
            content=body,
        )))
    return found


def _with_unique_ids(sections: list[Section]) -> list[Section]:
    seen: dict[str, int] = {}
    result = []
    for section in sections:
        count = seen.get(section.id, 0) + 1
        seen[section.id] = count
        if count > 1:
            section = section.model_copy(update={"id": f"{section.id}-{count}"})
        result.append(section)
    return result


def extract_rule_sections(chapter_id: int, text: str) -> Optional[list[Section]]:
    """Sections for each "Rule-<n>" marker, or None if there are none."""
    sections = [section for _, section in _scan_rules(chapter_id, text)]
    return _with_unique_ids(sections) or None


def extract_shortcut_sections(chapter_id: int, text: str) -> Optional[list[Section]]:
    """Sections for each "Shortcut Tip(s)-<n>" marker, or None if there are none."""
    sections = [section for _, section in _scan_shortcuts(chapter_id, text)]
    return _with_unique_ids(sections) or None


def extract_marked_sections(chapter_id: int, text: str) -> Optional[list[Section]]:
    """Rules and shortcut tips together, in source order."""
    found = _scan_rules(chapter_id, text) + _scan_shortcuts(chapter_id, text)
    found.sort(key=lambda item: item[0])
    return _with_unique_ids([section for _, section in found]) or None


def extract_numbered_sections(chapter_id: int, text: str) -> Optional[list[Section]]:
    """
    Split generic numbered items ("1. ...", "2) ...", "3Subject...").

    Only runs on content longer than MIN_CONTENT_LENGTH and stops after
    MAX_NUMBERED_ITEMS markers.
    """
    if len(text.strip()) <= MIN_CONTENT_LENGTH:
        return None

    markers = []
    for match in _NUMBERED_MARKER.finditer(text):
        markers.append(match)
        if len(markers) >= MAX_NUMBERED_ITEMS:
            break
    if not markers:
        return None

    sections = []
    for i, marker in enumerate(markers):
        end = markers[i + 1].start() if i + 1 < len(markers) else len(text)
        body = text[marker.end():end].strip()
        if len(body) <= MIN_CONTENT_LENGTH:
            continue
        sections.append(Section(
            id=f"item-{chapter_id}-{marker.group(1)}",
            type=SectionType.NOTE,
            title=f"Point {marker.group(1)}",
            content=body,
        ))
    return _with_unique_ids(sections) or None


def extract_raw_section(chapter_id: int, text: str) -> Optional[list[Section]]:
    """Catch-all: the whole content as one bounded section."""
    body = text.strip()
    if not body:
        return None
    return [Section(
        id=f"content-{chapter_id}",
        type=SectionType.CONTENT,
        title="Content",
        content=body[:MAX_RAW_CONTENT_LENGTH],
    )]


SECTION_STRATEGIES: tuple[SectionStrategy, ...] = (
    extract_marked_sections,
    extract_numbered_sections,
    extract_raw_section,
)


def build_sections(
    chapter_id: int,
    text: str,
    strategies: tuple[SectionStrategy, ...] = SECTION_STRATEGIES,
) -> list[Section]:
    """Run strategies in order; the first non-empty result wins."""
    for strategy in strategies:
        sections = strategy(chapter_id, text)
        if sections:
            return sections
    return []


# -----------------------------------------------------------------------------
# Chapter parsing
# -----------------------------------------------------------------------------


def _header_titles(header_rest: str) -> tuple[str, str]:
    """Latin and Bengali title fragments from the chapter header line."""
    latin = _LATIN_TITLE.match(header_rest)
    bengali = _BENGALI_RUN.search(header_rest)
    latin_title = latin.group(1).strip() if latin else ""
    bengali_title = bengali.group(0).strip()[:MAX_BENGALI_TITLE_LENGTH] if bengali else ""
    return latin_title, bengali_title


def parse_chapter_block(block: str) -> Optional[ParsedChapter]:
    """Parse one "Chapter-<n>" block. Returns None without a header."""
    header = _CHAPTER_HEADER.match(block)
    if not header:
        return None

    chapter_id = int(header.group(1))
    header_title, header_bengali = _header_titles(header.group(2))
    content = block[header.start(2):].strip()

    reference = get_chapter_reference(chapter_id)
    if reference:
        title = reference.title
        title_bengali = header_bengali or reference.title_bengali
        description = reference.description
    else:
        title = header_title or f"Chapter {chapter_id}"
        title_bengali = header_bengali
        description = DEFAULT_CHAPTER_DESCRIPTION

    sections = build_sections(chapter_id, content)
    if not sections:
        logger.warning(f"Chapter {chapter_id}: no content found")

    return ParsedChapter(
        id=chapter_id,
        title=title,
        title_bengali=title_bengali,
        description=description,
        sections=sections,
        raw_content=content,
    )


def parse_grammar(text: str) -> list[ParsedChapter]:
    """
    Parse grammar text into chapters.

    Returns:
        Chapters sorted ascending by chapter id, whatever the file order
    """
    chapters = []
    for block in _CHAPTER_SPLIT.split(text):
        if not block.strip():
            continue
        chapter = parse_chapter_block(block)
        if chapter is not None:
            chapters.append(chapter)

    for warning in validate_sequence_ids((c.id for c in chapters), "chapter"):
        logger.warning(warning)

    chapters.sort(key=lambda c: c.id)
    logger.debug(f"Parsed {len(chapters)} grammar chapters")
    return chapters


def load_grammar_book(data: dict[str, Any]) -> list[StructuredChapter]:
    """
    Validate the pre-structured grammar JSON.

    Missing Bengali titles and descriptions are filled from the chapter
    reference table.

    Raises:
        pydantic.ValidationError: If the JSON does not match the schema
    """
    book = GrammarBook.model_validate(data)
    chapters = []
    for chapter in book.chapters:
        reference = get_chapter_reference(chapter.chapter)
        if reference:
            updates = {}
            if "title_bengali" not in chapter.model_fields_set:
                updates["title_bengali"] = reference.title_bengali
            if "description" not in chapter.model_fields_set:
                updates["description"] = reference.description
            if updates:
                chapter = chapter.model_copy(update=updates)
        chapters.append(chapter)

    for warning in validate_sequence_ids((c.chapter for c in chapters), "chapter"):
        logger.warning(warning)

    return sorted(chapters, key=lambda c: c.chapter)


# -----------------------------------------------------------------------------
# Display helpers
# -----------------------------------------------------------------------------


def format_grammar_content(text: str) -> str:
    """Insert paragraph breaks after sentence ends followed by a new sentence."""
    if not text:
        return ""
    return _SENTENCE_BREAK.sub(r'\1\n\n', text)


def extract_bilingual_pairs(text: str) -> list[BilingualPair]:
    """Pairs of a Bengali line immediately followed by an English sentence line."""
    if not text:
        return []
    return [
        BilingualPair(bengali=match.group(1).strip(), english=match.group(2).strip())
        for match in _BILINGUAL_PATTERN.finditer(text)
    ]
