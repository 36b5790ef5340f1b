"""
Word list parsers for ShobdoHub.

Two source formats are supported:
- Pipe list: one `TERM | Bangla meaning` entry per line (the primary list)
- Detailed blocks: rich entries separated by the target marker, carrying
  pronunciation, smart meaning, synonyms, antonyms and examples

Both parsers are pure per-entry mappers. Malformed entries are logged and
skipped; the rest of the file still parses.
"""

import logging
import re
from typing import Optional

from shobdohub.schemas import (
    Difficulty,
    PartOfSpeech,
    POS_ABBREVIATIONS,
    Word,
    normalize_token,
)

from .text_cleanup import (
    BANGLA_MEANING_PREFIX,
    BENGALI_CHARS,
    clean_bangla_text,
    has_bengali,
    strip_zero_width,
)

logger = logging.getLogger(__name__)

BLOCK_MARKER = '\U0001F3AF'  # target emoji separating detailed entries
EXAMPLE_BULLET = '\u2751'  # hollow square bullet
DETAIL_BULLET = '\U0001F5F9'  # ballot box bullet

MAX_SYNONYMS = 15
MAX_EXAMPLES = 8

_HEADER_PATTERN = re.compile(r'^([A-Z]+)\s*\u27BA?\s*\(([^)]+)\)\s*\[([^\]]+)\]', re.IGNORECASE)
_SIMPLE_HEADER_PATTERN = re.compile(r'^([A-Z]+)', re.IGNORECASE)
_SMART_LABEL = re.compile(r'Word Smart Meaning:?\u27AD?\s*', re.IGNORECASE)
_POS_PREFIX = re.compile(r'^(v|n|adj|adv|prep|conj|interj)\s+', re.IGNORECASE)
_SYNONYM_LABEL = re.compile(r'synonyms?:?-?\s*', re.IGNORECASE)
_ANTONYM_LABEL = re.compile(r'antonyms?:?-?\s*', re.IGNORECASE)
_LIST_SEPARATOR = re.compile(r'[,;]')
_BULLETS = re.compile(f'^[{DETAIL_BULLET}{EXAMPLE_BULLET}\\s]+')
_BENGALI_CHAR = re.compile(f'[{BENGALI_CHARS}]')


# -----------------------------------------------------------------------------
# Pipe list
# -----------------------------------------------------------------------------


def parse_word_line(line: str, line_no: int = 0) -> Optional[Word]:
    """
    Parse one `TERM | meaning` line.

    Returns None (after logging a warning) for lines that cannot produce a
    Word. Fields after the second are ignored.
    """
    stripped = strip_zero_width(line).strip()
    if not stripped:
        return None

    parts = stripped.split('|')
    if len(parts) < 2:
        logger.warning(f"Line {line_no}: expected 'TERM | meaning', skipping: {stripped[:60]!r}")
        return None

    term = parts[0].strip()
    meaning = parts[1].strip()
    if not term or not meaning:
        logger.warning(f"Line {line_no}: empty term or meaning, skipping")
        return None

    if not normalize_token(term):
        logger.warning(f"Line {line_no}: term {term!r} has no letters to key on, skipping")
        return None

    return Word.from_term(term, bangla_meaning=meaning)


def parse_words(text: str) -> list[Word]:
    """
    Parse a pipe-delimited word list.

    Args:
        text: File content, one entry per line

    Returns:
        Words in input line order. Duplicate terms are kept as separate
        entries.
    """
    words = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        word = parse_word_line(line, line_no)
        if word is not None:
            words.append(word)

    logger.debug(f"Parsed {len(words)} words from pipe list")
    return words


# -----------------------------------------------------------------------------
# Detailed blocks
# -----------------------------------------------------------------------------


def _split_list_line(line: str, label: re.Pattern) -> list[str]:
    body = label.sub('', line, count=1)
    items = [item.strip() for item in _LIST_SEPARATOR.split(body)]
    return [item for item in items if len(item) > 1][:MAX_SYNONYMS]


def _find_line(lines: list[str], predicate) -> Optional[str]:
    return next((line for line in lines if predicate(line)), None)


def _is_english_example(example: str, min_length: int) -> bool:
    return min_length < len(example) < 400 and example[:1].isupper() and example[:1].isascii()


def rich_difficulty(term: str, synonym_count: int) -> Difficulty:
    """
    Difficulty for detailed entries, where synonym richness is known.

    Short words with many synonyms are easy; long words or words with few
    synonyms are hard.
    """
    length = len(term)
    if length <= 5 and synonym_count > 5:
        return Difficulty.EASY
    if length > 8 or synonym_count < 3:
        return Difficulty.HARD
    return Difficulty.MEDIUM


def parse_word_block(block: str) -> Optional[Word]:
    """Parse one detailed entry. Returns None if no headword is found."""
    lines = [line.strip() for line in strip_zero_width(block).split('\n')]
    lines = [line for line in lines if line]
    if len(lines) < 3:
        return None

    header = _HEADER_PATTERN.match(lines[0])
    if header:
        term = header.group(1).strip()
        pronunciation = header.group(2).strip()
    else:
        simple = _SIMPLE_HEADER_PATTERN.match(lines[0])
        if not simple:
            return None
        term = simple.group(1).strip()
        pronunciation = ''

    # Bangla meaning: labelled lines, or bare Bengali lines right after the header
    meaning_lines = []
    for i, line in enumerate(lines[:10]):
        if BANGLA_MEANING_PREFIX.match(line) or (
            0 < i < 5 and _BENGALI_CHAR.match(line) and 'Word Smart' not in line
        ):
            meaning_lines.append(line)
    bangla_meaning = ', '.join(filter(None, (clean_bangla_text(l) for l in meaning_lines)))

    smart_line = _find_line(lines, lambda l: 'Word Smart Meaning' in l or '\u27AD' in l)
    smart_meaning = _SMART_LABEL.sub('', smart_line).strip() if smart_line else ''
    pos_match = _POS_PREFIX.match(smart_meaning)
    part_of_speech = POS_ABBREVIATIONS.get(pos_match.group(1).lower()) if pos_match else PartOfSpeech.NOUN
    smart_meaning = _POS_PREFIX.sub('', smart_meaning).strip()

    synonym_line = _find_line(lines, lambda l: l.lower().startswith('synonym'))
    synonyms = _split_list_line(synonym_line, _SYNONYM_LABEL) if synonym_line else []
    antonym_line = _find_line(lines, lambda l: l.lower().startswith('antonym'))
    antonyms = _split_list_line(antonym_line, _ANTONYM_LABEL) if antonym_line else []

    detailed = []
    detail_start = next((i for i, l in enumerate(lines) if 'Detailed Bangla Meaning' in l), -1)
    if detail_start > -1:
        for line in lines[detail_start + 1:]:
            lowered = line.lower()
            if 'Examples' in line or lowered.startswith('synonym') or lowered.startswith('antonym'):
                break
            if has_bengali(line) or line.startswith((EXAMPLE_BULLET, DETAIL_BULLET)):
                cleaned = clean_bangla_text(_BULLETS.sub('', line))
                if cleaned:
                    detailed.append(cleaned)

    examples = []
    example_start = next((i for i, l in enumerate(lines) if 'examples' in l.lower()), -1)
    if example_start > -1:
        for line in lines[example_start + 1:]:
            if len(examples) >= MAX_EXAMPLES:
                break
            if line.startswith(EXAMPLE_BULLET):
                example = line.lstrip(EXAMPLE_BULLET).strip()
                if _is_english_example(example, 15):
                    examples.append(example)

    # Example sentences also appear inside the definition area
    definition_end = example_start if example_start > -1 else len(lines)
    for line in lines[:definition_end]:
        if len(examples) >= MAX_EXAMPLES:
            break
        if not line.startswith(EXAMPLE_BULLET):
            continue
        example = line.lstrip(EXAMPLE_BULLET).strip()
        bengali_count = len(_BENGALI_CHAR.findall(example))
        if (
            _is_english_example(example, 20)
            and example not in examples
            and bengali_count < len(example) * 0.3
        ):
            examples.append(example)

    return Word.from_term(
        term.upper(),
        pronunciation=pronunciation,
        part_of_speech=part_of_speech,
        smart_meaning=smart_meaning,
        bangla_meaning=bangla_meaning,
        detailed_bangla_meaning=' '.join(detailed).strip(),
        synonyms=synonyms,
        antonyms=antonyms,
        examples=examples,
        difficulty=rich_difficulty(term, len(synonyms)),
    )


def parse_word_blocks(text: str) -> list[Word]:
    """
    Parse the detailed word format (entries separated by the target marker).

    Returns:
        Words in block order; blocks without a headword are skipped.
    """
    words = []
    for index, block in enumerate(re.split(f'{BLOCK_MARKER}\\s*', text)):
        if not block.strip():
            continue
        word = parse_word_block(block)
        if word is None:
            logger.warning(f"Block {index}: no headword found, skipping")
            continue
        words.append(word)

    logger.debug(f"Parsed {len(words)} words from detailed blocks")
    return words


def merge_word_sources(simple: list[Word], rich: list[Word]) -> list[Word]:
    """
    Combine the pipe list with detailed entries.

    A detailed entry replaces every simple entry with the same id (keeping
    the simple entry's position); detailed entries with no simple
    counterpart are appended in their own order.
    """
    rich_by_id: dict[str, Word] = {}
    for word in rich:
        rich_by_id.setdefault(word.id, word)

    merged = [rich_by_id.get(word.id, word) for word in simple]
    simple_ids = {word.id for word in simple}
    merged.extend(w for w in rich_by_id.values() if w.id not in simple_ids)
    return merged
