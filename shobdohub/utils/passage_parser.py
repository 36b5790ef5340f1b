"""
Reading passage parser for ShobdoHub.

Passage files hold repeated blocks of the form:

    Passage 3: A Rainy Morning
    (Words: MITIGATE, RESILIENT)
    Bengali Contextual Version
    ...bangla lines...
    English Translation
    ...english lines...

Blocks are split on the "Passage <n>:" header. A block that yields neither
Bangla nor English text is dropped.
"""

import logging
import re
from typing import Optional

from shobdohub.schemas import Passage

from .id_checks import validate_sequence_ids
from .text_cleanup import strip_zero_width

logger = logging.getLogger(__name__)

BENGALI_MARKER = "Bengali Contextual Version"
ENGLISH_MARKER = "English Translation"
WORDS_MARKER = "(Words:"

_BLOCK_SPLIT = re.compile(r'(?=Passage \d+:)')
_HEADER_PATTERN = re.compile(r'Passage (\d+):\s*(.*)')
_WORDS_PATTERN = re.compile(r'\(Words:\s*([^)]+)\)')


def extract_vocabulary(lines: list[str]) -> list[str]:
    """Uppercased, trimmed tokens from the first "(Words: ...)" line."""
    for line in lines:
        match = _WORDS_PATTERN.search(line)
        if match:
            tokens = (token.strip().upper() for token in match.group(1).split(','))
            return [token for token in tokens if token]
    return []


def _collect_english(lines: list[str]) -> list[str]:
    """English lines run until a blank line, the next header or a Bengali marker."""
    collected = []
    for line in lines:
        if not line:
            if collected:
                break
            continue
        if line.startswith('Passage ') or BENGALI_MARKER in line:
            break
        collected.append(line)
    return collected


def parse_passage_block(block: str) -> Optional[Passage]:
    """
    Parse one passage block.

    Returns:
        Passage, or None if the header is missing or no text was extracted
    """
    lines = [strip_zero_width(line).strip() for line in block.split('\n')]
    content = [line for line in lines if line]
    if not content:
        return None

    header = _HEADER_PATTERN.match(content[0])
    if not header:
        return None

    passage_id = int(header.group(1))
    title = header.group(2).strip()
    words = extract_vocabulary(content)

    bangla_index = next((i for i, l in enumerate(lines) if BENGALI_MARKER in l), -1)
    english_index = next((i for i, l in enumerate(lines) if ENGLISH_MARKER in l), -1)

    bangla_text = ''
    english_text = ''
    if bangla_index != -1 and english_index != -1:
        bangla_lines = [
            line for line in lines[bangla_index + 1:english_index]
            if line and WORDS_MARKER not in line
        ]
        bangla_text = ' '.join(bangla_lines).strip()
        english_text = ' '.join(_collect_english(lines[english_index + 1:])).strip()

    if not bangla_text and not english_text:
        logger.warning(f"Passage {passage_id}: no Bangla or English text found, skipping")
        return None

    return Passage(
        id=passage_id,
        title=title,
        words=words,
        bangla_text=bangla_text,
        english_text=english_text,
    )


def parse_passages(text: str) -> list[Passage]:
    """
    Parse all passages in file order.

    Passage ids are taken from the headers as written; duplicates and gaps
    are logged but kept.
    """
    passages = []
    for block in _BLOCK_SPLIT.split(text):
        if not block.strip():
            continue
        passage = parse_passage_block(block)
        if passage is not None:
            passages.append(passage)

    for warning in validate_sequence_ids((p.id for p in passages), "passage"):
        logger.warning(warning)

    logger.debug(f"Parsed {len(passages)} passages")
    return passages
