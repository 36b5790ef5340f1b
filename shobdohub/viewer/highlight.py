"""
Highlight engine - split passage text into plain and vocabulary segments.

All vocabulary tokens are escaped and joined into one case-insensitive
whole-word alternation. Splitting the text on that pattern (with a capture
group) yields literal runs at even indices and matches at odd indices.
Concatenating the returned segments reproduces the text that was segmented.
"""

import re
from typing import Iterable, Optional, Union

from shobdohub.schemas import Segment, TextSegment, WordSegment

from .lookup import WordLookupIndex

# Parenthetical asides containing Bengali script, e.g. "(প্রশমিত হওয়া)"
_BANGLA_GLOSS = re.compile(r'\s*\([^)]*[\u0980-\u09FF][^)]*\)')


def strip_bangla_glosses(text: str) -> str:
    """Remove translator glosses written in Bengali from English text."""
    return _BANGLA_GLOSS.sub('', text)


def build_vocabulary_pattern(vocabulary: Iterable[str]) -> Optional[re.Pattern]:
    """Compile the whole-word alternation, or None for an empty vocabulary."""
    tokens = [re.escape(token) for token in vocabulary if token and token.strip()]
    if not tokens:
        return None
    return re.compile(r'\b(' + '|'.join(tokens) + r')\b', re.IGNORECASE)


def segment(
    text: str,
    vocabulary: Iterable[str],
    index: Union[WordLookupIndex, dict],
    english: bool = False,
) -> list[Segment]:
    """
    Split text into TextSegment and WordSegment runs.

    Args:
        text: Passage text
        vocabulary: The passage's vocabulary tokens
        index: Lookup index built from the same vocabulary
        english: Strip Bengali glosses before segmenting

    Returns:
        Segments in text order. A match that does not resolve through the
        index degrades to a TextSegment.
    """
    if not text:
        return []

    if english:
        text = strip_bangla_glosses(text)

    if not isinstance(index, WordLookupIndex):
        index = WordLookupIndex(index)

    pattern = build_vocabulary_pattern(vocabulary)
    if pattern is None:
        return [TextSegment(text=text)]

    segments: list[Segment] = []
    for position, piece in enumerate(pattern.split(text)):
        if not piece:
            continue
        if position % 2 == 1:
            word = index.resolve(piece)
            if word is not None:
                segments.append(WordSegment(text=piece, word=word))
                continue
        segments.append(TextSegment(text=piece))
    return segments


def segments_text(segments: Iterable[Segment]) -> str:
    """Concatenate segment text back into a string."""
    return ''.join(s.text for s in segments)
