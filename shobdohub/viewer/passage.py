"""
Passage renderer - HTML for reading passages with clickable vocabulary.

Features:
- Difficulty color-coded vocabulary spans
- Hover tooltip with pronunciation and Bangla meaning
- Vocabulary list for the words a passage teaches
"""

import html
from typing import Iterable

from shobdohub.schemas import Difficulty, Passage, Segment, Word, WordSegment

from .highlight import segment
from .lookup import WordLookupIndex


# Difficulty to CSS class mapping for color coding
DIFFICULTY_CLASSES = {
    Difficulty.EASY: "vocab-easy",       # Green
    Difficulty.MEDIUM: "vocab-medium",   # Yellow
    Difficulty.HARD: "vocab-hard",       # Red
}


def get_passage_css() -> str:
    """Get CSS styles for passage display."""
    return """
    <style>
    .passage-text {
        font-size: 1.15em;
        line-height: 2em;
        margin: 1em 0;
    }
    .passage-bangla {
        font-family: "Noto Sans Bengali", "Hind Siliguri", sans-serif;
    }
    .vocab-word {
        cursor: pointer;
        font-weight: 600;
        border-radius: 4px;
        padding: 0 2px;
        position: relative;
    }
    .vocab-easy { color: #4ade80; }
    .vocab-medium { color: #facc15; }
    .vocab-hard { color: #f87171; }
    .vocab-tooltip {
        position: absolute;
        bottom: 100%;
        left: 50%;
        transform: translateX(-50%);
        background: white;
        color: #333;
        border: 1px solid #ccc;
        border-radius: 6px;
        padding: 6px 10px;
        white-space: nowrap;
        display: none;
        font-size: 0.85em;
        font-weight: normal;
        z-index: 1000;
    }
    .vocab-word:hover .vocab-tooltip {
        display: block;
    }
    .tooltip-pronunciation {
        color: #666;
        font-style: italic;
    }
    .vocab-list-item {
        display: flex;
        gap: 1em;
        margin: 0.4em 0;
    }
    .vocab-list-word {
        font-weight: 600;
        min-width: 120px;
    }
    </style>
    """


def render_word_tooltip(word: Word) -> str:
    """Render tooltip HTML for a vocabulary word."""
    parts = []
    if word.pronunciation:
        parts.append(f'<div class="tooltip-pronunciation">{html.escape(word.pronunciation)}</div>')
    parts.append(f'<div class="tooltip-meaning">{html.escape(word.bangla_meaning)}</div>')
    return f'<span class="vocab-tooltip">{"".join(parts)}</span>'


def render_segments(segments: Iterable[Segment]) -> str:
    """Render segments as escaped HTML; matched words become vocabulary spans."""
    result = []
    for seg in segments:
        if isinstance(seg, WordSegment):
            css_class = DIFFICULTY_CLASSES.get(seg.word.difficulty, "vocab-medium")
            result.append(
                f'<span class="vocab-word {css_class}" data-word-id="{html.escape(seg.word.id)}">'
                f'{html.escape(seg.text)}{render_word_tooltip(seg.word)}</span>'
            )
        else:
            result.append(html.escape(seg.text))
    return ''.join(result)


def render_passage_html(passage: Passage, words: list[Word], english: bool = False) -> str:
    """
    Render one language version of a passage.

    Args:
        passage: Parsed passage
        words: The full word collection
        english: Render the English translation instead of the Bangla text

    Returns:
        HTML string with vocabulary spans and tooltips
    """
    index = WordLookupIndex.build(passage.words, words)
    text = passage.english_text if english else passage.bangla_text
    body = render_segments(segment(text, passage.words, index, english=english))
    lang_class = "" if english else " passage-bangla"
    return f'<div class="passage-text{lang_class}">{body}</div>'


def render_word_list(passage: Passage, words: list[Word]) -> str:
    """Render the passage vocabulary with meanings; unknown tokens are listed bare."""
    if not passage.words:
        return ""

    index = WordLookupIndex.build(passage.words, words)
    items = []
    for token in passage.words:
        word = index.resolve(token)
        meaning = html.escape(word.bangla_meaning) if word else ""
        items.append(
            f'<div class="vocab-list-item">'
            f'<span class="vocab-list-word">{html.escape(token)}</span>'
            f'<span class="vocab-list-meaning">{meaning}</span>'
            f'</div>'
        )
    return f'<div class="vocab-list">{"".join(items)}</div>'
