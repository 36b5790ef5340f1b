"""
ShobdoHub Viewer - per-view logic for reading passages and quizzes.

This module provides:
- Word lookup index for passage vocabulary
- Highlight engine splitting passage text into segments
- Passage HTML rendering with interactive vocabulary
- Vocabulary quiz generation and scoring
"""

from .lookup import WordLookupIndex

from .highlight import (
    segment,
    segments_text,
    strip_bangla_glosses,
    build_vocabulary_pattern,
)

from .passage import (
    DIFFICULTY_CLASSES,
    get_passage_css,
    render_word_tooltip,
    render_segments,
    render_passage_html,
    render_word_list,
)

from .quiz import (
    QuizType,
    QuizQuestion,
    generate_quiz,
    calculate_quiz_score,
)

__all__ = [
    # Lookup
    "WordLookupIndex",
    # Highlight
    "segment",
    "segments_text",
    "strip_bangla_glosses",
    "build_vocabulary_pattern",
    # Passage rendering
    "DIFFICULTY_CLASSES",
    "get_passage_css",
    "render_word_tooltip",
    "render_segments",
    "render_passage_html",
    "render_word_list",
    # Quiz
    "QuizType",
    "QuizQuestion",
    "generate_quiz",
    "calculate_quiz_score",
]
