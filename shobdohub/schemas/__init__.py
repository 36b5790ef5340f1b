"""
ShobdoHub Schemas - Pydantic models for the vocabulary learning platform.

This module exports all schema classes for:
- Word: vocabulary records, difficulty and part-of-speech enums
- Passage: reading passages and highlight segments
- Grammar: chapter archetypes, sections, bilingual pairs
- Progress: learner progress tracking
"""

# Word schemas
from .word import (
    ContentModel,
    Difficulty,
    PartOfSpeech,
    POS_ABBREVIATIONS,
    Word,
    normalize_token,
    difficulty_for_term,
)

# Passage schemas
from .passage import (
    Passage,
    TextSegment,
    WordSegment,
    Segment,
)

# Grammar schemas
from .grammar import (
    DEFAULT_CHAPTER_DESCRIPTION,
    SectionType,
    Section,
    BilingualPair,
    ParsedChapter,
    GrammarExample,
    ContentBlock,
    RuleEntry,
    ShortcutTip,
    PracticeExercise,
    StructuredChapter,
    GrammarChapter,
    GrammarBook,
)

# Progress schemas
from .progress import (
    WordStatus,
    WordProgress,
    QuizAttempt,
    DailyStreak,
    ProgressStats,
    ChapterProgress,
    TotalProgress,
)

__all__ = [
    # Word
    'ContentModel',
    'Difficulty',
    'PartOfSpeech',
    'POS_ABBREVIATIONS',
    'Word',
    'normalize_token',
    'difficulty_for_term',
    # Passage
    'Passage',
    'TextSegment',
    'WordSegment',
    'Segment',
    # Grammar
    'DEFAULT_CHAPTER_DESCRIPTION',
    'SectionType',
    'Section',
    'BilingualPair',
    'ParsedChapter',
    'GrammarExample',
    'ContentBlock',
    'RuleEntry',
    'ShortcutTip',
    'PracticeExercise',
    'StructuredChapter',
    'GrammarChapter',
    'GrammarBook',
    # Progress
    'WordStatus',
    'WordProgress',
    'QuizAttempt',
    'DailyStreak',
    'ProgressStats',
    'ChapterProgress',
    'TotalProgress',
]
