"""
ShobdoHub Classroom - Runtime components for loading content and tracking study.

This module provides:
- ContentLoader: Load words, passages and grammar from a data directory
- WordLibrary: Search and filter the vocabulary list
- StudyCollections: Flashcard and memorized word sets
- ProgressTracker: Track learner progress
- ChapterNavigator: Grammar chapter sequencing
"""

from .loader import (
    ContentLoader,
    LOAD_ERRORS,
)

from .library import WordLibrary

from .word_sets import (
    FLASHCARDS_KEY,
    MEMORIZED_KEY,
    StorageBackend,
    MemoryStorage,
    JsonFileStorage,
    SqliteStorage,
    WordSetRepository,
    StudyCollections,
)

from .progress import (
    ProgressTracker,
    advance_streak,
)

from .navigator import (
    ChapterNavigator,
    ChapterStatus,
)

__all__ = [
    # Loader
    "ContentLoader",
    "LOAD_ERRORS",
    # Library
    "WordLibrary",
    # Word sets
    "FLASHCARDS_KEY",
    "MEMORIZED_KEY",
    "StorageBackend",
    "MemoryStorage",
    "JsonFileStorage",
    "SqliteStorage",
    "WordSetRepository",
    "StudyCollections",
    # Progress
    "ProgressTracker",
    "advance_streak",
    # Navigator
    "ChapterNavigator",
    "ChapterStatus",
]
