"""
ChapterNavigator - Grammar chapter sequencing and navigation.

Provides:
- Next/previous chapter navigation in ascending id order
- Chapter status from the learner's progress
- A recommended chapter to study next
"""

from enum import Enum
from typing import Optional, Sequence

from shobdohub.schemas import GrammarChapter

from .progress import ProgressTracker


class ChapterStatus(str, Enum):
    """Chapter status for UI display."""
    NOT_STARTED = "not_started"
    LESSON_READ = "lesson_read"     # Lesson done, practice pending
    COMPLETED = "completed"         # Lesson and practice done


class ChapterNavigator:
    """
    Navigate through grammar chapters.

    Chapters are ordered by id regardless of the order they were given in.
    Duplicate ids keep their input order and act as one navigation stop:
    get_chapter returns the first of them, and next/previous step over the
    whole run.

    A ProgressTracker is optional; without one every chapter reports
    NOT_STARTED.
    """

    def __init__(self, chapters: Sequence[GrammarChapter], progress: Optional[ProgressTracker] = None):
        self.chapters = sorted(chapters, key=lambda c: c.id)
        self.progress = progress
        self._first_index: dict[int, int] = {}
        self._last_index: dict[int, int] = {}
        for idx, chapter in enumerate(self.chapters):
            self._first_index.setdefault(chapter.id, idx)
            self._last_index[chapter.id] = idx

    @property
    def total_chapters(self) -> int:
        return len(self.chapters)

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def get_chapter(self, chapter_id: int) -> Optional[GrammarChapter]:
        idx = self._first_index.get(chapter_id)
        return self.chapters[idx] if idx is not None else None

    def get_first_chapter(self) -> Optional[GrammarChapter]:
        return self.chapters[0] if self.chapters else None

    def next_chapter(self, current_id: int) -> Optional[GrammarChapter]:
        """Chapter after current_id, or None at the end or for unknown ids."""
        idx = self._last_index.get(current_id)
        if idx is None or idx + 1 >= len(self.chapters):
            return None
        return self.chapters[idx + 1]

    def previous_chapter(self, current_id: int) -> Optional[GrammarChapter]:
        """Chapter before current_id, or None at the start or for unknown ids."""
        idx = self._first_index.get(current_id)
        if idx is None or idx <= 0:
            return None
        return self.get_chapter(self.chapters[idx - 1].id)

    def has_next(self, current_id: int) -> bool:
        return self.next_chapter(current_id) is not None

    def has_previous(self, current_id: int) -> bool:
        return self.previous_chapter(current_id) is not None

    # -------------------------------------------------------------------------
    # Progress
    # -------------------------------------------------------------------------

    def get_chapter_status(self, chapter_id: int) -> ChapterStatus:
        if self.progress is None:
            return ChapterStatus.NOT_STARTED

        chapter_progress = self.progress.get_chapter_progress(chapter_id)
        if chapter_progress is None or not chapter_progress.lesson_completed:
            return ChapterStatus.NOT_STARTED
        if chapter_progress.practice_completed:
            return ChapterStatus.COMPLETED
        return ChapterStatus.LESSON_READ

    def get_recommended_chapter_id(self) -> Optional[int]:
        """
        Get the chapter the learner should open next.

        Priority:
        1. First chapter whose lesson is read but practice is pending
        2. First chapter not started
        3. First chapter
        """
        statuses = [(chapter.id, self.get_chapter_status(chapter.id)) for chapter in self.chapters]

        for wanted in (ChapterStatus.LESSON_READ, ChapterStatus.NOT_STARTED):
            for chapter_id, status in statuses:
                if status == wanted:
                    return chapter_id

        return self.chapters[0].id if self.chapters else None
