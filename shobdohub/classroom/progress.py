"""
ProgressTracker - Track learner progress in ~/.shobdohub/progress.db.

Stores learner state separately from the content files:
- Word views, learned words and favorites
- Quiz attempts and the daily streak
- Grammar chapter lesson/practice completion
"""

import sqlite3
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Callable, Optional

from shobdohub.config import DEFAULT_PROGRESS_DB
from shobdohub.schemas import (
    ChapterProgress,
    DailyStreak,
    ProgressStats,
    QuizAttempt,
    TotalProgress,
    WordProgress,
    WordStatus,
)


def advance_streak(streak: Optional[DailyStreak], today: date) -> DailyStreak:
    """
    Apply one day of activity to a streak.

    Same day: unchanged. Day after the last activity: +1. Otherwise the
    streak restarts at 1. The longest streak never decreases.
    """
    if streak is None or streak.last_activity_date is None:
        return DailyStreak(current_streak=1, longest_streak=1, last_activity_date=today)

    if streak.last_activity_date == today:
        return streak

    if streak.last_activity_date == today - timedelta(days=1):
        current = streak.current_streak + 1
    else:
        current = 1

    return DailyStreak(
        current_streak=current,
        longest_streak=max(current, streak.longest_streak),
        last_activity_date=today,
    )


def _percent(part: float, whole: float) -> int:
    return int(part / whole * 100 + 0.5) if whole > 0 else 0


class ProgressTracker:
    """
    Track learner progress in a SQLite database.

    Each method opens its own connection, so a tracker can be shared freely
    within a process.
    """

    def __init__(
        self,
        db_path: Optional[Path] = None,
        student_id: str = "default",
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize progress tracker.

        Args:
            db_path: Path to progress.db (default: ~/.shobdohub/progress.db)
            student_id: Learner identifier for multi-user support
            clock: Source of the current time
        """
        self.db_path = Path(db_path or DEFAULT_PROGRESS_DB)
        self.student_id = student_id
        self.clock = clock
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS word_progress (
                    student_id TEXT NOT NULL,
                    word_id TEXT NOT NULL,
                    word TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'viewed',
                    view_count INTEGER NOT NULL DEFAULT 1,
                    first_viewed_at TEXT NOT NULL,
                    last_viewed_at TEXT NOT NULL,
                    PRIMARY KEY (student_id, word_id)
                );

                CREATE TABLE IF NOT EXISTS quiz_attempts (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    student_id TEXT NOT NULL,
                    quiz_type TEXT NOT NULL,
                    total_questions INTEGER NOT NULL,
                    correct_answers INTEGER NOT NULL,
                    score_percentage REAL NOT NULL,
                    completed_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS daily_streaks (
                    student_id TEXT PRIMARY KEY,
                    current_streak INTEGER NOT NULL DEFAULT 0,
                    longest_streak INTEGER NOT NULL DEFAULT 0,
                    last_activity_date TEXT
                );

                CREATE TABLE IF NOT EXISTS chapter_progress (
                    student_id TEXT NOT NULL,
                    chapter_id INTEGER NOT NULL,
                    lesson_completed INTEGER NOT NULL DEFAULT 0,
                    practice_score REAL,
                    practice_completed INTEGER NOT NULL DEFAULT 0,
                    last_attempt TEXT,
                    PRIMARY KEY (student_id, chapter_id)
                );

                CREATE INDEX IF NOT EXISTS idx_quiz_attempts_student
                ON quiz_attempts(student_id);
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    # -------------------------------------------------------------------------
    # Word Progress
    # -------------------------------------------------------------------------

    @staticmethod
    def _word_progress_from_row(row: sqlite3.Row) -> WordProgress:
        return WordProgress(
            word_id=row["word_id"],
            word=row["word"],
            status=WordStatus(row["status"]),
            view_count=row["view_count"],
            first_viewed_at=datetime.fromisoformat(row["first_viewed_at"]),
            last_viewed_at=datetime.fromisoformat(row["last_viewed_at"]),
        )

    def track_word_view(self, word_id: str, word: str):
        """Record a view; the first view creates the record and counts toward the streak."""
        conn = self._get_connection()
        try:
            now = self.clock().isoformat()
            conn.execute(
                """INSERT INTO word_progress
                       (student_id, word_id, word, status, view_count, first_viewed_at, last_viewed_at)
                   VALUES (?, ?, ?, ?, 1, ?, ?)
                   ON CONFLICT(student_id, word_id) DO UPDATE SET
                     view_count = view_count + 1,
                     last_viewed_at = ?""",
                (self.student_id, word_id, word, WordStatus.VIEWED.value, now, now, now)
            )
            conn.commit()
        finally:
            conn.close()
        self.update_streak()

    def _set_word_status(self, word_id: str, word: str, status: WordStatus):
        conn = self._get_connection()
        try:
            now = self.clock().isoformat()
            conn.execute(
                """INSERT INTO word_progress
                       (student_id, word_id, word, status, view_count, first_viewed_at, last_viewed_at)
                   VALUES (?, ?, ?, ?, 1, ?, ?)
                   ON CONFLICT(student_id, word_id) DO UPDATE SET
                     status = ?,
                     last_viewed_at = ?""",
                (self.student_id, word_id, word, status.value, now, now, status.value, now)
            )
            conn.commit()
        finally:
            conn.close()

    def mark_word_as_learned(self, word_id: str, word: str):
        """Mark a word as learned."""
        self._set_word_status(word_id, word, WordStatus.LEARNED)

    def toggle_favorite(self, word_id: str, word: str) -> bool:
        """
        Toggle favorite status.

        Returns:
            True if the word is now a favorite
        """
        current = self.get_word_progress(word_id)
        if current is not None and current.status == WordStatus.FAVORITE:
            self._set_word_status(word_id, word, WordStatus.VIEWED)
            return False
        self._set_word_status(word_id, word, WordStatus.FAVORITE)
        return True

    def get_word_progress(self, word_id: str) -> Optional[WordProgress]:
        """Get progress for a specific word."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT word_id, word, status, view_count, first_viewed_at, last_viewed_at
                   FROM word_progress
                   WHERE student_id = ? AND word_id = ?""",
                (self.student_id, word_id)
            )
            row = cursor.fetchone()
            return self._word_progress_from_row(row) if row else None
        finally:
            conn.close()

    def get_all_word_progress(self) -> list[WordProgress]:
        """Get progress for all words, most recently viewed first."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT word_id, word, status, view_count, first_viewed_at, last_viewed_at
                   FROM word_progress
                   WHERE student_id = ?
                   ORDER BY last_viewed_at DESC""",
                (self.student_id,)
            )
            return [self._word_progress_from_row(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def is_word_learned(self, word_id: str) -> bool:
        progress = self.get_word_progress(word_id)
        return progress is not None and progress.status == WordStatus.LEARNED

    def is_word_favorite(self, word_id: str) -> bool:
        progress = self.get_word_progress(word_id)
        return progress is not None and progress.status == WordStatus.FAVORITE

    # -------------------------------------------------------------------------
    # Quiz Attempts
    # -------------------------------------------------------------------------

    def save_quiz_attempt(self, quiz_type: str, total_questions: int, correct_answers: int) -> QuizAttempt:
        """Record a finished quiz and update the daily streak."""
        if correct_answers > total_questions:
            raise ValueError("correct_answers cannot exceed total_questions")

        attempt = QuizAttempt(
            quiz_type=quiz_type,
            total_questions=total_questions,
            correct_answers=correct_answers,
            score_percentage=round(correct_answers / total_questions * 100, 2) if total_questions else 0.0,
            completed_at=self.clock(),
        )
        conn = self._get_connection()
        try:
            conn.execute(
                """INSERT INTO quiz_attempts
                       (student_id, quiz_type, total_questions, correct_answers, score_percentage, completed_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (self.student_id, attempt.quiz_type, attempt.total_questions,
                 attempt.correct_answers, attempt.score_percentage, attempt.completed_at.isoformat())
            )
            conn.commit()
        finally:
            conn.close()
        self.update_streak()
        return attempt

    def get_quiz_attempts(self) -> list[QuizAttempt]:
        """Get all quiz attempts, newest first."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT quiz_type, total_questions, correct_answers, score_percentage, completed_at
                   FROM quiz_attempts
                   WHERE student_id = ?
                   ORDER BY completed_at DESC, id DESC""",
                (self.student_id,)
            )
            return [
                QuizAttempt(
                    quiz_type=row["quiz_type"],
                    total_questions=row["total_questions"],
                    correct_answers=row["correct_answers"],
                    score_percentage=row["score_percentage"],
                    completed_at=datetime.fromisoformat(row["completed_at"]),
                )
                for row in cursor.fetchall()
            ]
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Daily Streak
    # -------------------------------------------------------------------------

    def get_streak(self) -> Optional[DailyStreak]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT current_streak, longest_streak, last_activity_date
                   FROM daily_streaks WHERE student_id = ?""",
                (self.student_id,)
            )
            row = cursor.fetchone()
            if not row:
                return None
            return DailyStreak(
                current_streak=row["current_streak"],
                longest_streak=row["longest_streak"],
                last_activity_date=date.fromisoformat(row["last_activity_date"]) if row["last_activity_date"] else None,
            )
        finally:
            conn.close()

    def update_streak(self) -> DailyStreak:
        """Register activity for today and return the new streak."""
        streak = advance_streak(self.get_streak(), self.clock().date())
        conn = self._get_connection()
        try:
            conn.execute(
                """INSERT INTO daily_streaks (student_id, current_streak, longest_streak, last_activity_date)
                   VALUES (?, ?, ?, ?)
                   ON CONFLICT(student_id) DO UPDATE SET
                     current_streak = ?,
                     longest_streak = ?,
                     last_activity_date = ?""",
                (self.student_id, streak.current_streak, streak.longest_streak,
                 streak.last_activity_date.isoformat(),
                 streak.current_streak, streak.longest_streak,
                 streak.last_activity_date.isoformat())
            )
            conn.commit()
        finally:
            conn.close()
        return streak

    # -------------------------------------------------------------------------
    # Grammar Chapters
    # -------------------------------------------------------------------------

    def get_chapter_progress(self, chapter_id: int) -> Optional[ChapterProgress]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT chapter_id, lesson_completed, practice_score, practice_completed, last_attempt
                   FROM chapter_progress
                   WHERE student_id = ? AND chapter_id = ?""",
                (self.student_id, chapter_id)
            )
            row = cursor.fetchone()
            return self._chapter_progress_from_row(row) if row else None
        finally:
            conn.close()

    def get_all_chapter_progress(self) -> list[ChapterProgress]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT chapter_id, lesson_completed, practice_score, practice_completed, last_attempt
                   FROM chapter_progress
                   WHERE student_id = ?
                   ORDER BY chapter_id""",
                (self.student_id,)
            )
            return [self._chapter_progress_from_row(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    @staticmethod
    def _chapter_progress_from_row(row: sqlite3.Row) -> ChapterProgress:
        return ChapterProgress(
            chapter_id=row["chapter_id"],
            lesson_completed=bool(row["lesson_completed"]),
            practice_score=row["practice_score"],
            practice_completed=bool(row["practice_completed"]),
            last_attempt=datetime.fromisoformat(row["last_attempt"]) if row["last_attempt"] else None,
        )

    def mark_lesson_complete(self, chapter_id: int):
        """Mark a chapter's lesson as read."""
        conn = self._get_connection()
        try:
            conn.execute(
                """INSERT INTO chapter_progress (student_id, chapter_id, lesson_completed)
                   VALUES (?, ?, 1)
                   ON CONFLICT(student_id, chapter_id) DO UPDATE SET
                     lesson_completed = 1""",
                (self.student_id, chapter_id)
            )
            conn.commit()
        finally:
            conn.close()

    def save_practice_score(self, chapter_id: int, score: float):
        """Record a practice score; the best score is kept."""
        if not 0 <= score <= 100:
            raise ValueError(f"Practice score must be between 0 and 100, got {score}")

        conn = self._get_connection()
        try:
            now = self.clock().isoformat()
            conn.execute(
                """INSERT INTO chapter_progress
                       (student_id, chapter_id, practice_score, practice_completed, last_attempt)
                   VALUES (?, ?, ?, 1, ?)
                   ON CONFLICT(student_id, chapter_id) DO UPDATE SET
                     practice_score = MAX(COALESCE(practice_score, 0), ?),
                     practice_completed = 1,
                     last_attempt = ?""",
                (self.student_id, chapter_id, score, now, score, now)
            )
            conn.commit()
        finally:
            conn.close()

    def get_total_progress(self, total_chapters: int) -> TotalProgress:
        """Lesson and practice each count once per chapter."""
        total = total_chapters * 2
        completed = sum(
            int(p.lesson_completed) + int(p.practice_completed)
            for p in self.get_all_chapter_progress()
        )
        return TotalProgress(completed=completed, total=total, percentage=_percent(completed, total))

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def get_stats(self) -> ProgressStats:
        """Aggregate word, quiz and streak statistics."""
        words = self.get_all_word_progress()
        quizzes = self.get_quiz_attempts()
        streak = self.get_streak()
        today = self.clock().date()

        average = sum(q.score_percentage for q in quizzes) / len(quizzes) if quizzes else 0.0

        return ProgressStats(
            total_words_viewed=len(words),
            total_words_learned=sum(1 for w in words if w.status == WordStatus.LEARNED),
            total_favorites=sum(1 for w in words if w.status == WordStatus.FAVORITE),
            today_words=sum(1 for w in words if w.last_viewed_at.date() == today),
            quizzes_taken=len(quizzes),
            average_score=int(average + 0.5),
            current_streak=streak.current_streak if streak else 0,
            longest_streak=streak.longest_streak if streak else 0,
        )

    def reset_all_progress(self):
        """Reset all progress for the current learner."""
        conn = self._get_connection()
        try:
            for table in ("word_progress", "quiz_attempts", "daily_streaks", "chapter_progress"):
                conn.execute(f"DELETE FROM {table} WHERE student_id = ?", (self.student_id,))
            conn.commit()
        finally:
            conn.close()
