"""
Progress tracker tests.

A fake clock drives every timestamp so streak and "today" logic are
deterministic.
"""

from datetime import date, datetime, timedelta

import pytest

from shobdohub.classroom.progress import ProgressTracker, advance_streak
from shobdohub.schemas import DailyStreak, WordStatus


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: int = 0, hours: int = 0):
        self.now += timedelta(days=days, hours=hours)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 1, 9, 0))


@pytest.fixture
def tracker(tmp_path, clock):
    return ProgressTracker(db_path=tmp_path / "progress.db", clock=clock)


class TestAdvanceStreak:
    """Test the pure streak transition."""

    def test_first_activity(self):
        streak = advance_streak(None, date(2024, 5, 1))
        assert (streak.current_streak, streak.longest_streak) == (1, 1)

    def test_same_day_unchanged(self):
        streak = DailyStreak(current_streak=3, longest_streak=5, last_activity_date=date(2024, 5, 1))
        assert advance_streak(streak, date(2024, 5, 1)) == streak

    def test_consecutive_day(self):
        streak = DailyStreak(current_streak=5, longest_streak=5, last_activity_date=date(2024, 5, 1))
        advanced = advance_streak(streak, date(2024, 5, 2))
        assert (advanced.current_streak, advanced.longest_streak) == (6, 6)

    def test_gap_resets(self):
        streak = DailyStreak(current_streak=4, longest_streak=7, last_activity_date=date(2024, 5, 1))
        advanced = advance_streak(streak, date(2024, 5, 3))
        assert (advanced.current_streak, advanced.longest_streak) == (1, 7)
        assert advanced.last_activity_date == date(2024, 5, 3)


class TestWordProgress:
    """Test word view/learned/favorite tracking."""

    def test_track_views(self, tracker, clock):
        tracker.track_word_view("abate", "ABATE")
        clock.advance(hours=1)
        tracker.track_word_view("abate", "ABATE")

        progress = tracker.get_word_progress("abate")
        assert progress.view_count == 2
        assert progress.status == WordStatus.VIEWED
        assert progress.last_viewed_at - progress.first_viewed_at == timedelta(hours=1)

    def test_unknown_word(self, tracker):
        assert tracker.get_word_progress("missing") is None
        assert not tracker.is_word_learned("missing")

    def test_mark_learned(self, tracker):
        tracker.mark_word_as_learned("abate", "ABATE")
        assert tracker.is_word_learned("abate")
        assert not tracker.is_word_favorite("abate")

    def test_toggle_favorite(self, tracker):
        assert tracker.toggle_favorite("zeal", "ZEAL") is True
        assert tracker.is_word_favorite("zeal")
        assert tracker.toggle_favorite("zeal", "ZEAL") is False
        assert tracker.get_word_progress("zeal").status == WordStatus.VIEWED

    def test_all_word_progress_most_recent_first(self, tracker, clock):
        tracker.track_word_view("abate", "ABATE")
        clock.advance(hours=1)
        tracker.track_word_view("zeal", "ZEAL")
        assert [p.word_id for p in tracker.get_all_word_progress()] == ["zeal", "abate"]


class TestQuizAndStreak:
    """Test quiz attempts and the daily streak."""

    def test_save_quiz_attempt(self, tracker):
        attempt = tracker.save_quiz_attempt("definition", 10, 7)
        assert attempt.score_percentage == 70.0
        assert len(tracker.get_quiz_attempts()) == 1

    def test_invalid_quiz_attempt(self, tracker):
        with pytest.raises(ValueError):
            tracker.save_quiz_attempt("definition", 5, 6)

    def test_update_streak(self, tracker, clock):
        assert tracker.get_streak() is None
        assert tracker.update_streak().current_streak == 1
        assert tracker.update_streak().current_streak == 1

        clock.advance(days=1)
        assert tracker.update_streak().current_streak == 2

        clock.advance(days=2)
        streak = tracker.update_streak()
        assert (streak.current_streak, streak.longest_streak) == (1, 2)
        assert tracker.get_streak() == streak

    def test_activity_advances_streak(self, tracker, clock):
        tracker.track_word_view("abate", "ABATE")
        assert tracker.get_streak().current_streak == 1

        clock.advance(days=1)
        tracker.save_quiz_attempt("definition", 4, 4)
        streak = tracker.get_streak()
        assert (streak.current_streak, streak.longest_streak) == (2, 2)
        assert streak.last_activity_date == date(2024, 5, 2)

    def test_stats(self, tracker, clock):
        tracker.track_word_view("abate", "ABATE")
        tracker.mark_word_as_learned("zeal", "ZEAL")
        tracker.toggle_favorite("candor", "CANDOR")
        tracker.save_quiz_attempt("definition", 4, 3)
        tracker.save_quiz_attempt("synonym", 4, 2)

        clock.advance(days=1)
        tracker.track_word_view("abate", "ABATE")

        stats = tracker.get_stats()
        assert stats.total_words_viewed == 3
        assert stats.total_words_learned == 1
        assert stats.total_favorites == 1
        assert stats.today_words == 1
        assert stats.quizzes_taken == 2
        assert stats.average_score == 63
        assert stats.current_streak == 2

    def test_empty_stats(self, tracker):
        stats = tracker.get_stats()
        assert stats.total_words_viewed == 0
        assert stats.average_score == 0
        assert stats.longest_streak == 0


class TestChapterProgress:
    """Test grammar chapter completion."""

    def test_practice_keeps_best_score(self, tracker):
        tracker.save_practice_score(1, 60)
        tracker.save_practice_score(1, 40)
        progress = tracker.get_chapter_progress(1)
        assert progress.practice_score == 60
        assert progress.practice_completed
        assert not progress.lesson_completed
        assert progress.last_attempt is not None

    def test_practice_after_lesson(self, tracker):
        tracker.mark_lesson_complete(2)
        assert tracker.get_chapter_progress(2).practice_score is None
        tracker.save_practice_score(2, 40)
        assert tracker.get_chapter_progress(2).practice_score == 40

    def test_invalid_score(self, tracker):
        with pytest.raises(ValueError):
            tracker.save_practice_score(1, 101)

    def test_total_progress(self, tracker):
        tracker.mark_lesson_complete(1)
        tracker.save_practice_score(1, 90)
        tracker.mark_lesson_complete(2)

        total = tracker.get_total_progress(4)
        assert (total.completed, total.total, total.percentage) == (3, 8, 38)

    def test_total_progress_no_chapters(self, tracker):
        assert tracker.get_total_progress(0).percentage == 0


class TestLearnerIsolation:
    """Test multi-learner separation and reset."""

    def test_students_do_not_share_progress(self, tmp_path, clock):
        db = tmp_path / "progress.db"
        first = ProgressTracker(db_path=db, student_id="rahim", clock=clock)
        second = ProgressTracker(db_path=db, student_id="karim", clock=clock)

        first.mark_word_as_learned("abate", "ABATE")
        assert not second.is_word_learned("abate")

    def test_reset(self, tracker):
        tracker.mark_word_as_learned("abate", "ABATE")
        tracker.save_quiz_attempt("definition", 2, 2)
        tracker.mark_lesson_complete(1)
        tracker.update_streak()

        tracker.reset_all_progress()
        assert tracker.get_all_word_progress() == []
        assert tracker.get_quiz_attempts() == []
        assert tracker.get_streak() is None
        assert tracker.get_all_chapter_progress() == []
