"""
Progress tracking schemas for ShobdoHub.

Defines Pydantic models for learner progress including:
- Word view / learned / favorite status
- Quiz attempts and daily streaks
- Grammar chapter completion
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class WordStatus(str, Enum):
    VIEWED = "viewed"
    LEARNED = "learned"
    FAVORITE = "favorite"


class WordProgress(BaseModel):
    word_id: str
    word: str
    status: WordStatus = WordStatus.VIEWED
    view_count: int = Field(default=1, ge=0)
    first_viewed_at: datetime
    last_viewed_at: datetime


class QuizAttempt(BaseModel):
    quiz_type: str
    total_questions: int = Field(..., ge=0)
    correct_answers: int = Field(..., ge=0)
    score_percentage: float = Field(..., ge=0.0, le=100.0)
    completed_at: datetime


class DailyStreak(BaseModel):
    current_streak: int = 0
    longest_streak: int = 0
    last_activity_date: Optional[date] = None


class ProgressStats(BaseModel):
    total_words_viewed: int = 0
    total_words_learned: int = 0
    total_favorites: int = 0
    today_words: int = 0
    quizzes_taken: int = 0
    average_score: int = 0
    current_streak: int = 0
    longest_streak: int = 0


class ChapterProgress(BaseModel):
    chapter_id: int
    lesson_completed: bool = False
    practice_score: Optional[float] = None
    practice_completed: bool = False
    last_attempt: Optional[datetime] = None


class TotalProgress(BaseModel):
    completed: int
    total: int
    percentage: int
