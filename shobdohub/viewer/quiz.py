"""
Vocabulary quiz - question generation and scoring.

Provides:
- Definition, synonym and fill-in-the-blank questions built from the word list
- Mixed quizzes drawing a random type per question
- Quiz scoring support
"""

import random
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from shobdohub.schemas import Difficulty, Word

MEANING_PREVIEW_LENGTH = 80
DISTRACTOR_COUNT = 3
BLANK = "_____"


class QuizType(str, Enum):
    DEFINITION = "definition"
    SYNONYM = "synonym"
    FILL_BLANK = "fillblank"
    MIXED = "mixed"


@dataclass
class QuizQuestion:
    """Multiple-choice question about one word."""
    type: QuizType
    word: Word
    question: str
    options: list[str]
    correct_answer: str
    blank_sentence: Optional[str] = None
    selected_answer: Optional[str] = field(default=None, compare=False)

    def is_correct(self, answer: str) -> bool:
        return answer == self.correct_answer


def _distractors(candidates: list[str], exclude: set[str], rng: random.Random) -> list[str]:
    unique = []
    for candidate in candidates:
        if candidate and candidate not in exclude and candidate not in unique:
            unique.append(candidate)
    rng.shuffle(unique)
    return unique[:DISTRACTOR_COUNT]


def _shuffled(options: list[str], rng: random.Random) -> list[str]:
    options = list(options)
    rng.shuffle(options)
    return options


def _definition_question(word: Word, words: list[Word], rng: random.Random) -> QuizQuestion:
    correct = word.bangla_meaning[:MEANING_PREVIEW_LENGTH]
    wrong = _distractors(
        [w.bangla_meaning[:MEANING_PREVIEW_LENGTH] for w in words if w.id != word.id],
        {correct},
        rng,
    )
    return QuizQuestion(
        type=QuizType.DEFINITION,
        word=word,
        question=f'"{word.word}" এর অর্থ কী?',
        options=_shuffled(wrong + [correct], rng),
        correct_answer=correct,
    )


def _synonym_question(word: Word, words: list[Word], rng: random.Random) -> QuizQuestion:
    correct = rng.choice(word.synonyms)
    wrong = _distractors(
        [s for w in words if w.id != word.id for s in w.synonyms],
        set(word.synonyms),
        rng,
    )
    return QuizQuestion(
        type=QuizType.SYNONYM,
        word=word,
        question=f'Which is a synonym of "{word.word}"?',
        options=_shuffled(wrong + [correct], rng),
        correct_answer=correct,
    )


def _fill_blank_question(word: Word, words: list[Word], rng: random.Random) -> QuizQuestion:
    example = rng.choice(word.examples)
    blanked = re.sub(re.escape(word.word), BLANK, example, flags=re.IGNORECASE)
    if blanked == example:
        blanked = f'The word "{word.word}" means: {BLANK}'
    wrong = _distractors(
        [w.word for w in words if w.id != word.id and w.part_of_speech == word.part_of_speech],
        {word.word},
        rng,
    )
    return QuizQuestion(
        type=QuizType.FILL_BLANK,
        word=word,
        question="Fill in the blank:",
        options=_shuffled(wrong + [word.word], rng),
        correct_answer=word.word,
        blank_sentence=blanked,
    )


def generate_quiz(
    words: list[Word],
    quiz_type: QuizType | str = QuizType.DEFINITION,
    count: int = 10,
    difficulty: Optional[Difficulty | str] = None,
    rng: Optional[random.Random] = None,
) -> list[QuizQuestion]:
    """
    Build a quiz from the word collection.

    Args:
        words: Word collection (also the distractor pool)
        quiz_type: definition, synonym, fillblank or mixed
        count: Maximum number of questions
        difficulty: Optional difficulty filter for the asked words
        rng: Random source (pass a seeded Random for reproducible quizzes)

    Returns:
        Up to `count` questions. Synonym and fill-blank questions fall back
        to definition questions for words lacking synonyms or examples.

    Raises:
        ValueError: Unknown quiz type or difficulty, or negative count
    """
    quiz_type = QuizType(quiz_type)
    if count < 0:
        raise ValueError(f"Question count must be non-negative, got {count}")
    rng = rng or random.Random()

    pool = list(words)
    if difficulty is not None:
        difficulty = Difficulty(difficulty)
        pool = [w for w in pool if w.difficulty == difficulty]
    rng.shuffle(pool)

    concrete_types = [QuizType.DEFINITION, QuizType.SYNONYM, QuizType.FILL_BLANK]
    questions = []
    for word in pool[:count]:
        question_type = rng.choice(concrete_types) if quiz_type == QuizType.MIXED else quiz_type

        if question_type == QuizType.FILL_BLANK and word.examples:
            questions.append(_fill_blank_question(word, words, rng))
        elif question_type == QuizType.SYNONYM and word.synonyms:
            questions.append(_synonym_question(word, words, rng))
        else:
            questions.append(_definition_question(word, words, rng))
    return questions


def calculate_quiz_score(questions: list[QuizQuestion], correct_count: int) -> dict:
    """
    Calculate quiz score.

    Args:
        questions: Total questions
        correct_count: Number answered correctly

    Returns:
        Dict with score info
    """
    total = len(questions)
    if total == 0:
        return {"score": 1.0, "percent": 100, "correct": 0, "total": 0}

    score = correct_count / total
    return {
        "score": round(score, 2),
        "percent": round(score * 100),
        "correct": correct_count,
        "total": total,
    }
