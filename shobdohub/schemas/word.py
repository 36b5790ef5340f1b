"""
Vocabulary schemas for ShobdoHub.

Defines the Word record produced by the word parsers along with the
deterministic helpers that derive its identity and difficulty.
"""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_NON_LETTERS = re.compile(r'[^a-z]')


class ContentModel(BaseModel):
    """Base for immutable content records (camelCase on the wire)."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class PartOfSpeech(str, Enum):
    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    ADVERB = "adverb"
    PREPOSITION = "preposition"
    CONJUNCTION = "conjunction"
    INTERJECTION = "interjection"


POS_ABBREVIATIONS = {
    'v': PartOfSpeech.VERB,
    'n': PartOfSpeech.NOUN,
    'adj': PartOfSpeech.ADJECTIVE,
    'adv': PartOfSpeech.ADVERB,
    'prep': PartOfSpeech.PREPOSITION,
    'conj': PartOfSpeech.CONJUNCTION,
    'interj': PartOfSpeech.INTERJECTION,
}


def normalize_token(raw: str) -> str:
    """Lowercase and strip everything that is not an ASCII letter."""
    return _NON_LETTERS.sub('', raw.lower())


def difficulty_for_term(term: str) -> Difficulty:
    """
    Length-based difficulty: <=5 characters easy, 6-8 medium, >8 hard.

    Length is measured on the display term, punctuation and spaces included.
    """
    length = len(term)
    if length <= 5:
        return Difficulty.EASY
    if length <= 8:
        return Difficulty.MEDIUM
    return Difficulty.HARD


class Word(ContentModel):
    """A single vocabulary entry."""
    id: str                  # normalized lowercase-letters-only key
    word: str                # display form
    pronunciation: str = ""
    part_of_speech: PartOfSpeech = PartOfSpeech.NOUN
    smart_meaning: str = ""
    bangla_meaning: str = ""
    detailed_bangla_meaning: str = ""
    synonyms: list[str] = []
    antonyms: list[str] = []
    examples: list[str] = []
    difficulty: Difficulty
    first_letter: str = Field(..., min_length=1, max_length=1)

    @classmethod
    def from_term(cls, term: str, **fields) -> "Word":
        """
        Build a Word whose id, difficulty and first letter derive from term.

        Explicit keyword fields override the derived values.
        """
        values = {
            "id": normalize_token(term),
            "word": term,
            "difficulty": difficulty_for_term(term),
            "first_letter": term[:1].upper() or "A",
        }
        values.update(fields)
        return cls(**values)
