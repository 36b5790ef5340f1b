"""
WordLibrary - query helpers over the parsed word collection.
"""

from typing import Optional

from shobdohub.schemas import Difficulty, PartOfSpeech, Word


class WordLibrary:
    """Read-only queries over a word list (list order is preserved)."""

    def __init__(self, words: list[Word]):
        self.words = list(words)

    def __len__(self) -> int:
        return len(self.words)

    def get_word_by_id(self, word_id: str) -> Optional[Word]:
        return next((w for w in self.words if w.id == word_id), None)

    def search_words(self, query: str) -> list[Word]:
        """Case-insensitive substring match on word, smart meaning and synonyms."""
        q = query.lower()
        return [
            w for w in self.words
            if q in w.word.lower()
            or q in w.smart_meaning.lower()
            or any(q in s.lower() for s in w.synonyms)
        ]

    def filter_by_letter(self, letter: str) -> list[Word]:
        return [w for w in self.words if w.first_letter == letter.upper()]

    def filter_by_part_of_speech(self, pos: PartOfSpeech | str) -> list[Word]:
        """Unknown values match nothing."""
        return [w for w in self.words if w.part_of_speech == pos]

    def filter_by_difficulty(self, difficulty: Difficulty | str) -> list[Word]:
        return [w for w in self.words if w.difficulty == difficulty]

    def letters(self) -> list[str]:
        """Sorted first letters that have at least one word."""
        return sorted({w.first_letter for w in self.words})
