"""
Word lookup index - maps raw passage vocabulary tokens to Word records.

Tokens are matched case- and punctuation-insensitively. Each matched token
is registered under its uppercase, lowercase and normalized forms so any
casing resolves in one dict lookup. A token with no match is simply absent.
"""

import logging
from typing import Iterable, Iterator, Optional

from shobdohub.schemas import Word, normalize_token

logger = logging.getLogger(__name__)


def _find_word(token: str, words: list[Word]) -> Optional[Word]:
    """First word whose id equals the normalized token or whose display form equals the token."""
    normalized = normalize_token(token)
    lowered = token.lower()
    for word in words:
        if (normalized and word.id == normalized) or word.word.lower() == lowered:
            return word
    return None


class WordLookupIndex:
    """
    Normalized token -> Word mapping for one passage.

    Only the first matching Word is kept per token.
    """

    def __init__(self, mapping: Optional[dict[str, Word]] = None):
        self._map: dict[str, Word] = dict(mapping or {})

    @classmethod
    def build(cls, passage_words: Iterable[str], words: Iterable[Word]) -> "WordLookupIndex":
        """
        Build the index for a passage vocabulary list.

        Args:
            passage_words: Raw vocabulary tokens from the passage
            words: The parsed word collection

        Returns:
            WordLookupIndex covering every token that matched a Word
        """
        collection = list(words)
        mapping: dict[str, Word] = {}
        unresolved = []

        for token in passage_words:
            token = token.strip()
            if not token:
                continue
            word = _find_word(token, collection)
            if word is None:
                unresolved.append(token)
                continue
            for key in (token.upper(), token.lower(), normalize_token(token)):
                if key:
                    mapping.setdefault(key, word)

        if unresolved:
            logger.debug(f"Unresolved vocabulary tokens: {', '.join(unresolved)}")
        return cls(mapping)

    def resolve(self, token: str) -> Optional[Word]:
        """Resolve a token trying exact-upper, exact-lower, then normalized."""
        for key in (token.upper(), token.lower(), normalize_token(token)):
            word = self._map.get(key)
            if word is not None:
                return word
        return None

    def get(self, key: str, default: Optional[Word] = None) -> Optional[Word]:
        """Raw dict lookup without key derivation."""
        return self._map.get(key, default)

    def as_dict(self) -> dict[str, Word]:
        return dict(self._map)

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and self.resolve(token) is not None

    def __getitem__(self, key: str) -> Word:
        return self._map[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)
