"""
Word sets - flashcard and memorized sets behind a storage interface.

Membership logic lives in WordSetRepository; persistence is delegated to an
injected StorageBackend so the same logic runs over memory, a JSON file or
SQLite.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Iterator, Optional, Protocol

logger = logging.getLogger(__name__)

FLASHCARDS_KEY = "flashcards"
MEMORIZED_KEY = "memorized"


class StorageBackend(Protocol):
    """Persists ordered lists of word ids under string keys."""

    def load(self, key: str) -> list[str]:
        ...

    def save(self, key: str, items: list[str]) -> None:
        ...


class MemoryStorage:
    """Process-local storage (nothing survives the session)."""

    def __init__(self):
        self._data: dict[str, list[str]] = {}

    def load(self, key: str) -> list[str]:
        return list(self._data.get(key, []))

    def save(self, key: str, items: list[str]) -> None:
        self._data[key] = list(items)


class JsonFileStorage:
    """All keys in one JSON object file, rewritten on every save."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict[str, list[str]]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Collection file must hold a JSON object: {self.path}")
        return data

    def load(self, key: str) -> list[str]:
        return [str(item) for item in self._read().get(key, [])]

    def save(self, key: str, items: list[str]) -> None:
        data = self._read()
        data[key] = list(items)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)


class SqliteStorage:
    """Collections stored as rows in a SQLite table."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        self._ensure_database()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS word_collections (
                    collection TEXT NOT NULL,
                    word_id TEXT NOT NULL,
                    position INTEGER NOT NULL,
                    PRIMARY KEY (collection, word_id)
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def load(self, key: str) -> list[str]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT word_id FROM word_collections
                   WHERE collection = ?
                   ORDER BY position""",
                (key,)
            )
            return [row["word_id"] for row in cursor.fetchall()]
        finally:
            conn.close()

    def save(self, key: str, items: list[str]) -> None:
        conn = self._get_connection()
        try:
            conn.execute("DELETE FROM word_collections WHERE collection = ?", (key,))
            conn.executemany(
                "INSERT INTO word_collections (collection, word_id, position) VALUES (?, ?, ?)",
                [(key, word_id, position) for position, word_id in enumerate(items)]
            )
            conn.commit()
        finally:
            conn.close()


class WordSetRepository:
    """
    An insertion-ordered set of word ids persisted under one storage key.

    add() and remove() are idempotent and write through to storage.
    """

    def __init__(self, storage: StorageBackend, key: str):
        self.storage = storage
        self.key = key
        self._items: list[str] = list(dict.fromkeys(storage.load(key)))

    def _persist(self):
        self.storage.save(self.key, self._items)

    def get(self, word_id: str) -> Optional[str]:
        """The stored id if present, else None."""
        return word_id if word_id in self._items else None

    def add(self, word_id: str) -> bool:
        """Add a word id. Returns False if it was already present."""
        if word_id in self._items:
            return False
        self._items.append(word_id)
        self._persist()
        return True

    def remove(self, word_id: str) -> bool:
        """Remove a word id. Returns False if it was not present."""
        if word_id not in self._items:
            return False
        self._items.remove(word_id)
        self._persist()
        return True

    def list(self) -> list[str]:
        return list(self._items)

    def clear(self):
        self._items = []
        self._persist()

    def __contains__(self, word_id: object) -> bool:
        return word_id in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)


class StudyCollections:
    """The learner's flashcard deck and memorized words."""

    def __init__(self, storage: StorageBackend):
        self.flashcards = WordSetRepository(storage, FLASHCARDS_KEY)
        self.memorized = WordSetRepository(storage, MEMORIZED_KEY)

    def add_to_flashcards(self, word_id: str) -> bool:
        return self.flashcards.add(word_id)

    def remove_from_flashcards(self, word_id: str) -> bool:
        return self.flashcards.remove(word_id)

    def mark_as_memorized(self, word_id: str):
        """Move a word out of the flashcard deck into the memorized set."""
        self.memorized.add(word_id)
        self.flashcards.remove(word_id)
        logger.debug(f"Marked {word_id} as memorized")
