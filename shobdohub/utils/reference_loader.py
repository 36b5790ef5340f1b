"""
Reference table loader for ShobdoHub.

Loads the static YAML tables shipped in the package data/ directory.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel


# Default data directory (inside the package)
REFERENCE_DIR = Path(__file__).parent.parent / "data"


class ChapterReference(BaseModel):
    title: str
    title_bengali: str = ""
    description: str


def load_reference(name: str, reference_dir: Path | None = None) -> dict[str, Any]:
    """
    Load a reference table by name.

    Args:
        name: Table name without .yaml extension (e.g., "grammar_chapters")
        reference_dir: Optional custom directory

    Returns:
        Parsed YAML mapping

    Raises:
        FileNotFoundError: If the table file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """
    dir_path = reference_dir or REFERENCE_DIR
    file_path = dir_path / f"{name}.yaml"

    if not file_path.exists():
        raise FileNotFoundError(f"Reference table not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@lru_cache(maxsize=1)
def get_chapter_references() -> dict[int, ChapterReference]:
    """Chapter number -> title/description, from grammar_chapters.yaml."""
    table = load_reference("grammar_chapters")
    return {
        int(number): ChapterReference(**entry)
        for number, entry in (table.get("chapters") or {}).items()
    }


def get_chapter_reference(chapter_id: int) -> Optional[ChapterReference]:
    return get_chapter_references().get(chapter_id)
