"""
Runtime configuration for ShobdoHub.

Settings come from the environment, optionally seeded from a .env file at
the project root.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

PROJECT_ROOT = Path(__file__).parent.parent

DEFAULT_DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_PROGRESS_DIR = Path.home() / ".shobdohub"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"

# File names inside the data directory
WORDS_FILE = "words.txt"
WORDS_DETAILED_FILE = "words_detailed.txt"
PASSAGES_FILE = "passages.txt"
GRAMMAR_TEXT_FILE = "grammar.txt"
GRAMMAR_JSON_FILE = "essential_grammar.json"


class Settings(BaseModel):
    data_dir: Path = DEFAULT_DATA_DIR
    progress_db: Path = DEFAULT_PROGRESS_DB
    log_level: str = "INFO"

    @property
    def log_level_value(self) -> int:
        """Numeric logging level, falling back to INFO for unknown names."""
        return getattr(logging, self.log_level.upper(), logging.INFO)


def load_settings(env_file: Path | None = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        env_file: Optional .env path (default: <project root>/.env)

    Returns:
        Settings with SHOBDOHUB_* overrides applied
    """
    load_dotenv(env_file or PROJECT_ROOT / ".env")

    values = {}
    if os.getenv("SHOBDOHUB_DATA_DIR"):
        values["data_dir"] = Path(os.environ["SHOBDOHUB_DATA_DIR"]).expanduser()
    if os.getenv("SHOBDOHUB_PROGRESS_DB"):
        values["progress_db"] = Path(os.environ["SHOBDOHUB_PROGRESS_DB"]).expanduser()
    if os.getenv("SHOBDOHUB_LOG_LEVEL"):
        values["log_level"] = os.environ["SHOBDOHUB_LOG_LEVEL"]
    return Settings(**values)
