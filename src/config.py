"""Runtime configuration, read from the environment (and a repo-root .env)."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from src.engine import GameOptions
from src.engine.wordlist import default_wordlist_path


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_data_dir() -> Path:
    """Get game data directory from env or default."""
    env_dir = os.environ.get("WORDGAME_DATA_DIR")
    if env_dir:
        return Path(env_dir)
    return Path("game_data")


class Settings(BaseModel):
    """Service settings."""

    data_dir: str = Field(default_factory=lambda: str(get_data_dir()))
    wordlist_path: str = Field(default_factory=lambda: str(default_wordlist_path()))

    # Defaults for games created without explicit options
    timer_duration_ms: int = 60_000
    enforce_timer: bool = False
    random_words: bool = True

    def default_options(self) -> GameOptions:
        return GameOptions(
            timer_duration_ms=self.timer_duration_ms,
            enforce_timer=self.enforce_timer,
            random_words=self.random_words,
        )


def load_settings(env_file: Path | str | None = None) -> Settings:
    """Build settings from the environment after loading `.env`."""
    load_dotenv(env_file or _repo_root() / ".env")

    overrides: dict[str, object] = {}
    if os.environ.get("WORDGAME_WORDLIST"):
        overrides["wordlist_path"] = os.environ["WORDGAME_WORDLIST"]
    if os.environ.get("WORDGAME_TIMER_MS"):
        overrides["timer_duration_ms"] = int(os.environ["WORDGAME_TIMER_MS"])
    overrides["enforce_timer"] = _env_bool("WORDGAME_ENFORCE_TIMER", False)
    overrides["random_words"] = _env_bool("WORDGAME_RANDOM_WORDS", True)

    return Settings(**overrides)
