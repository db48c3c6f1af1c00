"""Word-list loading for the shared vocabulary."""

from __future__ import annotations

from pathlib import Path


def default_wordlist_path() -> Path:
    # src/engine/wordlist.py -> src/engine -> src -> repo
    return Path(__file__).resolve().parent.parent.parent / "data" / "wordlist.txt"


def load_wordlist(path: Path | str | None = None) -> list[str]:
    """
    Load the word list from file.

    One word per line; blank lines and `#` comments are skipped, and words
    are deduplicated case-insensitively keeping the first spelling.
    """
    if path is None:
        path = default_wordlist_path()

    words: list[str] = []
    seen: set[str] = set()
    with open(path, "r") as f:
        for line in f:
            word = line.strip()
            if not word or word.startswith("#"):
                continue
            key = word.lower()
            if key in seen:
                continue
            seen.add(key)
            words.append(word)
    return words
