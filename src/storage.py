"""JSON-file persistence for game records and lineage snapshots."""
from __future__ import annotations

import json
import re
from pathlib import Path

from src.engine import Game, GameSnapshot

_UNSAFE = re.compile(r"[^A-Za-z0-9_.-]")


def _safe_name(key: str) -> str:
    name = _UNSAFE.sub("_", key).strip(".")
    if not name:
        raise ValueError(f"Invalid storage key: {key!r}")
    return name


class GameStore:
    """Stores one JSON file per game, plus one per lineage snapshot."""

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def _games_dir(self) -> Path:
        return self.root / "games"

    def _snapshots_dir(self) -> Path:
        return self.root / "snapshots"

    def ensure_storage(self) -> None:
        self._games_dir().mkdir(parents=True, exist_ok=True)
        self._snapshots_dir().mkdir(parents=True, exist_ok=True)

    def _game_path(self, game_id: str) -> Path:
        return self._games_dir() / f"{_safe_name(game_id)}.json"

    def _snapshot_path(self, lineage_id: str) -> Path:
        return self._snapshots_dir() / f"{_safe_name(lineage_id)}.json"

    def has_game(self, game_id: str) -> bool:
        return self._game_path(game_id).exists()

    def save_game(self, game: Game) -> Path:
        """Save a full record; the caller's live record is not aliased."""
        self.ensure_storage()
        path = self._game_path(game.id)
        with open(path, "w") as f:
            json.dump(game.model_dump(mode="json"), f, indent=2)
        return path

    def load_game(self, game_id: str) -> Game:
        path = self._game_path(game_id)
        if not path.exists():
            raise FileNotFoundError(game_id)
        with open(path, "r") as f:
            return Game.model_validate(json.load(f))

    def list_games(self) -> list[str]:
        self.ensure_storage()
        return [path.stem for path in sorted(self._games_dir().glob("*.json"))]

    def delete_game(self, game_id: str) -> None:
        """Delete a record along with its lineage snapshot."""
        paths = [p for p in (self._game_path(game_id), self._snapshot_path(game_id)) if p.exists()]
        if not paths:
            raise FileNotFoundError(game_id)
        for path in paths:
            path.unlink()

    def save_snapshot(self, lineage_id: str, snapshot: GameSnapshot) -> Path:
        self.ensure_storage()
        path = self._snapshot_path(lineage_id)
        with open(path, "w") as f:
            json.dump(snapshot.model_dump(mode="json"), f, indent=2)
        return path

    def load_snapshot(self, lineage_id: str) -> GameSnapshot | None:
        path = self._snapshot_path(lineage_id)
        if not path.exists():
            return None
        with open(path, "r") as f:
            return GameSnapshot.model_validate(json.load(f))
