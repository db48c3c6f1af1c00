"""In-memory registry of live games, one lock per game."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from src.engine import GameEngine


@dataclass
class GameSession:
    engine: GameEngine
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class GameRegistry:
    def __init__(self):
        self._sessions: dict[str, GameSession] = {}

    def get(self, game_id: str) -> GameSession | None:
        return self._sessions.get(game_id)

    def put(self, engine: GameEngine) -> GameSession:
        session = GameSession(engine=engine)
        self._sessions[engine.game.id] = session
        return session

    def remove(self, game_id: str) -> GameSession | None:
        return self._sessions.pop(game_id, None)

    def ids(self) -> list[str]:
        return list(self._sessions)

    def __contains__(self, game_id: str) -> bool:
        return game_id in self._sessions
