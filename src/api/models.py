"""Request/response models for the game API."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from src.engine import GameEngine, GameOptions
from src.engine.models import TeamValue


class CreateGameRequest(BaseModel):
    game_id: str | None = None
    seed: int | None = None
    options: GameOptions | None = None
    word_set: list[str] | None = None  # None uses the configured word list


class NextGameRequest(BaseModel):
    word_set: list[str] | None = None  # None continues the current lineage


class PlayerRequest(BaseModel):
    player_name: str = Field(min_length=1)
    team: TeamValue


class UpdatePlayerRequest(BaseModel):
    team: TeamValue
    player_name: str = ""  # empty keeps the current name


class WordRequest(BaseModel):
    word: str = Field(min_length=1)


class NextWordRequest(BaseModel):
    correct: bool = False


class GameResponse(BaseModel):
    state_id: str
    game: dict[str, Any]
    current_player_name: str | None = None
    advanced: bool | None = None

    @classmethod
    def from_engine(cls, engine: GameEngine, advanced: bool | None = None) -> "GameResponse":
        player = engine.current_routed_player()
        return cls(
            state_id=engine.state_id,
            game=engine.game.model_dump(mode="json"),
            current_player_name=player.player_name if player else None,
            advanced=advanced,
        )


class GameListResponse(BaseModel):
    game_ids: list[str]


class StateResponse(BaseModel):
    game_id: str
    state_id: str
