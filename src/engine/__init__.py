from .models import (
    WORDS_PER_GAME, Team, Stage, TeamPlayer, TeamPoint, GameOptions,
    GameSnapshot, Game,
)
from .errors import GameError, InvalidStageError, NotFoundError
from .snapshot import (
    fresh_snapshot, advance_snapshot, select_words, wrap_int64,
)
from .routing import create_routing_order
from .game import GameEngine, new_game, restore_game
from .wordlist import load_wordlist

__all__ = [
    "WORDS_PER_GAME", "Team", "Stage", "TeamPlayer", "TeamPoint", "GameOptions",
    "GameSnapshot", "Game",
    "GameError", "InvalidStageError", "NotFoundError",
    "fresh_snapshot", "advance_snapshot", "select_words", "wrap_int64",
    "create_routing_order",
    "GameEngine", "new_game", "restore_game",
    "load_wordlist",
]
