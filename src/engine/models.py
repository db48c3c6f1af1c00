"""Data models for the party word game engine."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, field_validator

WORDS_PER_GAME = 25

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MICROSECOND = timedelta(microseconds=1)


class Team(str, Enum):
    """Team enumeration."""
    RED = "red"
    BLUE = "blue"
    NEUTRAL = "neutral"

    @classmethod
    def parse(cls, value: Any) -> "Team":
        """Coerce any input to a team; unknown values become NEUTRAL."""
        if isinstance(value, Team):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.NEUTRAL

    def other(self) -> "Team":
        if self == Team.RED:
            return Team.BLUE
        if self == Team.BLUE:
            return Team.RED
        return self

    @property
    def parity(self) -> int:
        """Turn parity: RED acts on even steps, BLUE on odd ones."""
        return _TEAM_PARITY[self]

    @classmethod
    def from_parity(cls, parity: int) -> "Team":
        return cls.RED if parity % 2 == 0 else cls.BLUE


_TEAM_PARITY = {Team.RED: 0, Team.BLUE: 1, Team.NEUTRAL: 0}

TeamValue = Annotated[Team, BeforeValidator(Team.parse)]


class Stage(str, Enum):
    """Clue-giving phases, in play order."""
    SETUP = "setup"
    END_SETUP = "endsetup"
    EXPLAIN = "explain"
    END_EXPLAIN = "endexplain"
    GESTURES = "gestures"
    END_GESTURES = "endgestures"
    ONE_WORD = "oneword"
    END_ONE_WORD = "endoneword"

    @property
    def position(self) -> int:
        return _STAGE_ORDER.index(self)

    def next(self) -> "Stage":
        """Successor stage; the last stage has no successor and returns itself."""
        idx = self.position
        if idx + 1 >= len(_STAGE_ORDER):
            return self
        return _STAGE_ORDER[idx + 1]


_STAGE_ORDER = list(Stage)


class TeamPlayer(BaseModel):
    """A seated player."""
    team: TeamValue
    player_name: str


class TeamPoint(BaseModel):
    team: TeamValue
    points: int = 0


class GameOptions(BaseModel):
    """Per-game options. Timer settings are advisory for the caller."""
    timer_duration_ms: int | None = None
    enforce_timer: bool = False
    random_words: bool = False


class GameSnapshot(BaseModel):
    """
    Minimal state needed to rebuild a game after a process restart.

    `perm_index` marks which slice of the seed's word permutation belongs
    to the current game in a lineage of games sharing `seed`.
    """
    seed: int = Field(ge=INT64_MIN, le=INT64_MAX)
    perm_index: int = Field(default=0, ge=0)
    round: int = 0
    revealed: list[bool] = Field(default_factory=list)
    word_set: list[str] = Field(default_factory=list)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Game(GameSnapshot):
    """The full runtime record of one game; snapshot fields are flattened in."""
    id: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    starting_team: TeamValue = Team.RED
    winning_team: Team | None = None
    words: list[str] = Field(default_factory=list)
    layout: list[TeamValue] = Field(default_factory=list)
    round_started_at: datetime = Field(default_factory=utcnow)

    # Options
    timer_duration_ms: int | None = None
    enforce_timer: bool = False
    random_words: bool = False

    team_players: list[TeamPlayer] = Field(default_factory=list)
    stage: Stage = Stage.SETUP
    team_points: list[TeamPoint] = Field(default_factory=list)
    current_player: int = 0
    routing_order: list[TeamPlayer] = Field(default_factory=list)
    current_word: str = ""

    @field_validator("winning_team", mode="before")
    @classmethod
    def _parse_winner(cls, value: Any) -> Any:
        # Absent stays absent; anything else goes through Team.parse.
        return None if value is None else Team.parse(value)

    @property
    def options(self) -> GameOptions:
        return GameOptions(
            timer_duration_ms=self.timer_duration_ms,
            enforce_timer=self.enforce_timer,
            random_words=self.random_words,
        )

    @property
    def state_id(self) -> str:
        """Change-detection token: `updated_at` in nanoseconds, zero padded."""
        updated = self.updated_at
        if updated.tzinfo is None:
            updated = updated.replace(tzinfo=timezone.utc)
        micros = (updated - _EPOCH) // _ONE_MICROSECOND
        return f"{micros * 1000:019d}"

    def snapshot(self) -> GameSnapshot:
        """Detached copy of the restart-durable state."""
        return GameSnapshot(
            seed=self.seed,
            perm_index=self.perm_index,
            round=self.round,
            revealed=list(self.revealed),
            word_set=list(self.word_set),
        )

    def points_for(self, team: Team) -> int:
        for entry in self.team_points:
            if entry.team == team:
                return entry.points
        return 0
