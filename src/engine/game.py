"""Core game logic: the mutable engine around one game record."""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta
from typing import Callable

from .errors import InvalidStageError, NotFoundError
from .models import (
    Game, GameOptions, GameSnapshot, Stage, Team, TeamPlayer, TeamPoint,
    utcnow,
)
from .routing import create_routing_order
from .snapshot import choice_rng, select_words

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def find_word_index(words: list[str], search: str) -> int:
    """Case-insensitive position of `search` in `words`, or -1."""
    needle = search.lower()
    for idx, word in enumerate(words):
        if word.lower() == needle:
            return idx
    return -1


def find_player_index(players: list[TeamPlayer], name: str) -> int:
    for idx, player in enumerate(players):
        if player.player_name == name:
            return idx
    return -1


def _swap_remove(items: list, idx: int) -> None:
    """Remove items[idx] by swapping it with the last element and truncating."""
    items[idx], items[-1] = items[-1], items[idx]
    items.pop()


class GameEngine:
    """
    Owns one game's record and applies every mutation to it.

    Not safe for concurrent use; callers serialize calls per game. Failing
    operations raise before touching the record.
    """

    def __init__(self, game: Game, rng: random.Random, clock: Clock | None = None):
        self._game = game
        self._rng = rng
        self._clock = clock or utcnow

    @property
    def game(self) -> Game:
        return self._game

    @property
    def state_id(self) -> str:
        return self._game.state_id

    def snapshot(self) -> GameSnapshot:
        return self._game.snapshot()

    def _touch(self) -> datetime:
        """Stamp updated_at, keeping it strictly increasing."""
        now = self._clock()
        if now <= self._game.updated_at:
            now = self._game.updated_at + timedelta(microseconds=1)
        self._game.updated_at = now
        return now

    def _require_setup(self, operation: str) -> None:
        if self._game.stage != Stage.SETUP:
            raise InvalidStageError(operation, self._game.stage)

    # ------------------------------------------------------------------
    # Turns and teams
    # ------------------------------------------------------------------

    def current_team(self) -> Team:
        """Acting team: the starting team on even rounds, the other on odd."""
        if self._game.round % 2 == 0:
            return self._game.starting_team
        return self._game.starting_team.other()

    def current_routed_player(self) -> TeamPlayer | None:
        order = self._game.routing_order
        if not order:
            return None
        return order[self._game.current_player % len(order)]

    def _next_player(self) -> None:
        if self._game.current_player + 1 >= len(self._game.routing_order):
            self._game.current_player = 0
        else:
            self._game.current_player += 1

    def next_turn(self) -> bool:
        """
        End the current turn.

        Returns False without changing anything once a winner is set.
        """
        if self._game.winning_team is not None:
            return False
        self._touch()
        self._game.round += 1
        self._next_player()
        self.get_next_word(False)
        self._game.round_started_at = self._clock()
        return True

    # ------------------------------------------------------------------
    # Words and scoring
    # ------------------------------------------------------------------

    def available_words(self) -> list[str]:
        game = self._game
        return [w for w, revealed in zip(game.words, game.revealed) if not revealed]

    def _award_point(self, team: Team) -> None:
        for entry in self._game.team_points:
            if entry.team == team:
                entry.points += 1
        self._touch()

    def get_next_word(self, correct: bool) -> None:
        """
        Record the result for the current word and draw the next one.

        A correct answer scores a point for the acting team and reveals the
        current word. If the current word is not on the board nothing is
        scored. When no unrevealed words remain the stage ends.
        """
        game = self._game
        if correct and game.current_word:
            matches = [idx for idx, word in enumerate(game.words) if word == game.current_word]
            if matches:
                self._award_point(self.current_team())
                for idx in matches:
                    game.revealed[idx] = True

        available = self.available_words()
        if not available:
            self.move_to_next_stage()
        else:
            game.current_word = available[self._rng.randrange(len(available))]
        self._touch()

    def _resolve_winner(self) -> Team:
        top_points = 0
        top_team = Team.NEUTRAL
        for entry in self._game.team_points:
            if entry.points == top_points:
                top_team = Team.NEUTRAL
            elif entry.points > top_points:
                top_points = entry.points
                top_team = entry.team
        return top_team

    def move_to_next_stage(self) -> None:
        """Advance to the next stage, or settle the winner after the last play stage."""
        game = self._game
        if game.stage.position >= Stage.ONE_WORD.position:
            game.winning_team = self._resolve_winner()
            logger.info(f"Game {game.id} finished, winner: {game.winning_team.value}")
        else:
            previous = game.stage
            game.stage = game.stage.next()
            game.revealed = [False] * len(game.words)
            game.current_word = ""
            logger.info(f"Game {game.id} stage {previous.value} -> {game.stage.value}")
        self._touch()

    def check_winning_condition(self) -> None:
        """
        Board-reveal variant: a team wins once none of its layout cells
        remain unrevealed. RED is checked first; an existing winner stays.
        """
        game = self._game
        if game.winning_team is not None or not game.layout:
            return

        red_remaining = False
        blue_remaining = False
        for team, revealed in zip(game.layout, game.revealed):
            if revealed:
                continue
            if team == Team.RED:
                red_remaining = True
            elif team == Team.BLUE:
                blue_remaining = True

        if not red_remaining:
            game.winning_team = Team.RED
        elif not blue_remaining:
            game.winning_team = Team.BLUE

    # ------------------------------------------------------------------
    # Setup-stage editing
    # ------------------------------------------------------------------

    def add_word(self, word: str) -> None:
        """Add a word; case-insensitive duplicates are ignored."""
        self._require_setup("add words")
        self._touch()
        if find_word_index(self._game.words, word) == -1:
            self._game.words.append(word)
            self._game.revealed.append(False)
            logger.debug(f"Game {self._game.id} added word {word!r}")

    def delete_word(self, word: str) -> None:
        self._require_setup("remove words")
        idx = find_word_index(self._game.words, word)
        if idx == -1:
            raise NotFoundError("word", word)
        _swap_remove(self._game.words, idx)
        _swap_remove(self._game.revealed, idx)
        self._touch()
        logger.debug(f"Game {self._game.id} removed word {word!r}")

    def _rebuild_routing(self) -> None:
        self._game.routing_order = create_routing_order(
            self._game.team_players, self._game.starting_team
        )

    def add_player(self, player: TeamPlayer) -> None:
        """Seat a player at the end of the roster. Names are not deduplicated."""
        self._require_setup("add players")
        self._touch()
        self._game.team_players.append(player)
        self._rebuild_routing()
        logger.debug(
            f"Game {self._game.id} seated {player.player_name!r} on {player.team.value}"
        )

    def delete_player(self, name: str) -> None:
        self._require_setup("remove players")
        idx = find_player_index(self._game.team_players, name)
        if idx == -1:
            raise NotFoundError("player", name)
        _swap_remove(self._game.team_players, idx)
        self._touch()
        self._rebuild_routing()
        logger.debug(f"Game {self._game.id} removed player {name!r}")

    def update_player(self, old_name: str, team: Team, new_name: str = "") -> None:
        """
        Re-seat a player with a new team and/or name.

        Implemented as remove-then-add, so the player moves to the end of
        the roster and of the recomputed routing order.
        """
        self._require_setup("update players")
        if find_player_index(self._game.team_players, old_name) == -1:
            raise NotFoundError("player", old_name)
        self.delete_player(old_name)
        self.add_player(TeamPlayer(team=team, player_name=new_name or old_name))

    def change_player_team(self, name: str, team: Team) -> None:
        self.update_player(name, team)


def _initial_points(starting_team: Team) -> list[TeamPoint]:
    return [
        TeamPoint(team=starting_team, points=0),
        TeamPoint(team=starting_team.other(), points=0),
    ]


def new_game(
    game_id: str,
    snapshot: GameSnapshot,
    options: GameOptions | None = None,
    *,
    clock: Clock | None = None,
) -> GameEngine:
    """
    Build a live game from a snapshot.

    With `random_words`, the game's words are the snapshot's slice of the
    seed permutation. Otherwise words start empty and are added in setup.
    """
    if options is None:
        options = GameOptions()
    clock = clock or utcnow

    rng = choice_rng(snapshot)
    starting_team = Team.from_parity(rng.randrange(2))

    words: list[str] = []
    revealed: list[bool] = []
    if options.random_words:
        words = select_words(snapshot)
        # Reveal flags carried by the snapshot restore an in-progress game.
        if len(snapshot.revealed) == len(words):
            revealed = list(snapshot.revealed)
        else:
            revealed = [False] * len(words)

    now = clock()
    game = Game(
        id=game_id,
        seed=snapshot.seed,
        perm_index=snapshot.perm_index,
        round=snapshot.round,
        revealed=revealed,
        word_set=list(snapshot.word_set),
        created_at=now,
        updated_at=now,
        starting_team=starting_team,
        words=words,
        round_started_at=now,
        timer_duration_ms=options.timer_duration_ms,
        enforce_timer=options.enforce_timer,
        random_words=options.random_words,
        stage=Stage.SETUP,
        team_points=_initial_points(starting_team),
        current_player=0,
        routing_order=[],
        current_word="",
    )
    logger.info(
        f"Created game {game_id} (seed={snapshot.seed}, perm_index={snapshot.perm_index}, "
        f"starting={starting_team.value}, words={len(words)})"
    )
    return GameEngine(game, rng, clock)


def restore_game(record: Game, *, clock: Clock | None = None) -> GameEngine:
    """Rebuild an engine around a persisted record after a restart."""
    game = record.model_copy(deep=True)
    rng = choice_rng(game)
    # Consume the starting-team draw so picks follow the same stream position.
    rng.randrange(2)
    return GameEngine(game, rng, clock)
