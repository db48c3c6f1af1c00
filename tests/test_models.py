"""Tests for engine data models and their serialized shape."""

from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.engine import Game, GameSnapshot, Stage, Team, TeamPlayer, TeamPoint


class TestTeam:
    """Tests for the team enum."""

    def test_other(self):
        assert Team.RED.other() == Team.BLUE
        assert Team.BLUE.other() == Team.RED
        assert Team.NEUTRAL.other() == Team.NEUTRAL

    def test_parity(self):
        assert Team.RED.parity == 0
        assert Team.BLUE.parity == 1
        assert Team.from_parity(0) == Team.RED
        assert Team.from_parity(1) == Team.BLUE

    def test_parse_unknown_is_neutral(self):
        """Unrecognized strings never fail; they become neutral."""
        assert Team.parse("red") == Team.RED
        assert Team.parse("blue") == Team.BLUE
        assert Team.parse("purple") == Team.NEUTRAL
        assert Team.parse("RED") == Team.NEUTRAL
        assert Team.parse(None) == Team.NEUTRAL

    def test_model_fields_coerce_unknown_team(self):
        player = TeamPlayer.model_validate({"team": "green", "player_name": "x"})
        assert player.team == Team.NEUTRAL
        point = TeamPoint.model_validate({"team": 7, "points": 2})
        assert point.team == Team.NEUTRAL

    def test_serializes_lowercase(self):
        data = TeamPlayer(team=Team.BLUE, player_name="x").model_dump(mode="json")
        assert data == {"team": "blue", "player_name": "x"}


class TestStage:
    """Tests for the stage enum."""

    def test_next_follows_play_order(self):
        assert Stage.SETUP.next() == Stage.END_SETUP
        assert Stage.END_SETUP.next() == Stage.EXPLAIN
        assert Stage.GESTURES.next() == Stage.END_GESTURES
        assert Stage.ONE_WORD.next() == Stage.END_ONE_WORD
        assert Stage.END_ONE_WORD.next() == Stage.END_ONE_WORD

    def test_position_in_progression(self):
        """Positions count up through the play order and leave str.index alone."""
        assert [s.position for s in Stage] == list(range(8))
        assert Stage.ONE_WORD.position > Stage.GESTURES.position
        assert Stage.SETUP.index("up") == 3

    def test_serialized_names_are_lowercase(self):
        assert [s.value for s in Stage] == [
            "setup", "endsetup", "explain", "endexplain",
            "gestures", "endgestures", "oneword", "endoneword",
        ]


class TestGameRecord:
    """Tests for the full record shape."""

    def test_record_flattens_snapshot_and_options(self):
        game = Game(id="g1", seed=3, word_set=["a"], random_words=True)
        data = game.model_dump(mode="json")

        for key in ("seed", "perm_index", "round", "revealed", "word_set"):
            assert key in data
        for key in ("timer_duration_ms", "enforce_timer", "random_words"):
            assert key in data
        assert data["stage"] == "setup"
        assert data["winning_team"] is None

    def test_winning_team_parsing(self):
        """Absent winner stays absent; unknown winner strings are neutral."""
        base = {"id": "g", "seed": 1}
        assert Game.model_validate(base).winning_team is None
        assert Game.model_validate({**base, "winning_team": "red"}).winning_team == Team.RED
        assert Game.model_validate({**base, "winning_team": "?"}).winning_team == Team.NEUTRAL

    def test_layout_coerces_unknown(self):
        game = Game.model_validate({"id": "g", "seed": 1, "layout": ["red", "assassin"]})
        assert game.layout == [Team.RED, Team.NEUTRAL]

    def test_snapshot_copy(self):
        game = Game(id="g", seed=3, perm_index=25, round=4, revealed=[True], word_set=["a"])
        snapshot = game.snapshot()
        assert isinstance(snapshot, GameSnapshot)
        assert not isinstance(snapshot, Game)
        assert snapshot.model_dump() == {
            "seed": 3, "perm_index": 25, "round": 4, "revealed": [True], "word_set": ["a"],
        }
        snapshot.revealed[0] = False
        assert game.revealed == [True]
