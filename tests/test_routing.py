"""Tests for routing order computation."""

import pytest
from collections import Counter
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.engine import Team, TeamPlayer, create_routing_order


def players(red: list[str], blue: list[str]) -> list[TeamPlayer]:
    return (
        [TeamPlayer(team=Team.RED, player_name=n) for n in red]
        + [TeamPlayer(team=Team.BLUE, player_name=n) for n in blue]
    )


def names(order: list[TeamPlayer]) -> list[str]:
    return [p.player_name for p in order]


class TestRoutingOrder:
    """Tests for the interleaved turn order."""

    def test_two_by_three_red_start(self):
        """Every red player meets every blue player once per rotation."""
        order = create_routing_order(players(["A", "B"], ["1", "2", "3"]), Team.RED)
        assert names(order) == ["A", "1", "B", "2", "A", "3", "B", "1", "A", "2", "B", "3"]

    def test_two_by_three_blue_start(self):
        order = create_routing_order(players(["A", "B"], ["1", "2", "3"]), Team.BLUE)
        assert names(order) == ["1", "A", "2", "B", "3", "A", "1", "B", "2", "A", "3", "B"]

    def test_join_order_interleaved_across_teams(self):
        """Team membership, not roster position, decides the side."""
        roster = [
            TeamPlayer(team=Team.BLUE, player_name="1"),
            TeamPlayer(team=Team.RED, player_name="A"),
            TeamPlayer(team=Team.BLUE, player_name="2"),
        ]
        assert names(create_routing_order(roster, Team.RED)) == ["A", "1", "A", "2"]

    @pytest.mark.parametrize("red,blue", [(1, 1), (2, 3), (3, 2), (4, 4), (1, 5)])
    def test_fairness(self, red, blue):
        """Length is 2rb; each red player appears b times, each blue r times."""
        roster = players(
            [f"r{i}" for i in range(red)], [f"b{i}" for i in range(blue)]
        )
        order = create_routing_order(roster, Team.RED)
        counts = Counter(names(order))

        assert len(order) == 2 * red * blue
        assert all(counts[f"r{i}"] == blue for i in range(red))
        assert all(counts[f"b{i}"] == red for i in range(blue))

    def test_alternates_teams(self):
        order = create_routing_order(players(["A", "B", "C"], ["1", "2"]), Team.BLUE)
        teams = [p.team for p in order]
        assert teams[0] == Team.BLUE
        assert all(a != b for a, b in zip(teams, teams[1:]))

    @pytest.mark.parametrize("red,blue", [(["A", "B"], []), ([], ["1"]), ([], [])])
    def test_empty_team_gives_empty_order(self, red, blue):
        """With one side empty the rotation has no entries."""
        assert create_routing_order(players(red, blue), Team.RED) == []

    def test_neutral_players_are_not_routed(self):
        roster = players(["A"], ["1"]) + [TeamPlayer(team=Team.NEUTRAL, player_name="x")]
        assert names(create_routing_order(roster, Team.RED)) == ["A", "1"]
