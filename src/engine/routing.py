"""Turn routing order over seated players."""

from __future__ import annotations

from .models import Team, TeamPlayer


def create_routing_order(
    team_players: list[TeamPlayer],
    starting_team: Team,
) -> list[TeamPlayer]:
    """
    Interleave RED and BLUE players so every RED player faces every BLUE
    player once per rotation.

    The rotation is 2 * len(red) * len(blue) entries long. Step parity picks
    the side (even = RED, odd = BLUE), starting at the parity of
    `starting_team`; each side cycles through its own players in join order.
    A team with no players makes the rotation empty.
    """
    red = [tp for tp in team_players if tp.team == Team.RED]
    blue = [tp for tp in team_players if tp.team == Team.BLUE]

    rotation_length = len(red) * len(blue) * 2
    order: list[TeamPlayer] = []
    step = starting_team.parity
    red_count = 0
    blue_count = 0

    while len(order) < rotation_length:
        if step % 2 == 0:
            if red:
                order.append(red[red_count % len(red)])
                red_count += 1
        else:
            if blue:
                order.append(blue[blue_count % len(blue)])
                blue_count += 1
        step += 1

    return order
