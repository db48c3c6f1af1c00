#!/usr/bin/env python3
"""Play a hot-seat game in the terminal, stage by stage."""

import argparse
import logging
import random
import sys
from pathlib import Path

from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).parent.parent))
load_dotenv(Path(__file__).parent.parent / ".env")

from src.engine import (
    GameEngine, GameOptions, GameSnapshot, Stage, Team, TeamPlayer,
    fresh_snapshot, load_wordlist, new_game,
)
from src.storage import GameStore


# ANSI colors for terminal output
class Colors:
    RED = "\033[91m"
    BLUE = "\033[94m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


END_STAGES = {Stage.END_SETUP, Stage.END_EXPLAIN, Stage.END_GESTURES, Stage.END_ONE_WORD}


def team_color(team: Team) -> str:
    if team == Team.RED:
        return Colors.RED
    if team == Team.BLUE:
        return Colors.BLUE
    return Colors.GRAY


def print_status(engine: GameEngine) -> None:
    game = engine.game
    team = engine.current_team()
    player = engine.current_routed_player()
    who = player.player_name if player else "-"
    color = team_color(team)
    print(f"\n{Colors.BOLD}{'=' * 60}{Colors.RESET}")
    print(
        f"{Colors.BOLD}Stage: {game.stage.value}{Colors.RESET}  "
        f"Round {game.round}  {color}{team.value.upper()} ({who}){Colors.RESET}"
    )
    points = "  ".join(
        f"{team_color(tp.team)}{tp.team.value}: {tp.points}{Colors.RESET}" for tp in game.team_points
    )
    print(f"Score: {points}  Remaining words: {len(engine.available_words())}")
    print(f"{'=' * 60}")


def ask(word: str, auto: bool, rng: random.Random) -> str:
    """Return 'y' (guessed), 'n' (pass the turn) or 'q'."""
    if auto:
        return "y" if rng.random() < 0.7 else "n"
    answer = input(f"  Word: {Colors.BOLD}{word}{Colors.RESET}  guessed? [y/n/q] ")
    return answer.strip().lower()[:1] or "n"


def play(engine: GameEngine, auto: bool, rng: random.Random, max_turns: int) -> None:
    game = engine.game
    engine.move_to_next_stage()  # leave setup

    turns = 0
    while game.winning_team is None and turns < max_turns:
        if game.stage in END_STAGES:
            print(f"\n{Colors.GRAY}-- end of stage, moving on --{Colors.RESET}")
            engine.move_to_next_stage()
            continue

        print_status(engine)
        stage = game.stage
        engine.get_next_word(False)
        while game.stage == stage and game.winning_team is None:
            answer = ask(game.current_word, auto, rng)
            if answer == "q":
                return
            if answer == "y":
                engine.get_next_word(True)
            else:
                engine.next_turn()
                turns += 1
                print_status(engine)


def main() -> None:
    parser = argparse.ArgumentParser(description="Play a local word-guessing game")
    parser.add_argument("--red", nargs="+", default=["Alice", "Bob"], help="Red team players")
    parser.add_argument("--blue", nargs="+", default=["Carol", "Dan"], help="Blue team players")
    parser.add_argument("--seed", type=int, default=None, help="Lineage seed")
    parser.add_argument("--wordlist", type=str, default=None, help="Path to word list")
    parser.add_argument("--auto", action="store_true", help="Answer randomly instead of prompting")
    parser.add_argument("--max-turns", type=int, default=200)
    parser.add_argument("--save-dir", type=str, default=None, help="Save the final record here")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only warnings")
    args = parser.parse_args()

    if args.quiet:
        logging.basicConfig(level=logging.WARNING)
    elif args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    words = load_wordlist(args.wordlist)
    rng = random.Random(args.seed)
    if args.seed is not None:
        snapshot = GameSnapshot(seed=args.seed, word_set=words)
    else:
        snapshot = fresh_snapshot(words, rng)

    engine = new_game("local", snapshot, GameOptions(random_words=True))
    for name in args.red:
        engine.add_player(TeamPlayer(team=Team.RED, player_name=name))
    for name in args.blue:
        engine.add_player(TeamPlayer(team=Team.BLUE, player_name=name))

    starting = engine.game.starting_team
    print(f"{team_color(starting)}{Colors.BOLD}{starting.value.upper()} starts{Colors.RESET}")
    order = ", ".join(tp.player_name for tp in engine.game.routing_order)
    print(f"Routing order: {order}")

    play(engine, args.auto, rng, args.max_turns)

    winner = engine.game.winning_team
    if winner is not None:
        print(f"\n{team_color(winner)}{Colors.BOLD}Winner: {winner.value.upper()}{Colors.RESET}")
    if args.save_dir:
        path = GameStore(args.save_dir).save_game(engine.game)
        print(f"Saved to {path}")


if __name__ == "__main__":
    main()
