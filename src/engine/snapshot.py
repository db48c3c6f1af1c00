"""Snapshot lifecycle: starting and advancing a lineage of games."""

from __future__ import annotations

import random

from .models import INT64_MAX, WORDS_PER_GAME, GameSnapshot


def wrap_int64(value: int) -> int:
    """Wrap an arbitrary int into the signed 64-bit range (two's complement)."""
    value &= 2**64 - 1
    if value > INT64_MAX:
        value -= 2**64
    return value


def new_seed(rng: random.Random | None = None) -> int:
    """Draw a non-negative 63-bit seed for a new lineage."""
    if rng is None:
        rng = random.Random()
    return rng.getrandbits(63)


def fresh_snapshot(
    word_set: list[str],
    rng: random.Random | None = None,
) -> GameSnapshot:
    """Start a new lineage over `word_set` with a freshly drawn seed."""
    return GameSnapshot(
        seed=new_seed(rng),
        perm_index=0,
        round=0,
        revealed=[],
        word_set=list(word_set),
    )


def advance_snapshot(
    prev: GameSnapshot,
    rng: random.Random | None = None,
) -> GameSnapshot:
    """
    Snapshot for the next game in the same lineage.

    Moves to the next WORDS_PER_GAME slice of the seed's permutation. Once
    that slice would reach the end of the word set, the lineage re-rolls to
    a new seed starting at offset 0.
    """
    seed = prev.seed
    perm_index = prev.perm_index + WORDS_PER_GAME
    if perm_index + WORDS_PER_GAME >= len(prev.word_set):
        seed = new_seed(rng)
        perm_index = 0

    return GameSnapshot(
        seed=seed,
        perm_index=perm_index,
        round=0,
        revealed=[],
        word_set=list(prev.word_set),
    )


def permutation_rng(snapshot: GameSnapshot) -> random.Random:
    """Stream shared by every game with this seed (word permutation)."""
    return random.Random(snapshot.seed)


def choice_rng(snapshot: GameSnapshot) -> random.Random:
    """Stream distinct per game within a lineage (starting team, word picks)."""
    return random.Random(wrap_int64(snapshot.seed * (snapshot.perm_index + 1)))


def select_words(snapshot: GameSnapshot) -> list[str]:
    """
    The WORDS_PER_GAME words belonging to this snapshot's game.

    Raises IndexError when the word set is too short for `perm_index`.
    """
    perm = list(range(len(snapshot.word_set)))
    permutation_rng(snapshot).shuffle(perm)
    end = snapshot.perm_index + WORDS_PER_GAME
    if end > len(perm):
        raise IndexError(
            f"Word set has {len(perm)} words, need {end} for perm_index {snapshot.perm_index}"
        )
    return [snapshot.word_set[i] for i in perm[snapshot.perm_index:end]]

