"""Tests for snapshot lineages: word reuse across games sharing a seed."""

import random
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.engine import (
    GameOptions, GameSnapshot, WORDS_PER_GAME,
    advance_snapshot, fresh_snapshot, load_wordlist, new_game, wrap_int64,
)


WORD_SET = [f"w{i}" for i in range(400)]


class TestFreshSnapshot:
    """Tests for starting a lineage."""

    def test_fresh_snapshot_defaults(self):
        """A fresh snapshot starts at offset 0 with nothing revealed."""
        snapshot = fresh_snapshot(WORD_SET, random.Random(3))
        assert snapshot.perm_index == 0
        assert snapshot.round == 0
        assert snapshot.revealed == []
        assert snapshot.word_set == WORD_SET
        assert 0 <= snapshot.seed < 2**63

    def test_explicit_rng_is_reproducible(self):
        """Seeds come from the given generator, not global state."""
        a = fresh_snapshot(WORD_SET, random.Random(11))
        b = fresh_snapshot(WORD_SET, random.Random(11))
        assert a.seed == b.seed

    def test_word_set_is_copied(self):
        words = ["a", "b"]
        snapshot = fresh_snapshot(words)
        words.append("c")
        assert snapshot.word_set == ["a", "b"]


class TestAdvanceSnapshot:
    """Tests for moving to the next game in a lineage."""

    def test_advances_by_one_game(self):
        """The next game uses the next slice under the same seed."""
        prev = GameSnapshot(seed=5, perm_index=0, round=9, revealed=[True] * 25, word_set=WORD_SET)
        nxt = advance_snapshot(prev)
        assert nxt.seed == 5
        assert nxt.perm_index == WORDS_PER_GAME
        assert nxt.round == 0
        assert nxt.revealed == []

    def test_previous_snapshot_untouched(self):
        prev = GameSnapshot(seed=5, perm_index=25, word_set=WORD_SET)
        advance_snapshot(prev)
        assert prev.perm_index == 25
        assert prev.seed == 5

    def test_rollover_resets_offset_and_seed(self):
        """Once the next slice reaches the end, the lineage re-rolls."""
        prev = GameSnapshot(seed=5, perm_index=350, word_set=WORD_SET)
        nxt = advance_snapshot(prev, random.Random(99))
        assert nxt.perm_index == 0
        assert nxt.seed != 5

    def test_rollover_boundary(self):
        """The slice ending exactly at the end of the set is never used."""
        prev = GameSnapshot(seed=5, perm_index=325, word_set=WORD_SET)
        assert advance_snapshot(prev).perm_index == 350
        prev = GameSnapshot(seed=5, perm_index=350, word_set=WORD_SET)
        assert advance_snapshot(prev, random.Random(1)).perm_index == 0

    def test_small_word_set_always_rerolls(self):
        prev = GameSnapshot(seed=5, word_set=WORD_SET[:40])
        nxt = advance_snapshot(prev, random.Random(2))
        assert nxt.perm_index == 0

    def test_no_repeats_within_lineage(self):
        """No word appears in two games before the lineage rolls over."""
        games_without_repeats = len(WORD_SET) // WORDS_PER_GAME - 1
        state = fresh_snapshot(WORD_SET, random.Random(7))
        lineage_seed = state.seed

        seen: dict[str, int] = {}
        for i in range(games_without_repeats):
            assert state.seed == lineage_seed
            game = new_game("foo", state, GameOptions(random_words=True)).game
            for word in game.words:
                assert word not in seen, f"{word!r} in game {seen[word]} and game {i}"
                seen[word] = i
            state = advance_snapshot(state, random.Random(i))

        assert len(seen) == games_without_repeats * WORDS_PER_GAME
        assert state.perm_index == 0

    def test_no_repeats_with_bundled_wordlist(self):
        """The shipped word list supports a full lineage without repeats."""
        words = load_wordlist()
        assert len(words) >= 2 * WORDS_PER_GAME
        state = fresh_snapshot(words, random.Random(21))

        seen: set[str] = set()
        for _ in range(len(words) // WORDS_PER_GAME - 1):
            game = new_game("foo", state, GameOptions(random_words=True)).game
            assert not seen & set(game.words)
            seen.update(game.words)
            state = advance_snapshot(state)


class TestSeedArithmetic:
    """Tests for 64-bit seed handling."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, 0),
            (2**63 - 1, 2**63 - 1),
            (2**63, -(2**63)),
            (2**64 + 5, 5),
            (-1, -1),
        ],
    )
    def test_wrap_int64(self, value, expected):
        assert wrap_int64(value) == expected

    def test_large_seed_games_differ_per_offset(self):
        """Seed times offset overflows 64 bits without failing."""
        snapshot = GameSnapshot(seed=2**63 - 1, perm_index=300, word_set=WORD_SET)
        engine = new_game("big", snapshot, GameOptions(random_words=True))
        assert len(engine.game.words) == WORDS_PER_GAME

    def test_seed_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            GameSnapshot(seed=2**63)
