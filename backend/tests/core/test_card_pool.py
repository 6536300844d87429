"""Card Pool - tests for short codes, shuffling, and the starter decks.

Tests cover:
    - digit_short_code has the requested digit count and no leading zero
    - digit_short_code is reproducible under a seeded rng
    - shuffle keeps the multiset, leaves the input alone, and is seed-deterministic
    - starter decks cover every setup type
"""

import random
from collections import Counter

import pytest

from punchlines.core.card_pool import (
    STARTER_PUNCHLINES, STARTER_SETUPS, digit_short_code, shuffle,
)
from punchlines.core.domain_types import SetupType


# ─── digit_short_code ────────────────────────────────────────────

@pytest.mark.parametrize("length", [1, 4, 6, 9])
def test_digit_short_code_has_exact_length(length):
    rng = random.Random(7)
    for _ in range(200):
        code = digit_short_code(length, rng)
        assert len(code) == length
        assert code.isdigit()
        assert length == 1 or code[0] != "0"


def test_digit_short_code_is_seed_deterministic():
    assert digit_short_code(6, random.Random(3)) == digit_short_code(6, random.Random(3))


def test_digit_short_code_rejects_zero_length():
    with pytest.raises(ValueError):
        digit_short_code(0, random.Random())


# ─── shuffle ─────────────────────────────────────────────────────

def test_shuffle_preserves_cards():
    cards = ["a", "b", "c", "c", "d"]
    result = shuffle(cards, random.Random(1))
    assert Counter(result) == Counter(cards)


def test_shuffle_does_not_mutate_input():
    cards = [1, 2, 3, 4, 5]
    shuffle(cards, random.Random(1))
    assert cards == [1, 2, 3, 4, 5]


def test_shuffle_is_seed_deterministic():
    cards = list(range(30))
    assert shuffle(cards, random.Random(9)) == shuffle(cards, random.Random(9))


def test_shuffle_reaches_every_permutation_of_three():
    rng = random.Random(0)
    seen = {tuple(shuffle("abc", rng)) for _ in range(300)}
    assert len(seen) == 6


def test_shuffle_handles_empty_and_single():
    assert shuffle([], random.Random()) == []
    assert shuffle(["x"], random.Random()) == ["x"]


# ─── starter decks ───────────────────────────────────────────────

def test_starter_setups_cover_every_type():
    assert {setup_type for _, setup_type in STARTER_SETUPS} == set(SetupType)


def test_starter_punchlines_are_unique():
    assert len(STARTER_PUNCHLINES) == len(set(STARTER_PUNCHLINES))
    assert len(STARTER_PUNCHLINES) > 40
