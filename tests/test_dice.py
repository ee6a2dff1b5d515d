import random
from collections import Counter

from wordsprint.dice import DICE, random_seed, roll_dice


def test_dice_set_shape():
    assert len(DICE) == 16
    assert all(len(die) == 6 for die in DICE)


def test_random_seed_is_16_letters():
    for n in range(20):
        seed = random_seed(random.Random(n))
        assert len(seed) == 16
        assert all("A" <= ch <= "Z" for ch in seed)


def test_each_die_used_once():
    for n in range(20):
        rolled = roll_dice(random.Random(n))
        indices = [i for i, _ in rolled]
        assert sorted(indices) == list(range(16))
        for die_index, letter in rolled:
            assert letter in DICE[die_index]


def test_letter_counts_bounded_by_dice():
    # A letter can appear at most once per die that carries it
    carriers = Counter(ch for die in DICE for ch in set(die))
    for n in range(50):
        for ch, count in Counter(random_seed(random.Random(n))).items():
            assert count <= carriers[ch]


def test_same_rng_state_gives_same_seed():
    assert random_seed(random.Random("20250714")) == random_seed(random.Random("20250714"))


def test_independent_rngs_differ():
    assert random_seed(random.Random(1)) != random_seed(random.Random(2))


def test_dice_list_not_mutated():
    before = tuple(DICE)
    roll_dice(random.Random(3))
    assert DICE == before


def test_default_rng():
    assert len(random_seed()) == 16
