from __future__ import annotations

import random

from wordsprint.grid import CELL_COUNT

# Modern (post-1987) Boggle dice.
DICE: tuple[str, ...] = (
    "AAEEGN", "ELRTTY", "AOOTTW", "ABBJOO", "EHRTVW", "CIMOTU",
    "DISTTY", "EIOSST", "DELRVY", "ACHOPS", "HIMNQU", "EEINSU",
    "EEGHNW", "AFFKPS", "HLNNRZ", "DEILRX",
)


def roll_dice(rng: random.Random | None = None, dice: tuple[str, ...] = DICE) -> list[tuple[int, str]]:
    """Roll each die once, in random order, and shuffle the board positions.

    Returns ``(die_index, letter)`` pairs in board order so the origin of every
    letter can be traced back to its die.
    """
    if rng is None:
        rng = random.Random()
    if len(dice) != CELL_COUNT:
        raise ValueError(f"Expected {CELL_COUNT} dice, got {len(dice)}")

    available = list(enumerate(dice))
    rolled: list[tuple[int, str]] = []
    for _ in range(CELL_COUNT):
        die_index, faces = available.pop(rng.randrange(len(available)))
        rolled.append((die_index, rng.choice(faces)))

    rng.shuffle(rolled)
    return rolled


def random_seed(rng: random.Random | None = None) -> str:
    """A random 16-letter board; pass a seeded ``rng`` for reproducible boards."""
    return "".join(letter for _, letter in roll_dice(rng))
