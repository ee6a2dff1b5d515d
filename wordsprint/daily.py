from __future__ import annotations

import random
from datetime import date, datetime

from wordsprint.evaluator import NORMAL, Difficulty, best_seed
from wordsprint.solver import Trie

DAY_FORMAT = "%Y%m%d"


def day_id(day: date | str) -> str:
    """Normalize a date (or a ``YYYYMMDD`` string) to its day id."""
    if isinstance(day, str):
        datetime.strptime(day, DAY_FORMAT)  # raises ValueError on bad input
        if len(day) != 8:
            raise ValueError(f"Day id must be YYYYMMDD, got {day!r}")
        return day
    return day.strftime(DAY_FORMAT)


def daily_rng(day: date | str) -> random.Random:
    return random.Random(day_id(day))


def daily_seed(trie: Trie, day: date | str, difficulty: Difficulty = NORMAL) -> str:
    """The puzzle for ``day``: every client with the same dictionary derives the same board."""
    return best_seed(trie, daily_rng(day), difficulty)
