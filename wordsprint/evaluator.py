"""Two-phase selection of playable boards.

The fast pass samples many random boards, throws away structurally poor ones
and scores the rest with a depth-limited search. Only the best few
("finalists") pay for a full search and the richer score of the full pass.
"""
from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass

import numpy as np

from wordsprint.dice import random_seed
from wordsprint.metrics import StageTimer
from wordsprint.solver import Trie, find_words

logger = logging.getLogger("wordsprint")

VOWELS = "AEIOU"
RARE_LETTERS = "QJXZ"
LONG_WORD = 5

MAX_LETTER_REPEATS = 4
MIN_VOWELS, MAX_VOWELS = 4, 7
MIN_DISTINCT_LETTERS = 9
MAX_RARE_LETTERS = 2


@dataclass(frozen=True)
class Difficulty:
    name: str
    attempts: int
    early_accept: int
    shallow_depth: int
    finalists: int

    @classmethod
    def from_name(cls, name: str) -> Difficulty:
        try:
            return DIFFICULTIES[name.strip().lower()]
        except (KeyError, AttributeError):
            raise ValueError(f"Unknown difficulty: {name!r} (expected one of {', '.join(DIFFICULTIES)})") from None


EASY = Difficulty("easy", attempts=80, early_accept=20, shallow_depth=7, finalists=3)
NORMAL = Difficulty("normal", attempts=140, early_accept=34, shallow_depth=7, finalists=5)
HARD = Difficulty("hard", attempts=220, early_accept=48, shallow_depth=7, finalists=7)

DIFFICULTIES = {d.name: d for d in (EASY, NORMAL, HARD)}


@dataclass(frozen=True)
class FastEval:
    seed: str
    word_count: int
    long_count: int
    unique_starts: int
    avg_len: float
    dup_penalty: int

    @property
    def score(self) -> float:
        return (
            4.5 * self.word_count
            + 7.0 * self.long_count
            + 2.2 * self.unique_starts
            + 1.2 * self.avg_len
            - 3.0 * self.dup_penalty
        )


@dataclass(frozen=True)
class FullMetrics:
    seed: str
    word_count: int
    long_count: int
    max_len: int
    unique_starts: int
    prefix2: int
    dup_penalty: int
    entropy: float

    @property
    def score(self) -> float:
        return (
            0.45 * self.word_count
            + 0.25 * self.long_count
            + 0.08 * self.max_len
            + 0.08 * self.unique_starts
            + 0.06 * self.prefix2
            + 0.08 * self.entropy
            - 0.20 * self.dup_penalty
        )


def passes_structure(seed: str) -> bool:
    """Cheap checks run before any search."""
    freq = Counter(seed)
    if max(freq.values()) > MAX_LETTER_REPEATS:
        return False
    vowels = sum(n for ch, n in freq.items() if ch in VOWELS)
    if not MIN_VOWELS <= vowels <= MAX_VOWELS:
        return False
    if len(freq) < MIN_DISTINCT_LETTERS:
        return False
    rares = sum(1 for ch in freq if ch in RARE_LETTERS)
    return rares <= MAX_RARE_LETTERS


def duplicate_penalty(seed: str) -> int:
    return sum(max(0, n - 2) for n in Counter(seed).values())


def letter_entropy(seed: str) -> float:
    """Shannon entropy (bits) of the letter distribution on the board."""
    if not seed:
        return 0.0
    _, counts = np.unique(np.array(list(seed)), return_counts=True)
    p = counts / counts.sum()
    return float(-(p * np.log2(p)).sum())


def prefix2_count(words) -> int:
    return len({w[:2] for w in words if len(w) >= 2})


def fast_eval(seed: str, words: set[str]) -> FastEval:
    total = len(words)
    return FastEval(
        seed=seed,
        word_count=total,
        long_count=sum(1 for w in words if len(w) >= LONG_WORD),
        unique_starts=len({w[0] for w in words}),
        avg_len=sum(len(w) for w in words) / total if total else 0.0,
        dup_penalty=duplicate_penalty(seed),
    )


def full_metrics(seed: str, words: set[str]) -> FullMetrics:
    return FullMetrics(
        seed=seed,
        word_count=len(words),
        long_count=sum(1 for w in words if len(w) >= LONG_WORD),
        max_len=max((len(w) for w in words), default=0),
        unique_starts=len({w[0] for w in words}),
        prefix2=prefix2_count(words),
        dup_penalty=duplicate_penalty(seed),
        entropy=letter_entropy(seed),
    )


def best_seed(trie: Trie, rng: random.Random | None = None, difficulty: Difficulty = NORMAL) -> str:
    """Pick a playable board. Deterministic for a given trie, rng state and difficulty."""
    if rng is None:
        rng = random.Random()

    timer = StageTimer(logging.DEBUG)
    shortlist: list[FastEval] = []
    rejected_structure = 0
    rejected_empty = 0

    # Fast pass (shallow search)
    for attempt in range(difficulty.attempts):
        seed = random_seed(rng)
        if not passes_structure(seed):
            rejected_structure += 1
            continue

        with timer.stage("fast_pass"):
            words = find_words(seed, trie, depth_limit=difficulty.shallow_depth)
        if not words:
            rejected_empty += 1
            continue

        if len(words) >= difficulty.early_accept:
            logger.info(
                "Early accept %s after %d attempts (%d words, difficulty=%s)",
                seed, attempt + 1, len(words), difficulty.name,
            )
            timer.log(attempts=attempt + 1)
            return seed

        evaluation = fast_eval(seed, words)
        shortlist.append(evaluation)
        shortlist.sort(key=lambda e: e.score, reverse=True)
        if len(shortlist) > difficulty.finalists:
            shortlist.pop()

    logger.debug(
        "Fast pass done: %d finalists, %d failed structure, %d without words",
        len(shortlist), rejected_structure, rejected_empty,
    )

    if not shortlist:
        logger.warning("No candidate passed the fast pass in %d attempts; using an ungraded board",
                       difficulty.attempts)
        return random_seed(rng)

    # Full pass (no depth limit) for the finalists
    best: FullMetrics | None = None
    for candidate in shortlist:
        with timer.stage("full_pass"):
            words = find_words(candidate.seed, trie)
        if not words:
            continue
        metrics = full_metrics(candidate.seed, words)
        if best is None or metrics.score > best.score:
            best = metrics

    timer.log(finalists=len(shortlist))

    if best is None:
        logger.info("Full pass found no words; keeping top fast-pass board %s", shortlist[0].seed)
        return shortlist[0].seed

    logger.info("Selected %s (%d words, score %.2f, difficulty=%s)",
                best.seed, best.word_count, best.score, difficulty.name)
    return best.seed
