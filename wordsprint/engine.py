"""Process-wide puzzle engine.

The engine is built once per process: the word list is loaded, the trie is
built, and from then on both are read-only and shared by every search. All
collaborators go through the four operations here (``load_lexicon``,
``is_word_valid``, ``words_on_board`` and ``request_playable_grid``).
"""
from __future__ import annotations

import logging
import random
import threading
from collections import OrderedDict
from datetime import date

from wordsprint.daily import day_id, daily_seed
from wordsprint.evaluator import Difficulty, best_seed
from wordsprint.lexicon import Lexicon, load_lexicon
from wordsprint.pool import SeedPool
from wordsprint.round import Round
from wordsprint.settings import Settings
from wordsprint.solver import Trie, find_path, find_words

logger = logging.getLogger("wordsprint")

__all__ = ["WordEngine", "load_lexicon", "get_engine", "reset_engine"]

# Daily grids kept per engine; the oldest looked-up day is dropped first
DAILY_CACHE_SIZE = 32


def _difficulty(value: Difficulty | str) -> Difficulty:
    return value if isinstance(value, Difficulty) else Difficulty.from_name(value)


class WordEngine:
    def __init__(self, lexicon: Lexicon, min_word_length: int = 3):
        self.lexicon = lexicon
        self.trie = Trie.from_lexicon(lexicon, min_word_length)
        self.pool = SeedPool(self._generate)
        self._daily: OrderedDict[tuple[str, str], str] = OrderedDict()
        self._daily_lock = threading.Lock()

    @classmethod
    def from_settings(cls, cfg: Settings) -> WordEngine:
        lexicon = load_lexicon(cfg.DICTIONARY_PATH, cfg.MIN_WORD_LENGTH, cfg.Y_AS_VOWEL)
        return cls(lexicon, cfg.MIN_WORD_LENGTH)

    def _generate(self, difficulty: Difficulty) -> str:
        return best_seed(self.trie, random.Random(), difficulty)

    def is_word_valid(self, word: str) -> bool:
        return self.lexicon.is_valid(word)

    def words_on_board(self, seed: str, depth_limit: int | None = None) -> set[str]:
        return find_words(seed, self.trie, depth_limit)

    def word_paths(self, seed: str, words) -> dict[str, list[int]]:
        """One traceable cell path per word; words that cannot be traced are left out."""
        paths = {}
        for word in words:
            path = find_path(seed, word)
            if path is not None:
                paths[word] = path
        return paths

    def new_round(self, seed: str) -> Round:
        return Round(seed, self.lexicon)

    def request_playable_grid(self, difficulty: Difficulty | str = "normal",
                              rng: random.Random | None = None) -> str:
        """A good board: deterministic when ``rng`` is given, otherwise served from the pool."""
        difficulty = _difficulty(difficulty)
        if rng is not None:
            return best_seed(self.trie, rng, difficulty)
        return self.pool.pop_or_generate(difficulty)

    def daily_grid(self, day: date | str, difficulty: Difficulty | str = "normal") -> str:
        difficulty = _difficulty(difficulty)
        key = (day_id(day), difficulty.name)
        with self._daily_lock:
            cached = self._daily.get(key)
            if cached is not None:
                self._daily.move_to_end(key)
                return cached

        seed = daily_seed(self.trie, key[0], difficulty)
        with self._daily_lock:
            self._daily[key] = seed
            while len(self._daily) > DAILY_CACHE_SIZE:
                self._daily.popitem(last=False)
        logger.info("Daily grid for %s (%s): %s", key[0], difficulty.name, seed)
        return seed


_engine: WordEngine | None = None
_engine_lock = threading.Lock()


def get_engine(cfg: Settings | None = None) -> WordEngine:
    """Return the process-wide engine, building it on first use.

    Concurrent first callers block until the single build finishes and then
    all receive the same instance. A LexiconError from the build propagates.
    """
    global _engine
    if _engine is not None:
        return _engine
    with _engine_lock:
        if _engine is None:
            if cfg is None:
                from wordsprint.settings import settings as cfg
            _engine = WordEngine.from_settings(cfg)
    return _engine


def reset_engine():
    global _engine
    with _engine_lock:
        _engine = None
