from __future__ import annotations

import logging
import threading
from typing import Callable

from wordsprint.evaluator import NORMAL, Difficulty

logger = logging.getLogger("wordsprint")


class SeedPool:
    """Thread-safe cache of pre-generated boards, one stack per difficulty.

    ``generate(difficulty)`` runs the full selection pipeline. It is always
    called outside the cache lock so a slow generation never blocks a pop.
    At most one refill runs per difficulty; a concurrent ``ensure`` for the
    same difficulty returns at once instead of waiting for it.
    """

    def __init__(self, generate: Callable[[Difficulty], str]):
        self._generate = generate
        self._cache: dict[str, list[str]] = {}
        self._lock = threading.Lock()
        self._fill_locks: dict[str, threading.Lock] = {}

    def pop_or_generate(self, difficulty: Difficulty = NORMAL) -> str:
        with self._lock:
            cached = self._cache.get(difficulty.name)
            if cached:
                seed = cached.pop()
                logger.debug("Served %s from %s pool (%d left)", seed, difficulty.name, len(cached))
                return seed
        logger.info("Seed pool empty for %s, generating synchronously", difficulty.name)
        return self._generate(difficulty)

    def _fill_lock(self, difficulty: Difficulty) -> threading.Lock:
        with self._lock:
            return self._fill_locks.setdefault(difficulty.name, threading.Lock())

    def ensure(self, target: int = 2, difficulty: Difficulty = NORMAL) -> int:
        """Top the ``difficulty`` stack up to ``target`` seeds; returns how many were added.

        Returns 0 without generating when another refill of the same
        difficulty is already running.
        """
        fill_lock = self._fill_lock(difficulty)
        if not fill_lock.acquire(blocking=False):
            logger.debug("Refill for %s already running, skipping", difficulty.name)
            return 0

        added = 0
        try:
            while self.size(difficulty) < target:
                seed = self._generate(difficulty)
                with self._lock:
                    self._cache.setdefault(difficulty.name, []).append(seed)
                added += 1
        finally:
            fill_lock.release()

        if added:
            logger.info("Seed pool refilled with %d %s seed(s), size=%d",
                        added, difficulty.name, self.size(difficulty))
        return added

    def ensure_in_background(self, target: int = 2, difficulty: Difficulty = NORMAL) -> threading.Thread:
        thread = threading.Thread(
            target=self.ensure, args=(target, difficulty), name="seed-pool-fill", daemon=True
        )
        thread.start()
        return thread

    def size(self, difficulty: Difficulty) -> int:
        with self._lock:
            return len(self._cache.get(difficulty.name, ()))

    def snapshot(self, difficulty: Difficulty | None = None) -> list[str]:
        """Cached seeds, oldest first; every difficulty when none is given."""
        with self._lock:
            if difficulty is not None:
                return list(self._cache.get(difficulty.name, ()))
            return [seed for stack in self._cache.values() for seed in stack]

    def __len__(self) -> int:
        with self._lock:
            return sum(len(stack) for stack in self._cache.values())
