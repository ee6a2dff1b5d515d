from __future__ import annotations

import logging
from typing import Sequence

from wordsprint.grid import GRID_SIZE, cell_index, is_valid_path, seed_to_rows
from wordsprint.lexicon import Lexicon

logger = logging.getLogger("wordsprint")

MIN_SUBMIT_LENGTH = 3


class Round:
    """One play session on a board: path submissions, accepted words and score."""

    def __init__(self, seed: str, lexicon: Lexicon):
        self.seed = seed
        self.rows = seed_to_rows(seed)
        self._lexicon = lexicon
        self._accepted: list[str] = []
        self._score = 0
        self._finished = False

    @property
    def accepted(self) -> list[str]:
        return list(self._accepted)

    @property
    def score(self) -> int:
        return self._score

    @property
    def finished(self) -> bool:
        return self._finished

    def word_for(self, path: Sequence[tuple[int, int]]) -> str | None:
        """Letters along ``path`` of (row, col) cells, or None if the path is not a legal trace."""
        if any(not (0 <= r < GRID_SIZE and 0 <= c < GRID_SIZE) for r, c in path):
            return None
        indices = [cell_index(r, c) for r, c in path]
        if not is_valid_path(indices):
            return None
        return "".join(self.rows[r][c] for r, c in path)

    def submit(self, path: Sequence[tuple[int, int]]) -> str | None:
        if self._finished:
            return None
        word = self.word_for(path)
        if word is None or len(word) < MIN_SUBMIT_LENGTH:
            return None
        if word in self._accepted or not self._lexicon.is_valid(word):
            logger.debug("Rejected %s on %s", word, self.seed)
            return None

        self._accepted.append(word)
        self._score += len(word)
        return word

    def finish(self):
        self._finished = True
