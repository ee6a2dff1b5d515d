from __future__ import annotations

import logging
from typing import Iterable

from wordsprint.grid import CELL_COUNT, NEIGHBORS
from wordsprint.lexicon import LexiconError

logger = logging.getLogger("wordsprint")


class TrieNode:
    __slots__ = ("children", "is_word")

    def __init__(self):
        self.children: dict[str, TrieNode] = {}
        self.is_word: bool = False


class Trie:
    def __init__(self):
        self.root = TrieNode()

    def insert(self, word: str):
        node = self.root
        for ch in word:
            if ch not in node.children:
                node.children[ch] = TrieNode()
            node = node.children[ch]
        node.is_word = True

    def _walk(self, text: str) -> TrieNode | None:
        node = self.root
        for ch in text:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def contains(self, word: str) -> bool:
        node = self._walk(word.upper())
        return node is not None and node.is_word

    def has_prefix(self, prefix: str) -> bool:
        return self._walk(prefix.upper()) is not None

    @classmethod
    def from_lexicon(cls, lexicon: Iterable[str], min_length: int = 3) -> Trie:
        """Build the trie once from a loaded lexicon; never mutated afterwards."""
        words = list(lexicon)
        if not words:
            raise LexiconError("Lexicon must be loaded before building the trie")

        trie = cls()
        for word in words:
            if len(word) >= min_length:
                trie.insert(word)

        if not trie.root.children:
            raise LexiconError("Trie failed to build: no root letters")
        logger.info("Trie built with %d root letters", len(trie.root.children))
        return trie


def find_words(seed: str, trie: Trie, depth_limit: int | None = None) -> set[str]:
    """Enumerate every word on a 16-letter board by DFS with trie pruning.

    Each call keeps its own visited bitmask and letter buffer, so one trie can
    serve any number of concurrent searches. ``depth_limit`` caps the word
    length explored (for cheap approximate scoring); ``None`` searches fully.
    A seed that is not 16 characters long yields an empty set.
    """
    if not isinstance(seed, str) or len(seed) != CELL_COUNT:
        return set()

    cells = seed.upper()
    found: set[str] = set()
    path: list[str] = []

    def dfs(idx: int, node: TrieNode, visited: int):
        path.append(cells[idx])
        if node.is_word:
            found.add("".join(path))

        if depth_limit is None or len(path) < depth_limit:
            for nidx in NEIGHBORS[idx]:
                if visited & (1 << nidx):
                    continue
                child = node.children.get(cells[nidx])
                if child is not None:
                    dfs(nidx, child, visited | (1 << nidx))

        path.pop()

    for start in range(CELL_COUNT):
        first = trie.root.children.get(cells[start])
        if first is not None:
            dfs(start, first, 1 << start)

    return found


def find_path(seed: str, word: str) -> list[int] | None:
    """Return one list of distinct, adjacent cell indices spelling ``word``, or None."""
    if not isinstance(seed, str) or len(seed) != CELL_COUNT or not word:
        return None

    cells = seed.upper()
    target = word.upper()

    def dfs(idx: int, pos: int, visited: int, path: list[int]) -> list[int] | None:
        if cells[idx] != target[pos]:
            return None
        path.append(idx)
        if pos == len(target) - 1:
            return list(path)
        for nidx in NEIGHBORS[idx]:
            if not (visited & (1 << nidx)):
                result = dfs(nidx, pos + 1, visited | (1 << nidx), path)
                if result is not None:
                    return result
        path.pop()
        return None

    for start in range(CELL_COUNT):
        result = dfs(start, 0, 1 << start, [])
        if result is not None:
            return result
    return None
