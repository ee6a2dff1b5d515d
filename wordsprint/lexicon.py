from __future__ import annotations

import gzip
import logging
from pathlib import Path
from typing import Iterable, Iterator

logger = logging.getLogger("wordsprint")

VOWELS = frozenset("AEIOU")


class LexiconError(RuntimeError):
    """The word list is missing, unreadable or produced no usable words."""


def is_acceptable(word: str, min_length: int = 3, y_as_vowel: bool = True) -> bool:
    """Check one normalized (trimmed, uppercase) candidate against the word rules.

    A word needs at least ``min_length`` ASCII letters, one vowel and one
    consonant. With ``y_as_vowel`` a word without any of A/E/I/O/U may use
    Y as its vowel ("MYTH", "XYZ"); otherwise Y is always a consonant.
    """
    if len(word) < min_length:
        return False
    if not all("A" <= ch <= "Z" for ch in word):
        return False

    vowels = sum(1 for ch in word if ch in VOWELS)
    if vowels == 0 and y_as_vowel:
        vowels = word.count("Y")
    return 0 < vowels < len(word)


class Lexicon:
    """Immutable set of valid uppercase words."""

    __slots__ = ("_words",)

    def __init__(self, words: Iterable[str] = ()):
        self._words: frozenset[str] = frozenset(words)

    @classmethod
    def build(cls, raw_words: Iterable[str], min_length: int = 3, y_as_vowel: bool = True) -> Lexicon:
        accepted = set()
        for raw in raw_words:
            word = raw.strip().upper()
            if is_acceptable(word, min_length, y_as_vowel):
                accepted.add(word)
        return cls(accepted)

    def is_valid(self, word: str | None) -> bool:
        if not word:
            return False
        return word.strip().upper() in self._words

    @property
    def words(self) -> frozenset[str]:
        return self._words

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_valid(word)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return f"Lexicon({len(self._words)} words)"


def _read_lines(path: Path) -> list[str]:
    if path.suffix == ".gz":
        with gzip.open(path, "rt", encoding="utf-8") as f:
            return f.read().splitlines()
    with open(path, "r", encoding="utf-8") as f:
        return f.read().splitlines()


def load_lexicon(path: str | Path, min_length: int = 3, y_as_vowel: bool = True) -> Lexicon:
    """Load a one-word-per-line file (optionally gzipped) into a Lexicon.

    Raises LexiconError if the file cannot be read or yields no words: without
    a dictionary there is nothing to search.
    """
    path = Path(path)
    try:
        lines = _read_lines(path)
    except (OSError, UnicodeDecodeError) as e:
        raise LexiconError(f"Could not read word list {path}: {e}") from e

    lexicon = Lexicon.build(lines, min_length, y_as_vowel)
    if not lexicon:
        raise LexiconError(f"Word list {path} contains no usable words")

    logger.info("Dictionary loaded: %d words from %s", len(lexicon), path)
    return lexicon
