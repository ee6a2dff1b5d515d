import itertools
import math
import random
import string

import pytest

from wordsprint.dice import random_seed
from wordsprint.evaluator import (
    EASY, HARD, NORMAL, Difficulty, FastEval, FullMetrics, best_seed, duplicate_penalty,
    fast_eval, full_metrics, letter_entropy, passes_structure, prefix2_count,
)
from wordsprint.lexicon import Lexicon
from wordsprint.solver import Trie, find_words


@pytest.fixture(scope="module")
def dense_trie() -> Trie:
    """Every acceptable 3-letter string is a word, so any board has plenty of words."""
    words = ("".join(p) for p in itertools.product(string.ascii_uppercase, repeat=3))
    return Trie.from_lexicon(Lexicon.build(words))


def test_difficulty_presets():
    assert (EASY.attempts, EASY.early_accept, EASY.finalists) == (80, 20, 3)
    assert (NORMAL.attempts, NORMAL.early_accept, NORMAL.finalists) == (140, 34, 5)
    assert (HARD.attempts, HARD.early_accept, HARD.finalists) == (220, 48, 7)
    assert all(d.shallow_depth == 7 for d in (EASY, NORMAL, HARD))


def test_difficulty_from_name():
    assert Difficulty.from_name("Hard") is HARD
    assert Difficulty.from_name(" normal ") is NORMAL
    with pytest.raises(ValueError):
        Difficulty.from_name("brutal")


def test_passes_structure():
    assert passes_structure("AEIOBCDFGHLMNRST")  # 4 vowels, 16 distinct
    assert not passes_structure("AAAAABCDEFGHIJKL")  # A five times
    assert not passes_structure("ABCDFGHLMNRSTVWE")  # 2 vowels
    assert not passes_structure("AEIOUAEIBCDFGHLM")  # 8 vowels
    assert not passes_structure("AAEEIIBBCCDDFFGG")  # 8 distinct letters
    assert passes_structure("AAEEIBBCCDDFFGGH")  # 9 distinct letters
    assert not passes_structure("QJXAEIOBCDFGHLMN")  # 3 rare letters
    assert passes_structure("QJAEIOBCDFGHLMNR")  # 2 rare letters


def test_duplicate_penalty():
    assert duplicate_penalty("ABCDEFGHIJKLMNOP") == 0
    assert duplicate_penalty("AABBCDEFGHIJKLMN") == 0
    assert duplicate_penalty("AAABBBBCDEFGHIJK") == 1 + 2


def test_letter_entropy():
    assert letter_entropy("ABCDEFGHIJKLMNOP") == pytest.approx(4.0)
    assert letter_entropy("A" * 16) == pytest.approx(0.0)
    assert letter_entropy("AAAAAAAABBBBBBBB") == pytest.approx(1.0)
    assert letter_entropy("") == 0.0


def test_prefix2_count():
    assert prefix2_count({"CAT", "CAR", "TEN", "TEND"}) == 2
    assert prefix2_count(set()) == 0


def test_fast_eval_score():
    words = {"CAT", "CARES", "TEND"}
    e = fast_eval("AAABCDEFGHIJKLMN", words)
    assert e.word_count == 3
    assert e.long_count == 1
    assert e.unique_starts == 2
    assert e.avg_len == pytest.approx(4.0)
    assert e.dup_penalty == 1
    assert e.score == pytest.approx(4.5 * 3 + 7.0 * 1 + 2.2 * 2 + 1.2 * 4.0 - 3.0 * 1)


def test_full_metrics_score():
    seed = "CATSAREXTENDSXXX"
    words = {"CAT", "CAR", "CARE", "TEN", "TEND", "EXTEND"}
    m = full_metrics(seed, words)
    assert m.word_count == 6
    assert m.long_count == 1
    assert m.max_len == 6
    assert m.unique_starts == 3
    assert m.prefix2 == 3
    assert m.dup_penalty == duplicate_penalty(seed)
    assert m.entropy == pytest.approx(letter_entropy(seed))
    expected = (0.45 * 6 + 0.25 * 1 + 0.08 * 6 + 0.08 * 3 + 0.06 * 3
                + 0.08 * m.entropy - 0.20 * m.dup_penalty)
    assert m.score == pytest.approx(expected)


def test_entropy_matches_formula():
    seed = "CATSAREXTENDSXXX"
    counts = {ch: seed.count(ch) for ch in set(seed)}
    expected = -sum(c / 16 * math.log2(c / 16) for c in counts.values())
    assert letter_entropy(seed) == pytest.approx(expected)


def test_eval_records_are_frozen():
    e = FastEval("A" * 16, 1, 0, 1, 3.0, 0)
    with pytest.raises(AttributeError):
        e.word_count = 2
    m = FullMetrics("A" * 16, 1, 0, 3, 1, 1, 0, 0.0)
    with pytest.raises(AttributeError):
        m.entropy = 1.0


def test_early_accept_returns_first_rich_candidate(dense_trie):
    difficulty = Difficulty("test", attempts=50, early_accept=1, shallow_depth=3, finalists=3)
    chosen = best_seed(dense_trie, random.Random(11), difficulty)

    # Replay the same random stream: the first structurally sound board with words wins
    rng = random.Random(11)
    for _ in range(difficulty.attempts):
        seed = random_seed(rng)
        if passes_structure(seed) and find_words(seed, dense_trie, depth_limit=3):
            break
    assert chosen == seed


def test_full_pass_picks_a_finalist(dense_trie):
    difficulty = Difficulty("test", attempts=30, early_accept=10**6, shallow_depth=3, finalists=3)
    chosen = best_seed(dense_trie, random.Random(7), difficulty)
    assert len(chosen) == 16
    assert passes_structure(chosen)
    assert find_words(chosen, dense_trie)

    # It must be the best full score among the boards the fast pass could have kept
    rng = random.Random(7)
    candidates = []
    for _ in range(difficulty.attempts):
        seed = random_seed(rng)
        if passes_structure(seed):
            words = find_words(seed, dense_trie, depth_limit=3)
            if words:
                candidates.append(fast_eval(seed, words))
    finalists = sorted(candidates, key=lambda e: e.score, reverse=True)[:difficulty.finalists]
    best = max(finalists, key=lambda e: full_metrics(e.seed, find_words(e.seed, dense_trie)).score)
    assert chosen == best.seed


def test_no_attempts_falls_back_to_random_board(dense_trie):
    difficulty = Difficulty("test", attempts=0, early_accept=1, shallow_depth=3, finalists=3)
    assert best_seed(dense_trie, random.Random(5), difficulty) == random_seed(random.Random(5))


def test_no_words_falls_back_to_random_board(dense_trie):
    # Depth 2 never reaches a 3-letter word, so every candidate is rejected
    difficulty = Difficulty("test", attempts=10, early_accept=1, shallow_depth=2, finalists=3)
    chosen = best_seed(dense_trie, random.Random(9), difficulty)
    assert len(chosen) == 16


def test_best_seed_is_deterministic(dense_trie):
    difficulty = Difficulty("test", attempts=20, early_accept=10**6, shallow_depth=3, finalists=2)
    a = best_seed(dense_trie, random.Random("day"), difficulty)
    b = best_seed(dense_trie, random.Random("day"), difficulty)
    assert a == b


def test_best_seed_has_words_with_real_dictionary():
    from wordsprint.lexicon import load_lexicon
    from wordsprint.settings import Settings

    trie = Trie.from_lexicon(load_lexicon(Settings().DICTIONARY_PATH))
    seed = best_seed(trie, random.Random(42), EASY)
    assert len(seed) == 16
    assert find_words(seed, trie)
