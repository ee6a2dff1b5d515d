"""
Seed report for WordSprint boards.

Usage:
    python -m scripts.seed_report [--seed SEED | --date YYYYMMDD] [--difficulty NAME]

Examples:
    python -m scripts.seed_report --seed CATSAREXTENDSXXX
    python -m scripts.seed_report --date 20250714 --difficulty hard
    python -m scripts.seed_report --depth-limit 3 --seed CATSAREXTENDSXXX

This will:
  1. Load the dictionary and build the trie
  2. Take the given seed, derive the day's seed, or generate a fresh one
  3. Print the board, its full-pass metrics and the words found on it
"""
import argparse
import sys
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from wordsprint.settings import settings
from wordsprint.engine import WordEngine
from wordsprint.evaluator import DIFFICULTIES, Difficulty, full_metrics, passes_structure
from wordsprint.grid import is_valid_seed, seed_to_rows
from wordsprint.lexicon import LexiconError
from wordsprint.metrics import StageTimer


def main():
    parser = argparse.ArgumentParser(description="WordSprint Seed Report")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--seed", help="16-letter board to inspect")
    source.add_argument("--date", help="Report the daily board for this YYYYMMDD date")
    parser.add_argument("--difficulty", choices=sorted(DIFFICULTIES), default=settings.DEFAULT_DIFFICULTY,
                        help=f"Difficulty for generated boards (default: {settings.DEFAULT_DIFFICULTY})")
    parser.add_argument("--depth-limit", type=int, default=None,
                        help="Cap the word length searched (default: full search)")
    parser.add_argument("--dictionary", type=str, default=str(settings.DICTIONARY_PATH),
                        help=f"Word list to load (default: {settings.DICTIONARY_PATH})")
    parser.add_argument("--limit", type=int, default=40,
                        help="Max words to print, longest first (default: 40)")
    args = parser.parse_args()

    settings.DICTIONARY_PATH = Path(args.dictionary)
    difficulty = Difficulty.from_name(args.difficulty)
    timer = StageTimer()

    print("\n--- Dictionary ---")
    try:
        with timer.stage("load"):
            engine = WordEngine.from_settings(settings)
    except LexiconError as e:
        print(f"Error: {e}")
        sys.exit(1)
    print(f"Loaded {len(engine.lexicon)} words from {settings.DICTIONARY_PATH}")

    print("\n--- Board ---")
    with timer.stage("board"):
        if args.seed:
            seed = args.seed.strip().upper()
            if not is_valid_seed(seed):
                print(f"Error: seed must be 16 letters A-Z, got {args.seed!r}")
                sys.exit(2)
        elif args.date:
            try:
                seed = engine.daily_grid(args.date, difficulty)
            except ValueError as e:
                print(f"Error: {e}")
                sys.exit(2)
        else:
            seed = engine.request_playable_grid(difficulty)

    print(f"Seed: {seed}")
    for row in seed_to_rows(seed):
        print("  " + " ".join(row))
    print(f"Passes structural filters: {passes_structure(seed)}")

    print("\n--- Words ---")
    with timer.stage("search"):
        words = engine.words_on_board(seed, args.depth_limit)
    m = full_metrics(seed, words)
    print(f"Words: {m.word_count}  long (5+): {m.long_count}  longest: {m.max_len}")
    print(f"Unique starts: {m.unique_starts}  2-letter prefixes: {m.prefix2}")
    print(f"Duplicate penalty: {m.dup_penalty}  entropy: {m.entropy:.3f}  score: {m.score:.2f}")
    print()
    for w in sorted(words, key=lambda x: (-len(x), x))[: max(1, args.limit)]:
        print(f"  {w}")

    print(f"\nTimings: {timer.summary()}")


if __name__ == "__main__":
    main()
