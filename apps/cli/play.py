# apps/cli/play.py
"""
Play a game in the terminal against one of the registered oracles.

  - standard: a secret word is drawn from the list and answered honestly
  - absurd:   no secret; every answer is the worst consistent one

After each guess the full history is printed as "GUESS PATTERN" lines
(G = exact, Y = displaced, - = absent) followed by one still-possible word.

Usage:
    python -m apps.cli.play absurd --wordlist data/words.txt
    python -m apps.cli.play standard --wordlist data/words.txt --seed 7
"""

from __future__ import annotations

import argparse
import sys

from packages.datasets import load_wordlist
from packages.engine import InvalidWordError, Word, validate_guess
from packages.harness import GameSession
from packages.oracles import OracleError, create_oracle, get_oracle_ids


def _read_guess(allowed: set) -> Word | None:
    """Prompt until a valid guess is entered; None on end of input."""
    while True:
        try:
            line = input("Enter guess: ").strip().upper()
        except EOFError:
            return None
        problem = validate_guess(line, allowed)
        if problem is None:
            return Word.from_text(line)
        print(f"Invalid line: {problem}")


def main() -> int:
    ap = argparse.ArgumentParser(description="Play Wordle against an oracle")
    ap.add_argument("oracle", choices=get_oracle_ids(), help="answering strategy")
    ap.add_argument("--wordlist", required=True,
                    help="word list: 6-byte records (5 uppercase letters + newline)")
    ap.add_argument("--seed", type=int, help="RNG seed (standard oracle secret)")
    ap.add_argument("--show-state", action="store_true",
                    help="print the deduced knowledge after every guess")
    args = ap.parse_args()

    try:
        words = load_wordlist(args.wordlist)
    except (FileNotFoundError, InvalidWordError) as e:
        print(f"Error loading wordlist: {e}", file=sys.stderr)
        return 1
    if not words:
        print("Error loading wordlist", file=sys.stderr)
        return 1

    oracle = create_oracle(args.oracle)
    oracle.reset(words=words, seed=args.seed)
    session = GameSession(oracle, words)
    allowed = set(words)

    while not session.solved:
        for g, fb in session.history:
            print(f"{g} {fb.to_pattern()}")
        guess = _read_guess(allowed)
        if guess is None:
            return 1
        try:
            session.submit(guess)
        except OracleError as e:
            print(f"Oracle error: {e}", file=sys.stderr)
            return 2
        if args.show_state:
            print(session.state.describe())

        if session.solved:
            break
        possible = session.possible()
        if possible is None:
            print("No possible words!!")
        else:
            print(f"Possible: {possible}")

    for g, fb in session.history:
        print(f"{g} {fb.to_pattern()}")
    print(f"Good job! Solved in {len(session.history)} guesses")
    return 0


if __name__ == "__main__":
    sys.exit(main())
