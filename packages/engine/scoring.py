"""
Wordle scoring (feedback) for a single (secret, guess) pair.

This implementation is:
  - duplicate-safe (respects true letter multiplicities in the secret)
  - deterministic (same inputs -> same Feedback)

Algorithm (two-pass, canonical for Wordle):
  1) First pass marks all exact positions and counts the remaining
     (unmatched) letters of the secret.
  2) Second pass marks a guess letter displaced only if the secret still
     has an unconsumed copy of it.
"""

from __future__ import annotations

from collections import Counter

from .feedback import Feedback, Mark
from .words import Word


def score(secret: Word, guess: Word) -> Feedback:
    """
    Compute the feedback the real game gives for `guess` when the hidden
    word is `secret`.

    Examples (pattern form):
      score(ABASE, ABIDE) -> "GG--G"
      score(LEVEL, BELLE) -> "-GYYY"
    """
    marks = [Mark.ABSENT] * len(guess)

    # Pass 1: exact matches; everything else in the secret stays available.
    remaining = Counter()
    for i, (g, s) in enumerate(zip(guess, secret)):
        if g == s:
            marks[i] = Mark.EXACT
        else:
            remaining[s] += 1

    # Pass 2: displaced marks, capped by the secret's leftover copies.
    for i, g in enumerate(guess):
        if marks[i] is Mark.EXACT:
            continue
        if remaining[g] > 0:
            marks[i] = Mark.DISPLACED
            remaining[g] -= 1

    return Feedback(tuple(marks))
