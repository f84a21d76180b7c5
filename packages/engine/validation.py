"""
Lightweight guess validation for interactive drivers.

A guess is acceptable iff:
  - it has exactly 5 characters
  - every character is in 'A'..'Z'
  - it exists in the provided `allowed` list

The engine itself works on Word values; this module is only the text gate
in front of Word.from_text.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .words import WORD_LENGTH, Word


def validate_guess(text: str, allowed: Iterable[Word]) -> Optional[str]:
    """
    Return None when `text` is a valid guess, else a short reason.

    Notes:
      - Case must already be normalised; lowercase counts as out of range.
      - `allowed` may be a large list; callers in a loop should pass a set.
    """
    if len(text) > WORD_LENGTH:
        return "too many characters"
    if len(text) < WORD_LENGTH:
        return "too few characters"
    if any(not "A" <= ch <= "Z" for ch in text):
        return "characters must be in range 'A'-'Z'"

    allowed_set = allowed if isinstance(allowed, (set, frozenset)) else set(allowed)
    if Word.from_text(text) not in allowed_set:
        return "word is not in the wordlist"
    return None
