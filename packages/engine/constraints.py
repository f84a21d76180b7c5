"""
Candidate filtering against a KnowledgeState.

Given:
  - a pool of words (the fixed word list)
  - the knowledge accumulated so far

Return:
  - the words that could still be the hidden word.

This is the step that turns knowledge into a shrinking candidate set. The
solver also uses it to prune responses that leave no possible word.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, List

from .state import KnowledgeState
from .words import UNKNOWN, Word


def matches(state: KnowledgeState, word: Word) -> bool:
    """
    True iff `word` is consistent with `state`:
      - every resolved position holds the resolved letter
      - no letter sits at a position excluded for it
      - every letter occurs at least min_count times, exactly that many
        when the bound is exact
    """
    for i, c in enumerate(word):
        r = state.resolved[i]
        if r != UNKNOWN and r != c:
            return False
        if state.letters[c].excluded >> i & 1:
            return False

    occurs = Counter(word)
    for c, facts in enumerate(state.letters):
        n = occurs[c]
        if n < facts.min_count or (facts.exact and n != facts.min_count):
            return False
    return True


def filter_candidates(words: Iterable[Word], state: KnowledgeState) -> List[Word]:
    """Words consistent with `state`, order preserved as in `words`."""
    return [w for w in words if matches(state, w)]
