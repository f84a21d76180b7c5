"""
Response ranking shared by the minimax solver and the adversarial oracle.

Both answer the same question: "given this state and this guess, which
feedback is worst for the guesser?" They differ only in how a branch is
valued (solver: player rank of the successor + 1; oracle: how many words
survive). Keeping the enumeration here means the offline solver and the
online adversary are literally the same algorithm.

Rank classes:
  - n >= 0      : a finite value
  - NO_SOLUTION : nothing determinable along this branch
  - PENDING     : value not computed yet (transient, never persisted)
  - UNBOUNDED   : the branch lets the server stall the guesser forever
"""

from __future__ import annotations

import sys
from typing import Callable, Iterator, Optional, Tuple

from .feedback import Feedback, all_feedbacks
from .state import KnowledgeState, apply_feedback
from .words import Word

NO_SOLUTION = -1
PENDING = -2
UNBOUNDED = sys.maxsize

ValueFn = Callable[[Feedback, KnowledgeState], int]
TieBreakFn = Callable[[Feedback, KnowledgeState], Tuple]


def successors(state: KnowledgeState, guess: Word) -> Iterator[Tuple[Feedback, KnowledgeState]]:
    """Every non-rejected (feedback, successor) pair, in enumeration order."""
    for fb in all_feedbacks():
        nxt = apply_feedback(state, guess, fb)
        if nxt is not None:
            yield fb, nxt


def worst_response(
        state: KnowledgeState,
        guess: Word,
        value: ValueFn,
        tie_break: Optional[TieBreakFn] = None,
) -> Tuple[Optional[Feedback], int]:
    """
    Maximise value(feedback, successor) over the consistent responses.

    Returns (feedback, rank):
      - (fb, UNBOUNDED) as soon as any branch is unbounded
      - (None, PENDING) if any branch is pending (all pending branches are
        still visited, so a caller that queues work from `value` sees every
        missing dependency in one pass)
      - (None, NO_SOLUTION) if no branch has a finite value
      - otherwise the best feedback and its value; ties go to the larger
        tie_break(...) tuple, then to the earliest in enumeration order
    """
    pending = False
    best: Optional[Feedback] = None
    best_key: Optional[Tuple] = None

    for fb, nxt in successors(state, guess):
        rank = value(fb, nxt)
        if rank == UNBOUNDED:
            return fb, UNBOUNDED
        if rank == PENDING:
            pending = True
            continue
        if rank == NO_SOLUTION or pending:
            continue
        key = (rank,) + (tie_break(fb, nxt) if tie_break else ())
        if best_key is None or key > best_key:
            best, best_key = fb, key

    if pending:
        return None, PENDING
    if best_key is None:
        return None, NO_SOLUTION
    return best, best_key[0]
