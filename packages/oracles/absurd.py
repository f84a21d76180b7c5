"""
Absurd oracle: no secret at all.

Each guess is answered with the consistent feedback that is worst for the
guesser, using the same response ranking the minimax solver uses for its
server side.

Branch value:
  - default: how many words still fit after the response (more is worse
    for the guesser); ties prefer fewer exact marks, then fewer coloured ones
  - with a solved Solver attached: the solver's branch rank (remaining
    optimal guesses + 1), word count and the mark counts as tie-breaks
"""

from __future__ import annotations

from typing import List

from packages.engine import (
    Feedback, KnowledgeState, NO_SOLUTION, UNBOUNDED, Word,
    filter_candidates, worst_response,
)
from .base import BaseOracle, OracleError, register


@register
class AbsurdOracle(BaseOracle):
    id = "absurd"
    name = "Absurd (adversarial)"
    version = "1.0.0"

    def __init__(self):
        super().__init__()
        self.solver = None

    def reset(self, *, words: List[Word], seed: int | None = None, solver=None) -> None:
        super().reset(words=words, seed=seed)
        self.solver = solver

    def _count(self, state: KnowledgeState) -> int:
        return len(filter_candidates(self.words, state))

    def respond(self, state: KnowledgeState, guess: Word) -> Feedback:
        if self._count(state) == 0:
            raise OracleError("no word in the list matches the current state")

        def marks(fb: Feedback) -> tuple:
            return -fb.exact_count(), -fb.colored_count()

        if self.solver is None:
            def value(fb: Feedback, nxt: KnowledgeState) -> int:
                n = self._count(nxt)
                return n if n else NO_SOLUTION

            def tie_break(fb: Feedback, nxt: KnowledgeState) -> tuple:
                return marks(fb)
        else:
            def value(fb: Feedback, nxt: KnowledgeState) -> int:
                if self._count(nxt) == 0:
                    return NO_SOLUTION
                if nxt == state:
                    return UNBOUNDED
                rank = self.solver.run(nxt)
                return rank + 1 if rank >= 0 else rank

            def tie_break(fb: Feedback, nxt: KnowledgeState) -> tuple:
                return (self._count(nxt),) + marks(fb)

        best, rank = worst_response(state, guess, value, tie_break)
        if best is None:
            raise OracleError(f"no viable response to {guess} (rank {rank})")
        return best

