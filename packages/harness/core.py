"""
Game harness primitives.

- GameSession: one game between an oracle and whoever supplies guesses;
  keeps the public KnowledgeState and the (guess, feedback) history.
- run_case:    play a whole game with a callable guesser (e.g. a solved
               Solver's best_guess) until the word is pinned down.

These functions are intentionally UI-agnostic so they can be reused by
a CLI app, a notebook, or tests without changes.
"""

from __future__ import annotations
import time
from typing import Callable, Dict, List, Optional, Tuple

from packages.engine import (
    Feedback, KnowledgeState, Word, apply_feedback, filter_candidates,
)
from packages.oracles import BaseOracle, OracleError

Guesser = Callable[[KnowledgeState], Optional[Word]]


class GameSession:
    def __init__(self, oracle: BaseOracle, words: List[Word]):
        self.oracle = oracle
        self.words = list(words)
        self.state = KnowledgeState.empty()
        self.history: List[Tuple[Word, Feedback]] = []

    def submit(self, guess: Word) -> Feedback:
        """
        Ask the oracle about `guess` and fold its answer into the state.

        Raises OracleError if the answer contradicts earlier answers; the
        state is left as it was in that case.
        """
        feedback = self.oracle.respond(self.state, guess)
        nxt = apply_feedback(self.state, guess, feedback)
        if nxt is None:
            raise OracleError(f"answer {feedback} to {guess} contradicts earlier feedback")
        self.state = nxt
        self.history.append((guess, feedback))
        return feedback

    @property
    def solved(self) -> bool:
        """True once the last guess is the fully resolved word."""
        if not self.history:
            return False
        return self.state.final() == self.history[-1][0]

    def candidates(self) -> List[Word]:
        return filter_candidates(self.words, self.state)

    def possible(self) -> Optional[Word]:
        """First word of the list still consistent with the state, if any."""
        for w in self.candidates():
            return w
        return None


def run_case(
        oracle: BaseOracle,
        guesser: Guesser,
        words: List[Word],
        *,
        max_turns: int | None = None,
        seed: int | None = None,
        **reset_kwargs,
) -> Dict:
    """
    Execute one game until the guesser names the resolved word, gives up
    (returns None), or the optional turn budget is exhausted.

    Args:
        oracle:        a BaseOracle; reset here with `words` and `seed`
        guesser:       state -> next guess (None to give up)
        words:         the fixed word list
        max_turns:     optional turn budget (the adversarial game has none)
        seed:          RNG seed for the oracle
        reset_kwargs:  forwarded to oracle.reset (e.g. secret=..., solver=...)

    Returns:
        dict with keys:
            success (bool), guesses (int), time_ms (float),
            history (list[(guess, pattern)])
    """
    oracle.reset(words=words, seed=seed, **reset_kwargs)
    session = GameSession(oracle, words)

    t0 = time.time()
    turn = 0
    while max_turns is None or turn < max_turns:
        guess = guesser(session.state)
        if guess is None:
            break
        turn += 1
        session.submit(guess)
        if session.solved:
            break

    dt = (time.time() - t0) * 1000.0
    return {
        "success": session.solved,
        "guesses": len(session.history),
        "time_ms": dt,
        "history": [(str(g), fb.to_pattern()) for g, fb in session.history],
    }
