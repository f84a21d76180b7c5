"""
Standard oracle: the ordinary game.

A secret is drawn uniformly from the word list (seeded RNG) on reset and
every guess is answered by plain scoring against it.
"""

from __future__ import annotations

from typing import List, Optional

from packages.engine import Feedback, KnowledgeState, Word, matches, score
from .base import BaseOracle, OracleError, register


@register
class StandardOracle(BaseOracle):
    id = "standard"
    name = "Standard (fixed secret)"
    version = "1.0.0"

    def __init__(self):
        super().__init__()
        self.secret: Optional[Word] = None

    def reset(self, *, words: List[Word], seed: int | None = None,
              secret: Word | None = None) -> None:
        super().reset(words=words, seed=seed)
        self.secret = secret if secret is not None else self.words[self.rng.randrange(len(self.words))]

    def respond(self, state: KnowledgeState, guess: Word) -> Feedback:
        if self.secret is None:
            raise OracleError("reset() must be called before respond()")
        # Every earlier answer came from the secret, so it must still fit.
        if not matches(state, self.secret):
            raise OracleError(f"state no longer matches secret {self.secret}")
        return score(self.secret, guess)
