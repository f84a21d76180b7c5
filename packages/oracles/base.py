from __future__ import annotations
import random
from typing import Dict, List, Type

from packages.engine import Feedback, KnowledgeState, Word

# ---- Global oracle registry ----
REGISTRY: Dict[str, Type["BaseOracle"]] = {}


def register(cls: Type["BaseOracle"]) -> Type["BaseOracle"]:
    """
    Decorator: @register on an oracle class adds it to REGISTRY by its `id`.
    """
    oid = getattr(cls, "id", None)
    if not oid:
        raise ValueError(f"{cls.__name__} must define a non-empty `id`")
    if oid in REGISTRY:
        raise ValueError(f"Duplicate oracle id: {oid}")
    REGISTRY[oid] = cls
    return cls


class OracleError(RuntimeError):
    """The oracle cannot answer consistently (e.g. no word fits the state)."""


# ---- Base class that oracles inherit ----
class BaseOracle:
    """Answers guesses with feedback. Subclasses decide how."""
    id = "base"
    name = "Base"
    version = "0.0.0"

    def __init__(self):
        self.words: List[Word] = []
        self.rng = random.Random()

    def reset(self, *, words: List[Word], seed: int | None = None) -> None:
        if not words:
            raise ValueError("word list is empty")
        self.words = list(words)
        if seed is not None:
            self.rng.seed(seed)

    def respond(self, state: KnowledgeState, guess: Word) -> Feedback:
        raise NotImplementedError("Override in subclass")
