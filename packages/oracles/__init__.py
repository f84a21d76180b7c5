from __future__ import annotations
from typing import List
from .base import BaseOracle, OracleError, REGISTRY, register

from . import standard  # noqa: F401
from . import absurd  # noqa: F401


def create_oracle(oracle_id: str) -> BaseOracle:
    """
    Factory: instantiate a registered oracle by id.
    """
    try:
        cls = REGISTRY[oracle_id]
    except KeyError as e:
        raise ValueError(
            f"Unknown oracle id: {oracle_id}. Available: {sorted(REGISTRY.keys())}") from e
    return cls()


def get_oracle_ids() -> List[str]:
    """
    Return all registered oracle ids (sorted for stable CLI help).
    """
    return sorted(REGISTRY.keys())
