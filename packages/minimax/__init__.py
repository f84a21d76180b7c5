from .checkpoint import CheckpointStore, CheckpointError, FORMAT_VERSION, wordlist_fingerprint
from .solver import Solver, SolverStalled, RoundStats, new_solver

__all__ = [
    "Solver", "SolverStalled", "RoundStats", "new_solver",
    "CheckpointStore", "CheckpointError", "FORMAT_VERSION", "wordlist_fingerprint",
]
