"""
Minimax value of the adversarial guessing game, by round-based relaxation.

Two valuations call each other:
  - player value of a state    = min over guesses w of server value (state, w)
  - server value of (state, w) = max over consistent feedbacks r of
                                 player value(apply(state, w, r)) + 1
                                 (0 when w is already the only possible word)

The call graph is far too deep and wide for plain recursion, so nothing here
recurses. An evaluation that hits an uncached dependency puts it on the other
table's work queue and reports PENDING. run() then drains both queues in
rounds until every queued entry has been committed, checkpointing the tables
after each round.

Conventions:
  - A state with no candidate words is NO_SOLUTION; one with exactly one
    candidate is worth 0 (that word is known, guessing it ends the game).
  - A response that leaves the state unchanged means the server can repeat
    it forever, so that guess is NO_SOLUTION for the player.
  - Server entries depend on the successor state actually reached, not on
    the state they were asked about.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Deque, Dict, Iterable, List, Optional, Set, Tuple

from packages.engine import (
    Feedback, KnowledgeState, NO_SOLUTION, PENDING, UNBOUNDED, Word,
    filter_candidates, matches, worst_response,
)
from .checkpoint import CheckpointStore

logger = logging.getLogger(__name__)

ServerKey = Tuple[KnowledgeState, Word]


class SolverStalled(RuntimeError):
    """Work is still queued but the fixpoint iteration stopped making progress."""


@dataclass
class RoundStats:
    round: int
    player_done: int
    server_done: int
    player_queue: int
    server_queue: int
    committed: int


class Solver:
    def __init__(self, words: Iterable[Word], *,
                 store: Optional[CheckpointStore] = None,
                 max_rounds: Optional[int] = None,
                 on_round: Optional[Callable[[RoundStats], None]] = None):
        self.words: List[Word] = list(words)
        if not self.words:
            raise ValueError("word list is empty")
        self.store = store
        self.max_rounds = max_rounds
        self.on_round = on_round

        # memo tables (the durable state of the computation)
        self.player_cache: Dict[KnowledgeState, int] = {}
        self.server_cache: Dict[ServerKey, int] = {}

        # work queues plus membership sets so each entry is queued once
        self._player_queue: Deque[KnowledgeState] = deque()
        self._server_queue: Deque[ServerKey] = deque()
        self._player_waiting: Set[KnowledgeState] = set()
        self._server_waiting: Set[ServerKey] = set()
        self._discovered = 0

        self.rounds = 0

    # ---- persistence ----

    def resume(self) -> bool:
        """Merge the checkpointed tables into this solver. False if there is none."""
        if self.store is None or not self.store.exists():
            return False
        player, server = self.store.load()
        self.player_cache.update(player)
        self.server_cache.update(server)
        logger.info("resumed from %s: %d player, %d server entries",
                    self.store.path, len(player), len(server))
        return True

    # ---- helpers ----

    def candidates(self, state: KnowledgeState) -> List[Word]:
        return filter_candidates(self.words, state)

    def _sole_candidate(self, state: KnowledgeState) -> Tuple[int, Optional[Word]]:
        """(count capped at 2, the word when count == 1)"""
        found: Optional[Word] = None
        for w in self.words:
            if matches(state, w):
                if found is not None:
                    return 2, None
                found = w
        return (0, None) if found is None else (1, found)

    def _settled_value(self, state: KnowledgeState) -> Optional[int]:
        n, _ = self._sole_candidate(state)
        if n == 0:
            return NO_SOLUTION
        if n == 1:
            return 0
        return None

    def _enqueue_player(self, state: KnowledgeState) -> None:
        if state in self._player_waiting or state in self.player_cache:
            return
        self._player_waiting.add(state)
        self._player_queue.append(state)
        self._discovered += 1

    def _enqueue_server(self, key: ServerKey) -> None:
        if key in self._server_waiting or key in self.server_cache:
            return
        self._server_waiting.add(key)
        self._server_queue.append(key)
        self._discovered += 1

    def _player_lookup(self, state: KnowledgeState) -> int:
        rank = self.player_cache.get(state)
        if rank is not None:
            return rank
        rank = self._settled_value(state)
        if rank is not None:
            return rank
        self._enqueue_player(state)
        return PENDING

    # ---- single evaluations (never recurse) ----

    def _player_decide(self, state: KnowledgeState) -> int:
        settled = self._settled_value(state)
        if settled is not None:
            return settled

        best: Optional[int] = None
        pending = False
        for w in self.words:
            key = (state, w)
            rank = self.server_cache.get(key)
            if rank is None:
                pending = True
                self._enqueue_server(key)
                continue
            if rank != NO_SOLUTION and (best is None or rank < best):
                best = rank

        if pending:
            return PENDING
        return NO_SOLUTION if best is None else best

    def _branch_value(self, state: KnowledgeState, nxt: KnowledgeState) -> int:
        if nxt == state:
            return UNBOUNDED
        rank = self._player_lookup(nxt)
        if rank in (PENDING, NO_SOLUTION):
            return rank
        return rank + 1

    def _server_decide(self, state: KnowledgeState, word: Word) -> int:
        if state.final() == word:
            return 0
        n, sole = self._sole_candidate(state)
        if n == 1 and sole == word:
            return 0

        def value(fb: Feedback, nxt: KnowledgeState) -> int:
            return self._branch_value(state, nxt)

        _, rank = worst_response(state, word, value)
        return NO_SOLUTION if rank == UNBOUNDED else rank

    def player_value(self, state: KnowledgeState) -> int:
        """Cached value, else one attempt (committed unless PENDING)."""
        rank = self.player_cache.get(state)
        if rank is None:
            rank = self._player_decide(state)
            if rank != PENDING:
                self.player_cache[state] = rank
        return rank

    def server_value(self, state: KnowledgeState, word: Word) -> int:
        """Cached value, else one attempt (committed unless PENDING)."""
        key = (state, word)
        rank = self.server_cache.get(key)
        if rank is None:
            rank = self._server_decide(state, word)
            if rank != PENDING:
                self.server_cache[key] = rank
        return rank

    # ---- fixpoint ----

    def _drain_server(self) -> int:
        committed = 0
        still_waiting: List[ServerKey] = []
        while self._server_queue:
            key = self._server_queue.popleft()
            if key in self.server_cache:
                self._server_waiting.discard(key)
                continue
            rank = self._server_decide(*key)
            if rank == PENDING:
                still_waiting.append(key)
                continue
            self.server_cache[key] = rank
            self._server_waiting.discard(key)
            committed += 1
        self._server_queue.extend(still_waiting)
        return committed

    def _drain_player(self) -> int:
        committed = 0
        still_waiting: List[KnowledgeState] = []
        while self._player_queue:
            state = self._player_queue.popleft()
            if state in self.player_cache:
                self._player_waiting.discard(state)
                continue
            rank = self._player_decide(state)
            if rank == PENDING:
                still_waiting.append(state)
                continue
            self.player_cache[state] = rank
            self._player_waiting.discard(state)
            committed += 1
        self._player_queue.extend(still_waiting)
        return committed

    def pending_work(self) -> Tuple[int, int]:
        return len(self._player_queue), len(self._server_queue)

    def run(self, root: Optional[KnowledgeState] = None) -> int:
        """
        Compute the player value of `root` (default: the empty state).

        Each round drains the server queue, then the player queue, then
        checkpoints both tables. Raises SolverStalled if a round neither
        commits an entry nor discovers new work, or when max_rounds is hit.
        """
        if root is None:
            root = KnowledgeState.empty()

        rank = self.player_value(root)
        logger.info("initial attempt returned %d", rank)
        if rank != PENDING:
            return rank
        self._enqueue_player(root)

        while self._player_queue or self._server_queue:
            if self.max_rounds is not None and self.rounds >= self.max_rounds:
                raise SolverStalled(f"round limit {self.max_rounds} reached with work pending")

            self.rounds += 1
            discovered = self._discovered
            committed = self._drain_server()
            committed += self._drain_player()

            if self.store is not None:
                self.store.save(self.player_cache, self.server_cache)

            stats = RoundStats(
                round=self.rounds,
                player_done=len(self.player_cache),
                server_done=len(self.server_cache),
                player_queue=len(self._player_queue),
                server_queue=len(self._server_queue),
                committed=committed,
            )
            logger.info("round %d: player done %d, server done %d, player queue %d, "
                        "server queue %d", stats.round, stats.player_done, stats.server_done,
                        stats.player_queue, stats.server_queue)
            if self.on_round is not None:
                self.on_round(stats)

            if committed == 0 and self._discovered == discovered:
                raise SolverStalled(
                    f"no progress in round {self.rounds}: "
                    f"{stats.player_queue} player / {stats.server_queue} server entries stuck")

        logger.info("queues are empty")
        return self.player_cache[root]

    # ---- queries on solved tables ----

    def opening_ranks(self, state: Optional[KnowledgeState] = None) -> List[Tuple[Word, int]]:
        """(guess, server value) for every word from `state`, solving first if needed."""
        if state is None:
            state = KnowledgeState.empty()
        if state not in self.player_cache:
            self.run(state)
        return [(w, self.server_value(state, w)) for w in self.words]

    def best_guess(self, state: KnowledgeState) -> Optional[Word]:
        """
        A guess achieving the player value of `state`, first in list order
        among ties. None if no guess leads anywhere.
        """
        n, sole = self._sole_candidate(state)
        if n == 0:
            return None
        if n == 1:
            return sole

        if state not in self.player_cache:
            self.run(state)
        target = self.player_cache[state]
        if target == NO_SOLUTION:
            return None
        for w in self.words:
            if self.server_cache.get((state, w)) == target:
                return w
        return None


def new_solver(words: Iterable[Word], *, checkpoint: Path | str | None = None,
               resume: bool = False, **kwargs) -> Solver:
    """Build a Solver, optionally backed by (and resumed from) a checkpoint file."""
    words = list(words)
    store = CheckpointStore(checkpoint, words) if checkpoint is not None else None
    solver = Solver(words, store=store, **kwargs)
    if resume:
        solver.resume()
    return solver
