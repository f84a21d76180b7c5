"""
Durable storage for the solver's two memo tables.

File format (version 1), a numpy .npz archive with these arrays:
  - version         : 0-d int, FORMAT_VERSION
  - fingerprint     : 0-d str, SHA-256 of the word list the ranks belong to
  - player_states   : (n, 83) uint8, KnowledgeState.to_bytes() rows
  - player_ranks    : (n,)    int64
  - server_states   : (m, 83) uint8
  - server_words    : (m, 5)  uint8, Word.to_bytes() rows
  - server_ranks    : (m,)    int64

Older raw struct dumps are platform-layout dependent and are not readable here.

Writes go to a sibling temp file which is fsync'd and then renamed over the
target, so an interrupted save leaves the previous checkpoint intact.
"""

from __future__ import annotations

import hashlib
import logging
import os
import zipfile
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

import numpy as np

from packages.engine import KnowledgeState, PENDING, Word, WORD_LENGTH
from packages.engine.state import STATE_SIZE

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

PlayerTable = Dict[KnowledgeState, int]
ServerTable = Dict[Tuple[KnowledgeState, Word], int]


class CheckpointError(RuntimeError):
    """Checkpoint could not be written, read, or does not fit this run."""


def wordlist_fingerprint(words: Iterable[Word]) -> str:
    """SHA-256 over the raw letter codes of the list, in order."""
    h = hashlib.sha256()
    for w in words:
        h.update(w.to_bytes())
    return h.hexdigest()


def _pack(rows: List[bytes], width: int) -> np.ndarray:
    return np.frombuffer(b"".join(rows), dtype=np.uint8).reshape(-1, width)


class CheckpointStore:
    def __init__(self, path: Path | str, words: Iterable[Word]):
        self.path = Path(path)
        self.fingerprint = wordlist_fingerprint(words)

    def exists(self) -> bool:
        return self.path.exists()

    def save(self, player_cache: PlayerTable, server_cache: ServerTable) -> None:
        """Write both tables in full, replacing any previous checkpoint."""
        if PENDING in player_cache.values() or PENDING in server_cache.values():
            raise CheckpointError("refusing to persist a pending rank")

        player_items = list(player_cache.items())
        server_items = list(server_cache.items())
        arrays = {
            "version": np.array(FORMAT_VERSION, dtype=np.int64),
            "fingerprint": np.array(self.fingerprint),
            "player_states": _pack([s.to_bytes() for s, _ in player_items], STATE_SIZE),
            "player_ranks": np.array([r for _, r in player_items], dtype=np.int64),
            "server_states": _pack([s.to_bytes() for (s, _), _ in server_items], STATE_SIZE),
            "server_words": _pack([w.to_bytes() for (_, w), _ in server_items], WORD_LENGTH),
            "server_ranks": np.array([r for _, r in server_items], dtype=np.int64),
        }

        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("wb") as f:
                np.savez(f, **arrays)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except OSError as e:
            raise CheckpointError(f"cannot write checkpoint {self.path}: {e}") from e

        logger.debug("checkpoint %s: %d player, %d server entries",
                     self.path, len(player_items), len(server_items))

    def load(self) -> Tuple[PlayerTable, ServerTable]:
        """Read both tables back. Raises CheckpointError on any mismatch."""
        try:
            data = np.load(self.path, allow_pickle=False)
            if not isinstance(data, np.lib.npyio.NpzFile):
                raise CheckpointError(f"checkpoint {self.path} is not an .npz archive")
            with data:
                version = int(data["version"])
                if version != FORMAT_VERSION:
                    raise CheckpointError(
                        f"unsupported checkpoint version {version} (expected {FORMAT_VERSION})")
                if data["fingerprint"].item() != self.fingerprint:
                    raise CheckpointError("checkpoint was written for a different word list")

                p_states, p_ranks = data["player_states"], data["player_ranks"]
                s_states, s_words = data["server_states"], data["server_words"]
                s_ranks = data["server_ranks"]
        except (OSError, KeyError, ValueError, EOFError, zipfile.BadZipFile) as e:
            raise CheckpointError(f"cannot read checkpoint {self.path}: {e}") from e

        if (p_states.shape != (len(p_ranks), STATE_SIZE)
                or s_states.shape != (len(s_ranks), STATE_SIZE)
                or s_words.shape != (len(s_ranks), WORD_LENGTH)):
            raise CheckpointError(f"checkpoint {self.path} has inconsistent table shapes")

        try:
            player = {
                KnowledgeState.from_bytes(row.tobytes()): int(r)
                for row, r in zip(p_states, p_ranks)
            }
            server = {
                (KnowledgeState.from_bytes(srow.tobytes()), Word.from_bytes(wrow.tobytes())): int(r)
                for srow, wrow, r in zip(s_states, s_words, s_ranks)
            }
        except ValueError as e:
            raise CheckpointError(f"checkpoint {self.path} holds a corrupt record: {e}") from e

        logger.debug("loaded %s: %d player, %d server entries", self.path, len(player), len(server))
        return player, server
