"""
I/O utilities for solver and game runs.

Responsibilities:
- write_csv:     opening-guess ranks as a tidy CSV (one row per guess).
- write_manifest:dump a JSON manifest with config, hashes, and metadata.
- timestamp_id:  stable UTC run ID string.
- git_commit_or_unknown: best-effort short commit hash for reproducibility.

Notes:
- NoSolution ranks are written as an empty cell rather than -1 so that
  spreadsheet sorting puts them last instead of first.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Tuple
import csv
import json
import subprocess
import datetime as dt

from packages.engine import NO_SOLUTION, Word


def write_csv(ranks: Iterable[Tuple[Word, int]], path: str) -> str:
    """
    Serialize (guess, rank) pairs to CSV.

    Schema (columns):
      guess, rank, solvable

    Returns:
      The path written (string).
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=["guess", "rank", "solvable"])
        w.writeheader()
        for word, rank in ranks:
            w.writerow({
                "guess": str(word),
                "rank": "" if rank == NO_SOLUTION else rank,
                "solvable": rank != NO_SOLUTION,
            })

    return str(p)


def write_manifest(manifest: Dict, path: str) -> str:
    """
    Write a JSON manifest with run configuration and results.

    Typical keys:
      - run_id, git_commit
      - config: CLI args (wordlist, checkpoint, resume, max_rounds, outdir)
      - wordlist: output of datasets.validate_wordlist(...)
      - value, rounds, player_entries, server_entries
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2)
    return str(p)


def timestamp_id() -> str:
    """
    Return a compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """
    Best-effort short git hash of the current repo state.
    Returns 'unknown' if git is not available or the call fails.
    """
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
