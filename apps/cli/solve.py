# apps/cli/solve.py
"""
CLI entry point for computing the minimax value of the adversarial game.

This script:
  1) Validates the word list (prints count + SHA, flags bad records).
  2) Builds a Solver, optionally resuming from a checkpoint.
  3) Runs the fixpoint rounds with a live progress indicator, checkpointing
     after every round, and writes:
       - CSV:  rank of every opening guess
       - JSON: manifest with config, word-list hash, git commit, result

Usage:
    python -m apps.cli.solve --wordlist data/words.txt --checkpoint log.npz --resume
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from tqdm import tqdm

from packages.datasets import load_wordlist, pretty_summary, validate_wordlist
from packages.engine import InvalidWordError, KnowledgeState, NO_SOLUTION
from packages.harness.io import git_commit_or_unknown, timestamp_id, write_csv, write_manifest
from packages.minimax import CheckpointError, RoundStats, SolverStalled, new_solver


def main() -> int:
    """
    Parse CLI args, validate the word list, solve with progress, and write outputs.
    """
    ap = argparse.ArgumentParser(description="Minimax solver for adversarial Wordle")
    ap.add_argument("--wordlist", required=True,
                    help="word list: 6-byte records (5 uppercase letters + newline)")
    ap.add_argument("--checkpoint", default="log.npz",
                    help="checkpoint file, rewritten after every round ('' to disable)")
    ap.add_argument("--resume", action="store_true",
                    help="load the checkpoint before solving")
    ap.add_argument("--max-rounds", type=int, help="give up after this many rounds")
    ap.add_argument("--outdir", default="reports", help="directory for output files")
    ap.add_argument(
        "--progress",
        choices=["auto", "bar", "plain", "off"],
        default="auto",
        help="Show round progress (auto=bar on a terminal, else plain text)."
    )
    ap.add_argument("--verbose", action="store_true", help="log solver rounds to stderr")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    # 1) Validate and load the word list
    rep = validate_wordlist(args.wordlist)
    print(pretty_summary(rep))
    try:
        words = load_wordlist(args.wordlist)
    except (FileNotFoundError, InvalidWordError) as e:
        print(f"Error loading wordlist: {e}", file=sys.stderr)
        return 1
    if not words:
        print("Error loading wordlist: no words", file=sys.stderr)
        return 1

    # 2) Progress mode
    mode = args.progress
    if mode == "auto":
        mode = "bar" if sys.stderr.isatty() else "plain"

    bar = tqdm(ncols=80, desc="Rounds", unit="round") if mode == "bar" else None

    def on_round(stats: RoundStats) -> None:
        if bar is not None:
            bar.update(1)
            bar.set_postfix(player=stats.player_done, server=stats.server_done,
                            queued=stats.player_queue + stats.server_queue)
        elif mode == "plain":
            sys.stderr.write(
                f"\r[round {stats.round}] done p={stats.player_done} s={stats.server_done} "
                f"| queued p={stats.player_queue} s={stats.server_queue}"
            )
            sys.stderr.flush()

    # 3) Solve
    checkpoint = args.checkpoint or None
    start = time.time()
    try:
        solver = new_solver(words, checkpoint=checkpoint, resume=args.resume,
                            max_rounds=args.max_rounds, on_round=on_round)
        value = solver.run()
        opening = solver.opening_ranks()
    except CheckpointError as e:
        print(f"\nCheckpoint error: {e}", file=sys.stderr)
        return 1
    except SolverStalled as e:
        print(f"\nSolver stopped: {e}", file=sys.stderr)
        return 2
    finally:
        if bar is not None:
            bar.close()
        elif mode == "plain":
            sys.stderr.write("\n"); sys.stderr.flush()
    elapsed = time.time() - start

    if value == NO_SOLUTION:
        print("No solution: no guess is guaranteed to make progress")
    else:
        print(f"Value: {value} guess(es) before the word is known")
    best = solver.best_guess(KnowledgeState.empty())
    if best is not None:
        print(f"Best opening guess: {best}")

    # 4) Write outputs (CSV + manifest)
    run_id = timestamp_id()
    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    csv_path = outdir / f"solve_{run_id}.csv"
    manifest_path = outdir / f"solve_{run_id}_manifest.json"

    write_csv(opening, str(csv_path))
    manifest = {
        "run_id": run_id,
        "git_commit": git_commit_or_unknown(),
        "config": vars(args),
        "wordlist": rep,
        "value": value,
        "best_guess": str(best) if best is not None else None,
        "rounds": solver.rounds,
        "player_entries": len(solver.player_cache),
        "server_entries": len(solver.server_cache),
        "elapsed_s": round(elapsed, 3),
    }
    write_manifest(manifest, str(manifest_path))

    print(f"Wrote: {csv_path}")
    print(f"Wrote: {manifest_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
