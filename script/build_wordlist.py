"""
Turn an arbitrary one-word-per-line text file into a solver word list.

Features:
- Uppercases everything and keeps only 5-letter A-Z tokens.
- Removes duplicates, preserving original order by default (stable dedupe).
- Optional sorting AFTER dedupe (alphabetical); otherwise keep input order.
- Writes 6-byte records (5 letters + newline), overwriting in place by
  default, or to a separate --out path.

Usage:
    python -m script.build_wordlist --in raw/allowed.txt --out data/words.txt --sort
"""

import argparse
import re
from pathlib import Path

from packages.datasets import read_lines, write_wordlist
from packages.engine import Word

TOKEN_RE = re.compile(r"^[A-Z]{5}$")


def unique_preserve_order(lines: list[str], key=None) -> list[str]:
    seen, out = set(), []
    for s in lines:
        k = key(s) if key else s
        if k not in seen:
            seen.add(k)
            out.append(s)
    return out


def clean(lines: list[str]) -> tuple[list[str], int]:
    """(valid uppercase words, number of dropped lines)"""
    tokens = [ln.strip().upper() for ln in lines if ln.strip()]
    kept = [t for t in tokens if TOKEN_RE.match(t)]
    return kept, len(lines) - len(kept)


def main():
    ap = argparse.ArgumentParser(description="Build a record-format word list from a text file.")
    ap.add_argument("--in", dest="inp", required=True, help="input .txt file")
    ap.add_argument("--out", dest="out", help="output file (default: overwrite input)")
    ap.add_argument("--sort", action="store_true", help="sort alphabetically after dedupe (otherwise keep original order)")
    args = ap.parse_args()

    inp = Path(args.inp)
    outp = Path(args.out) if args.out else inp
    if not inp.exists():
        raise FileNotFoundError(inp)

    words, dropped = clean(read_lines(inp))
    out = unique_preserve_order(words)
    if args.sort:
        out = sorted(out)

    write_wordlist([Word.from_text(w) for w in out], outp)
    print(f"Input: {inp} ({len(words) + dropped} lines, {dropped} dropped) -> Output: {outp} ({len(out)} unique)")

if __name__ == "__main__":
    main()
