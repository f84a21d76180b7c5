"""
Dataset validator for the solver's word list.

What this module does:
- Validate one word list stored as 6-byte records (5 uppercase letters A-Z
  plus a separator byte).
- Count invalid records and duplicates; compute SHA-256 of the raw file.
- Return a machine-readable dict (for manifests) and provide a pretty one-line summary.

Typical use:
    from packages.datasets import validate_wordlist, pretty_summary
    rep = validate_wordlist("data/words.txt")
    print(pretty_summary(rep))
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List
import hashlib

from packages.engine import InvalidWordError
from .io import RECORD_SIZE, iter_records, parse_record


# -----------------------------
# Dataclass for structured reports
# -----------------------------

@dataclass
class WordlistReport:
    path: str            # file path (as given)
    exists: bool         # did the file exist on disk?
    count: int           # number of VALID records
    unique_count: int    # unique valid words
    invalid_records: int # records that are not 5 letters A-Z
    trailing_bytes: int  # bytes after the last full record (ignored by the loader)
    sha256: str          # SHA-256 of raw file bytes (empty string if missing)
    passed: bool
    issues: List[str]    # human-friendly list of problems (if any)


# -----------------------------
# Public API
# -----------------------------

def validate_wordlist(path: str) -> Dict:
    """
    Validate a record-format word list.

    Returns
    -------
    Dict
        A JSON-serializable dictionary (see WordlistReport schema).
        `passed` is strict: the file exists, is non-empty, and has no
        invalid records, duplicates or trailing bytes.
    """
    p = Path(path)
    if not p.exists():
        rep = WordlistReport(path, False, 0, 0, 0, 0, "", False,
                             [f"wordlist file not found: {path}"])
        return asdict(rep)

    raw = p.read_bytes()
    words = []
    invalid = 0
    for rec in iter_records(raw):
        try:
            words.append(parse_record(rec))
        except InvalidWordError:
            invalid += 1

    issues: List[str] = []
    unique = len(set(words))
    trailing = len(raw) % RECORD_SIZE

    if not words:
        issues.append("wordlist contains 0 valid words")
    if invalid:
        issues.append(f"wordlist has {invalid} invalid record(s)")
    if unique != len(words):
        issues.append("wordlist contains duplicate words")
    if trailing:
        issues.append(f"{trailing} trailing byte(s) after the last full record")

    rep = WordlistReport(
        path=str(p),
        exists=True,
        count=len(words),
        unique_count=unique,
        invalid_records=invalid,
        trailing_bytes=trailing,
        sha256=hashlib.sha256(raw).hexdigest(),
        passed=not issues,
        issues=issues,
    )
    return asdict(rep)


def pretty_summary(report: Dict) -> str:
    """
    Produce a compact, human-friendly one-liner for console/docs.

    Example:
        words=2315 (uniq=2315, invalid=0, sha=abc123...) | OK
    """
    status = "OK" if report["passed"] else "FAIL"
    sha = (report.get("sha256") or "")[:12]
    return (
        f"words={report['count']} (uniq={report['unique_count']}, "
        f"invalid={report['invalid_records']}, sha={sha}) | {status}"
    )
