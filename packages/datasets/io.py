from __future__ import annotations
from pathlib import Path
from typing import Iterable, Iterator, List

from packages.engine import InvalidWordError, Word, WORD_LENGTH

# One word per record: 5 uppercase ASCII letters + a separator byte (usually '\n').
RECORD_SIZE = WORD_LENGTH + 1


def read_lines(p: Path | str) -> List[str]:
    """
    Read a UTF-8 text file into a list of lines, stripping trailing CR/LF.
    Raises FileNotFoundError if the path doesn't exist.
    """
    p = Path(p)
    if not p.exists():
        raise FileNotFoundError(p)
    return [ln.rstrip("\r\n") for ln in p.read_text(encoding="utf-8").splitlines()]


def write_lines(lines: Iterable[str], p: Path | str) -> str:
    """
    Write lines to a UTF-8 text file, ensuring a trailing newline.
    Returns the string path written.
    """
    p = Path(p)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(p)


def iter_records(raw: bytes) -> Iterator[bytes]:
    """
    Yield the 5-letter part of each full record; a trailing short record
    (e.g. a missing final newline) ends the list.
    """
    for off in range(0, len(raw) - RECORD_SIZE + 1, RECORD_SIZE):
        yield raw[off:off + WORD_LENGTH]


def parse_record(rec: bytes) -> Word:
    try:
        text = rec.decode("ascii")
    except UnicodeDecodeError as e:
        raise InvalidWordError(f"non-ASCII record {rec!r}") from e
    return Word.from_text(text)


def load_wordlist(p: Path | str) -> List[Word]:
    """
    Load a word list stored as fixed 6-byte records.
    Raises FileNotFoundError if missing, InvalidWordError on a bad record.
    An empty result is the caller's problem to report.
    """
    p = Path(p)
    if not p.exists():
        raise FileNotFoundError(p)
    return [parse_record(rec) for rec in iter_records(p.read_bytes())]


def write_wordlist(words: Iterable[Word], p: Path | str) -> str:
    """Write words as 6-byte records ('\\n' separator). Returns the path."""
    return write_lines([str(w) for w in words], p)
