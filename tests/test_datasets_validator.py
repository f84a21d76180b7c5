from pathlib import Path

import pytest

from packages.datasets import load_wordlist, pretty_summary, validate_wordlist, write_wordlist
from packages.engine import InvalidWordError, Word


def _write(p: Path, lines):
    p.write_text("\n".join(lines) + "\n", encoding="ascii")


def test_validate_wordlist_happy_path(tmp_path: Path):
    path = tmp_path / "words.txt"
    _write(path, ["ABIDE", "ABASE", "BEACH"])

    rep = validate_wordlist(str(path))
    assert rep["passed"] is True
    assert rep["count"] == 3 and rep["unique_count"] == 3
    s = pretty_summary(rep)
    assert "words=3" in s and s.endswith("OK")


def test_validate_wordlist_flags_errors(tmp_path: Path):
    path = tmp_path / "words.txt"
    # lowercase and digits are invalid records; one duplicate
    _write(path, ["ABIDE", "abase", "BE4CH", "ABIDE"])

    rep = validate_wordlist(str(path))
    assert rep["passed"] is False
    assert rep["invalid_records"] == 2
    assert any("invalid" in msg for msg in rep["issues"])
    assert any("duplicate" in msg for msg in rep["issues"])


def test_validate_wordlist_missing_file(tmp_path: Path):
    rep = validate_wordlist(str(tmp_path / "nope.txt"))
    assert rep["exists"] is False and rep["passed"] is False


def test_load_wordlist_reads_records(tmp_path: Path):
    path = tmp_path / "words.txt"
    _write(path, ["ABIDE", "ABASE"])
    assert load_wordlist(path) == [Word.from_text("ABIDE"), Word.from_text("ABASE")]


def test_load_wordlist_stops_at_short_record(tmp_path: Path):
    path = tmp_path / "words.txt"
    path.write_bytes(b"ABIDE\nABASE\nBEA")
    assert [str(w) for w in load_wordlist(path)] == ["ABIDE", "ABASE"]
    rep = validate_wordlist(str(path))
    assert rep["trailing_bytes"] == 3 and rep["passed"] is False


def test_load_wordlist_rejects_bad_record(tmp_path: Path):
    path = tmp_path / "words.txt"
    path.write_bytes(b"ABIDE\nab1se\n")
    with pytest.raises(InvalidWordError):
        load_wordlist(path)


def test_write_wordlist_uses_six_byte_records(tmp_path: Path):
    path = tmp_path / "out" / "words.txt"
    write_wordlist([Word.from_text("CRANE"), Word.from_text("SLATE")], path)
    assert path.read_bytes() == b"CRANE\nSLATE\n"
    assert load_wordlist(path) == [Word.from_text("CRANE"), Word.from_text("SLATE")]
