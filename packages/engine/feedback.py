"""
Per-position feedback marks and exhaustive enumeration of all responses.

Pattern text uses the same characters as the rest of the project:
  - 'G' : exact     (right letter, right position)
  - 'Y' : displaced (letter present elsewhere)
  - '-' : absent

Enumeration treats a Feedback as a base-3 number with the rightmost slot
changing fastest, so starting from all-absent and calling next() visits
3**5 = 243 distinct values before returning None.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Optional, Tuple

from .words import WORD_LENGTH


class Mark(IntEnum):
    ABSENT = 0
    DISPLACED = 1
    EXACT = 2


_TO_CHAR = {Mark.ABSENT: "-", Mark.DISPLACED: "Y", Mark.EXACT: "G"}
_FROM_CHAR = {v: k for k, v in _TO_CHAR.items()}


@dataclass(frozen=True)
class Feedback:
    marks: Tuple[Mark, ...]

    def __post_init__(self):
        if len(self.marks) != WORD_LENGTH:
            raise ValueError(f"feedback needs {WORD_LENGTH} marks, got {len(self.marks)}")
        # plain ints 0/1/2 become Marks; anything else raises ValueError
        object.__setattr__(self, "marks", tuple(Mark(m) for m in self.marks))

    @classmethod
    def first(cls) -> "Feedback":
        return cls((Mark.ABSENT,) * WORD_LENGTH)

    @classmethod
    def solved(cls) -> "Feedback":
        return cls((Mark.EXACT,) * WORD_LENGTH)

    @classmethod
    def from_pattern(cls, pattern: str) -> "Feedback":
        try:
            return cls(tuple(_FROM_CHAR[ch] for ch in pattern.upper()))
        except KeyError as e:
            raise ValueError(f"invalid pattern character in {pattern!r}") from e

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Feedback":
        return cls(tuple(Mark(b) for b in raw[:WORD_LENGTH]))

    def to_bytes(self) -> bytes:
        return bytes(int(m) for m in self.marks)

    def to_pattern(self) -> str:
        return "".join(_TO_CHAR[m] for m in self.marks)

    def next(self) -> Optional["Feedback"]:
        """
        Lexicographic successor (ABSENT < DISPLACED < EXACT), carrying
        leftward. Returns None after the all-exact value.
        """
        marks = list(self.marks)
        for i in reversed(range(WORD_LENGTH)):
            if marks[i] is not Mark.EXACT:
                marks[i] = Mark(marks[i] + 1)
                return Feedback(tuple(marks))
            marks[i] = Mark.ABSENT
        return None

    def exact_count(self) -> int:
        return sum(1 for m in self.marks if m is Mark.EXACT)

    def colored_count(self) -> int:
        return sum(1 for m in self.marks if m is not Mark.ABSENT)

    def __iter__(self) -> Iterator[Mark]:
        return iter(self.marks)

    def __getitem__(self, i: int) -> Mark:
        return self.marks[i]

    def __len__(self) -> int:
        return WORD_LENGTH

    def __str__(self) -> str:
        return self.to_pattern()


def all_feedbacks() -> Iterator[Feedback]:
    """Yield every Feedback in enumeration order, starting from all-absent."""
    fb: Optional[Feedback] = Feedback.first()
    while fb is not None:
        yield fb
        fb = fb.next()
