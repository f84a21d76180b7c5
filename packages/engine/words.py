"""
Fixed-length words over the 26-letter alphabet.

Conventions:
  - Letters are stored as codes 0..25 ('A' -> 0, 'Z' -> 25).
  - A slot may hold UNKNOWN (0xFF); this only happens for partially
    resolved words built by the engine, never for words parsed from text.
  - str(word) renders unknown slots as '_'.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

WORD_LENGTH = 5
ALPHABET_SIZE = 26
UNKNOWN = 0xFF


class InvalidWordError(ValueError):
    """Raised when text cannot be turned into a Word."""


@dataclass(frozen=True)
class Word:
    codes: Tuple[int, ...]

    def __post_init__(self):
        if len(self.codes) != WORD_LENGTH:
            raise InvalidWordError(f"expected {WORD_LENGTH} slots, got {len(self.codes)}")
        for c in self.codes:
            if c != UNKNOWN and not 0 <= c < ALPHABET_SIZE:
                raise InvalidWordError(f"letter code out of range: {c}")

    @classmethod
    def from_text(cls, text: str) -> "Word":
        """
        Parse exactly five uppercase letters A-Z.

        Raises InvalidWordError for any other length or character; callers
        normalise case before calling if they accept lowercase input.
        """
        if len(text) != WORD_LENGTH:
            raise InvalidWordError(f"word must have {WORD_LENGTH} letters: {text!r}")
        codes = []
        for ch in text:
            if not "A" <= ch <= "Z":
                raise InvalidWordError(f"invalid character {ch!r} in {text!r}")
            codes.append(ord(ch) - ord("A"))
        return cls(tuple(codes))

    @classmethod
    def unknown(cls) -> "Word":
        return cls((UNKNOWN,) * WORD_LENGTH)

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Word":
        return cls(tuple(raw[:WORD_LENGTH]))

    def to_bytes(self) -> bytes:
        return bytes(self.codes)

    def is_complete(self) -> bool:
        return UNKNOWN not in self.codes

    def __iter__(self) -> Iterator[int]:
        return iter(self.codes)

    def __getitem__(self, i: int) -> int:
        return self.codes[i]

    def __len__(self) -> int:
        return WORD_LENGTH

    def __str__(self) -> str:
        return "".join("_" if c == UNKNOWN else chr(ord("A") + c) for c in self.codes)
