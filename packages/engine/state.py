"""
Accumulated public knowledge after zero or more (guess, feedback) exchanges.

A KnowledgeState holds, for every letter of the alphabet:
  - min_count : how many copies the hidden word has at least
  - exact     : whether min_count is also an upper bound
  - excluded  : bit set over positions 0..4 where the letter cannot be
plus a 5-slot `resolved` array of letters known at each position.

States are immutable values: apply_feedback() never touches its input and
returns a fresh state, or None when the pair contradicts what is known.
That makes trial-and-discard during search a plain function call.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Optional, Tuple

from .feedback import Feedback, Mark
from .words import ALPHABET_SIZE, UNKNOWN, WORD_LENGTH, Word

ALL_POSITIONS = (1 << WORD_LENGTH) - 1
STATE_SIZE = ALPHABET_SIZE * 3 + WORD_LENGTH  # bytes in the binary form


@dataclass(frozen=True)
class LetterFacts:
    min_count: int = 0
    exact: bool = False
    excluded: int = 0


_NO_FACTS = LetterFacts()


@dataclass(frozen=True)
class KnowledgeState:
    letters: Tuple[LetterFacts, ...] = (_NO_FACTS,) * ALPHABET_SIZE
    resolved: Tuple[int, ...] = (UNKNOWN,) * WORD_LENGTH

    @classmethod
    def empty(cls) -> "KnowledgeState":
        return cls()

    def final(self) -> Optional[Word]:
        """The fully resolved word, or None while any slot is unknown."""
        if UNKNOWN in self.resolved:
            return None
        return Word(self.resolved)

    def to_bytes(self) -> bytes:
        out = bytearray()
        for f in self.letters:
            out += bytes((f.min_count, int(f.exact), f.excluded))
        out += bytes(self.resolved)
        return bytes(out)

    @classmethod
    def from_bytes(cls, raw: bytes) -> "KnowledgeState":
        if len(raw) < STATE_SIZE:
            raise ValueError(f"state record needs {STATE_SIZE} bytes, got {len(raw)}")
        letters = []
        for i in range(ALPHABET_SIZE):
            m, e, x = raw[3 * i], raw[3 * i + 1], raw[3 * i + 2]
            if m > WORD_LENGTH or e > 1 or x > ALL_POSITIONS:
                raise ValueError(f"bad facts for letter {chr(ord('A') + i)}: {m}, {e}, {x:#x}")
            letters.append(_NO_FACTS if (m == 0 and not e and x == 0) else LetterFacts(m, bool(e), x))
        base = ALPHABET_SIZE * 3
        resolved = tuple(raw[base:base + WORD_LENGTH])
        if any(c >= ALPHABET_SIZE and c != UNKNOWN for c in resolved):
            raise ValueError(f"bad resolved codes {resolved}")
        return cls(tuple(letters), resolved)

    def describe(self) -> str:
        """
        Multi-line summary of the non-trivial facts, e.g.

            E XX__X 2
            R ____X 1+
              __E__
        'X' marks an excluded position; '+' means the count is only a lower bound.
        """
        lines = []
        for i, f in enumerate(self.letters):
            if f.excluded == 0 and f.min_count == 0:
                continue
            mask = "".join("X" if f.excluded >> j & 1 else "_" for j in range(WORD_LENGTH))
            bound = f"{f.min_count}" if f.exact else f"{f.min_count}+"
            lines.append(f"{chr(ord('A') + i)} {mask} {bound}")
        lines.append("  " + str(Word(self.resolved)))
        return "\n".join(lines)


def apply_feedback(state: KnowledgeState, guess: Word,
                   feedback: Feedback) -> Optional[KnowledgeState]:
    """
    Fold one (guess, feedback) pair into `state`.

    Returns the new state, or None if the pair is inconsistent with what
    `state` already knows (the caller keeps using `state` in that case).
    Pairs scored from a real secret that matches `state` are never rejected.
    """
    mins = [f.min_count for f in state.letters]
    exact = [f.exact for f in state.letters]
    excluded = [f.excluded for f in state.letters]
    resolved = list(state.resolved)

    # w_occ: copies in the guess; k_occ: copies marked displaced or exact
    w_occ = Counter(guess)
    k_occ = Counter()
    for i, (c, m) in enumerate(zip(guess, feedback)):
        if m is not Mark.ABSENT:
            k_occ[c] += 1
        if resolved[i] == c and m is not Mark.EXACT:
            # Known letter at this position must come back exact
            return None

    # Occurrence bounds, one decision per distinct guessed letter
    for c in w_occ:
        k = k_occ[c]
        if w_occ[c] > k:
            # Some copy came back absent: the count is pinned to k
            if mins[c] > k or (exact[c] and mins[c] != k):
                return None
            exact[c] = True
            mins[c] = k
            if k == 0:
                excluded[c] = ALL_POSITIONS
        else:
            if exact[c] and k > mins[c]:
                return None
            mins[c] = max(mins[c], k)

    # Position marks
    for i, (c, m) in enumerate(zip(guess, feedback)):
        if m is Mark.DISPLACED:
            excluded[c] |= 1 << i
        elif m is Mark.EXACT:
            if resolved[i] == c:
                continue
            if resolved[i] != UNKNOWN:
                return None
            resolved[i] = c

            occurs = resolved.count(c)
            if exact[c] and occurs > mins[c]:
                return None
            mins[c] = max(mins[c], occurs)
            # Ex. EERIE -> YY--- pins E at 2; FLEES -> --GG- then places both,
            # so E cannot sit anywhere else.
            if exact[c] and occurs == mins[c]:
                for j in range(WORD_LENGTH):
                    if resolved[j] != c:
                        excluded[c] |= 1 << j

    # Deduce placements: a letter whose allowed positions number exactly its
    # required count must fill all of them.
    for c in range(ALPHABET_SIZE):
        free = WORD_LENGTH - bin(excluded[c]).count("1")
        if free < mins[c]:
            return None
        if free != mins[c]:
            continue
        for j in range(WORD_LENGTH):
            if excluded[c] >> j & 1:
                continue
            if resolved[j] == UNKNOWN:
                resolved[j] = c
            elif resolved[j] != c:
                return None

    for j, c in enumerate(resolved):
        if c != UNKNOWN and excluded[c] >> j & 1:
            return None

    letters = tuple(
        _NO_FACTS if (m == 0 and not e and x == 0) else LetterFacts(m, e, x)
        for m, e, x in zip(mins, exact, excluded)
    )
    return KnowledgeState(letters, tuple(resolved))
