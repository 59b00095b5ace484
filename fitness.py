# fitness.py
"""Scoring of candidate decryptions.

Every fitness function takes text of uppercase ASCII letters, either as a
``str`` or as the ``bytes``/``bytearray`` buffer the search loop fills,
and returns a float where higher means more plausible plaintext. Input is
not validated here: callers check the ciphertext once before searching.
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import ClassVar

from debug import Debug

debug = Debug()

EPSILON = 3e-10
FLOOR = math.log10(EPSILON)

_A = ord("A")
_LETTER_CODES = range(_A, _A + 26)

Text = str | bytes | bytearray


def _as_bytes(text: Text) -> bytes | bytearray:
    return text.encode("ascii") if isinstance(text, str) else text


def _is_upper_word(word: str) -> bool:
    return bool(word) and all("A" <= ch <= "Z" for ch in word)


class FitnessFunction(ABC):
    """Scores a decrypted text; higher is better."""

    @abstractmethod
    def score(self, text: Text) -> float:
        ...

    def __call__(self, text: Text) -> float:
        return self.score(text)


class IoCFitness(FitnessFunction):
    """Index of coincidence: sum n_i(n_i - 1) / N(N - 1).

    Texts shorter than two letters score 0.0.
    """

    def score(self, text: Text) -> float:
        data = _as_bytes(text)
        n = len(data)
        if n < 2:
            return 0.0
        total = 0
        for code in _LETTER_CODES:
            count = data.count(code)
            total += count * (count - 1)
        return total / (n * (n - 1))


class NgramFitness(FitnessFunction):
    """Sum of log10 probabilities over every sliding window of N letters.

    Built from ``KEY,VALUE`` lines; windows missing from the data score
    ``log10(3e-10)``. Blank lines are skipped, anything else malformed
    raises ValueError naming the line.
    """

    n: ClassVar[int | None] = None

    def __init__(self, lines: Iterable[str], n: int | None = None) -> None:
        n = n if n is not None else type(self).n
        if n is None or n < 1:
            raise ValueError(f"N-gram length must be a positive integer, got {n!r}")
        self.n = n
        self._size = 26 ** n
        self._table: list[float] = [FLOOR] * self._size

        loaded = 0
        for lineno, raw in enumerate(lines, 1):
            line = raw.strip()
            if not line:
                continue
            key, sep, value = line.partition(",")
            if not sep:
                raise ValueError(f"Invalid ngram entry on line {lineno}: {raw!r}")
            if len(key) != n or not _is_upper_word(key):
                raise ValueError(f"Invalid ngram key on line {lineno}: {key!r}")
            try:
                self._table[self.index(key)] = float(value)
            except ValueError:
                raise ValueError(f"Invalid ngram value on line {lineno}: {value!r}") from None
            loaded += 1

        debug.log("fitness", "%d-gram table: %d entries loaded", n, loaded)

    # ── constructors ─────────────────────────────────────────────
    @classmethod
    def from_file(cls, path: str | Path, n: int | None = None) -> "NgramFitness":
        with open(path, encoding="utf-8") as fh:
            return cls(fh, n)

    @classmethod
    def from_counts(cls, counts: Mapping[str, float], n: int | None = None) -> "NgramFitness":
        """Build from raw frequency counts, converting them to log10 probabilities."""
        total = sum(counts.values())
        if total <= 0:
            raise ValueError("N-gram counts must sum to a positive number")
        lines = (f"{key},{math.log10(v / total)}" for key, v in counts.items() if v > 0)
        return cls(lines, n)

    # ── helpers ──────────────────────────────────────────────────
    @staticmethod
    def index(key: str) -> int:
        """Base-26 number of the letters in `key` (A=0, first letter most significant)."""
        idx = 0
        for ch in key:
            idx = idx * 26 + ord(ch) - _A
        return idx

    def __getitem__(self, key: str) -> float:
        return self._table[self.index(key)]

    def score(self, text: Text) -> float:
        data = _as_bytes(text)
        table, size, skip = self._table, self._size, self.n - 1
        total = 0.0
        idx = 0
        for i, code in enumerate(data):
            idx = (idx * 26 + code - _A) % size
            if i >= skip:
                total += table[idx]
        return total


class UnigramFitness(NgramFitness):
    n = 1


class BigramFitness(NgramFitness):
    n = 2


class TrigramFitness(NgramFitness):
    n = 3


class QuadgramFitness(NgramFitness):
    n = 4


class KnownPlainTextFitness(FitnessFunction):
    """Number of positions where the text agrees with a known plaintext.

    Positions the crib does not cover never count as a match.
    """

    def __init__(self, plaintext: bytes) -> None:
        self.plaintext = plaintext

    @classmethod
    def exact_message(cls, text: str) -> "KnownPlainTextFitness":
        if not _is_upper_word(text):
            raise ValueError("Known plaintext must be non-empty and uppercase A-Z only")
        return cls(text.encode("ascii"))

    @classmethod
    def from_words(cls, words: Sequence[tuple[str, int]]) -> "KnownPlainTextFitness":
        """Sparse crib from (word, offset) fragments; later words overwrite earlier ones."""
        if not words:
            raise ValueError("A plaintext attack needs at least one word")
        for word, offset in words:
            if not _is_upper_word(word):
                raise ValueError(f"Crib word {word!r} must be uppercase A-Z only")
            if offset < 0:
                raise ValueError(f"Crib offset must not be negative, got {offset}")

        length = max(offset + len(word) for word, offset in words)
        plaintext = bytearray(length)      # zero bytes never match a letter
        for word, offset in words:
            plaintext[offset:offset + len(word)] = word.encode("ascii")
        return cls(bytes(plaintext))

    def score(self, text: Text) -> float:
        data = _as_bytes(text)
        return float(sum(a == b for a, b in zip(self.plaintext, data)))
