# keyboard_and_plugboard.py
from __future__ import annotations

from collections.abc import Iterable, Sequence

from debug import Debug
from rotor_and_reflector import ALPHABET, SIZE

debug = Debug()

Pair = tuple[str, str]


# ── Keyboard ──────────────────────────────────────────────────────
class Keyboard:
    def __init__(self, alphabet: str = ALPHABET) -> None:
        self.alphabet: str = alphabet
        self.alpha_to_index: dict[str, int] = {
            ch: i for i, ch in enumerate(alphabet)
        }

    # letter → integer signal
    def forward(self, letter: str) -> int:
        try:
            return self.alpha_to_index[letter]
        except KeyError:
            raise ValueError(
                f"Invalid character {letter!r}: expected one of A-Z."
            ) from None

    # integer signal → letter
    def backward(self, signal: int) -> str:
        if not (0 <= signal < len(self.alphabet)):
            hi = len(self.alphabet) - 1
            raise ValueError(f"Signal {signal} out of range 0–{hi}")
        return self.alphabet[signal]

    def validate(self, text: str) -> str:
        """Raise unless every character of `text` is on the keyboard."""
        for pos, ch in enumerate(text):
            if ch not in self.alpha_to_index:
                raise ValueError(
                    f"Invalid character {ch!r} at position {pos}: expected one of A-Z."
                )
        return text


KEYBOARD = Keyboard()


# ── Plugboard ─────────────────────────────────────────────────────
def _normalise(raw: str | Sequence[str]) -> Pair:
    if len(raw) != 2:
        raise ValueError(f"Pair {raw!r} must be exactly 2 symbols")
    a, b = raw
    return a, b


class Plugboard:
    """Involutive letter swap built from at most 13 disjoint pairs.

    `pairs` may be a space separated string ("AF TV"), or a sequence of
    two-letter strings / 2-tuples. The order pairs are given in is kept
    for display.
    """

    __slots__ = ("wiring", "_pairs")

    def __init__(self, pairs: str | Iterable[str | Sequence[str]] = ()) -> None:
        if isinstance(pairs, str):
            pairs = pairs.split()
        normalised = tuple(_normalise(raw) for raw in pairs)
        self.wiring: tuple[int, ...] = self.decode(normalised)
        self._pairs: tuple[Pair, ...] = normalised
        debug.log("plugboard", "%s", self)

    @staticmethod
    def decode(pairs: Iterable[Sequence[str]]) -> tuple[int, ...]:
        """Build the 26-entry permutation for `pairs`."""
        mapping = list(range(SIZE))
        used: set[str] = set()

        for a, b in pairs:
            for ch in (a, b):
                if ch not in KEYBOARD.alpha_to_index:
                    raise ValueError(f"Invalid plugboard symbol {ch!r} in pair {a + b!r}")
            if a == b:
                raise ValueError(f"Plugboard cannot map a symbol to itself: {a}")
            if a in used or b in used:
                dup = a if a in used else b
                raise ValueError(f"Character {dup!r} already used in plugboard")

            # passed validation → commit swap
            i, j = KEYBOARD.alpha_to_index[a], KEYBOARD.alpha_to_index[b]
            mapping[i], mapping[j] = j, i
            used.update((a, b))

        return tuple(mapping)

    @classmethod
    def from_wiring(cls, wiring: Sequence[int]) -> "Plugboard":
        board = cls(cls.generate_connections_for(wiring))
        if board.wiring != tuple(wiring):
            raise ValueError("Plugboard wiring must be an involution")
        return board

    @staticmethod
    def generate_connections_for(wiring: Sequence[int]) -> list[Pair]:
        """Recover the pair list from a wiring, one entry per pair."""
        connections: list[Pair] = []
        seen = [False] * SIZE
        for idx, other in enumerate(wiring):
            if idx == other or seen[idx]:
                continue  # not connected, or the other half of a pair
            seen[idx] = seen[other] = True
            connections.append((ALPHABET[idx], ALPHABET[other]))
        return connections

    def generate_connections(self) -> list[Pair]:
        return self.generate_connections_for(self.wiring)

    @property
    def pairs(self) -> tuple[Pair, ...]:
        """Pairs in the order they were plugged."""
        return self._pairs

    def unplugged(self) -> tuple[bool, ...]:
        """True for every letter still mapped to itself."""
        return tuple(idx == other for idx, other in enumerate(self.wiring))

    def plug(self, a: str, b: str) -> "Plugboard":
        """Return a new plugboard with (a, b) added after the existing pairs."""
        return Plugboard(self._pairs + ((a, b),))

    def forward(self, signal: int) -> int:
        return self.wiring[signal]

    backward = forward    # the board is its own inverse

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plugboard):
            return NotImplemented
        return self.wiring == other.wiring

    def __hash__(self) -> int:
        return hash(self.wiring)

    def __str__(self) -> str:
        return " ".join(a + b for a, b in self._pairs)

    # nicety for debugging
    def __repr__(self) -> str:
        return f"<Plugboard {self}>"
