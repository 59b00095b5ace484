# rotor_and_reflector.py
from __future__ import annotations

from enum import IntEnum
from typing import Dict, Tuple

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
SIZE = len(ALPHABET)

Wiring = Tuple[int, ...]


class RotorId(IntEnum):
    I = 0
    II = 1
    III = 2
    IV = 3
    V = 4
    VI = 5
    VII = 6
    VIII = 7
    IDENTITY = 8

    @classmethod
    def parse(cls, name: str) -> "RotorId":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown rotor {name!r}") from None

    def is_at_notch(self, position: int) -> bool:
        return position in ROTOR_NOTCHES[self]


class ReflectorId(IntEnum):
    B = 0
    C = 1
    IDENTITY = 2

    @property
    def wiring(self) -> Wiring:
        return REFLECTOR_WIRING[self]

    def reflect(self, c: int) -> int:
        return REFLECTOR_WIRING[self][c]


# ── wheel database ───────────────────────────────────────────────
#    wiring letters plus notch letters (position where the carry fires)
_ROTORS: Dict[RotorId, Tuple[str, str]] = {
    RotorId.I:        ("EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
    RotorId.II:       ("AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
    RotorId.III:      ("BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
    RotorId.IV:       ("ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
    RotorId.V:        ("VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
    RotorId.VI:       ("JPGVOUMFYQBENHZRDKASXLICTW", "MZ"),
    RotorId.VII:      ("NZJHGRCXMYSWBOUFAIVLPEKQDT", "MZ"),
    RotorId.VIII:     ("FKQHTLXOCBJSPDZRAMEWNIUYGV", "MZ"),
    RotorId.IDENTITY: (ALPHABET, "A"),
}

_REFLECTORS: Dict[ReflectorId, str] = {
    ReflectorId.B:        "YRUHQSLDPXNGOKMIEBFZCWVJAT",
    ReflectorId.C:        "FVPJIAOYEDRZXWGCTKUQSBNMHL",
    ReflectorId.IDENTITY: "ZYXWVUTSRQPONMLKJIHGFEDCBA",
}


def _forward(wiring: str) -> Wiring:
    if sorted(wiring) != sorted(ALPHABET):
        raise ValueError("wiring must be a permutation of alphabet")
    return tuple(ALPHABET.index(c) for c in wiring)


def _backward(wiring: str) -> Wiring:
    return tuple(wiring.index(c) for c in ALPHABET)


def _reflector(wiring: str) -> Wiring:
    if len(wiring) != SIZE:
        raise ValueError("Reflector wiring length must match alphabet length")

    # ensure involution property (w[i] = j ⇒ w[j] = i) and no self-maps
    for i, c in enumerate(wiring):
        j = ALPHABET.index(c)
        if wiring[j] != ALPHABET[i] or i == j:
            raise ValueError("Reflector wiring must be an involution with no fixed points")
    return tuple(ALPHABET.index(c) for c in wiring)


# Built once at import, indexed by the enum value, never mutated afterwards.
ROTOR_FORWARD_WIRING: Tuple[Wiring, ...] = tuple(_forward(_ROTORS[r][0]) for r in RotorId)
ROTOR_BACKWARD_WIRING: Tuple[Wiring, ...] = tuple(_backward(_ROTORS[r][0]) for r in RotorId)
ROTOR_NOTCHES: Tuple[frozenset[int], ...] = tuple(
    frozenset(ALPHABET.index(n) for n in _ROTORS[r][1]) for r in RotorId
)
REFLECTOR_WIRING: Tuple[Wiring, ...] = tuple(_reflector(_REFLECTORS[r]) for r in ReflectorId)


# ── the substitution primitive ───────────────────────────────────
def encypher(c: int, pos: int, ring: int, mapping: Wiring) -> int:
    """Pass signal `c` through `mapping` offset by (pos - ring).

    All of `c`, `pos` and `ring` must already be in 0..25; wraparound
    is done with a single compare instead of a modulo.
    """
    shift = pos - ring
    if shift < 0:
        shift += 26
    idx = c + shift
    if idx > 25:
        idx -= 26
    val = mapping[idx] - shift
    if val < 0:
        val += 26
    return val


def _check_range(name: str, value: int) -> int:
    if not isinstance(value, int) or not 0 <= value < SIZE:
        raise ValueError(f"{name} must be in 0..{SIZE - 1}, got {value!r}")
    return value


class Rotor:
    __slots__ = ("id", "position", "ring_setting")

    def __init__(self, rotor_id: RotorId, position: int = 0, ring_setting: int = 0) -> None:
        self.id = RotorId(rotor_id)
        self.position = _check_range("position", position)
        self.ring_setting = _check_range("ring_setting", ring_setting)

    # ── ring & position helpers ───────────────────────────────────
    def set_position(self, position: int) -> "Rotor":
        self.position = _check_range("position", position)
        return self

    def set_ring(self, ring: int) -> "Rotor":
        self.ring_setting = _check_range("ring_setting", ring)
        return self

    def copy(self) -> "Rotor":
        return Rotor(self.id, self.position, self.ring_setting)

    # ── stepping --------------------------------------------------
    def is_at_notch(self) -> bool:
        return self.id.is_at_notch(self.position)

    def turnover(self) -> None:
        pos = self.position + 1
        self.position = pos - 26 if pos > 25 else pos

    # ── signal paths ---------------------------------------------
    def forward(self, sig: int) -> int:
        return encypher(sig, self.position, self.ring_setting, ROTOR_FORWARD_WIRING[self.id])

    def backward(self, sig: int) -> int:
        return encypher(sig, self.position, self.ring_setting, ROTOR_BACKWARD_WIRING[self.id])

    # ── niceties --------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rotor):
            return NotImplemented
        return (self.id, self.position, self.ring_setting) == (
            other.id, other.position, other.ring_setting
        )

    def __str__(self) -> str:
        return f"{self.id.name} {self.position} {self.ring_setting}"

    def __repr__(self) -> str:
        return f"<Rotor {self.id.name} pos={self.position} ring={self.ring_setting}>"
