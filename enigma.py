# enigma.py  ───────────────────────────────────────────────────────
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from debug import Debug
from keyboard_and_plugboard import KEYBOARD, Plugboard
from rotor_and_reflector import (
    REFLECTOR_WIRING,
    ROTOR_BACKWARD_WIRING,
    ROTOR_FORWARD_WIRING,
    ROTOR_NOTCHES,
    ReflectorId,
    Rotor,
    RotorId,
    encypher,
)

debug = Debug()


class RotorSlot(Enum):
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"


@dataclass(slots=True)
class EnigmaKey:
    """Rotor order, positions, ring settings and plugboard of one candidate.

    The reflector is not part of the key; it is chosen per machine.
    """

    left: Rotor
    middle: Rotor
    right: Rotor
    plugboard: Plugboard = field(default_factory=Plugboard)

    @classmethod
    def from_settings(
        cls,
        rotors: Sequence[RotorId | str],
        positions: Sequence[int] = (0, 0, 0),
        rings: Sequence[int] = (0, 0, 0),
        plugboard: str | Plugboard = "",
    ) -> "EnigmaKey":
        """Build a key from (left, middle, right) rotor names/ids, positions and rings."""
        if not len(rotors) == len(positions) == len(rings) == 3:
            raise ValueError("Need exactly 3 rotors, 3 positions and 3 ring settings")
        ids = [r if isinstance(r, RotorId) else RotorId.parse(r) for r in rotors]
        left, middle, right = (Rotor(i, p, r) for i, p, r in zip(ids, positions, rings))
        if not isinstance(plugboard, Plugboard):
            plugboard = Plugboard(plugboard)
        return cls(left, middle, right, plugboard)

    # ── accessors ────────────────────────────────────────────────
    @property
    def rotors(self) -> tuple[Rotor, Rotor, Rotor]:
        return self.left, self.middle, self.right

    def rotor(self, slot: RotorSlot) -> Rotor:
        return getattr(self, slot.value)

    @property
    def is_historical(self) -> bool:
        """Three distinct historical wheels (no identity rotor)."""
        ids = {r.id for r in self.rotors}
        return len(ids) == 3 and RotorId.IDENTITY not in ids

    def copy(self) -> "EnigmaKey":
        # the plugboard is immutable and can be shared
        return EnigmaKey(self.left.copy(), self.middle.copy(), self.right.copy(), self.plugboard)

    def with_plugboard(self, plugboard: Plugboard) -> "EnigmaKey":
        key = self.copy()
        key.plugboard = plugboard
        return key

    def __str__(self) -> str:
        return (
            f"Left: {self.left} | Middle: {self.middle} | Right: {self.right}"
            f" | Plugboard: {self.plugboard}"
        )


class Enigma:
    """Three-rotor machine built from a key and a reflector.

    Rotors are copied from the key, so running the machine never moves the
    key's own rotor positions.
    """

    def __init__(self, key: EnigmaKey, reflector: ReflectorId = ReflectorId.B) -> None:
        self.left = key.left.copy()
        self.middle = key.middle.copy()
        self.right = key.right.copy()
        self.plugboard = key.plugboard
        self.reflector = ReflectorId(reflector)

    # ── key helpers ─────────────────────────────────────────────

    @property
    def positions(self) -> tuple[int, int, int]:
        return self.left.position, self.middle.position, self.right.position

    def set_positions(self, positions: Sequence[int]) -> None:
        """Rotate each rotor (left, middle, right) to a window position."""
        for rotor, pos in zip((self.left, self.middle, self.right), positions):
            rotor.set_position(pos)

    # ── stepping logic  ─────────────────────────────────────────

    def _rotate(self) -> None:
        """Advance rotors one key-press, including the double step."""
        if self.middle.is_at_notch():
            # middle and left turn over together
            self.middle.turnover()
            self.left.turnover()
        elif self.right.is_at_notch():
            self.middle.turnover()

        self.right.turnover()

    # ── encipher one symbol  ────────────────────────────────────

    def encrypt(self, letter: str) -> str:
        signal = KEYBOARD.forward(letter)

        self._rotate()
        debug.log("stepping", "Rotor pos %s", self.positions)

        signal = self.plugboard.forward(signal)

        signal = self.right.forward(signal)
        signal = self.middle.forward(signal)
        signal = self.left.forward(signal)

        signal = self.reflector.reflect(signal)

        signal = self.left.backward(signal)
        signal = self.middle.backward(signal)
        signal = self.right.backward(signal)

        signal = self.plugboard.backward(signal)
        out_ch = KEYBOARD.backward(signal)
        debug.log("encipher", "%s -> %s", letter, out_ch)
        return out_ch

    # ── encipher a whole message ────────────────────────────────

    def encrypt_text(self, text: str) -> str:
        KEYBOARD.validate(text)
        out = bytearray(len(text))
        self.encrypt_into(text.encode("ascii"), out)
        return out.decode("ascii")

    def encrypt_into(self, data: bytes | bytearray, out: bytearray) -> bytearray:
        """Encipher ASCII letter codes from `data` into the buffer `out`.

        This is the search loop's primitive: nothing is validated, every
        byte of `data` must be in b"A".."Z". `out` is resized only when its
        length differs from `data`, so one buffer can serve many trials.
        """
        n = len(data)
        if len(out) != n:
            out[:] = bytes(n)

        left, middle, right = self.left, self.middle, self.right
        lf, lb = ROTOR_FORWARD_WIRING[left.id], ROTOR_BACKWARD_WIRING[left.id]
        mf, mb = ROTOR_FORWARD_WIRING[middle.id], ROTOR_BACKWARD_WIRING[middle.id]
        rf, rb = ROTOR_FORWARD_WIRING[right.id], ROTOR_BACKWARD_WIRING[right.id]
        m_notch, r_notch = ROTOR_NOTCHES[middle.id], ROTOR_NOTCHES[right.id]
        lr, mr, rr = left.ring_setting, middle.ring_setting, right.ring_setting
        lp, mp, rp = left.position, middle.position, right.position
        plug = self.plugboard.wiring
        refl = REFLECTOR_WIRING[self.reflector]
        enc = encypher

        for i, code in enumerate(data):
            # same order as _rotate()
            if mp in m_notch:
                mp = 0 if mp == 25 else mp + 1
                lp = 0 if lp == 25 else lp + 1
            elif rp in r_notch:
                mp = 0 if mp == 25 else mp + 1
            rp = 0 if rp == 25 else rp + 1

            c = plug[code - 65]
            c = enc(enc(enc(c, rp, rr, rf), mp, mr, mf), lp, lr, lf)
            c = refl[c]
            c = enc(enc(enc(c, lp, lr, lb), mp, mr, mb), rp, rr, rb)
            out[i] = plug[c] + 65

        left.position, middle.position, right.position = lp, mp, rp
        return out

    def __repr__(self) -> str:
        return (
            f"<Enigma {self.left.id.name}-{self.middle.id.name}-{self.right.id.name}"
            f" pos={self.positions} reflector={self.reflector.name}>"
        )
