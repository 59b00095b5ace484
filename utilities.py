from __future__ import annotations

from typing import List

from enigma import EnigmaKey
from keyboard_and_plugboard import KEYBOARD
from rotor_and_reflector import ALPHABET, SIZE

# ────────────────────────────────────────────────────────────────────────
#  1. Text preprocessing
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str, alpha: str = ALPHABET) -> str:
    """Upper‑case and drop every character outside the alphabet."""
    return "".join(ch for ch in msg.upper() if ch in alpha)


def validate_text(text: str) -> str:
    """Return `text` unchanged, or raise if it holds anything but A–Z."""
    if not text:
        raise ValueError("Ciphertext must not be empty")
    return KEYBOARD.validate(text)


def blocks(text: str, size: int = 5) -> str:
    return " ".join(text[i : i + size] for i in range(0, len(text), size))


# ────────────────────────────────────────────────────────────────────────
#  2. Key parsing
# ────────────────────────────────────────────────────────────────────────


def parse_settings(raw: str, label: str, count: int = 3) -> List[int]:
    """Parse `count` numbers in 0‥25, or letters A‥Z, separated by spaces."""
    items = raw.replace(",", " ").split()
    if len(items) != count:
        raise ValueError(f"Need exactly {count} {label}, got {raw!r}")

    values: List[int] = []
    for item in items:
        if item.isdigit() and 0 <= int(item) < SIZE:
            values.append(int(item))
        elif len(item) == 1 and item.upper() in KEYBOARD.alpha_to_index:
            values.append(KEYBOARD.alpha_to_index[item.upper()])
        else:
            raise ValueError(f"Invalid {label[:-1]} {item!r}: expected 0–{SIZE - 1} or A–Z")
    return values


def parse_key(rotors: str, positions: str, rings: str = "0 0 0", plugs: str = "") -> EnigmaKey:
    """Build a key from operator style strings, e.g. ("II V III", "7 4 19", "12 2 20", "AF TV")."""
    names = rotors.replace(",", " ").split()
    if len(names) != 3:
        raise ValueError(f"Need exactly 3 rotors, got {rotors!r}")
    key = EnigmaKey.from_settings(
        names,
        parse_settings(positions, "positions"),
        parse_settings(rings, "ring settings"),
        plugs.upper(),
    )
    if not key.is_historical:
        raise ValueError(f"Rotors must be three distinct historical wheels, got {rotors!r}")
    return key


__all__ = [
    "preprocess_message",
    "validate_text",
    "blocks",
    "parse_settings",
    "parse_key",
]
