# suites.py
from typing import Dict, Tuple

from rotor_and_reflector import RotorId

# Wheel boxes an operator could have had: the three original army
# rotors, the five-rotor box, and the full naval set of eight.
ROTOR_SUITES: Dict[int, Tuple[RotorId, ...]] = {
    3: (RotorId.I, RotorId.II, RotorId.III),
    5: (RotorId.I, RotorId.II, RotorId.III, RotorId.IV, RotorId.V),
    8: tuple(r for r in RotorId if r is not RotorId.IDENTITY),
}


def rotor_suite(count: int) -> Tuple[RotorId, ...]:
    try:
        return ROTOR_SUITES[count]
    except KeyError:
        raise ValueError(f"Unknown rotor set size {count!r}. Expected one of {list(ROTOR_SUITES)}") from None
