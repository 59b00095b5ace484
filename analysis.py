# analysis.py
"""Ciphertext-only attack in three stages.

1. ``find_rotor_configurations`` - every rotor order and start position
   with rings at zero, scored (usually) by index of coincidence.
2. ``find_ring_settings`` - ring setting of the right, then the middle
   rotor, position compensated, scored (usually) by bigrams.
3. ``find_plugs`` - greedy plugboard hill-climb, scored (usually) by
   quadgrams.

``break_cipher`` chains the three. The reflector is fixed to
``SEARCH_REFLECTOR`` for every stage.
"""
from __future__ import annotations

import itertools
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from operator import attrgetter, itemgetter
from typing import Iterable, List, Optional, Sequence, Tuple

from tqdm import tqdm

from debug import Debug
from enigma import Enigma, EnigmaKey, RotorSlot
from fitness import FitnessFunction, IoCFitness
from keyboard_and_plugboard import Plugboard
from rotor_and_reflector import ALPHABET, ReflectorId, Rotor, RotorId
from suites import rotor_suite
from utilities import validate_text

debug = Debug()

SEARCH_REFLECTOR = ReflectorId.B
POSITIONS = range(26)

RotorOrder = Tuple[RotorId, RotorId, RotorId]


@dataclass(slots=True)
class ScoredKey:
    key: EnigmaKey
    score: float

    def __str__(self) -> str:
        return f"{self.score:.6f}  {self.key}"


@dataclass(slots=True)
class AnalysisResult:
    """Everything ``break_cipher`` found, stage by stage."""

    rotor_candidates: List[ScoredKey]
    ring_key: ScoredKey
    final: ScoredKey
    plaintext: str = field(default="")


def decrypt(cipher: str, key: EnigmaKey) -> str:
    """Run `cipher` through a fresh machine set to `key`."""
    return Enigma(key, SEARCH_REFLECTOR).encrypt_text(cipher)


def _trial(key: EnigmaKey, data: bytes, buf: bytearray, fitness: FitnessFunction) -> float:
    Enigma(key, SEARCH_REFLECTOR).encrypt_into(data, buf)
    return fitness.score(buf)


# ────────────────────────────────────────────────────────────────────────
#  Stage A – rotor order & start positions
# ────────────────────────────────────────────────────────────────────────

# per-process state, set once by the pool initializer
_worker: dict = {}


def _worker_initializer(data: bytes, plugboard: Plugboard, fitness: FitnessFunction) -> None:
    _worker["data"] = data
    _worker["plugboard"] = plugboard
    _worker["fitness"] = fitness


def _search_rotor_order(order: RotorOrder) -> ScoredKey:
    return best_start_position(order, _worker["data"], _worker["plugboard"], _worker["fitness"])


def best_start_position(
    order: RotorOrder,
    data: bytes,
    plugboard: Plugboard,
    fitness: FitnessFunction,
) -> ScoredKey:
    """Best of all 26³ start positions for one rotor order (rings at 0).

    Positions are tried left-major; on equal scores the first one wins.
    """
    left_id, middle_id, right_id = order
    buf = bytearray(len(data))
    keys = (
        EnigmaKey(Rotor(left_id, i), Rotor(middle_id, j), Rotor(right_id, k), plugboard)
        for i, j, k in itertools.product(POSITIONS, POSITIONS, POSITIONS)
    )
    # max() keeps the first of equal scores
    best = max((ScoredKey(key, _trial(key, data, buf, fitness)) for key in keys), key=attrgetter("score"))
    debug.log("search", "%s: best %s", "-".join(r.name for r in order), best)
    return best


def find_rotor_configurations(
    cipher: str,
    rotors: int = 5,
    required_keys: int = 10,
    fitness: Optional[FitnessFunction] = None,
    plugboard: str | Iterable[str] | Plugboard = (),
    *,
    max_workers: Optional[int] = None,
    progress: bool = False,
) -> List[ScoredKey]:
    """Rank every ordered choice of three distinct rotors from the 3, 5 or 8 rotor box.

    Each order keeps only its best start position; the winners are sorted
    by descending score (ties keep enumeration order) and cut to
    `required_keys`. `max_workers=1` runs in this process.
    """
    validate_text(cipher)
    if required_keys < 0:
        raise ValueError(f"required_keys must not be negative, got {required_keys}")
    fitness = fitness if fitness is not None else IoCFitness()
    board = plugboard if isinstance(plugboard, Plugboard) else Plugboard(plugboard)
    orders: List[RotorOrder] = list(itertools.permutations(rotor_suite(rotors), 3))
    data = cipher.encode("ascii")

    debug.log("search", "stage A: %d rotor orders, %d letters", len(orders), len(data))

    bar = dict(total=len(orders), disable=not progress, desc="Rotor orders", unit="order")
    if max_workers == 1:
        scored = [best_start_position(o, data, board, fitness) for o in tqdm(orders, **bar)]
    else:
        with ProcessPoolExecutor(
            max_workers=max_workers,
            initializer=_worker_initializer,
            initargs=(data, board, fitness),
        ) as executor:
            # map() yields in submission order, whatever finishes first
            scored = list(tqdm(executor.map(_search_rotor_order, orders), **bar))

    scored.sort(key=lambda s: s.score, reverse=True)
    return scored[:required_keys]


# ────────────────────────────────────────────────────────────────────────
#  Stage B – ring settings
# ────────────────────────────────────────────────────────────────────────

# Only the right and middle rings are refined; the left ring stays as given.
RING_SLOTS = (RotorSlot.RIGHT, RotorSlot.MIDDLE)


def best_ring_setting(
    key: EnigmaKey,
    slot: RotorSlot,
    data: bytes,
    buf: bytearray,
    fitness: FitnessFunction,
) -> Tuple[int, int]:
    """Return the (ring, position) pair for `slot` that scores highest.

    The position moves with the ring so the wiring offset stays put and
    only the turnover timing changes.
    """
    trial = key.copy()
    rotor = trial.rotor(slot)
    start = rotor.position
    def attempt(ring: int) -> Tuple[float, int, int]:
        position = (start + ring) % 26
        rotor.set_ring(ring).set_position(position)
        return _trial(trial, data, buf, fitness), ring, position

    _, ring, position = max((attempt(ring) for ring in POSITIONS), key=itemgetter(0))
    return ring, position


def find_ring_settings(cipher: str, key: EnigmaKey, fitness: FitnessFunction) -> ScoredKey:
    validate_text(cipher)
    data = cipher.encode("ascii")
    buf = bytearray(len(data))
    key = key.copy()

    for slot in RING_SLOTS:
        ring, position = best_ring_setting(key, slot, data, buf, fitness)
        key.rotor(slot).set_ring(ring).set_position(position)
        debug.log("search", "stage B: %s ring %d position %d", slot.value, ring, position)

    return ScoredKey(key, _trial(key, data, buf, fitness))


# ────────────────────────────────────────────────────────────────────────
#  Stage C – plugboard
# ────────────────────────────────────────────────────────────────────────


def best_plug(
    key: EnigmaKey,
    data: bytes,
    buf: bytearray,
    fitness: FitnessFunction,
) -> Optional[Tuple[float, Tuple[str, str]]]:
    """Try every pair of unplugged letters on top of the key's plugboard.

    Returns (score, pair) for the best, or None when fewer than two
    letters are free.
    """
    free = [i for i, flag in enumerate(key.plugboard.unplugged()) if flag]
    best: Optional[Tuple[float, Tuple[str, str]]] = None

    for i, j in itertools.combinations(free, 2):
        pair = (ALPHABET[i], ALPHABET[j])
        trial = EnigmaKey(key.left, key.middle, key.right, key.plugboard.plug(*pair))
        score = _trial(trial, data, buf, fitness)
        if best is None or score > best[0]:
            best = (score, pair)

    return best


def find_plugs(cipher: str, key: EnigmaKey, max_plugs: int, fitness: FitnessFunction) -> ScoredKey:
    """Greedily add up to `max_plugs` pairs, starting from an empty plugboard.

    Stops early when the best next plug scores below the plugs already
    committed; committed plugs are never revisited.
    """
    validate_text(cipher)
    if max_plugs < 0:
        raise ValueError(f"max_plugs must not be negative, got {max_plugs}")
    data = cipher.encode("ascii")
    buf = bytearray(len(data))

    key = key.with_plugboard(Plugboard())
    committed = _trial(key, data, buf, fitness)

    for _ in range(max_plugs):
        found = best_plug(key, data, buf, fitness)
        if found is None:
            break
        score, pair = found
        if score < committed:
            debug.log("search", "stage C: stop, %s scores %.4f < %.4f", "".join(pair), score, committed)
            break
        key = key.with_plugboard(key.plugboard.plug(*pair))
        committed = score
        debug.log("search", "stage C: plug %s, score %.4f", "".join(pair), score)

    return ScoredKey(key, committed)


# ────────────────────────────────────────────────────────────────────────
#  Whole pipeline
# ────────────────────────────────────────────────────────────────────────


def break_cipher(
    cipher: str,
    bigrams: FitnessFunction,
    quadgrams: FitnessFunction,
    *,
    rotors: int = 5,
    required_keys: int = 10,
    max_plugs: int = 10,
    initial_plugs: Sequence[str] = (),
    max_workers: Optional[int] = None,
    progress: bool = False,
) -> AnalysisResult:
    """Rotor search (IoC) → ring settings (bigrams) → plugboard (quadgrams)."""
    if required_keys < 1:
        raise ValueError(f"required_keys must be at least 1, got {required_keys}")

    candidates = find_rotor_configurations(
        cipher,
        rotors,
        required_keys,
        IoCFitness(),
        initial_plugs,
        max_workers=max_workers,
        progress=progress,
    )
    ring_key = find_ring_settings(cipher, candidates[0].key, bigrams)
    final = find_plugs(cipher, ring_key.key, max_plugs, quadgrams)
    debug.log("search", "final key %s", final)
    return AnalysisResult(candidates, ring_key, final, decrypt(cipher, final.key))
