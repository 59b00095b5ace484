# main.py
from __future__ import annotations

import argparse
import json
import sys
import time
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional, Sequence

from analysis import SEARCH_REFLECTOR, break_cipher, decrypt
from debug import COMPONENTS, Debug
from enigma import Enigma
from fitness import BigramFitness, QuadgramFitness
from suites import ROTOR_SUITES
from utilities import blocks, parse_key, preprocess_message, validate_text

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Config:
    """Search parameters for a `break` run."""

    bigrams: str = ""               # KEY,VALUE file for ring settings
    quadgrams: str = ""             # KEY,VALUE file for the plugboard
    rotors: int = 5                 # size of the rotor box: 3, 5 or 8
    required_keys: int = 10         # rotor candidates kept after stage A
    max_plugs: int = 10             # upper bound for the plugboard search
    workers: Optional[int] = None   # stage A processes, None = one per CPU
    progress: bool = False          # show a progress bar over rotor orders
    debug: List[str] = field(default_factory=list)

    def validate(self) -> "Config":
        for name in ("rotors", "required_keys", "max_plugs", "workers"):
            value = getattr(self, name)
            if value is None and name == "workers":
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        for name in ("bigrams", "quadgrams"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a file path, got {getattr(self, name)!r}")
        if not isinstance(self.progress, bool):
            raise ValueError(f"progress must be true or false, got {self.progress!r}")
        if not isinstance(self.debug, list) or not all(isinstance(c, str) for c in self.debug):
            raise ValueError(f"debug must be a list of component names, got {self.debug!r}")
        if self.rotors not in ROTOR_SUITES:
            raise ValueError(f"rotors must be one of {list(ROTOR_SUITES)}, got {self.rotors!r}")
        if self.required_keys < 1:
            raise ValueError("required_keys must be at least 1")
        if not 0 <= self.max_plugs <= 13:
            raise ValueError("max_plugs must be in 0–13")
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        missing = [name for name in ("bigrams", "quadgrams") if not getattr(self, name)]
        if missing:
            raise ValueError(f"Missing n-gram files: {', '.join(missing)}")
        unknown = set(self.debug) - set(COMPONENTS)
        if unknown:
            raise ValueError(f"Unknown debug components: {', '.join(sorted(unknown))}")
        return self


CONFIG_KEYS = {f.name for f in fields(Config)}


def load_config(path: str | Path) -> dict:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config file must hold a JSON object")
    unknown = data.keys() - CONFIG_KEYS
    if unknown:
        raise ValueError(f"Unknown keys in config: {', '.join(sorted(unknown))}")
    return data


def build_config(args: argparse.Namespace) -> Config:
    """JSON file first, then any flag given on the command line."""
    values = load_config(args.config) if args.config else {}
    for name in CONFIG_KEYS:
        flag = getattr(args, name, None)
        if flag is not None and flag is not False:
            values[name] = flag
    return Config(**values).validate()


# ────────────────────────────────────────────────────────────────────────
#  1. Input helpers
# ────────────────────────────────────────────────────────────────────────


def read_cipher(args: argparse.Namespace) -> str:
    if args.file:
        raw = Path(args.file).read_text(encoding="utf-8")
    elif args.text:
        raw = args.text
    else:
        raw = sys.stdin.read()
    return validate_text(preprocess_message(raw))


# ────────────────────────────────────────────────────────────────────────
#  2. Commands
# ────────────────────────────────────────────────────────────────────────


def run_break(args: argparse.Namespace) -> None:
    cfg = build_config(args)
    if cfg.debug:
        debug.enable(*cfg.debug)

    cipher = read_cipher(args)
    bigrams = BigramFitness.from_file(cfg.bigrams)
    quadgrams = QuadgramFitness.from_file(cfg.quadgrams)

    start = time.perf_counter()
    result = break_cipher(
        cipher,
        bigrams,
        quadgrams,
        rotors=cfg.rotors,
        required_keys=cfg.required_keys,
        max_plugs=cfg.max_plugs,
        max_workers=cfg.workers,
        progress=cfg.progress,
    )

    print(f"\nTop {len(result.rotor_candidates)} rotor configurations:")
    for scored in result.rotor_candidates:
        print(scored)
    print("\nRing settings:", result.ring_key)
    print("Final key:    ", result.final)
    print("\nDecrypted:", blocks(result.plaintext))
    print(f"\nTotal time: {time.perf_counter() - start:.1f}s")


def run_encrypt(args: argparse.Namespace) -> None:
    key = parse_key(args.rotors, args.positions, args.rings, args.plugs)
    text = read_cipher(args)
    if args.trace:
        debug.enable("stepping", "encipher")
        machine = Enigma(key, SEARCH_REFLECTOR)
        out = "".join(machine.encrypt(ch) for ch in text)
    else:
        out = decrypt(text, key)
    print(blocks(out) if args.blocks else out)


# ────────────────────────────────────────────────────────────────────────
#  3. CLI
# ────────────────────────────────────────────────────────────────────────


def _add_input(p: argparse.ArgumentParser) -> None:
    src = p.add_mutually_exclusive_group()
    src.add_argument("text", nargs="?", help="Message text. Letters only are kept; reads stdin if omitted.")
    src.add_argument("-f", "--file", metavar="FILE", help="Read the message from a file.")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Enigma M3 simulator and ciphertext-only attack")
    sub = p.add_subparsers(dest="command", required=True)

    b = sub.add_parser("break", help="Recover the key of a ciphertext")
    _add_input(b)
    b.add_argument("--config", metavar="FILE", help="Load search settings from JSON; flags override it.")
    b.add_argument("--bigrams", metavar="FILE", help="Bigram KEY,VALUE file (ring settings stage).")
    b.add_argument("--quadgrams", metavar="FILE", help="Quadgram KEY,VALUE file (plugboard stage).")
    b.add_argument("--rotors", type=int, choices=sorted(ROTOR_SUITES), help="Rotor box size. Default: 5")
    b.add_argument("--required-keys", dest="required_keys", type=int, help="Rotor candidates to keep. Default: 10")
    b.add_argument("--max-plugs", dest="max_plugs", type=int, help="Most plugs to search for. Default: 10")
    b.add_argument("--workers", type=int, help="Processes for the rotor search. Default: one per CPU")
    b.add_argument("--progress", action="store_true", help="Show a progress bar for the rotor search.")
    b.add_argument("--debug", nargs="+", choices=COMPONENTS, metavar="COMPONENT",
                   help=f"Enable debug logging for: {', '.join(COMPONENTS)}")
    b.set_defaults(func=run_break)

    e = sub.add_parser("encrypt", aliases=["decrypt"], help="Run text through a machine with a known key")
    _add_input(e)
    e.add_argument("--rotors", required=True, help='Left to right, e.g. "II V III"')
    e.add_argument("--positions", required=True, help='Start positions, e.g. "7 4 19" or "H E T"')
    e.add_argument("--rings", default="0 0 0", help='Ring settings, e.g. "12 2 20". Default: 0 0 0')
    e.add_argument("--plugs", default="", help='Plugboard pairs, e.g. "AF TV KO"')
    e.add_argument("--blocks", action="store_true", help="Print output in groups of five.")
    e.add_argument("--trace", action="store_true", help="Log rotor positions for every letter.")
    e.set_defaults(func=run_encrypt)

    return p.parse_args(argv)


# ────────────────────────────────────────────────────────────────────────
#  4. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    try:
        args.func(args)
    except (ValueError, OSError) as exc:
        raise SystemExit(f"❌  {exc}") from exc


if __name__ == "__main__":
    main()
