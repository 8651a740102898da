"""Known-answer vectors for the SHA-256 engine.

Vectors live in `sha256_vectors.yaml` next to this module. Each entry has a
`name`, a UTF-8 `message`, the expected hex `digest` and an optional `repeat`
count, e.g.:

    - name: fips-180-4 one block
      message: "abc"
      digest: ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, TextIO

import yaml

from sha256 import sha256_hex


DEFAULT_VECTORS_PATH = Path(__file__).with_name("sha256_vectors.yaml")


@dataclass(frozen=True)
class Vector:
    name: str
    message: bytes
    digest: str


def _parse_entry(idx: int, entry) -> Vector:
    if not isinstance(entry, dict):
        raise ValueError(f"Vector #{idx} must be a mapping, got {type(entry).__name__}")

    name = str(entry.get("name", f"#{idx}"))
    for key in ("message", "digest"):
        if key not in entry:
            raise ValueError(f"Vector {name!r} is missing {key!r}")

    digest = str(entry["digest"]).lower()
    if len(digest) != 64 or any(ch not in "0123456789abcdef" for ch in digest):
        raise ValueError(f"Vector {name!r} has a malformed digest: {entry['digest']!r}")

    repeat = entry.get("repeat", 1)
    if isinstance(repeat, bool) or not isinstance(repeat, int) or repeat < 0:
        raise ValueError(f"Vector {name!r} has an invalid repeat count: {repeat!r}")

    message = str(entry["message"]).encode("utf-8") * repeat
    return Vector(name=name, message=message, digest=digest)


def load_vectors(path: Optional[Path] = None) -> List[Vector]:
    """Load known-answer vectors from a YAML file (default: the bundled one)."""
    path = Path(path) if path is not None else DEFAULT_VECTORS_PATH
    with open(path, "r", encoding="utf-8") as f:
        entries = yaml.safe_load(f)

    if entries is None:
        return []
    if not isinstance(entries, list):
        raise ValueError(f"{path}: expected a list of vectors, got {type(entries).__name__}")

    return [_parse_entry(idx, entry) for idx, entry in enumerate(entries)]


def run_self_test(vectors: List[Vector], out: Optional[TextIO] = None) -> bool:
    """Hash every vector and report the outcome. Returns True if all matched."""
    out = sys.stdout if out is None else out
    passed = 0
    failed = 0

    for vector in vectors:
        actual = sha256_hex(vector.message)
        if actual == vector.digest:
            passed += 1
            print(f"[OK] {vector.name}", file=out)
        else:
            failed += 1
            print(f"[FAIL] {vector.name}: expected {vector.digest}, got {actual}", file=out)

    print(f"[SUMMARY] {passed} passed, {failed} failed", file=out)
    return failed == 0
