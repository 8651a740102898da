"""SHA-256 message schedule: expand one 64-byte block into 64 words."""

from __future__ import annotations

from typing import List, Sequence

from compress import BLOCK_SIZE, MASK32, ROUNDS, _rotr


# (rotation, rotation, logical shift) for the schedule's small sigma functions.
SMALL_SIGMA0_PARAMS = (7, 18, 3)
SMALL_SIGMA1_PARAMS = (17, 19, 10)

WORD_BYTES = 4


def _shr(x: int, n: int) -> int:
    """Right-shift a 32-bit word `x` by `n` bits."""
    x &= MASK32
    return x >> n


def small_sigma0(x: int) -> int:
    """SHA-256 function σ0 used in the message schedule."""
    r1, r2, s = SMALL_SIGMA0_PARAMS
    return (_rotr(x, r1) ^ _rotr(x, r2) ^ _shr(x, s)) & MASK32


def small_sigma1(x: int) -> int:
    """SHA-256 function σ1 used in the message schedule."""
    r1, r2, s = SMALL_SIGMA1_PARAMS
    return (_rotr(x, r1) ^ _rotr(x, r2) ^ _shr(x, s)) & MASK32


def expand_message_schedule(w: Sequence[int], rounds: int = ROUNDS) -> List[int]:
    """Expand an initial schedule W[0..15] to W[0..(rounds-1)].

    The input ``w`` must contain at least the first 16 words; any additional
    words are recomputed. The returned list has exactly ``rounds`` 32-bit
    words and leaves W[0..15] as provided.
    """
    if len(w) < 16:
        raise ValueError(
            f"Message schedule must contain at least 16 words, got {len(w)}"
        )

    schedule = [word & MASK32 for word in w[:16]] + [0] * (rounds - 16)
    for i in range(16, rounds):
        s0 = small_sigma0(schedule[i - 15])
        s1 = small_sigma1(schedule[i - 2])
        schedule[i] = (schedule[i - 16] + s0 + schedule[i - 7] + s1) & MASK32

    return schedule


def build_message_schedule(block) -> List[int]:
    """Given a 512-bit block, build the 64-word message schedule w[0..63].

    ``block`` may be any bytes-like object of exactly 64 bytes.
    """
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"Expected {BLOCK_SIZE}-byte block, got {len(block)}")

    # First 16 words come directly from the block (big-endian).
    w = [
        int.from_bytes(block[i : i + WORD_BYTES], byteorder="big")
        for i in range(0, BLOCK_SIZE, WORD_BYTES)
    ]
    return expand_message_schedule(w)
