"""SHA-256 compression: constants, bit-mixing primitives and the round loop.

One iteration of the compression loop takes the working state words
`(a, b, c, d, e, f, g, h)`, the round constant `k` and the message schedule
word `w`, and computes:

    S1    = (e >>> 6) ^ (e >>> 11) ^ (e >>> 25)
    ch    = (e & f) ^ (~e & g)
    temp1 = h + S1 + ch + k + w

    S0    = (a >>> 2) ^ (a >>> 13) ^ (a >>> 22)
    maj   = (a & b) ^ (a & c) ^ (b & c)
    temp2 = S0 + maj

    a' = temp1 + temp2
    e' = d + temp1

and shifts the remaining registers down by one (b' = a, c' = b, ...).

All additions are performed modulo 2**32, as in SHA-256.
"""

from __future__ import annotations

from typing import Sequence, Tuple


MASK32 = 0xFFFFFFFF
WORD_BITS = 32

# Bytes per message block.
BLOCK_SIZE = 64

# Number of compression rounds per block.
ROUNDS = 64

# Rotation amounts of the "big" sigma functions used in compression.
SIGMA0_ROTATIONS = (2, 13, 22)
SIGMA1_ROTATIONS = (6, 11, 25)

# Standard SHA-256 round constants k[0..63] from FIPS 180-4 (first 32 bits of
# the fractional parts of the cube roots of the first 64 primes).
K_VALUES: Tuple[int, ...] = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5,
    0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3,
    0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC,
    0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7,
    0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13,
    0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3,
    0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5,
    0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208,
    0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)


def _rotr(x: int, n: int) -> int:
    """Right-rotate a 32-bit word `x` by `n` bits (0 < n < 32)."""
    x &= MASK32
    return ((x >> n) | (x << (WORD_BITS - n))) & MASK32


def big_sigma0(a: int) -> int:
    """SHA-256 function Σ0 applied to the `a` register."""
    r1, r2, r3 = SIGMA0_ROTATIONS
    return _rotr(a, r1) ^ _rotr(a, r2) ^ _rotr(a, r3)


def big_sigma1(e: int) -> int:
    """SHA-256 function Σ1 applied to the `e` register."""
    r1, r2, r3 = SIGMA1_ROTATIONS
    return _rotr(e, r1) ^ _rotr(e, r2) ^ _rotr(e, r3)


def ch(e: int, f: int, g: int) -> int:
    """Choose: each bit of `e` selects the bit of `f` (1) or `g` (0)."""
    return ((e & f) ^ ((~e) & g)) & MASK32


def maj(a: int, b: int, c: int) -> int:
    """Majority of the bits of `a`, `b` and `c`."""
    return (a & b) ^ (a & c) ^ (b & c)


def compression(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    w: int,
    k: int,
) -> Tuple[int, int, int, int, int, int, int, int]:
    """Perform one SHA-256 compression round.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        32-bit words representing the current working state.
    w : int
        Message schedule word `w[i]`.
    k : int
        Round constant `k[i]`.

    Returns
    -------
    (a_new, b_new, c_new, d_new, e_new, f_new, g_new, h_new) : tuple[int, ...]
        Updated working state after one compression round, all reduced modulo 2**32.
    """
    temp1 = (h + big_sigma1(e) + ch(e, f, g) + k + w) & MASK32
    temp2 = (big_sigma0(a) + maj(a, b, c)) & MASK32

    return (
        (temp1 + temp2) & MASK32,
        a,
        b,
        c,
        (d + temp1) & MASK32,
        e,
        f,
        g,
    )


def compress64(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    ws: Sequence[int],
) -> Tuple[int, int, int, int, int, int, int, int]:
    """Run the full 64-round SHA-256 compression loop for one block.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        Initial working state words (the current hash value).
    ws : Sequence[int]
        The 64-word message schedule `w[0..63]` for this block.

    Returns
    -------
    (a, b, c, d, e, f, g, h) : tuple[int, ...]
        Final working state words after 64 rounds. The caller still has to add
        them onto the previous hash value (see `sha256.compress_block`).
    """
    if len(ws) != ROUNDS:
        raise ValueError(f"compress64 expects {ROUNDS} message schedule words, got {len(ws)}")

    state = (a, b, c, d, e, f, g, h)
    for i in range(ROUNDS):
        state = compression(*state, ws[i], K_VALUES[i])

    return state
