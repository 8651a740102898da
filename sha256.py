"""Incremental SHA-256 (FIPS 180-4) built on `compress64` from `compress.py`.

This module provides:

- `SHA256`: a streaming hash object. Feed it with `update(data)` any number of
  times, then call `finalize()` exactly once to obtain the 32-byte digest.
- `sha256(data) -> bytes` and `sha256_hex(data) -> str`: one-shot helpers.

Typical use:

    with SHA256() as h:
        for chunk in chunks:
            h.update(chunk)
        digest = h.finalize()

Splitting the input differently never changes the digest: hashing `b"abc"` in
one call is the same as hashing `b"a"`, `b"b"`, `b"c"` in three calls.
"""

from __future__ import annotations

from typing import Tuple

from compress import BLOCK_SIZE, MASK32, compress64
from message_schedule import build_message_schedule


State = Tuple[int, int, int, int, int, int, int, int]

# Initial hash values (first 32 bits of the fractional parts of the
# square roots of the first 8 primes 2..19), as per FIPS 180-4.
H0: State = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)

DIGEST_SIZE = 32

# The final block ends with the message length in bits as a 64-bit
# big-endian integer at offsets 56..63.
LENGTH_FIELD_SIZE = 8
LENGTH_OFFSET = BLOCK_SIZE - LENGTH_FIELD_SIZE

# The mandatory '1' bit followed by seven zero bits.
PAD_BYTE = 0x80

# Largest input whose length in bits still fits the 64-bit length field.
MAX_MESSAGE_BYTES = (1 << 61) - 1


def compress_block(state: State, block) -> State:
    """Fold one 64-byte block into the running hash value.

    Builds the message schedule, runs the 64 rounds and adds the resulting
    working words onto the previous hash value:

        H_{i+1}[j] = (H_i[j] + working[j]) mod 2^32
    """
    ws = build_message_schedule(block)
    work = compress64(*state, ws)
    return tuple((prev + new) & MASK32 for prev, new in zip(state, work))


def _finalize_digest_from_state(state: State) -> bytes:
    """Convert the final hash state into the 32-byte SHA-256 digest."""
    return b"".join(word.to_bytes(4, byteorder="big") for word in state)


class SHA256:
    """Streaming SHA-256 hash object.

    The object is owned by a single caller and goes through two states:
    accumulating (``update`` may be called) and finalized (after
    ``finalize``). Using it again after ``finalize`` raises ``RuntimeError``.
    """

    name = "sha256"
    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    def __init__(self, data=b"") -> None:
        self._h: State = H0
        self._pending = bytearray(BLOCK_SIZE)
        self._pending_count = 0
        self._total_length = 0
        self._finalized = False
        if data:
            self.update(data)

    def __enter__(self) -> "SHA256":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        status = "finalized" if self._finalized else "accumulating"
        return f"<SHA256 {status} total_length={self._total_length}>"

    @property
    def total_length(self) -> int:
        """Number of bytes absorbed so far."""
        return self._total_length

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _check_accumulating(self, operation: str) -> None:
        if self._finalized:
            raise RuntimeError(f"SHA256.{operation}() called after finalize()")

    def update(self, data) -> None:
        """Absorb ``data`` (any bytes-like object, possibly empty).

        Full blocks are compressed as soon as they are complete; a trailing
        partial block stays in the pending buffer until the next call or
        ``finalize``.
        """
        self._check_accumulating("update")

        view = memoryview(data).cast("B")
        size = len(view)
        if self._total_length + size > MAX_MESSAGE_BYTES:
            raise OverflowError(
                f"SHA-256 input limited to {MAX_MESSAGE_BYTES} bytes, "
                f"got {self._total_length + size}"
            )
        self._total_length += size

        offset = 0
        if self._pending_count:
            take = min(BLOCK_SIZE - self._pending_count, size)
            self._pending[self._pending_count : self._pending_count + take] = view[:take]
            self._pending_count += take
            offset = take
            if self._pending_count < BLOCK_SIZE:
                return
            self._h = compress_block(self._h, self._pending)
            self._pending_count = 0

        # Whole blocks straight from the input, without buffering.
        while size - offset >= BLOCK_SIZE:
            self._h = compress_block(self._h, view[offset : offset + BLOCK_SIZE])
            offset += BLOCK_SIZE

        remaining = size - offset
        self._pending[:remaining] = view[offset:]
        self._pending_count = remaining

    def finalize(self) -> bytes:
        """Pad the message, compress the last block(s) and return the digest.

        May be called only once; the hash object cannot be reused afterwards.
        """
        self._check_accumulating("finalize")
        self._finalized = True

        block = self._pending
        count = self._pending_count

        block[count] = PAD_BYTE
        count += 1

        # No room left for the length field: this block is padding only.
        if count > LENGTH_OFFSET:
            block[count:] = bytes(BLOCK_SIZE - count)
            self._h = compress_block(self._h, block)
            count = 0

        block[count:LENGTH_OFFSET] = bytes(LENGTH_OFFSET - count)
        block[LENGTH_OFFSET:] = (self._total_length * 8).to_bytes(
            LENGTH_FIELD_SIZE, byteorder="big"
        )
        self._h = compress_block(self._h, block)
        self._pending_count = 0

        return _finalize_digest_from_state(self._h)

    def hexdigest(self) -> str:
        """Finalize and return the digest as 64 lowercase hex digits."""
        return self.finalize().hex()

    def close(self) -> None:
        """Wipe buffered input and running state; the object is finalized."""
        self._pending[:] = bytes(BLOCK_SIZE)
        self._pending_count = 0
        self._h = (0,) * 8
        self._finalized = True


def sha256(data) -> bytes:
    """Compute the SHA-256 digest of `data` in one call."""
    with SHA256() as h:
        h.update(data)
        return h.finalize()


def sha256_hex(data) -> str:
    """Convenience helper to return the SHA-256 hex digest of `data`."""
    return sha256(data).hex()
