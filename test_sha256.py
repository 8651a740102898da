import hashlib
import random

import pytest

from sha256 import MAX_MESSAGE_BYTES, SHA256, sha256, sha256_hex


KNOWN_VECTORS = [
    (b"", "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"),
    (b"abc", "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
    (
        b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq",
        "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1",
    ),
    (
        b"abcdefghbcdefghicdefghijdefghijkefghijklfghijklmghijklmn"
        b"hijklmnoijklmnopjklmnopqklmnopqrlmnopqrsmnopqrstnopqrstu",
        "cf5b16a778af8380036ce59e7b0492370b249b11e8f07a51afac45037afee9d1",
    ),
]

# Lengths around the point where the length field no longer fits the
# final block (55 fits, 56 needs an extra block), for one and two blocks.
BOUNDARY_LENGTHS = [0, 1, 55, 56, 57, 63, 64, 65, 119, 120, 121, 127, 128, 129]


def _message(length: int) -> bytes:
    return bytes((i * 7 + 3) & 0xFF for i in range(length))


@pytest.mark.parametrize("message,expected", KNOWN_VECTORS)
def test_known_vectors(message, expected):
    assert sha256_hex(message) == expected
    assert sha256(message) == bytes.fromhex(expected)


def test_one_million_a():
    h = SHA256()
    chunk = b"a" * 1000
    for _ in range(1000):
        h.update(chunk)
    assert h.hexdigest() == "cdc76e5c9914fb9281a1c7e284d73e67f1809a48a497200e046d39ccc7112cd0"


@pytest.mark.parametrize("length", BOUNDARY_LENGTHS)
def test_padding_boundaries_match_hashlib(length):
    message = _message(length)
    assert sha256(message) == hashlib.sha256(message).digest()


@pytest.mark.parametrize("length", BOUNDARY_LENGTHS)
def test_byte_at_a_time_matches_single_update(length):
    message = _message(length)

    h = SHA256()
    for i in range(length):
        h.update(message[i : i + 1])

    assert h.finalize() == sha256(message)


def test_random_partitions_match_single_update():
    """Any way of chunking the input yields the same digest."""
    rng = random.Random(1337)
    message = bytes(rng.randrange(256) for _ in range(1000))
    expected = hashlib.sha256(message).digest()

    for _ in range(25):
        h = SHA256()
        offset = 0
        while offset < len(message):
            size = rng.choice([0, 1, 3, 17, 63, 64, 65, 200])
            h.update(message[offset : offset + size])
            offset += size
        assert h.finalize() == expected


def test_accepts_bytes_like_objects():
    message = b"The quick brown fox jumps over the lazy dog"
    expected = sha256(message)

    h = SHA256()
    h.update(bytearray(message[:10]))
    h.update(memoryview(message)[10:30])
    h.update(message[30:])
    assert h.finalize() == expected


def test_constructor_absorbs_initial_data():
    assert SHA256(b"ab").finalize() == sha256(b"ab")

    h = SHA256(b"a")
    h.update(b"bc")
    assert h.hexdigest() == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


def test_empty_updates_do_not_change_digest():
    h = SHA256()
    h.update(b"")
    h.update(b"abc")
    h.update(b"")
    assert h.finalize() == sha256(b"abc")


def test_deterministic_across_instances():
    message = _message(300)
    assert SHA256(message).finalize() == SHA256(message).finalize()


@pytest.mark.parametrize("length", [0, 1, 64, 1000, 100_000])
def test_digest_is_always_32_bytes(length):
    assert len(sha256(b"\x5a" * length)) == 32


def test_total_length_counts_bytes():
    h = SHA256()
    h.update(b"x" * 70)
    h.update(b"y" * 5)
    assert h.total_length == 75


def test_single_bit_flip_avalanche():
    message = bytearray(_message(100))
    before = int.from_bytes(sha256(bytes(message)), "big")
    message[42] ^= 0x01
    after = int.from_bytes(sha256(bytes(message)), "big")

    changed = bin(before ^ after).count("1")
    # Roughly half of the 256 bits are expected to flip.
    assert 64 < changed < 192


def test_update_after_finalize_raises():
    h = SHA256(b"abc")
    h.finalize()
    assert h.finalized
    with pytest.raises(RuntimeError):
        h.update(b"more")


def test_finalize_twice_raises():
    h = SHA256(b"abc")
    h.finalize()
    with pytest.raises(RuntimeError):
        h.finalize()


def test_update_rejects_text():
    with pytest.raises(TypeError):
        SHA256().update("abc")


def test_input_length_limit(monkeypatch):
    h = SHA256(b"abc")
    monkeypatch.setattr(h, "_total_length", MAX_MESSAGE_BYTES - 1)

    with pytest.raises(OverflowError):
        h.update(b"ab")
    # State is untouched by the rejected update.
    assert h.total_length == MAX_MESSAGE_BYTES - 1
    h.update(b"a")
    assert h.total_length == MAX_MESSAGE_BYTES


def test_context_manager_wipes_state():
    with SHA256() as h:
        h.update(b"secret")
        assert h.finalize() == sha256(b"secret")

    assert h.finalized
    assert h._pending == bytearray(64)
    with pytest.raises(RuntimeError):
        h.update(b"x")


def test_close_before_finalize_disallows_further_use():
    h = SHA256(b"partial")
    h.close()
    with pytest.raises(RuntimeError):
        h.finalize()


def test_hash_object_attributes():
    h = SHA256()
    assert h.name == "sha256"
    assert h.digest_size == 32
    assert h.block_size == 64
    assert len(h.finalize()) == h.digest_size
