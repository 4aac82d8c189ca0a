from __future__ import annotations

import random

import pytest
from Crypto.Cipher import AES as RefAES
from Crypto.Util.Padding import pad as ref_pad

from blockmodes.libs.crypto.cipher import AES
from blockmodes.libs.crypto.errors import InvalidKeySize, InvalidLength, InvalidPadding

_rng = random.Random(20251123)


def randbytes(n: int) -> bytes:
    return bytes(_rng.randrange(0, 256) for _ in range(n))


# ===========================================================
# Encrypt correctness
# ===========================================================


@pytest.mark.parametrize("length", [0, 1, 14, 15, 16, 17, 32, 100])
def test_aes_ecb_encrypt_matches_pycryptodome(length):
    key = randbytes(16)
    pt = randbytes(length)

    my = AES.new(key, AES.MODE_ECB)
    ref = RefAES.new(key, RefAES.MODE_ECB)

    assert my.encrypt(pt) == ref.encrypt(ref_pad(pt, 16))


# ===========================================================
# Decrypt correctness
# ===========================================================


@pytest.mark.parametrize("length", [0, 1, 13, 16, 31, 48, 160])
def test_aes_ecb_decrypt_matches_pycryptodome(length):
    key = randbytes(16)
    pt = randbytes(length)

    ct = RefAES.new(key, RefAES.MODE_ECB).encrypt(ref_pad(pt, 16))

    my_dec = AES.new(key, AES.MODE_ECB)
    assert my_dec.decrypt(ct) == pt


# ===========================================================
# Determinism leak
# ===========================================================


def test_aes_ecb_identical_blocks_give_identical_ciphertext():
    key = randbytes(16)
    pt = bytes(range(1, 17)) * 2

    ct = AES.new(key, AES.MODE_ECB).encrypt(pt)

    assert len(ct) == 48
    assert ct[:16] == ct[16:32]


def test_aes_ecb_stateless_object_independence():
    key = randbytes(16)
    pt = randbytes(16 * 4 + 3)

    my1 = AES.new(key, AES.MODE_ECB)
    my2 = AES.new(key, AES.MODE_ECB)

    assert my1.encrypt(pt) == my2.encrypt(pt)
    assert my1.encrypt(pt) == my1.encrypt(pt)


# ===========================================================
# Validation
# ===========================================================


def test_aes_ecb_rejects_bad_key_size():
    with pytest.raises(InvalidKeySize):
        AES.new(b"", AES.MODE_ECB)
    with pytest.raises(InvalidKeySize):
        AES.new(b"\x00" * 15, AES.MODE_ECB)
    with pytest.raises(ValueError):
        AES.new(b"\x00" * 17, AES.MODE_ECB)
    with pytest.raises(ValueError):
        AES.new(b"\x00" * 32, AES.MODE_ECB)


def test_aes_ecb_rejects_non_block_aligned_ciphertext():
    my = AES.new(randbytes(16), AES.MODE_ECB)

    with pytest.raises(InvalidLength):
        my.decrypt(b"\x00" * 15)
    with pytest.raises(InvalidLength):
        my.decrypt(b"\x00" * 31)


def test_aes_ecb_malformed_padding_strict_and_lenient():
    key = randbytes(16)
    raw = b"A" * 15 + b"\x00"
    ct = RefAES.new(key, RefAES.MODE_ECB).encrypt(raw)

    with pytest.raises(InvalidPadding):
        AES.new(key, AES.MODE_ECB).decrypt(ct)
    assert AES.new(key, AES.MODE_ECB, strict_padding=False).decrypt(ct) == raw


def test_aes_ecb_empty_ciphertext_has_no_padding():
    with pytest.raises(InvalidPadding):
        AES.new(randbytes(16), AES.MODE_ECB).decrypt(b"")


def test_aes_unknown_mode():
    with pytest.raises(ValueError):
        AES.new(randbytes(16), 99)


def test_aes_block_primitive_rejects_wrong_block_size():
    ctx = AES._AESContext(randbytes(16))
    with pytest.raises(InvalidLength):
        ctx.encrypt_block(b"\x00" * 15)
    with pytest.raises(InvalidLength):
        ctx.decrypt_block(b"\x00" * 17)


@pytest.mark.parametrize("key", [16, 0, "0123456789abcdef", None])
def test_aes_rejects_non_bytes_key(key):
    with pytest.raises(TypeError):
        AES.new(key, AES.MODE_ECB)


def test_aes_accepts_bytes_like_key():
    key = randbytes(16)
    pt = randbytes(20)
    expected = AES.new(key, AES.MODE_ECB).encrypt(pt)

    assert AES.new(bytearray(key), AES.MODE_ECB).encrypt(pt) == expected
    assert AES.new(memoryview(key), AES.MODE_ECB).encrypt(pt) == expected


@pytest.mark.parametrize(
    "options",
    [
        {"iv": b"\x00" * 16},
        {"embed_iv": True},
        {"counter_width": 8},
        {"rng": lambda n: b"\x00" * n},
    ],
)
def test_aes_ecb_rejects_mode_options(options):
    with pytest.raises(ValueError):
        AES.new(randbytes(16), AES.MODE_ECB, **options)
