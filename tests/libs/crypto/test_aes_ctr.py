from __future__ import annotations

import random

import pytest
from Crypto.Cipher import AES as RefAES
from Crypto.Util import Counter
from Crypto.Util.Padding import pad as ref_pad

from blockmodes.libs.crypto.cipher import AES
from blockmodes.libs.crypto.errors import InvalidLength, TruncatedCiphertext

_rng = random.Random(20251123)


def randbytes(n: int) -> bytes:
    return bytes(_rng.randrange(0, 256) for _ in range(n))


def fixed_source(value: bytes):
    """Randomness source that always hands out a prefix of ``value``."""
    calls: list[int] = []

    def source(n: int) -> bytes:
        calls.append(n)
        return value[:n]

    source.calls = calls
    return source


# ===========================================================
# Encryption matches reference
# ===========================================================


@pytest.mark.parametrize("length", [0, 1, 14, 16, 17, 64, 100])
def test_aes_ctr_encrypt_matches_pycryptodome(length):
    key = randbytes(16)
    # keep the top byte low so the reference counter cannot wrap
    nonce = b"\x00" + randbytes(15)
    pt = randbytes(length)

    my = AES.new(key, AES.MODE_CTR, rng=fixed_source(nonce))
    ct = my.encrypt(pt)

    ctr = Counter.new(128, initial_value=int.from_bytes(nonce, "big"))
    ref = RefAES.new(key, RefAES.MODE_CTR, counter=ctr)

    assert ct[-16:] == nonce
    assert ct[:-16] == ref.encrypt(ref_pad(pt, 16))


@pytest.mark.parametrize("length", [0, 5, 16, 90])
def test_aes_ctr_split_counter_matches_pycryptodome(length):
    key = randbytes(16)
    nonce = randbytes(8)
    pt = randbytes(length)

    source = fixed_source(nonce)
    my = AES.new(key, AES.MODE_CTR, counter_width=8, rng=source)
    ct = my.encrypt(pt)

    ctr = Counter.new(64, prefix=nonce, initial_value=0)
    ref = RefAES.new(key, RefAES.MODE_CTR, counter=ctr)

    assert source.calls == [8]
    assert ct[-16:] == nonce + bytes(8)
    assert ct[:-16] == ref.encrypt(ref_pad(pt, 16))
    assert my.decrypt(ct) == pt


# ===========================================================
# Decryption
# ===========================================================


@pytest.mark.parametrize("length", [0, 1, 13, 32, 47, 160])
def test_aes_ctr_decrypt_roundtrip(length):
    key = randbytes(16)
    pt = randbytes(length)
    my = AES.new(key, AES.MODE_CTR)

    assert my.decrypt(my.encrypt(pt)) == pt


def test_aes_ctr_decrypt_reference_ciphertext():
    key = randbytes(16)
    nonce = b"\x00" + randbytes(15)
    pt = randbytes(50)

    ctr = Counter.new(128, initial_value=int.from_bytes(nonce, "big"))
    body = RefAES.new(key, RefAES.MODE_CTR, counter=ctr).encrypt(ref_pad(pt, 16))

    assert AES.new(key, AES.MODE_CTR).decrypt(body + nonce) == pt


def test_aes_ctr_never_uses_block_decryption():
    key = randbytes(16)
    my = AES.new(key, AES.MODE_CTR)

    def fail(block: bytes) -> bytes:
        raise AssertionError("CTR must not call decrypt_block")

    my.decrypt_block = fail
    pt = randbytes(33)
    assert my.decrypt(my.encrypt(pt)) == pt


def test_aes_ctr_counter_wraps_across_whole_block():
    key = randbytes(16)
    nonce = b"\xff" * 16
    pt = randbytes(40)

    my = AES.new(key, AES.MODE_CTR, rng=fixed_source(nonce))
    ct = my.encrypt(pt)

    ecb = RefAES.new(key, RefAES.MODE_ECB)
    first = bytes(a ^ b for a, b in zip(ref_pad(pt, 16)[:16], ecb.encrypt(nonce)))
    second = bytes(a ^ b for a, b in zip(ref_pad(pt, 16)[16:32], ecb.encrypt(bytes(16))))

    assert ct[:16] == first
    assert ct[16:32] == second
    assert my.decrypt(ct) == pt


def test_aes_ctr_fresh_nonce_per_message():
    key = randbytes(16)
    pt = randbytes(20)
    my = AES.new(key, AES.MODE_CTR)

    ct1 = my.encrypt(pt)
    ct2 = my.encrypt(pt)

    assert ct1 != ct2
    assert ct1[-16:] != ct2[-16:]


# ===========================================================
# Random access
# ===========================================================


@pytest.mark.parametrize("width", [None, 8])
def test_aes_ctr_decrypt_block_at(width):
    key = randbytes(16)
    pt = randbytes(16 * 5 + 7)
    padded = ref_pad(pt, 16)

    my = AES.new(key, AES.MODE_CTR, counter_width=width)
    ct = my.encrypt(pt)

    for i in range(len(padded) // 16):
        assert my.decrypt_block_at(ct, i) == padded[16 * i : 16 * (i + 1)]

    with pytest.raises(IndexError):
        my.decrypt_block_at(ct, len(padded) // 16)
    with pytest.raises(IndexError):
        my.decrypt_block_at(ct, -1)


# ===========================================================
# Validation
# ===========================================================


@pytest.mark.parametrize("n", [0, 1, 15])
def test_aes_ctr_rejects_truncated_ciphertext(n):
    my = AES.new(randbytes(16), AES.MODE_CTR)
    with pytest.raises(TruncatedCiphertext):
        my.decrypt(b"\x00" * n)


@pytest.mark.parametrize("n", [17, 31, 40])
def test_aes_ctr_rejects_non_block_aligned_ciphertext(n):
    my = AES.new(randbytes(16), AES.MODE_CTR)
    with pytest.raises(InvalidLength):
        my.decrypt(b"\x00" * n)


@pytest.mark.parametrize("width", [0, 17])
def test_aes_ctr_rejects_bad_counter_width(width):
    with pytest.raises(ValueError):
        AES.new(randbytes(16), AES.MODE_CTR, counter_width=width)


def test_aes_ctr_rejects_short_random_output():
    my = AES.new(randbytes(16), AES.MODE_CTR, rng=lambda n: b"\x00" * (n - 1))
    with pytest.raises(ValueError):
        my.encrypt(b"data")


def test_aes_ctr_rejects_bad_key_size():
    with pytest.raises(ValueError):
        AES.new(b"\x00" * 24, AES.MODE_CTR)


def test_aes_ctr_rejects_embedded_iv():
    with pytest.raises(ValueError):
        AES.new(randbytes(16), AES.MODE_CTR, embed_iv=True)


def test_aes_ctr_rejects_iv():
    with pytest.raises(ValueError):
        AES.new(randbytes(16), AES.MODE_CTR, b"\x00" * 16)
