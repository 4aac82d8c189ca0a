"""
One-shot encryption helpers for the AES-128 modes of operation.

Each function takes the whole message and a 16-byte key and returns the
whole result. Nothing is shared between calls.
"""

from __future__ import annotations

__all__ = [
    "ecb_encrypt",
    "ecb_decrypt",
    "cbc_encrypt",
    "cbc_decrypt",
    "ctr_encrypt",
    "ctr_decrypt",
    "from_config",
]

from blockmodes.libs.crypto.cipher import AES, BaseMode
from blockmodes.libs.crypto.rng import RandomSource
from blockmodes.schemas import CipherConfig


def ecb_encrypt(plain_text: bytes, key: bytes) -> bytes:
    """Encrypt with AES-128 in ECB mode. Not secure; see :class:`ECBMode`."""
    return AES.new(key, AES.MODE_ECB).encrypt(plain_text)


def ecb_decrypt(cipher_text: bytes, key: bytes, strict: bool = True) -> bytes:
    """Opposite of :func:`ecb_encrypt`."""
    return AES.new(key, AES.MODE_ECB, strict_padding=strict).decrypt(cipher_text)


def cbc_encrypt(
    plain_text: bytes,
    key: bytes,
    iv: bytes | None = None,
    *,
    embed_iv: bool = False,
    rng: RandomSource | None = None,
) -> bytes:
    """Encrypt with AES-128 in CBC mode.

    Without ``iv`` or ``embed_iv`` the IV is all zeros and is not part of
    the output; ``embed_iv=True`` prepends a fresh random IV instead.
    """
    return AES.new(key, AES.MODE_CBC, iv, embed_iv=embed_iv, rng=rng).encrypt(
        plain_text
    )


def cbc_decrypt(
    cipher_text: bytes,
    key: bytes,
    iv: bytes | None = None,
    *,
    embed_iv: bool = False,
    strict: bool = True,
) -> bytes:
    """Opposite of :func:`cbc_encrypt`; use the same IV convention."""
    cipher = AES.new(key, AES.MODE_CBC, iv, embed_iv=embed_iv, strict_padding=strict)
    return cipher.decrypt(cipher_text)


def ctr_encrypt(
    plain_text: bytes,
    key: bytes,
    *,
    counter_width: int | None = None,
    rng: RandomSource | None = None,
) -> bytes:
    """Encrypt with AES-128 in CTR mode; the initial counter block trails."""
    cipher = AES.new(key, AES.MODE_CTR, counter_width=counter_width, rng=rng)
    return cipher.encrypt(plain_text)


def ctr_decrypt(
    cipher_text: bytes,
    key: bytes,
    *,
    counter_width: int | None = None,
    strict: bool = True,
) -> bytes:
    """Opposite of :func:`ctr_encrypt`."""
    cipher = AES.new(
        key, AES.MODE_CTR, counter_width=counter_width, strict_padding=strict
    )
    return cipher.decrypt(cipher_text)


_MODE_IDS = {
    "ecb": AES.MODE_ECB,
    "cbc": AES.MODE_CBC,
    "ctr": AES.MODE_CTR,
}


def from_config(
    cfg: CipherConfig,
    key: bytes,
    rng: RandomSource | None = None,
) -> BaseMode:
    """Build the mode object described by ``cfg``.

    Args:
        cfg: Resolved cipher configuration.
        key: AES-128 key.
        rng: Optional randomness source for IVs and nonces.

    Returns:
        A configured mode object.

    Raises:
        ValueError: If ``cfg.mode`` is unknown.
    """
    try:
        mode = _MODE_IDS[cfg.mode]
    except KeyError:
        raise ValueError(f"Unknown mode: {cfg.mode!r}") from None

    if mode == AES.MODE_CBC:
        embed_iv = cfg.cbc_iv == "random"
        return AES.new(
            key,
            mode,
            embed_iv=embed_iv,
            rng=rng if embed_iv else None,
            strict_padding=cfg.strict_padding,
        )

    if mode == AES.MODE_CTR:
        return AES.new(
            key,
            mode,
            counter_width=cfg.ctr_counter_width,
            rng=rng,
            strict_padding=cfg.strict_padding,
        )

    return AES.new(key, mode, strict_padding=cfg.strict_padding)
