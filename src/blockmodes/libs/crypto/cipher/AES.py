from __future__ import annotations

from Crypto.Cipher import AES as _AES

from ..errors import InvalidKeySize, InvalidLength
from ..rng import RandomSource
from ._mode_base import BaseMode

block_size = 16
key_size = (16,)

MODE_ECB = 1  #: Electronic Code Book
MODE_CBC = 2  #: Cipher-Block Chaining
MODE_CTR = 6  #: Counter


class _AESContext:
    """AES-128 single-block primitive backed by pycryptodome."""

    __slots__ = ("_ecb",)

    def __init__(self, key: bytes) -> None:
        """Initialize the AES key schedule.

        Args:
            key: Raw AES-128 key of length 16 bytes.

        Raises:
            InvalidKeySize: If the key length is not 16 bytes.
        """
        if len(key) not in key_size:
            raise InvalidKeySize("Invalid key size")
        self._ecb = _AES.new(key, _AES.MODE_ECB)

    def encrypt_block(self, plaintext: bytes) -> bytes:
        """Encrypt a single 16-byte block.

        Raises:
            InvalidLength: If the block size is invalid.
        """
        if len(plaintext) != block_size:
            raise InvalidLength("Plaintext block must be 16 bytes")
        return self._ecb.encrypt(plaintext)

    def decrypt_block(self, ciphertext: bytes) -> bytes:
        """Decrypt a single 16-byte block.

        Raises:
            InvalidLength: If the block size is invalid.
        """
        if len(ciphertext) != block_size:
            raise InvalidLength("Ciphertext block must be 16 bytes")
        return self._ecb.decrypt(ciphertext)


def _as_bytes(value: bytes | bytearray | memoryview, what: str) -> bytes:
    """Copy a bytes-like argument, refusing ints and other buffers."""
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{what} must be bytes-like, got {type(value).__name__}")
    return bytes(value)


def new(
    key: bytes | bytearray,
    mode: int,
    iv: bytes | bytearray | None = None,
    *,
    embed_iv: bool = False,
    counter_width: int | None = None,
    rng: RandomSource | None = None,
    strict_padding: bool = True,
) -> BaseMode:
    """Create an AES-128 cipher object in the requested mode.

    Args:
        key: AES key of length 16 bytes.
        mode: One of ``MODE_ECB``, ``MODE_CBC`` or ``MODE_CTR``.
        iv: Initialization vector for CBC mode. Must be 16 bytes; if ``None``,
            a zero IV is used for learning and testing.
        embed_iv: CBC only. Draw a random IV per message and prepend it to
            the ciphertext.
        counter_width: CTR only. Number of trailing counter bytes; ``None``
            increments the whole block.
        rng: Randomness source for CBC embedded IVs and CTR nonces.
        strict_padding: Whether malformed padding raises on decryption.

    Returns:
        A mode object implementing AES encryption and decryption.

    Raises:
        TypeError: If ``key`` or ``iv`` is not bytes-like.
        InvalidKeySize: If the key length is invalid.
        ValueError: If the IV length, counter width or mode is invalid, or
            an option is given that the mode cannot use.
    """
    ctx = _AESContext(_as_bytes(key, "key"))
    encrypt_block = ctx.encrypt_block
    decrypt_block = ctx.decrypt_block

    if mode == MODE_ECB:
        from ._mode_ecb import ECBMode

        unused = (iv, counter_width, rng)
        if embed_iv or any(opt is not None for opt in unused):
            raise ValueError("ECB mode takes no IV, nonce or counter options")
        return ECBMode(encrypt_block, decrypt_block, block_size, strict_padding)

    if mode == MODE_CBC:
        from ._mode_cbc import CBCMode

        if counter_width is not None:
            raise ValueError("counter_width is only valid for CTR mode")
        if rng is not None and not embed_iv:
            raise ValueError("rng is only used with embed_iv in CBC mode")
        return CBCMode(
            encrypt_block,
            decrypt_block,
            block_size,
            None if iv is None else _as_bytes(iv, "iv"),
            embed_iv=embed_iv,
            rng=rng,
            strict_padding=strict_padding,
        )

    if mode == MODE_CTR:
        from ._mode_ctr import CTRMode

        if iv is not None or embed_iv:
            raise ValueError("CTR mode generates its own nonce; no IV accepted")
        return CTRMode(
            encrypt_block,
            decrypt_block,
            block_size,
            counter_width=counter_width,
            rng=rng,
            strict_padding=strict_padding,
        )

    raise ValueError("Unknown mode")
