from __future__ import annotations

import logging

from ..blocks import group, xor_block
from ..errors import TruncatedCiphertext
from ..padding import pad
from ..rng import RandomSource, system_random
from ._mode_base import BaseMode, BlockCipherFunc

logger = logging.getLogger(__name__)


class CBCMode(BaseMode):
    """Cipher Block Chaining (CBC) mode.

    Each plaintext block is XORed with the previous ciphertext block (the IV
    for the first block) before encryption. Encryption is strictly
    sequential along the chain; decryption of a block only needs the
    ciphertext, so it has no such dependency.

    Three IV conventions are supported:

    - ``iv=None`` and ``embed_iv=False``: an all-zero IV on both sides and
      nothing transmitted. Compatible, but leaks equality of leading blocks
      across messages under the same key.
    - an explicit ``iv``: shared out of band, not transmitted.
    - ``embed_iv=True``: a fresh random IV per message, prepended to the
      ciphertext as its first block.
    """

    name = "cbc"

    def __init__(
        self,
        encrypt_block: BlockCipherFunc,
        decrypt_block: BlockCipherFunc,
        block_size: int,
        iv: bytes | None = None,
        embed_iv: bool = False,
        rng: RandomSource | None = None,
        strict_padding: bool = True,
    ) -> None:
        """Initialize a CBC mode instance.

        Args:
            encrypt_block: Block encryption function. See :class:`BaseMode`.
            decrypt_block: Block decryption function. See :class:`BaseMode`.
            block_size: Block size in bytes. See :class:`BaseMode`.
            iv: Initialization vector. Must be exactly ``block_size`` bytes.
                If ``None``, a zero IV is used (suitable for tests or learning,
                but not recommended for real cryptographic use).
            embed_iv: Generate a random IV for every message and transmit it
                as the first ciphertext block. Cannot be combined with ``iv``.
            rng: Randomness source for embedded IVs. Defaults to
                :data:`~blockmodes.libs.crypto.rng.system_random`.
            strict_padding: Padding policy. See :class:`BaseMode`.

        Raises:
            ValueError: If ``iv`` does not match ``block_size`` or is given
                together with ``embed_iv``.
        """
        super().__init__(encrypt_block, decrypt_block, block_size, strict_padding)
        if embed_iv and iv is not None:
            raise ValueError("A fixed IV cannot be combined with embed_iv")
        if iv is None:
            iv = bytes(block_size)
        if len(iv) != block_size:
            raise ValueError("Invalid IV size")
        self.iv = bytes(iv)
        self.embed_iv = embed_iv
        self.rng = rng or system_random

    def encrypt(self, data: bytes) -> bytes:
        """Encrypt data in CBC mode.

        Args:
            data: Plaintext bytes of any length.

        Returns:
            Ciphertext bytes, prefixed with the IV block when ``embed_iv``
            is set.
        """
        bs = self.block_size
        iv = self._new_iv() if self.embed_iv else self.iv
        blocks = group(pad(data, bs), bs)
        logger.debug("CBC encrypt: %d blocks, embed_iv=%s", len(blocks), self.embed_iv)

        out = bytearray(iv if self.embed_iv else b"")
        prev = iv
        for block in blocks:
            ct = self.encrypt_block(xor_block(block, prev))
            out += ct
            prev = ct

        return bytes(out)

    def decrypt(self, data: bytes) -> bytes:
        """Decrypt data in CBC mode.

        Args:
            data: Ciphertext bytes, block-aligned.

        Returns:
            Plaintext bytes with padding removed.

        Raises:
            InvalidLength: If the input is not block-aligned.
            TruncatedCiphertext: If ``embed_iv`` is set and the input has no
                room for both an IV block and a data block.
        """
        bs = self.block_size
        blocks = group(data, bs)

        if self.embed_iv:
            if len(blocks) < 2:
                raise TruncatedCiphertext("Ciphertext too short to hold an IV")
            prev, blocks = blocks[0], blocks[1:]
        else:
            prev = self.iv
        logger.debug("CBC decrypt: %d blocks, embed_iv=%s", len(blocks), self.embed_iv)

        out = bytearray()
        for block in blocks:
            out += xor_block(self.decrypt_block(block), prev)
            prev = block

        return self._unpad(bytes(out))

    def _new_iv(self) -> bytes:
        iv = self.rng(self.block_size)
        if len(iv) != self.block_size:
            raise ValueError("Random source returned an IV of the wrong size")
        return bytes(iv)
