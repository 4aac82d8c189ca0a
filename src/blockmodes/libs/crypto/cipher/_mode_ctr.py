from __future__ import annotations

import logging

from ..blocks import counter_at, group, increment_counter, xor_block
from ..errors import TruncatedCiphertext
from ..padding import pad
from ..rng import RandomSource, system_random
from ._mode_base import BaseMode, BlockCipherFunc

logger = logging.getLogger(__name__)


class CTRMode(BaseMode):
    """Counter (CTR) mode.

    A keystream block is produced by encrypting a counter value ``V`` that
    starts at a fresh random value and is incremented once per block. The
    keystream is XORed with the data, so the cipher's decryption direction
    is never used. The initial counter block is appended to the ciphertext
    as its trailing block.

    With the default ``counter_width`` the whole block is random and the
    whole block is incremented. A smaller width keeps a fixed random nonce
    in the leading bytes and counts from zero in the trailing
    ``counter_width`` bytes, wrapping within that width.
    """

    name = "ctr"

    def __init__(
        self,
        encrypt_block: BlockCipherFunc,
        decrypt_block: BlockCipherFunc,
        block_size: int,
        counter_width: int | None = None,
        rng: RandomSource | None = None,
        strict_padding: bool = True,
    ) -> None:
        """Initialize a CTR mode instance.

        Args:
            encrypt_block: Block encryption function. See :class:`BaseMode`.
            decrypt_block: Block decryption function. Unused by CTR; kept for
                a uniform constructor.
            block_size: Block size in bytes. See :class:`BaseMode`.
            counter_width: Number of trailing bytes used as the counter.
                ``None`` means the whole block.
            rng: Randomness source for nonces. Defaults to
                :data:`~blockmodes.libs.crypto.rng.system_random`.
            strict_padding: Padding policy. See :class:`BaseMode`.

        Raises:
            ValueError: If ``counter_width`` is outside ``1..block_size``.
        """
        super().__init__(encrypt_block, decrypt_block, block_size, strict_padding)
        if counter_width is None:
            counter_width = block_size
        if not (1 <= counter_width <= block_size):
            raise ValueError("Invalid counter width")
        self.counter_width = counter_width
        self.rng = rng or system_random

    def encrypt(self, data: bytes) -> bytes:
        """Encrypt data in CTR mode.

        Args:
            data: Plaintext bytes of any length.

        Returns:
            Ciphertext bytes followed by the initial counter block.
        """
        bs = self.block_size
        initial = self._new_initial_counter()
        blocks = group(pad(data, bs), bs)
        logger.debug(
            "CTR encrypt: %d blocks, counter_width=%d", len(blocks), self.counter_width
        )

        out = bytearray()
        v = initial
        for block in blocks:
            out += xor_block(block, self.encrypt_block(v))
            v = increment_counter(v, self.counter_width)

        out += initial
        return bytes(out)

    def decrypt(self, data: bytes) -> bytes:
        """Decrypt data in CTR mode.

        Args:
            data: Ciphertext bytes followed by the initial counter block.

        Returns:
            Plaintext bytes with padding removed.

        Raises:
            TruncatedCiphertext: If the input is shorter than one block.
            InvalidLength: If the input is not block-aligned.
        """
        initial, blocks = self._split(data)
        logger.debug(
            "CTR decrypt: %d blocks, counter_width=%d", len(blocks), self.counter_width
        )

        out = bytearray()
        v = initial
        for block in blocks:
            out += xor_block(block, self.encrypt_block(v))
            v = increment_counter(v, self.counter_width)

        return self._unpad(bytes(out))

    def keystream_block(self, initial: bytes, index: int) -> bytes:
        """Return the keystream block for block ``index`` of a message.

        Args:
            initial: The initial counter block of the message.
            index: Zero-based block index.

        Returns:
            The encrypted counter value for that block.
        """
        return self.encrypt_block(counter_at(initial, index, self.counter_width))

    def decrypt_block_at(self, data: bytes, index: int) -> bytes:
        """Decrypt a single block of a CTR ciphertext without the others.

        Padding is not removed, so the last block still carries its trailer.

        Args:
            data: Full ciphertext as produced by :meth:`encrypt`.
            index: Zero-based index of the data block to recover.

        Returns:
            The plaintext block.

        Raises:
            IndexError: If ``index`` does not address a data block.
        """
        initial, blocks = self._split(data)
        if not (0 <= index < len(blocks)):
            raise IndexError("Block index out of range")
        return xor_block(blocks[index], self.keystream_block(initial, index))

    def _split(self, data: bytes) -> tuple[bytes, list[bytes]]:
        """Separate the trailing initial counter block from the data blocks."""
        bs = self.block_size
        if len(data) < bs:
            raise TruncatedCiphertext("Ciphertext too short to hold a nonce")
        blocks = group(data, bs)
        return blocks[-1], blocks[:-1]

    def _new_initial_counter(self) -> bytes:
        bs = self.block_size
        # full-width counters start from a random value, split ones from zero
        nonce_len = bs if self.counter_width == bs else bs - self.counter_width
        nonce = self.rng(nonce_len)
        if len(nonce) != nonce_len:
            raise ValueError("Random source returned a nonce of the wrong size")
        return bytes(nonce) + bytes(bs - nonce_len)
