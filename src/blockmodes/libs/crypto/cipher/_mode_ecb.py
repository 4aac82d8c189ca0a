from __future__ import annotations

import logging

from ..blocks import group, ungroup
from ..padding import pad
from ._mode_base import BaseMode, BlockCipherFunc

logger = logging.getLogger(__name__)


class ECBMode(BaseMode):
    """Electronic Code Book (ECB) mode.

    ECB is stateless: each block is processed independently without an IV or
    chaining. Identical plaintext blocks under the same key always give
    identical ciphertext blocks, so this mode provides no semantic security
    and is included mainly for completeness or educational purposes.
    """

    name = "ecb"

    def __init__(
        self,
        encrypt_block: BlockCipherFunc,
        decrypt_block: BlockCipherFunc,
        block_size: int,
        strict_padding: bool = True,
    ) -> None:
        """Initialize an ECB mode instance.

        Args:
            encrypt_block: Block encryption function. See :class:`BaseMode`.
            decrypt_block: Block decryption function. See :class:`BaseMode`.
            block_size: Block size in bytes. See :class:`BaseMode`.
            strict_padding: Padding policy. See :class:`BaseMode`.
        """
        super().__init__(encrypt_block, decrypt_block, block_size, strict_padding)

    def encrypt(self, data: bytes) -> bytes:
        """Pad ``data`` and encrypt every block independently."""
        blocks = group(pad(data, self.block_size), self.block_size)
        logger.debug("ECB encrypt: %d blocks", len(blocks))
        return ungroup(self.encrypt_block(block) for block in blocks)

    def decrypt(self, data: bytes) -> bytes:
        """Decrypt every block independently and strip the padding."""
        blocks = group(data, self.block_size)
        logger.debug("ECB decrypt: %d blocks", len(blocks))
        return self._unpad(ungroup(self.decrypt_block(block) for block in blocks))
