import abc
from collections.abc import Callable

from ..padding import unpad

BlockCipherFunc = Callable[[bytes], bytes]


class BaseMode(abc.ABC):
    """Base class for block-cipher modes of operation.

    A mode instance wraps a *block cipher primitive* that encrypts or decrypts
    a single block, and provides whole-message :meth:`encrypt` and
    :meth:`decrypt` operations for arbitrary-length data. Calls are
    independent: no chaining state survives from one call to the next.
    """

    #: Short lowercase mode name used in logs and configuration.
    name: str = ""

    def __init__(
        self,
        encrypt_block: BlockCipherFunc,
        decrypt_block: BlockCipherFunc,
        block_size: int,
        strict_padding: bool = True,
    ) -> None:
        """Initialize a block-cipher mode instance.

        Args:
            encrypt_block: Callable that encrypts a single block of length
                ``block_size``.
            decrypt_block: Callable that decrypts a single block of length
                ``block_size``.
            block_size: Block size in bytes (16 for AES).
            strict_padding: Whether malformed padding on decryption raises
                :class:`~blockmodes.libs.crypto.errors.InvalidPadding`
                instead of being passed through.
        """
        self.encrypt_block = encrypt_block
        self.decrypt_block = decrypt_block
        self.block_size = block_size
        self.strict_padding = strict_padding

    @abc.abstractmethod
    def encrypt(self, data: bytes) -> bytes:
        """Encrypt plaintext.

        Args:
            data: Plaintext bytes of any length. Padding is applied here.

        Returns:
            Ciphertext bytes, block-aligned, including any IV or nonce block
            the mode transmits.
        """
        ...

    @abc.abstractmethod
    def decrypt(self, data: bytes) -> bytes:
        """Decrypt ciphertext.

        Args:
            data: Ciphertext bytes as produced by :meth:`encrypt`.

        Returns:
            The original plaintext with padding removed.

        Raises:
            InvalidLength: If the ciphertext is not block-aligned.
            InvalidPadding: If strict padding is enabled and the decrypted
                trailer is malformed.
        """
        ...

    def _unpad(self, data: bytes) -> bytes:
        return unpad(data, self.block_size, strict=self.strict_padding)
