class CipherError(ValueError):
    """Base class for mode-of-operation failures."""


class InvalidPadding(CipherError):
    """The padding trailer of a decrypted message is malformed."""


class InvalidLength(CipherError):
    """Input is not a whole number of blocks."""


class TruncatedCiphertext(CipherError):
    """Ciphertext is too short to carry its IV or nonce block."""


class InvalidKeySize(CipherError):
    """Key length does not match the cipher's key size."""
