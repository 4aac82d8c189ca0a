from __future__ import annotations

import logging

from .errors import InvalidLength, InvalidPadding

logger = logging.getLogger(__name__)


def _check_block_size(block_size: int) -> None:
    if not (1 <= block_size <= 255):
        raise ValueError("block_size must be between 1 and 255")


def pad(data_to_pad: bytes, block_size: int = 16) -> bytes:
    """Apply PKCS#7 padding to align data to ``block_size``.

    Between 1 and ``block_size`` bytes are always appended, each equal to
    the number of bytes added. Block-aligned input (including the empty
    message) receives a full extra block, so the trailer is always padding.

    Args:
        data_to_pad: Raw input bytes.
        block_size: Block size in bytes. Must be in the range [1, 255].

    Returns:
        Data padded so its length becomes a multiple of ``block_size``.

    Raises:
        ValueError: If ``block_size`` is out of range.
    """
    _check_block_size(block_size)

    padding_len = block_size - (len(data_to_pad) % block_size)
    return bytes(data_to_pad) + bytes([padding_len]) * padding_len


def unpad(
    padded_data: bytes,
    block_size: int = 16,
    strict: bool = True,
) -> bytes:
    """Remove padding previously applied by :func:`pad`.

    In strict mode the whole trailer is verified. With ``strict=False`` only
    the length byte is checked against the buffer length; a trailer that
    cannot be a pad length is left in place and the input is returned
    unchanged.

    Args:
        padded_data: Input data with padding applied.
        block_size: Block size in bytes. Must be in the range [1, 255].
        strict: Whether malformed padding raises instead of passing through.

    Returns:
        The original unpadded data.

    Raises:
        InvalidPadding: If ``strict`` and the trailer is malformed.
        InvalidLength: If ``strict`` and the input is not block-aligned.
        ValueError: If ``block_size`` is out of range.
    """
    _check_block_size(block_size)

    pdata_len = len(padded_data)

    if not strict:
        padding_len = padded_data[-1] if pdata_len else 0
        if 1 <= padding_len <= pdata_len:
            return bytes(padded_data[:-padding_len])
        logger.warning(
            "Ignoring malformed padding trailer (length byte %d, buffer %d bytes)",
            padding_len,
            pdata_len,
        )
        return bytes(padded_data)

    if pdata_len == 0:
        raise InvalidPadding("Zero-length input cannot be unpadded")

    if pdata_len % block_size:
        raise InvalidLength("Input data is not padded")

    padding_len = padded_data[-1]
    if padding_len < 1 or padding_len > block_size:
        raise InvalidPadding("Padding is incorrect")

    if padded_data[-padding_len:] != bytes([padding_len]) * padding_len:
        raise InvalidPadding("Padding is incorrect")

    return bytes(padded_data[:-padding_len])
