from __future__ import annotations

from collections.abc import Iterable

from .errors import InvalidLength

Block = bytes


def group(data: bytes, block_size: int = 16) -> list[Block]:
    """Split block-aligned data into consecutive blocks.

    Args:
        data: Input bytes. Length must be a multiple of ``block_size``; call
            :func:`~blockmodes.libs.crypto.padding.pad` first otherwise.
        block_size: Block size in bytes.

    Returns:
        The blocks in order.

    Raises:
        InvalidLength: If the input length is not a multiple of
            ``block_size``.
    """
    if len(data) % block_size != 0:
        raise InvalidLength("Data length not a multiple of block size")
    return [bytes(data[i : i + block_size]) for i in range(0, len(data), block_size)]


def ungroup(blocks: Iterable[Block]) -> bytes:
    """Concatenate blocks in order. Inverse of :func:`group`."""
    return b"".join(blocks)


def xor_block(a: Block, b: Block) -> Block:
    """XOR two blocks of equal length.

    Args:
        a: First block.
        b: Second block.

    Returns:
        The XOR result as a new block.

    Raises:
        InvalidLength: If the blocks differ in length.
    """
    if len(a) != len(b):
        raise InvalidLength("Blocks must have equal length")
    return bytes(x ^ y for x, y in zip(a, b, strict=True))


def _counter_width(counter: Block, width: int | None) -> int:
    if width is None:
        return len(counter)
    if not (1 <= width <= len(counter)):
        raise ValueError("Counter width must be between 1 and the block size")
    return width


def increment_counter(counter: Block, width: int | None = None) -> Block:
    """Return ``counter`` plus one, read as a big-endian unsigned integer.

    The carry runs from the last byte towards the first and is dropped once
    it leaves the counter, so the all-``0xFF`` value wraps to all zeros.

    Args:
        counter: Current counter block.
        width: Number of trailing bytes that form the counter. Leading bytes
            are left untouched. Defaults to the whole block.

    Returns:
        The next counter block.
    """
    width = _counter_width(counter, width)
    out = bytearray(counter)
    for i in range(len(out) - 1, len(out) - width - 1, -1):
        out[i] = (out[i] + 1) & 0xFF
        if out[i] != 0:
            break
    return bytes(out)


def counter_at(initial: Block, index: int, width: int | None = None) -> Block:
    """Return the counter reached after ``index`` increments of ``initial``.

    Equivalent to calling :func:`increment_counter` ``index`` times, but
    computed directly so any block can be addressed.
    """
    if index < 0:
        raise ValueError("Counter index must be non-negative")
    width = _counter_width(initial, width)
    split = len(initial) - width
    value = int.from_bytes(initial[split:], "big") + index
    return bytes(initial[:split]) + (value % (1 << (8 * width))).to_bytes(
        width, "big"
    )
