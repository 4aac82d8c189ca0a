from collections.abc import Callable

from Crypto.Random import get_random_bytes

RandomSource = Callable[[int], bytes]
"""Callable returning ``n`` cryptographically strong random bytes."""

system_random: RandomSource = get_random_bytes
