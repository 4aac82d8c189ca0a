"""
Block-cipher primitives and their modes of operation.
"""

__all__ = [
    "AES",
    "BaseMode",
    "CBCMode",
    "CTRMode",
    "ECBMode",
]

from . import AES
from ._mode_base import BaseMode
from ._mode_cbc import CBCMode
from ._mode_ctr import CTRMode
from ._mode_ecb import ECBMode
