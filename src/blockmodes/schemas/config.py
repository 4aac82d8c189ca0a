"""
Defines structured configuration models using dataclasses.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CipherConfig:
    """Configuration selecting and tuning a mode of operation.

    Attributes:
        mode: Mode name ("ecb", "cbc" or "ctr").
        cbc_iv: CBC IV policy. "zero" uses an all-zero IV that is not
            transmitted; "random" draws a fresh IV per message and prepends it.
        ctr_counter_width: Number of trailing counter bytes in CTR mode. 16
            increments the whole block.
        strict_padding: Whether malformed padding raises on decryption.
    """

    mode: str = "ctr"  # "ecb" | "cbc" | "ctr"
    cbc_iv: str = "zero"  # "zero" | "random"
    ctr_counter_width: int = 16
    strict_padding: bool = True
