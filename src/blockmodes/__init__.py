from .version import __version__ as __version__

__title__ = "BlockModes"
__description__ = "Block-cipher modes of operation (ECB, CBC, CTR) over AES-128."
__author__ = "Saudade Z"
__license__ = "Apache-2.0"
