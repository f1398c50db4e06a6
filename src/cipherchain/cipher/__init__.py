"""
Block-cipher modes of operation over an injected single-block transform.
"""

__all__ = [
    "BaseMode",
    "BlockTransform",
    "PlainMode",
    "CBCMode",
    "CFBMode",
    "Mode",
    "Direction",
    "MODE_PLAIN",
    "MODE_CBC",
    "MODE_CFB",
    "ModeCipher",
    "new",
    "process_blocks",
    "encrypt_blocks",
    "decrypt_blocks",
    "resolve_mode",
    "coerce_mode",
    "ChainError",
    "TransformError",
    "BlockSizeError",
    "MissingIVError",
]

from ._mode_base import BaseMode, BlockTransform
from ._mode_cbc import CBCMode
from ._mode_cfb import CFBMode
from ._mode_plain import PlainMode
from .errors import BlockSizeError, ChainError, MissingIVError, TransformError
from .mode_cipher import ModeCipher, new
from .selector import (
    MODE_CBC,
    MODE_CFB,
    MODE_PLAIN,
    Direction,
    Mode,
    coerce_mode,
    decrypt_blocks,
    encrypt_blocks,
    process_blocks,
    resolve_mode,
)
