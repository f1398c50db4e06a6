"""
Data contracts and type definitions.
"""

__all__ = [
    "ChainConfig",
    "MISSING_IV_POLICIES",
]

from .config import MISSING_IV_POLICIES, ChainConfig
