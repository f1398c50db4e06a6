"""
Defines structured configuration models using dataclasses.
"""

from dataclasses import dataclass

MISSING_IV_POLICIES = ("fallback", "strict")


@dataclass
class ChainConfig:
    """Configuration for block chaining calls.

    Attributes:
        missing_iv: What to do when a chained mode is requested without an
            IV. ``"fallback"`` downgrades to Plain mode and logs a warning;
            ``"strict"`` raises :class:`~cipherchain.cipher.errors.MissingIVError`.
        decrypt_workers: Thread count for CBC decryption. ``1`` keeps it
            sequential.
        validate_blocks: Whether to check that all blocks but the last share
            the chaining block size before processing.
    """

    missing_iv: str = "fallback"  # "fallback" | "strict"
    decrypt_workers: int = 1
    validate_blocks: bool = True

    def __post_init__(self) -> None:
        if self.missing_iv not in MISSING_IV_POLICIES:
            raise ValueError(
                f"missing_iv must be one of {MISSING_IV_POLICIES}, "
                f"got {self.missing_iv!r}"
            )
        if self.decrypt_workers < 1:
            raise ValueError("decrypt_workers must be at least 1")
