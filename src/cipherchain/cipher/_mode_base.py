from __future__ import annotations

import abc
from collections.abc import Callable, Sequence
from typing import ClassVar

from .errors import BlockSizeError, MissingIVError, TransformError

BlockTransform = Callable[[bytes], bytes | None]


def _xor_bytes(data: bytes, mask: bytes) -> bytes:
    """XOR ``data`` against the same-length prefix of ``mask``.

    Args:
        data: Bytes to transform. May be shorter than ``mask``.
        mask: Chaining state or keystream block.

    Returns:
        A new byte string of length ``len(data)``.

    Raises:
        BlockSizeError: If ``data`` is longer than ``mask``.
    """
    if len(data) > len(mask):
        raise BlockSizeError(
            f"Block of {len(data)} bytes exceeds chaining state of {len(mask)} bytes"
        )
    return bytes(x ^ y for x, y in zip(data, mask, strict=False))


def _check_blocks(blocks: Sequence[bytes], block_size: int) -> None:
    """Validate that every block but the last is exactly ``block_size`` long.

    The final block may be shorter but never longer.
    """
    last = len(blocks) - 1
    for i, block in enumerate(blocks):
        n = len(block)
        if n > block_size or (i < last and n != block_size):
            raise BlockSizeError(f"Block {i} has {n} bytes, expected {block_size}")


class BaseMode(abc.ABC):
    """Base class for block-cipher modes of operation.

    A mode instance wraps a *single-block transform* and chains it over an
    ordered sequence of blocks. The chaining state lives only for the
    duration of one :meth:`encrypt` or :meth:`decrypt` call, so an instance
    can be reused, and calls never influence one another.

    Subclasses state which primitive direction they expect for decryption
    through :attr:`uses_inverse_for_decrypt`.
    """

    #: Whether the mode needs an initialization vector.
    requires_iv: ClassVar[bool] = True
    #: Whether :meth:`decrypt` expects the inverse block transform.
    uses_inverse_for_decrypt: ClassVar[bool] = True

    def __init__(
        self,
        transform: BlockTransform,
        validate_blocks: bool = True,
    ) -> None:
        """Initialize a mode instance.

        Args:
            transform: Callable that maps one block to one block, returning
                ``None`` (or raising) on failure. Whether it is the forward or
                inverse primitive is the caller's choice, per mode and
                direction.
            validate_blocks: Check that all blocks but the last share one size
                before processing.
        """
        self.transform = transform
        self.validate_blocks = validate_blocks

    @abc.abstractmethod
    def encrypt(self, blocks: Sequence[bytes], iv: bytes | None = None) -> bytes:
        """Encrypt an ordered sequence of plaintext blocks.

        Args:
            blocks: Plaintext blocks. Only the last may be short.
            iv: Initialization vector; required by chained modes.

        Returns:
            Ciphertext bytes, the concatenation of every processed block.

        Raises:
            TransformError: If the transform fails on any block.
            BlockSizeError: If a block does not fit the chaining state.
            MissingIVError: If the mode requires an IV and none was given.
        """
        ...

    @abc.abstractmethod
    def decrypt(self, blocks: Sequence[bytes], iv: bytes | None = None) -> bytes:
        """Decrypt an ordered sequence of ciphertext blocks.

        Args:
            blocks: Ciphertext blocks. Only the last may be short.
            iv: Initialization vector; required by chained modes.

        Returns:
            Plaintext bytes, the concatenation of every processed block.

        Raises:
            TransformError: If the transform fails on any block.
            BlockSizeError: If a block does not fit the chaining state.
            MissingIVError: If the mode requires an IV and none was given.
        """
        ...

    def _apply(self, block: bytes, index: int) -> bytes:
        """Run the transform on one block, normalizing failure.

        Raises:
            TransformError: If the transform raised, returned ``None``, or
                returned something that is not bytes-like.
        """
        try:
            out = self.transform(block)
        except Exception as e:
            raise TransformError(
                index, f"Block transform raised at block {index}: {e}"
            ) from e
        if out is None:
            raise TransformError(index)
        if not isinstance(out, (bytes, bytearray, memoryview)):
            kind = type(out).__name__
            raise TransformError(
                index, f"Block transform returned {kind} for block {index}"
            )
        return bytes(out)

    def _seed_chain(self, blocks: Sequence[bytes], iv: bytes | None) -> bytes:
        """Return the initial chaining state, validating ``blocks`` against it."""
        if iv is None:
            raise MissingIVError(f"{type(self).__name__} requires an IV")
        chain = bytes(iv)
        if not chain:
            raise BlockSizeError("IV must not be empty")
        if self.validate_blocks:
            _check_blocks(blocks, len(chain))
        return chain
