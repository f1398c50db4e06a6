from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from ._mode_base import BaseMode, BlockTransform, _xor_bytes
from .errors import BlockSizeError


class CBCMode(BaseMode):
    """Cipher Block Chaining (CBC) mode.

    Each plaintext block is XORed with the previous ciphertext block (the IV
    for the first one) before the forward transform runs. Decryption runs the
    inverse transform and XORs the result with the previous *received*
    ciphertext block.

    Encryption is strictly sequential. Decryption only depends on ciphertext
    that is already known, so it can optionally fan the inverse transform out
    over a thread pool.
    """

    requires_iv = True
    uses_inverse_for_decrypt = True

    def __init__(
        self,
        transform: BlockTransform,
        validate_blocks: bool = True,
        workers: int = 1,
    ) -> None:
        """Initialize a CBC mode instance.

        Args:
            transform: Forward transform for :meth:`encrypt`, inverse transform
                for :meth:`decrypt`. See :class:`BaseMode`.
            validate_blocks: See :class:`BaseMode`.
            workers: Number of threads used by :meth:`decrypt`. ``1`` keeps
                decryption sequential. The transform must be safe to call
                concurrently when this is greater than one.

        Raises:
            ValueError: If ``workers`` is smaller than 1.
        """
        super().__init__(transform, validate_blocks)
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.workers = workers

    def encrypt(self, blocks: Sequence[bytes], iv: bytes | None = None) -> bytes:
        """Encrypt blocks in CBC mode.

        A transform failure aborts the whole call; the chain is never carried
        forward past a block that could not be encrypted.

        Args:
            blocks: Plaintext blocks. The final block may be short, in which
                case it is XORed with the matching prefix of the chain.
            iv: Initialization vector, one full block.

        Returns:
            Ciphertext bytes.

        Raises:
            MissingIVError: If ``iv`` is ``None``.
            BlockSizeError: If a block does not fit the chaining state.
            TransformError: If the transform fails on any block.
        """
        chain = self._seed_chain(blocks, iv)

        last = len(blocks) - 1
        out = bytearray()
        for i, block in enumerate(blocks):
            block = bytes(block)
            ct = self._apply(_xor_bytes(block, chain), i)
            # Only a short final block may come back at another length.
            short_tail = i == last and len(block) < len(chain)
            if len(ct) != len(chain) and not short_tail:
                raise BlockSizeError(
                    f"Encrypted block {i} has {len(ct)} bytes, expected {len(chain)}"
                )
            out += ct
            chain = ct
        return bytes(out)

    def decrypt(self, blocks: Sequence[bytes], iv: bytes | None = None) -> bytes:
        """Decrypt blocks in CBC mode.

        Args:
            blocks: Ciphertext blocks.
            iv: Initialization vector, one full block.

        Returns:
            Plaintext bytes.

        Raises:
            MissingIVError: If ``iv`` is ``None``.
            BlockSizeError: If a decrypted block does not match the chain.
            TransformError: If the transform fails on any block.
        """
        chain = self._seed_chain(blocks, iv)
        blocks = [bytes(b) for b in blocks]

        if self.workers > 1 and len(blocks) > 1:
            return self._decrypt_parallel(blocks, chain)

        out = bytearray()
        for i, block in enumerate(blocks):
            out += self._unmask(self._apply(block, i), chain, i)
            chain = block
        return bytes(out)

    def _decrypt_parallel(self, blocks: list[bytes], iv: bytes) -> bytes:
        """Run the inverse transform concurrently, then unmask in order."""
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            decrypted = list(executor.map(self._apply, blocks, range(len(blocks))))

        out = bytearray()
        prev = [iv, *blocks[:-1]]
        for i, (dec, chain) in enumerate(zip(decrypted, prev, strict=True)):
            out += self._unmask(dec, chain, i)
        return bytes(out)

    @staticmethod
    def _unmask(decrypted: bytes, chain: bytes, index: int) -> bytes:
        if len(decrypted) != len(chain):
            raise BlockSizeError(
                f"Decrypted block {index} has {len(decrypted)} bytes, "
                f"expected {len(chain)}"
            )
        return _xor_bytes(decrypted, chain)
