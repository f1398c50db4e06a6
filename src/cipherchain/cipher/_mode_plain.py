from __future__ import annotations

from collections.abc import Sequence

from ._mode_base import BaseMode, _check_blocks


class PlainMode(BaseMode):
    """Plain (ECB-like) mode.

    Plain mode is stateless: each block is passed through the transform
    independently, without an IV or chaining. Identical input blocks produce
    identical output blocks, so this mode provides no semantic security and
    exists for debugging and testing only.

    Encryption and decryption run the same algorithm; the caller decides the
    direction by supplying the forward or the inverse transform.
    """

    requires_iv = False
    uses_inverse_for_decrypt = True

    def encrypt(self, blocks: Sequence[bytes], iv: bytes | None = None) -> bytes:
        """Encrypt blocks in Plain mode.

        Args:
            blocks: Plaintext blocks.
            iv: Ignored.

        Returns:
            Ciphertext bytes.

        Raises:
            TransformError: If the transform fails on any block.
        """
        return self._run(blocks)

    def decrypt(self, blocks: Sequence[bytes], iv: bytes | None = None) -> bytes:
        """Decrypt blocks in Plain mode.

        Args:
            blocks: Ciphertext blocks.
            iv: Ignored.

        Returns:
            Plaintext bytes.

        Raises:
            TransformError: If the transform fails on any block.
        """
        return self._run(blocks)

    def _run(self, blocks: Sequence[bytes]) -> bytes:
        if self.validate_blocks and blocks:
            _check_blocks(blocks, len(blocks[0]))

        out = bytearray()
        for i, block in enumerate(blocks):
            out += self._apply(bytes(block), i)
        return bytes(out)
