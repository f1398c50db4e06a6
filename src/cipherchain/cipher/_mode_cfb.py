from __future__ import annotations

from collections.abc import Sequence

from ._mode_base import BaseMode, _xor_bytes
from .errors import BlockSizeError


class CFBMode(BaseMode):
    """Cipher Feedback (CFB) mode, full-block segments.

    The transform turns the previous ciphertext block (the IV for the first
    one) into a keystream block, which is XORed with the input. The transform
    always runs in the *forward* direction, for decryption as well as for
    encryption: pass the same forward primitive to both. Passing the inverse
    primitive for decryption does not fail, it silently yields garbage.

    A short final block is XORed with the matching prefix of the keystream,
    so the output is always exactly as long as the input.
    """

    requires_iv = True
    uses_inverse_for_decrypt = False

    def encrypt(self, blocks: Sequence[bytes], iv: bytes | None = None) -> bytes:
        """Encrypt blocks in CFB mode.

        Args:
            blocks: Plaintext blocks. The final block may be short.
            iv: Initialization vector, one full block.

        Returns:
            Ciphertext bytes of the same total length as the input.

        Raises:
            MissingIVError: If ``iv`` is ``None``.
            BlockSizeError: If a block or keystream does not fit the chain.
            TransformError: If the transform fails on any block.
        """
        chain = self._seed_chain(blocks, iv)

        out = bytearray()
        for i, block in enumerate(blocks):
            ct = _xor_bytes(bytes(block), self._keystream(chain, i))
            out += ct
            chain = ct
        return bytes(out)

    def decrypt(self, blocks: Sequence[bytes], iv: bytes | None = None) -> bytes:
        """Decrypt blocks in CFB mode using the forward transform.

        Args:
            blocks: Ciphertext blocks. The final block may be short.
            iv: Initialization vector, one full block.

        Returns:
            Plaintext bytes of the same total length as the input.

        Raises:
            MissingIVError: If ``iv`` is ``None``.
            BlockSizeError: If a block or keystream does not fit the chain.
            TransformError: If the transform fails on any block.
        """
        chain = self._seed_chain(blocks, iv)

        out = bytearray()
        for i, block in enumerate(blocks):
            block = bytes(block)
            out += _xor_bytes(block, self._keystream(chain, i))
            chain = block
        return bytes(out)

    def _keystream(self, chain: bytes, index: int) -> bytes:
        ks = self._apply(chain, index)
        if len(ks) != len(chain):
            raise BlockSizeError(
                f"Keystream block {index} has {len(ks)} bytes, expected {len(chain)}"
            )
        return ks
