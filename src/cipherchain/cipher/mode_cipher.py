from __future__ import annotations

from cipherchain.schemas import ChainConfig

from ._mode_base import BlockTransform
from .errors import BlockSizeError
from .selector import Direction, Mode, coerce_mode, resolve_mode, run_blocks


class ModeCipher:
    """One-shot cipher object built from a block primitive and a mode.

    Splits byte strings into blocks and routes each mode to the primitive
    direction it needs: the forward primitive for every encryption, the
    inverse primitive for Plain and CBC decryption, and the forward primitive
    for CFB decryption.

    The IV is not advanced between calls; every :meth:`encrypt` and
    :meth:`decrypt` starts again from the configured IV.
    """

    def __init__(
        self,
        encrypt_block: BlockTransform,
        decrypt_block: BlockTransform,
        block_size: int,
        mode: Mode | int,
        iv: bytes | None = None,
        config: ChainConfig | None = None,
    ) -> None:
        """Initialize a cipher object.

        Args:
            encrypt_block: Forward primitive for one ``block_size`` block.
            decrypt_block: Inverse primitive for one ``block_size`` block.
            block_size: Block size in bytes (for example, 16 for AES or
                8 for DES).
            mode: Requested chaining mode.
            iv: Initialization vector, exactly ``block_size`` bytes. When
                ``None`` the ``missing_iv`` policy of ``config`` applies.
            config: Chaining configuration. Defaults to :class:`ChainConfig`.

        Raises:
            ValueError: If ``block_size`` or ``mode`` is invalid.
            BlockSizeError: If ``iv`` does not match ``block_size``.
            MissingIVError: If the IV is missing under the strict policy.
        """
        if block_size < 1:
            raise ValueError("block_size must be at least 1")
        if iv is not None and len(iv) != block_size:
            raise BlockSizeError("Invalid IV size")

        self.encrypt_block = encrypt_block
        self.decrypt_block = decrypt_block
        self.block_size = block_size
        self.config = config or ChainConfig()
        self.iv = None if iv is None else bytes(iv)
        self.requested_mode = coerce_mode(mode)
        self.mode = resolve_mode(self.requested_mode, self.iv, self.config)

    def encrypt(self, data: bytes) -> bytes:
        """Encrypt data.

        Args:
            data: Plaintext bytes. Must be block-aligned for Plain and CBC;
                CFB accepts any length.

        Returns:
            Ciphertext bytes of the same length.

        Raises:
            BlockSizeError: If the data is not block-aligned where required.
            TransformError: If the primitive fails on any block.
        """
        return run_blocks(
            self.mode,
            Direction.ENCRYPT,
            self._split(data),
            self.iv,
            self.encrypt_block,
            self.config,
        )

    def decrypt(self, data: bytes) -> bytes:
        """Decrypt data.

        Args:
            data: Ciphertext bytes. Must be block-aligned for Plain and CBC;
                CFB accepts any length.

        Returns:
            Plaintext bytes of the same length.

        Raises:
            BlockSizeError: If the data is not block-aligned where required.
            TransformError: If the primitive fails on any block.
        """
        transform = self.decrypt_block
        if self.mode is Mode.CFB:
            transform = self.encrypt_block

        return run_blocks(
            self.mode,
            Direction.DECRYPT,
            self._split(data),
            self.iv,
            transform,
            self.config,
        )

    def _split(self, data: bytes) -> list[bytes]:
        bs = self.block_size
        if self.mode is not Mode.CFB and len(data) % bs != 0:
            raise BlockSizeError("Data length not a multiple of block size")

        data = bytes(data)
        return [data[i : i + bs] for i in range(0, len(data), bs)]


def new(
    encrypt_block: BlockTransform,
    decrypt_block: BlockTransform,
    block_size: int,
    mode: Mode | int,
    iv: bytes | bytearray | None = None,
    config: ChainConfig | None = None,
) -> ModeCipher:
    """Create a cipher object for a block primitive in the requested mode.

    Args:
        encrypt_block: Forward single-block primitive.
        decrypt_block: Inverse single-block primitive.
        block_size: Block size in bytes.
        mode: One of ``MODE_PLAIN``, ``MODE_CBC`` or ``MODE_CFB``.
        iv: Initialization vector of ``block_size`` bytes.
        config: Chaining configuration.

    Returns:
        A :class:`ModeCipher` instance.

    Raises:
        ValueError: If the block size, IV length, or mode is invalid.
    """
    return ModeCipher(
        encrypt_block,
        decrypt_block,
        block_size,
        mode,
        None if iv is None else bytes(iv),
        config,
    )
