from __future__ import annotations

import enum
import logging
from collections.abc import Sequence

from cipherchain.schemas import ChainConfig

from ._mode_base import BaseMode, BlockTransform
from ._mode_cbc import CBCMode
from ._mode_cfb import CFBMode
from ._mode_plain import PlainMode
from .errors import MissingIVError, TransformError

logger = logging.getLogger(__name__)


class Mode(enum.IntEnum):
    """Closed set of chaining disciplines."""

    PLAIN = 1  #: Independent blocks, no IV (debugging only)
    CBC = 2  #: Cipher-Block Chaining
    CFB = 3  #: Cipher Feedback, full-block segments


class Direction(enum.Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


MODE_PLAIN = Mode.PLAIN
MODE_CBC = Mode.CBC
MODE_CFB = Mode.CFB

_ENGINES: dict[Mode, type[BaseMode]] = {
    Mode.PLAIN: PlainMode,
    Mode.CBC: CBCMode,
    Mode.CFB: CFBMode,
}

if set(_ENGINES) != set(Mode):
    raise RuntimeError("Every Mode member needs an engine")


def coerce_mode(mode: Mode | int) -> Mode:
    """Return ``mode`` as a :class:`Mode`, raising ``ValueError`` if unknown."""
    try:
        return Mode(mode)
    except ValueError:
        raise ValueError(f"Unknown mode: {mode!r}") from None


def resolve_mode(
    mode: Mode | int,
    iv: bytes | None,
    config: ChainConfig | None = None,
) -> Mode:
    """Return the mode that will actually run for a request.

    Chained modes need an IV. When none is supplied, the ``missing_iv``
    policy decides: ``"fallback"`` downgrades to :attr:`Mode.PLAIN` and logs
    a warning, ``"strict"`` refuses the call.

    Args:
        mode: Requested mode.
        iv: Initialization vector, or ``None``.
        config: Chaining configuration. Defaults to :class:`ChainConfig`.

    Returns:
        The effective mode.

    Raises:
        ValueError: If ``mode`` is unknown.
        MissingIVError: If the IV is missing under the strict policy.
    """
    mode = coerce_mode(mode)
    cfg = config or ChainConfig()

    if iv is not None or not _ENGINES[mode].requires_iv:
        return mode

    if cfg.missing_iv == "strict":
        raise MissingIVError(f"{mode.name} mode requires an IV")

    logger.warning(
        "No IV supplied for %s mode, falling back to unchained PLAIN mode",
        mode.name,
    )
    return Mode.PLAIN


def build_engine(
    mode: Mode,
    direction: Direction,
    transform: BlockTransform,
    config: ChainConfig | None = None,
) -> BaseMode:
    """Instantiate the engine for ``mode`` with ``transform``."""
    cfg = config or ChainConfig()
    if mode is Mode.CBC and direction is Direction.DECRYPT:
        return CBCMode(transform, cfg.validate_blocks, workers=cfg.decrypt_workers)
    return _ENGINES[mode](transform, cfg.validate_blocks)


def run_blocks(
    mode: Mode | int,
    direction: Direction,
    blocks: Sequence[bytes],
    iv: bytes | None,
    transform: BlockTransform,
    config: ChainConfig | None = None,
) -> bytes:
    """Process ``blocks`` and raise on any failure.

    Same contract as :func:`process_blocks`, except that a transform failure
    raises :class:`TransformError` instead of returning ``None``.
    """
    effective = resolve_mode(mode, iv, config)
    direction = Direction(direction)
    engine = build_engine(effective, direction, transform, config)

    logger.debug(
        "Running %s %s over %d block(s)",
        effective.name,
        direction.value,
        len(blocks),
    )

    if direction is Direction.ENCRYPT:
        return engine.encrypt(blocks, iv)
    return engine.decrypt(blocks, iv)


def process_blocks(
    mode: Mode | int,
    direction: Direction,
    blocks: Sequence[bytes],
    iv: bytes | None,
    transform: BlockTransform,
    config: ChainConfig | None = None,
) -> bytes | None:
    """Chain a single-block transform over an ordered block sequence.

    The caller picks the transform direction: the forward primitive for
    encryption in every mode, the inverse primitive for Plain and CBC
    decryption, and the *forward* primitive again for CFB decryption.

    Args:
        mode: Requested chaining mode.
        direction: Encrypt or decrypt.
        blocks: Ordered blocks; only the last may be short.
        iv: Initialization vector, or ``None``. See :func:`resolve_mode`.
        transform: Single-block transform returning ``None`` on failure.
        config: Chaining configuration. Defaults to :class:`ChainConfig`.

    Returns:
        The assembled output, or ``None`` if the transform failed on any
        block. An empty block sequence yields ``b""``.

    Raises:
        ValueError: If ``mode`` is unknown.
        MissingIVError: If the IV is missing under the strict policy.
        BlockSizeError: If a block does not fit the chaining state.
    """
    try:
        return run_blocks(mode, direction, blocks, iv, transform, config)
    except TransformError as e:
        logger.info("Chaining aborted at block %d: %s", e.index, e)
        return None


def encrypt_blocks(
    mode: Mode | int,
    blocks: Sequence[bytes],
    iv: bytes | None,
    transform: BlockTransform,
    config: ChainConfig | None = None,
) -> bytes | None:
    """Shortcut for :func:`process_blocks` with ``Direction.ENCRYPT``."""
    return process_blocks(mode, Direction.ENCRYPT, blocks, iv, transform, config)


def decrypt_blocks(
    mode: Mode | int,
    blocks: Sequence[bytes],
    iv: bytes | None,
    transform: BlockTransform,
    config: ChainConfig | None = None,
) -> bytes | None:
    """Shortcut for :func:`process_blocks` with ``Direction.DECRYPT``."""
    return process_blocks(mode, Direction.DECRYPT, blocks, iv, transform, config)
