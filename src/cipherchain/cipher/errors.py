class ChainError(Exception):
    """Generic chaining failure."""


class TransformError(ChainError):
    """The single-block transform failed on one block of the sequence.

    Attributes:
        index: Zero-based position of the block that could not be processed.
    """

    def __init__(self, index: int, message: str = "") -> None:
        self.index = index
        super().__init__(message or f"Block transform failed at block {index}")


class BlockSizeError(ChainError, ValueError):
    """A block does not fit the chaining state it is combined with."""


class MissingIVError(ChainError, ValueError):
    """A chained mode was requested without an initialization vector."""
