from .version import __version__ as __version__

__title__ = "cipherchain"
__description__ = "Block-cipher modes of operation over pluggable block primitives."
__license__ = "Apache-2.0"
