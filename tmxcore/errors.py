"""Error definitions for TMX parsing."""

from typing import Optional


class TmxError(Exception):
    """Base exception for all tmxcore errors."""


class MalformedTmxError(TmxError):
    """Raised when the input is not well-formed XML or has no <tmx> root."""


class UnsupportedTmxVersionError(TmxError):
    """Raised in strict mode when the root version attribute is not 1.4."""

    def __init__(self, version: Optional[str]):
        self.version = version
        super().__init__(
            f"Unknown tmx version {version}. Cannot continue parsing. Can only parse v1.4b files."
        )


class TmxSerializationError(TmxError):
    """Raised when a unit holds text that cannot be written as XML, e.g. control characters."""
