"""Exception classes for Chirp.

Only the top-level operations raise. Rejected token candidates (terminator
hits, missing protocol, overlap loss) are extraction decisions, not errors.
"""

from __future__ import annotations


class ChirpError(Exception):
    """Base exception for all Chirp errors.

    Subclass this for specific error categories.
    """

    pass


class EncodingError(ChirpError):
    """Input text is not valid Unicode.

    Raised for undecodable UTF-8 bytes and for strings holding lone
    surrogates. No partial result accompanies it.
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        """Initialize encoding error with optional offset.

        Args:
            message: Error description
            position: Offset of the first offending byte or codepoint
        """
        self.message = message
        self.position = position

        location = f" at offset {position}" if position is not None else ""
        super().__init__(f"{message}{location}")


class ConfigurationError(ChirpError):
    """Invalid style configuration.

    Raised when a StyleConfig is built, never while annotating.
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize configuration error.

        Args:
            field: Name of the offending StyleConfig field
            message: Description of the problem
        """
        self.field = field
        super().__init__(f"StyleConfig.{field}: {message}")
