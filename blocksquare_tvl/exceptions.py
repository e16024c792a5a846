"""Exception hierarchy for blocksquare-tvl."""

from typing import Optional


class TvlError(Exception):
    """Base exception for all TVL adapter errors."""


class TransportError(TvlError):
    """Raised when the indexer cannot be reached or answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ResponseFormatError(TvlError):
    """Raised when the indexer response is not JSON or lacks the expected shape."""


class ValueParseError(TvlError):
    """Raised when a valuation is not a non-negative base-10 integer string."""

    def __init__(self, message: str, value=None, record_id: Optional[str] = None):
        super().__init__(message)
        self.value = value
        self.record_id = record_id


class ConfigurationError(TvlError):
    """Raised when the core asset table is missing an entry or cannot be read."""
