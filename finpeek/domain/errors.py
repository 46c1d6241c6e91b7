"""
Error taxonomy for the data-refresh pipeline.

FetchFailure subclasses are raised by IQuoteProvider adapters. Callers treat
all three kinds the same way (fall back to synthetic data) but the kind is
kept so it can be logged.
"""


class FetchFailure(Exception):
    kind: str = "fetch_failure"

    def __init__(self, symbol: str, message: str) -> None:
        super().__init__(f"{symbol}: {message}")
        self.symbol = symbol


class TransportError(FetchFailure):
    """Network failure, timeout or non-2xx response."""

    kind = "transport_error"


class ParseError(FetchFailure):
    """Response body could not be decoded into the expected shape."""

    kind = "parse_error"


class EmptyResult(FetchFailure):
    """Well-formed response that carries no quote or series data."""

    kind = "empty_result"


class PersistenceError(Exception):
    """Raised by ITickerStore adapters; never fatal."""
