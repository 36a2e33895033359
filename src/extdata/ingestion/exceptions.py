"""
extdata Exception Hierarchy

Typed failures raised by adapters, the aggregator and the repositories so the
scheduler can tell benign conditions (duplicates, empty tables) apart from
failures that must stop a collection cycle.
"""


class ExtDataError(Exception):
    """Base exception for all extdata errors."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class ConnectivityError(ExtDataError):
    """HTTP endpoint or database unreachable, or a non-200 response."""

    def __init__(self, message: str, status_code: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.status_code = status_code


class DecodeError(ExtDataError):
    """Response body is not JSON or does not have the expected shape."""

    pass


class ConversionError(ExtDataError):
    """A raw field could not be converted to its canonical type."""

    def __init__(self, message: str, field: str | None = None, value=None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class DuplicateKeyError(ExtDataError):
    """Record with the same natural key is already stored (benign)."""

    pass


class NotFoundError(ExtDataError):
    """Watermark query found no rows."""

    pass
