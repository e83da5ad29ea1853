"""Exceptions raised by the ledger engine."""


class LedgerEngineError(Exception):
    """Base class for ledger engine errors."""
    pass


class ConfigError(LedgerEngineError):
    """Raised when the configuration is unusable."""
    pass


class SnapshotError(LedgerEngineError):
    """Raised when a books snapshot cannot be read or validated."""
    pass


class UnknownReportError(LedgerEngineError):
    """Raised when an unknown report type is requested."""
    pass


class UnknownVoucherTypeError(LedgerEngineError):
    """Raised when a voucher kind outside the closed set reaches an aggregator."""
    pass


class InvalidTransitionError(LedgerEngineError):
    """Raised when a file job is moved to a status it cannot reach."""
    pass
