class EquityLookupError(RuntimeError):
    """Base exception for equity lookup errors."""


class InitializationError(EquityLookupError):
    """Raised when the service cannot be loaded from its input."""


class MissingHeaderError(InitializationError):
    """Raised when the input has no header line at all."""


class InputReadError(EquityLookupError):
    """Raised when a line source fails to deliver its lines."""


class ServiceStateError(EquityLookupError):
    """Raised on an illegal service state transition."""


class IndexFrozenError(EquityLookupError):
    """Raised when a published index is mutated."""
