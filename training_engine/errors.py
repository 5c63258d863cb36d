"""Domain-specific errors for the training engine.

The computation functions never raise for malformed numeric data; these
errors exist for caller-side precondition checks at the record boundary.
"""


class EngineError(Exception):
    """Base exception for all training engine errors."""

    pass


class InvalidRecordError(EngineError):
    """Raised when a raw record cannot be normalized into an engine input."""

    pass


class InvalidPlanError(InvalidRecordError):
    """Raised when a plan record has no usable race date."""

    pass
