"""Error taxonomy shared by the cultivation, processing and warehousing contexts.

Validation failures and missing entities use Protean's own exceptions
(``ValidationError`` and ``ObjectNotFoundError``). The classes below add the
conditions that callers need to tell apart from a malformed request.
"""

from protean.exceptions import ValidationError


class InsufficientStockError(ValidationError):
    """Demand for planted stock cannot be met."""


class CapacityExceededError(ValidationError):
    """A warehouse has no free slot for another stored package."""


class UnauthorizedInternalError(Exception):
    """An internal call arrived without a valid shared secret."""

    def __init__(self, message="Unauthorized internal request"):
        super().__init__(message)
        self.message = message


class RpcTransportError(Exception):
    """An internal RPC call failed before a response was received."""

    def __init__(self, operation, reason):
        super().__init__(f"{operation} failed: {reason}")
        self.operation = operation
        self.reason = reason
