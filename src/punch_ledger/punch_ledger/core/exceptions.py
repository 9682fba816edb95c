class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when required input is missing or invalid."""


class IterationLimitExceeded(DomainError):
    """Raised when a bounded scan runs out of its safety budget."""

    def __init__(self, scan: str, limit: int):
        super().__init__(f"{scan} exceeded its iteration limit ({limit})")
        self.scan = scan
        self.limit = limit
