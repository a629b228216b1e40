"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Missing or malformed input (answer id, voter id, level, text)."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """A single-row write collided with a concurrent writer."""

    pass


class StoreError(DomainError):
    """Transient failure in the store of record."""

    pass


class AdmissionRejectedError(DomainError):
    """Raised when the rate limiter refuses a request."""

    def __init__(self, admission_key: str):
        self.admission_key = admission_key
        super().__init__(f"Too Many Requests: {admission_key}")
