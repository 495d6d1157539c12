"""Domain layer errors.

Routes map these onto HTTP statuses: NotFoundError to 404,
NotAuthorizedError to 403, ContentDeletedException to 409 and
BusinessRuleViolationError to 400.
"""


class DomainError(Exception):
    """Base domain error."""


class BusinessRuleViolationError(DomainError):
    """A request that is well formed but breaks a thread rule."""


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to modify content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class ContentDeletedException(DomainError):
    """Raised when replying, voting or reacting on deleted content."""

    def __init__(self, resource: str, resource_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"Cannot act on deleted {resource} {resource_id}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
