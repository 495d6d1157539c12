"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    Services own the rules around discussions, comments, votes and reactions,
    open a logfire span per operation, and talk to storage only through the
    repository interfaces.
    """
