"""Client layer errors."""


class AdapterError(Exception):
    """Base client error."""

    pass


class CommentsAPIError(AdapterError):
    """A call to the comments API failed.

    Raised for transport failures, non-success statuses and payloads that
    don't match the expected shape. ``status_code`` is None when no response
    was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
