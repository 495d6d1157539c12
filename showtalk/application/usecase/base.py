"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

RequestT = TypeVar("RequestT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One API operation: validated request in, response model out.

    Use cases orchestrate domain services and translate string IDs from the
    interface layer into domain identifiers. Domain errors propagate to the
    caller, which maps them onto its own protocol.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass
