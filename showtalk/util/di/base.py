"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components that tests can swap for in-memory implementations
Component = Literal["persistence"]


class ProviderConfigurationError(LookupError):
    """No provider implementation matches the requested mode."""


class ProviderBase(Provider):
    """Base for all showtalk providers.

    A provider class with subclasses is a mockable component: exactly one
    subclass sets __is_mock__ and is picked by the test container, the other
    is the production implementation.

    Attributes:
        __mock_component__: Component name, None for concrete providers
        __is_mock__: Whether this is the in-memory implementation
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
