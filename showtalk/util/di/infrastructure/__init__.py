"""Infrastructure providers."""

# Import base and implementation (needed for __subclasses__())
from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
