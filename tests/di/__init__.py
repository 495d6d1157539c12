"""Mock providers for testing."""

from .persistence import SEED_REACTION_TYPES, MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "SEED_REACTION_TYPES",
    "build_test_container",
]
