"""Shared pytest fixtures for all test packages."""

from tests.shared.fixtures.factories import (
    TEST_ITERATIONS,
    TEST_JWT_SECRET,
    TEST_NEW_PASSWORD,
    TEST_PASSWORD,
    TestTokenFactory,
    TestUserFactory,
)
from tests.shared.fixtures.store import InMemoryStoreClient

__all__ = [
    "TEST_ITERATIONS",
    "TEST_JWT_SECRET",
    "TEST_NEW_PASSWORD",
    "TEST_PASSWORD",
    "InMemoryStoreClient",
    "TestTokenFactory",
    "TestUserFactory",
]
