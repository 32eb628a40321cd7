"""
pytest configuration and fixtures.
"""

from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from usersapi.app import create_app
from usersapi.models import UserEntity
from usersapi.services import InMemoryUserRepository, get_user_repository


@pytest.fixture
def repository() -> InMemoryUserRepository:
    """Fresh, empty user store."""
    return InMemoryUserRepository()


@pytest.fixture
def client(repository: InMemoryUserRepository) -> Generator[TestClient, None, None]:
    """Test client whose endpoints all share the ``repository`` fixture."""
    app = create_app()
    app.dependency_overrides[get_user_repository] = lambda: repository
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(repository: InMemoryUserRepository) -> Callable[..., UserEntity]:
    """Insert a valid user directly into the store."""

    def _make_user(
        login: str = "johndoe",
        first_name: str | None = "John",
        last_name: str = "Doe",
        **extra,
    ) -> UserEntity:
        return repository.insert(
            UserEntity(login=login, first_name=first_name, last_name=last_name, **extra)
        )

    return _make_user
