import pytest
from fastapi.testclient import TestClient

from movies.database.db import MovieStore, create_store
from movies.main import create_app
from movies.models.movies import MovieCreate


@pytest.fixture
def store() -> MovieStore:
    return create_store(seed=True)


@pytest.fixture
def empty_store() -> MovieStore:
    return MovieStore()


@pytest.fixture
def client(store):
    with TestClient(create_app(store=store)) as test_client:
        yield test_client


@pytest.fixture
def dune() -> MovieCreate:
    return MovieCreate(
        title="Dune",
        description="A duke's son leads desert warriors against the galactic emperor",
        genre="Sci-Fi",
        release_year=2021,
        rating=8.0,
    )
