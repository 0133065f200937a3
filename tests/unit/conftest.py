from datetime import datetime, UTC

import pytest

from linkregistry.dao.memory import LinkRecordMemoryDAO
from linkregistry.services import LinkService, Resolver
from linkregistry.utils.expiration import ExpirationPolicy


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def policy() -> ExpirationPolicy:
    return ExpirationPolicy()


@pytest.fixture
def store(policy) -> LinkRecordMemoryDAO:
    """Provide a fresh in-memory registry per test."""
    return LinkRecordMemoryDAO(policy=policy)


@pytest.fixture
def service(store) -> LinkService:
    return LinkService(store, base_url='https://sho.rt')


@pytest.fixture
def resolver(store) -> Resolver:
    return Resolver(store)
