"""Unit tests for Redis DAO helpers

Test coverage includes:
    1. handle_redis_connection_error decorator
       - Ensures the wrapped method executes and returns its result.
       - Ensures connection and timeout errors are converted into DataStoreError.
       - Confirms functools.wraps preserves the original function's metadata.
    2. Record serialization
       - dump_record() leaves the code out of the payload.
       - load_record() restores records, including timezone-aware expiry.
       - Malformed payloads raise DataStoreError.
"""

import json
from datetime import datetime, timedelta, UTC
from unittest.mock import MagicMock

import pytest
import redis

from linkregistry.models import LinkRecord
from linkregistry.dao.exceptions import DataStoreError
from linkregistry.dao.redis.helpers import handle_redis_connection_error, dump_record, load_record


class DummyDAO:
    def __init__(self):
        self.redis = MagicMock()
        self.redis.connection_pool.connection_kwargs = {'host': 'localhost', 'port': 6379, 'db': 0}

    @handle_redis_connection_error
    def ping(self):
        return 'OK'

    @handle_redis_connection_error
    def fail(self, error):
        raise error


# -------------------------------
# 1. handle_redis_connection_error
# -------------------------------


def test_decorator_allows_normal_execution():
    assert DummyDAO().ping() == 'OK'


@pytest.mark.parametrize(
    'error',
    [
        redis.exceptions.ConnectionError('Cannot connect'),
        redis.exceptions.TimeoutError('Timed out'),
    ],
)
def test_decorator_transforms_redis_connection_error(error):
    with pytest.raises(DataStoreError, match="Can't connect to Redis at localhost:6379/0."):
        DummyDAO().fail(error)


def test_decorator_leaves_other_errors_alone():
    with pytest.raises(redis.exceptions.ResponseError):
        DummyDAO().fail(redis.exceptions.ResponseError('WRONGTYPE'))


def test_decorator_preserves_function_metadata():
    @handle_redis_connection_error
    def sample_function():
        """This is a sample docstring."""
        return 'OK'

    assert sample_function.__name__ == 'sample_function'
    assert 'sample docstring' in sample_function.__doc__


# -------------------------------
# 2. Record serialization
# -------------------------------


def test_dump_record_omits_code():
    created_at = datetime(2025, 10, 15, 12, 0, tzinfo=UTC)
    record = LinkRecord(code='sale', target_url='https://example.com', created_at=created_at, is_custom=True)

    payload = json.loads(dump_record(record))

    assert payload == {
        'target_url': 'https://example.com',
        'created_at': '2025-10-15T12:00:00+00:00',
        'expires_at': None,
        'is_custom': True,
    }


def test_load_record_restores_expiry():
    created_at = datetime(2025, 10, 15, 12, 0, tzinfo=UTC)
    record = LinkRecord(
        code='brief',
        target_url='https://example.com/page?q=1',
        created_at=created_at,
        expires_at=created_at + timedelta(days=7),
    )

    restored = load_record('brief', dump_record(record))

    assert restored == record
    assert restored.expires_at.tzinfo is not None


def test_load_record_accepts_bytes():
    payload = b'{"target_url": "https://example.com", "created_at": "2025-10-15T12:00:00+00:00"}'

    restored = load_record('abc1234', payload)

    assert restored.code == 'abc1234'
    assert restored.expires_at is None
    assert restored.is_custom is False


@pytest.mark.parametrize(
    'payload',
    [
        'not json',
        '{"created_at": "2025-10-15T12:00:00+00:00"}',
        '{"target_url": "https://example.com", "created_at": "yesterday"}',
        '{"target_url": "https://example.com", "created_at": null}',
    ],
)
def test_load_record_malformed_payload(payload):
    with pytest.raises(DataStoreError, match="Malformed link record stored under code 'abc1234'."):
        load_record('abc1234', payload)
