import json
import functools
from datetime import datetime
from typing import TypeVar, Any
from collections.abc import Callable

import redis

from linkregistry.models import LinkRecord
from linkregistry.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])

CONNECTIVITY_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


def connection_address(client: redis.Redis) -> str:
    """Return '<host>:<port>/<db>' of the client's connection pool."""
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection errors

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.ConnectionError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on connectivity issues with Redis.

    Example:
        >>> @handle_redis_connection_error
        ... def get(self, code):
        ...     return self.redis.get(code)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except CONNECTIVITY_ERRORS as e:
            raise DataStoreError(f"Can't connect to Redis at {connection_address(self.redis)}.") from e

    return wrapper


def dump_record(record: LinkRecord) -> str:
    """Serialize a LinkRecord (minus its code, which lives in the key) to JSON."""
    return json.dumps(
        {
            'target_url': record.target_url,
            'created_at': record.created_at.isoformat(),
            'expires_at': None if record.expires_at is None else record.expires_at.isoformat(),
            'is_custom': record.is_custom,
        }
    )


def load_record(code: str, payload: str | bytes) -> LinkRecord:
    """Deserialize a JSON payload written by `dump_record()`.

    Raises:
        DataStoreError:
            If the stored payload is not a valid link record.
    """
    try:
        data = json.loads(payload)
        expires_at = data.get('expires_at')
        return LinkRecord(
            code=code,
            target_url=data['target_url'],
            created_at=datetime.fromisoformat(data['created_at']),
            expires_at=None if expires_at is None else datetime.fromisoformat(expires_at),
            is_custom=bool(data.get('is_custom', False)),
        )
    except (ValueError, KeyError, TypeError) as e:
        raise DataStoreError(f"Malformed link record stored under code '{code}'.") from e
