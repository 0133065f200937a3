"""Redis connection setup shared by Redis-backed registry stores.

A store either receives a ready client (tests, shared pools) or builds one
from host/port/db credentials. Either way the client is PINGed once before
the store is handed out, so an unreachable Redis fails at wiring time rather
than on the first `create()`.

Classes:
    RedisClientMixin:
        Attach `self.redis` and `self.keys`, then verify connectivity.

Example:
    >>> class LinkRecordRedisDAO(RedisClientMixin, LinkRecordBaseDAO):
    ...     pass
    ...
    >>> dao = LinkRecordRedisDAO(redis_host='cache.internal', prefix='linkregistry:prod')
    >>> dao.keys.link_key('sale')
    'linkregistry:prod:links:sale'
"""

import redis

from linkregistry.dao.redis.redis_key_schema import RedisKeySchema
from linkregistry.dao.redis.helpers import CONNECTIVITY_ERRORS, connection_address
from linkregistry.dao.exceptions import DataStoreError


class RedisClientMixin:
    """Attach a verified Redis client and a namespaced key schema.

    Attributes:
        redis (redis.Redis):
            Client whose responses are decoded to `str`.
        keys (RedisKeySchema):
            Key builder namespaced by `prefix`.

    Raises (on construction):
        DataStoreError:
            If Redis does not answer PING (connection refused or timed out).
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int | str = 6379,
        redis_db: int | str = 0,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        # Config documents built from environment variables may carry ports as strings
        self.redis = redis_client if redis_client is not None else redis.Redis(
            host=redis_host,
            port=int(redis_port),
            db=int(redis_db),
            username=redis_username,
            password=redis_password,
            decode_responses=True,
        )
        self.keys = RedisKeySchema(prefix=prefix)
        self._healthcheck()

    def _healthcheck(self) -> None:
        """PING Redis, raising DataStoreError when it is unreachable."""
        try:
            self.redis.ping()
        except CONNECTIVITY_ERRORS as e:
            raise DataStoreError(
                f"Can't connect to Redis at {connection_address(self.redis)}. Check the provided configuration parameters."
            ) from e
