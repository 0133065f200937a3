"""Data Access Object (DAO) implementation for managing link records in Redis

This module provides a Redis-based implementation of LinkRecordBaseDAO.

Responsibilities:
    - Insert and retrieve link records from Redis;
    - Guard inserts with an optimistic (WATCH/MULTI/EXEC) transaction;
    - Attach native key expiry so Redis evicts expired records itself;
    - Raise appropriate DAO exceptions on conflicts and connectivity issues.

Key layout:
    <prefix>:links:<code>  ->  JSON {"target_url", "created_at", "expires_at", "is_custom"}

Classes:
    LinkRecordRedisDAO:
        DAO for storing and retrieving LinkRecord in a Redis datastore.

Example:
    >>> from linkregistry.dao.redis import LinkRecordRedisDAO

    >>> dao = LinkRecordRedisDAO(prefix="linkregistry:dev")
    >>> dao.put(record)
    <LinkRecordRedisDAO>

    >>> dao.get(record.code).target_url
    'https://example.com/page'
"""

import logging

import redis
from beartype import beartype

from linkregistry.models import LinkRecord
from linkregistry.constants import LogEvent
from linkregistry.dao.base import LinkRecordBaseDAO
from linkregistry.dao.redis.mixins import RedisClientMixin
from linkregistry.dao.redis.helpers import handle_redis_connection_error, dump_record, load_record
from linkregistry.dao.exceptions import ConflictError
from linkregistry.utils.expiration import ExpirationPolicy


logger = logging.getLogger(__name__)


class LinkRecordRedisDAO(RedisClientMixin, LinkRecordBaseDAO):
    """Redis-based Data Access Object (DAO) for link records

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
        policy (ExpirationPolicy):
            Judges record liveness for conflicts and `contains_live`.

    Methods:
        put(record: LinkRecord, **kwargs) -> LinkRecordRedisDAO:
            Insert a link record unless a live record holds its code.
            Raises ConflictError on a live holder or a concurrent write.
            Raises DataStoreError on connectivity issues with Redis.

        get(code: str, **kwargs) -> LinkRecord | None:
            Retrieve a link record by code, or None.
            Raises DataStoreError on connectivity issues with Redis.
    """

    def __init__(self, policy: ExpirationPolicy | None = None, **kwargs):
        self.policy = policy if policy is not None else ExpirationPolicy()
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f'<{type(self).__name__}>'

    @handle_redis_connection_error
    @beartype
    def put(self, record: LinkRecord, **kwargs) -> 'LinkRecordRedisDAO':
        """Insert a link record into Redis

        Args:
            record (LinkRecord):
                LinkRecord instance to store under its code.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            LinkRecordRedisDAO: self (for method chaining)

        Raises:
            ConflictError:
                If a live record already holds the code, or another client
                wrote the key between WATCH and EXEC.
            DataStoreError:
                If a Redis connection issue occurs during the transaction.
        """
        link_key = self.keys.link_key(record.code)

        # NOTE: The existence check and the SET run inside a WATCHed transaction.
        #       A plain EXISTS followed by SET lets two writers both see the key
        #       as free:
        #
        #       (client 1): GET <app>:links:<code>   => nil
        #       (client 2): GET <app>:links:<code>   => nil
        #       (client 1): SET <app>:links:<code> <record 1>
        #       (client 2): SET <app>:links:<code> <record 2>   => record 1 silently lost
        #
        #       With WATCH, client 2's EXEC aborts (WatchError) because the key
        #       changed after it was watched.
        with self.redis.pipeline() as pipe:
            try:
                pipe.watch(link_key)
                payload = pipe.get(link_key)
                if payload is not None:
                    existing = load_record(record.code, payload)
                    if self.policy.is_live(existing):
                        raise ConflictError(f"Live link with code '{record.code}' already exists.")
                    logger.debug(
                        'Reclaiming code from expired record.',
                        extra={'code': record.code, 'event': LogEvent.RECORD_RECLAIMED},
                    )

                pipe.multi()
                if record.expires_at is None:
                    pipe.set(link_key, dump_record(record))
                else:
                    pipe.set(link_key, dump_record(record), pxat=int(record.expires_at.timestamp() * 1000))
                pipe.execute()
            except redis.exceptions.WatchError as e:
                raise ConflictError(f"Link with code '{record.code}' was written concurrently.") from e
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, code: str, **kwargs) -> LinkRecord | None:
        """Retrieve a stored link record by code

        Returns:
            LinkRecord | None:
                The stored record (live or not yet evicted), or None if absent.

        Raises:
            DataStoreError:
                If Redis connectivity issues occur or the stored payload is malformed.
        """
        payload = self.redis.get(self.keys.link_key(code))
        if payload is None:
            return None
        return load_record(code, payload)
