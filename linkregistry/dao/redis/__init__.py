from linkregistry.dao.redis.redis_key_schema import RedisKeySchema
from linkregistry.dao.redis.mixins import RedisClientMixin
from linkregistry.dao.redis.link_record_redis_dao import LinkRecordRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'LinkRecordRedisDAO',
]
