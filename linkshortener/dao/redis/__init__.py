from linkshortener.dao.redis.redis_key_schema import RedisKeySchema
from linkshortener.dao.redis.short_link_redis_dao import ShortLinkRedisDAO
from linkshortener.dao.redis.mixins import RedisClientMixin


__all__ = [
    'RedisKeySchema',
    'ShortLinkRedisDAO',
    'RedisClientMixin',
]
