from linkshortener.dao.base import ShortLinkBaseDAO
from linkshortener.dao.redis import ShortLinkRedisDAO


__all__ = [
    'ShortLinkBaseDAO',
    'ShortLinkRedisDAO',
]
