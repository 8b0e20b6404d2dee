"""Data Access Object (DAO) implementation for persisting short links in Redis

This module provides a Redis-based implementation of ShortLinkBaseDAO, used as
the persistence collaborator of a UrlRegistry.

Responsibilities:
    - Save newly registered short links and index their codes;
    - Append visit timestamps to persisted short links;
    - Bulk-load every persisted short link (with visits) on registry startup;
    - Discard short links whose registration was rolled back;
    - Provide error handling and raise appropriate DAO exceptions.

Classes:
    ShortLinkRedisDAO:
        DAO for storing and loading ShortLink entities in a Redis datastore.

Example:
    >>> from datetime import datetime, UTC
    >>> from linkshortener.models import ShortLink
    >>> from linkshortener.dao.redis import ShortLinkRedisDAO

    >>> dao = ShortLinkRedisDAO(prefix="linkshortener:dev")

    >>> link = ShortLink(
    ...     code="abc123",
    ...     target="https://example.com/page",
    ...     created_at=datetime.now(UTC),
    ... )
    >>> dao.save(link)
    <ShortLinkRedisDAO>

    >>> dao.append_visit("abc123", datetime.now(UTC))
    1

    >>> [l.code for l in dao.load_all()]
    ['abc123']
"""

import logging
from collections.abc import Iterator
from datetime import datetime

import redis
from beartype import beartype

from linkshortener.models import ShortLink
from linkshortener.dao.base import ShortLinkBaseDAO
from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.dao.redis.helpers import handle_redis_connection_error
from linkshortener.dao.exceptions import ShortLinkAlreadyExistsError


logger = logging.getLogger(__name__)


class ShortLinkRedisDAO(RedisClientMixin, ShortLinkBaseDAO):
    """Redis-based Data Access Object (DAO) for persisting short links

    This class implements the ShortLinkBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        save(link: ShortLink, **kwargs) -> ShortLinkRedisDAO:
            Store link metadata and index its code.
            Raises ShortLinkAlreadyExistsError when a link with the same code exists.
            Raises DataStoreError on connectivity issues with Redis.

        append_visit(code: str, at: datetime, **kwargs) -> int:
            Append an ISO-8601 visit timestamp to the link's visit list.
            Raises DataStoreError on connectivity issues with Redis.

        load_all(**kwargs) -> Iterator[ShortLink]:
            Load every indexed link with its visits.
            Raises DataStoreError on connectivity issues with Redis.

        delete(code: str, **kwargs) -> bool:
            Remove a link's metadata, visits and index entry.
            Raises DataStoreError on connectivity issues with Redis.
    """

    @handle_redis_connection_error
    @beartype
    def save(self, link: ShortLink, **kwargs) -> 'ShortLinkRedisDAO':
        """Persist a short link's metadata into Redis

        The link hash and the index entry are written in a transaction guarded
        by WATCH on the link hash: a concurrent save of the same code aborts
        this one. Visits are not written here; they live in a separate list
        that append_visit() fills, even before the link is saved.

        Args:
            link (ShortLink):
                ShortLink instance to persist.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortLinkRedisDAO: self (for method chaining)

        Raises:
            ShortLinkAlreadyExistsError:
                If a short link with the same code already exists.
            DataStoreError:
                If a Redis connection issue occurs during the transaction.
        """
        link_key = self.keys.link_key(link.code)
        message = f"Short link with code '{link.code}' already exists."

        with self.redis.pipeline(transaction=True) as pipe:
            try:
                pipe.watch(link_key)
                if pipe.exists(link_key):
                    raise ShortLinkAlreadyExistsError(message)
                pipe.multi()
                pipe.hset(link_key, mapping={'target': link.target, 'created_at': link.created_at.isoformat()})
                pipe.sadd(self.keys.index_key(), link.code)
                pipe.execute()
            except redis.exceptions.WatchError as e:
                raise ShortLinkAlreadyExistsError(message) from e
        return self

    @handle_redis_connection_error
    @beartype
    def append_visit(self, code: str, at: datetime, **kwargs) -> int:
        """Append a visit timestamp to a short link's visit list

        The metadata of `code` is not required to exist yet: a link is
        resolvable while its save() is still in flight.

        Args:
            code (str):
                Code of the visited short link.
            at (datetime):
                Visit timestamp, stored as ISO-8601.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            int: length of the persisted visit list after the append.

        Raises:
            DataStoreError:
                If Redis connectivity issues occur.
        """
        return self.redis.rpush(self.keys.link_visits_key(code), at.isoformat())

    @handle_redis_connection_error
    def load_all(self, **kwargs) -> Iterator[ShortLink]:
        """Load every persisted short link

        Codes are read from the index set, then every link hash and visit list
        is fetched in a single pipeline round trip. Indexed codes whose metadata
        is missing are skipped.

        Returns:
            Iterator[ShortLink]: persisted links with their visit history.

        Raises:
            DataStoreError:
                If Redis connectivity issues occur.
        """
        codes = sorted(self.redis.smembers(self.keys.index_key()))
        if not codes:
            return iter(())

        with self.redis.pipeline(transaction=False) as pipe:
            for code in codes:
                pipe.hgetall(self.keys.link_key(code))
                pipe.lrange(self.keys.link_visits_key(code), 0, -1)
            results = pipe.execute()

        links = []
        for code, metadata, visits in zip(codes, results[::2], results[1::2]):
            if not metadata:
                logger.warning('Indexed short link has no metadata. Skipping.', extra={'shortcode': code})
                continue
            links.append(
                ShortLink(
                    code=code,
                    target=metadata['target'],
                    created_at=datetime.fromisoformat(metadata['created_at']),
                    visits=[datetime.fromisoformat(visit) for visit in visits],
                )
            )
        return iter(links)

    @handle_redis_connection_error
    @beartype
    def delete(self, code: str, **kwargs) -> bool:
        """Remove a short link's metadata, visit list and index entry

        Returns:
            bool: True if any of the three was present.

        Raises:
            DataStoreError:
                If Redis connectivity issues occur.
        """
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.delete(self.keys.link_key(code), self.keys.link_visits_key(code))
            pipe.srem(self.keys.index_key(), code)
            removed_keys, removed_members = pipe.execute()
        return bool(removed_keys or removed_members)
