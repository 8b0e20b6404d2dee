"""Abstract base class for ShortLink data access objects (DAOs).

A DAO is the optional persistence collaborator of a UrlRegistry. The registry
stays the source of truth for uniqueness and concurrency; the DAO only mirrors
registrations and visits so a new registry instance can be rebuilt on startup.

A registered link is resolvable before its `save` completes, so visits may be
appended before the link's metadata exists in the data store. Visits are
therefore written by `append_visit` only, never by `save`.

Responsibilities:
    - Provide an interface for saving ShortLink metadata and appending visits.
    - Provide an interface for bulk-loading all persisted ShortLink objects.
    - Provide an interface for discarding a link whose registration was rolled back.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshortener.dao import ShortLinkRedisDAO
        >>> from linkshortener.core import UrlRegistry

        >>> dao = ShortLinkRedisDAO(prefix='linkshortener:dev')
        >>> registry = UrlRegistry(dao=dao)
        >>> registry.load()
        42
        >>> link = registry.register('https://example.com/blog/article-123')
        >>> [l.code for l in dao.load_all()].count(link.code)
        1
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from datetime import datetime

from linkshortener.models import ShortLink


class ShortLinkBaseDAO(ABC):
    """Interface for ShortLink data access objects (DAOs).

    Methods:
        save(link: ShortLink, **kwargs) -> ShortLinkBaseDAO:
            Persist the code, target and creation time of a newly registered ShortLink.
            Raises ShortLinkAlreadyExistsError if the code already exists.
            Raises DataStoreError on connection or write failure.

        append_visit(code: str, at: datetime, **kwargs) -> int:
            Append one visit timestamp to the visit history of `code`.
            Raises DataStoreError on connection or write failure.

        load_all(**kwargs) -> Iterator[ShortLink]:
            Yield every persisted ShortLink with its visit history.
            Raises DataStoreError on connection or read failure.

        delete(code: str, **kwargs) -> bool:
            Remove everything persisted for `code` (rollback of a failed registration).
            Raises DataStoreError on connection or write failure.

        close() -> None:
            Release connections held by the DAO.

    NOTE:
        - Links never expire. delete() is only used to roll back registrations.
    """

    @abstractmethod
    def save(self, link: ShortLink, **kwargs) -> 'ShortLinkBaseDAO':
        """Persist a newly registered ShortLink without its visits.

        Args:
            link (ShortLink):
                The ShortLink to persist.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortLinkBaseDAO: self (for method chaining)

        Raises:
            ShortLinkAlreadyExistsError:
                If a ShortLink with the same code already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def append_visit(self, code: str, at: datetime, **kwargs) -> int:
        """Append a visit timestamp to the visit history of `code`.

        Must succeed whether or not `save` for `code` has completed.

        Args:
            code (str):
                Code of the visited ShortLink.

            at (datetime):
                Visit timestamp.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            int: number of persisted visits after the append.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def load_all(self, **kwargs) -> Iterator[ShortLink]:
        """Yield every persisted ShortLink.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, code: str, **kwargs) -> bool:
        """Remove the metadata, visits and index entry of `code`.

        Returns:
            bool: True if anything was removed.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    def close(self) -> None:  # noqa: B027
        """Release connections held by the DAO. No-op by default."""
