"""Public entry point: register, resolve and inspect short links.

UrlRegistry composes a CodeAllocator (namespace of codes) and a VisitRecorder
(visit history), and optionally mirrors changes into a ShortLinkBaseDAO.

The registry is an explicitly constructed object, never a module global: every
driver (CLI, HTTP handler, test) builds or is handed its own instance.

Concurrency:
    - Registration claims the code and binds the new ShortLink in one atomic
      step of the shared LinkTable, so a code is never observable as reserved
      but bound to nothing, nor bound to two entities.
    - There is no registry-wide lock: the LinkTable locks one shard per code and
      VisitRecorder locks one link per visit.
    - The DAO is called outside of any table lock. A link is resolvable while
      its save is in flight, so the DAO persists visits through append_visit
      only, and a rolled back registration deletes whatever was persisted.

Example:
    >>> with UrlRegistry() as registry:
    ...     link = registry.register('https://example.com/page')
    ...     registry.resolve(link.code).target
    ...     registry.get_stats(link.code).total
    'https://example.com/page'
    1
"""

import logging
from collections.abc import Iterator
from datetime import datetime, UTC

from beartype import beartype

from linkshortener.constants import (
    Defaults,
    LINK_REGISTERED,
    LINK_RESOLVED,
    LINK_NOT_FOUND,
    LINKS_LOADED,
    REGISTRATION_ROLLED_BACK,
)
from linkshortener.core.allocator import CodeAllocator
from linkshortener.core.link_table import LinkTable
from linkshortener.core.recorder import VisitRecorder
from linkshortener.dao.base import ShortLinkBaseDAO
from linkshortener.dao.redis import ShortLinkRedisDAO
from linkshortener.dao.exceptions import DAOError, ShortLinkAlreadyExistsError
from linkshortener.exceptions import InvalidUrlError
from linkshortener.models import ShortLink, VisitStats
from linkshortener.types import Clock
from linkshortener.utils.config import RegistryConfig, app_prefix
from linkshortener.utils.helpers import utc_now
from linkshortener.utils.validators import is_absolute_url


logger = logging.getLogger(__name__)


class UrlRegistry:
    """Own the code -> ShortLink mapping and sequence allocator/recorder calls.

    Attributes:
        allocator (CodeAllocator):
            Reserves codes in the registry's LinkTable.
        recorder (VisitRecorder):
            Records and aggregates visits.
        dao (ShortLinkBaseDAO | None):
            Optional persistence collaborator.
        clock (Clock):
            Source of creation and visit timestamps (timezone-aware UTC).

    Methods:
        register(url: str, alias: str | None = None) -> ShortLink
        resolve(code: str) -> ShortLink | None
        get_stats(code: str) -> VisitStats | None
        get_timeline(code: str, limit: int | None = None) -> list[datetime] | None
        lookup(code: str) -> ShortLink | None
        links() -> Iterator[ShortLink]
        load() -> int
        close() -> None
    """

    def __init__(
        self,
        allocator: CodeAllocator | None = None,
        recorder: VisitRecorder | None = None,
        dao: ShortLinkBaseDAO | None = None,
        clock: Clock = utc_now,
        timeline_limit: int = Defaults.TIMELINE_LIMIT,
    ):
        self.clock = clock
        self.allocator = allocator if allocator is not None else CodeAllocator(LinkTable())
        self.recorder = recorder if recorder is not None else VisitRecorder(tz=UTC, clock=clock)
        self.dao = dao
        self.timeline_limit = timeline_limit
        self._closed = False

    @classmethod
    def from_config(cls, config: RegistryConfig, dao: ShortLinkBaseDAO | None = None, clock: Clock = utc_now) -> 'UrlRegistry':
        """Build a registry and all of its collaborators from a RegistryConfig.

        A ShortLinkRedisDAO is created when `config.redis` is set and no `dao`
        is passed explicitly.

        Raises:
            DataStoreError: If the configured Redis server is unreachable.
        """
        if dao is None and config.redis is not None:
            redis_config = {f'redis_{k}': v for k, v in config.redis.items() if v is not None}
            dao = ShortLinkRedisDAO(**redis_config, prefix=app_prefix())

        allocator = CodeAllocator(
            LinkTable(shards=config.shards),
            code_length=config.code_length,
            max_attempts=config.max_attempts,
        )
        recorder = VisitRecorder(tz=config.tzinfo, clock=clock)
        return cls(allocator=allocator, recorder=recorder, dao=dao, clock=clock, timeline_limit=config.timeline_limit)

    @property
    def table(self) -> LinkTable:
        return self.allocator.table

    @beartype
    def register(self, url: str, alias: str | None = None) -> ShortLink:
        """Register `url` under `alias`, or under a generated code.

        Steps:
        - Step 1: Validate `url` (no side effects on failure)
        - Step 2: Reserve a code and bind the new ShortLink atomically
        - Step 3: Persist through the DAO, releasing the code on failure

        Args:
            url (str): absolute, well-formed target URL
            alias (str | None): optional custom alias; blank means "generate"

        Returns:
            ShortLink: the registered link, with no visits

        Raises:
            InvalidUrlError: If `url` is not an absolute well-formed URL.
            InvalidAliasError: If `alias` contains whitespace.
            AliasTakenError: If `alias` is already reserved.
            GenerationExhaustedError: If no unused code could be generated.
            DAOError: If persisting fails. Anything persisted for the code is
                deleted (unless the data store already owned it) and the code is
                released before the error propagates.
        """
        # 1- Validate before touching the namespace
        if not is_absolute_url(url):
            raise InvalidUrlError(f'Invalid URL format: {url!r}')

        # 2- Reserve code and bind entity in one step
        created_at = self.clock()
        code = self.allocator.reserve(
            alias,
            factory=lambda code: ShortLink(code=code, target=url, created_at=created_at),
        )
        link = self.table.get(code)

        # 3- Mirror into the persistence collaborator
        if self.dao is not None:
            try:
                self.dao.save(link)
            except Exception as e:
                # Visits mirrored while the save was in flight are discarded with the link
                if not isinstance(e, ShortLinkAlreadyExistsError):
                    self._discard_persisted(code)
                self.allocator.release(code)
                logger.exception(
                    'Failed to persist short link. Released reserved code.',
                    extra={'shortcode': code, 'event': REGISTRATION_ROLLED_BACK},
                )
                raise

        logger.info('Registered short link.', extra={'shortcode': code, 'event': LINK_REGISTERED})
        return link

    @beartype
    def resolve(self, code: str) -> ShortLink | None:
        """Look up `code` and record a visit.

        Returns:
            ShortLink | None: the link, or None if no link has this code.
            A miss is an expected outcome and mutates nothing.
        """
        link = self.table.get(code)
        if link is None:
            logger.info('Short link not found.', extra={'shortcode': code, 'event': LINK_NOT_FOUND})
            return None

        at = self.recorder.log_visit(link)
        if self.dao is not None:
            # The in-memory visit stands even if mirroring it fails
            try:
                self.dao.append_visit(code, at)
            except DAOError:
                logger.exception('Failed to persist visit.', extra={'shortcode': code, 'event': LINK_RESOLVED})

        logger.debug('Resolved short link.', extra={'shortcode': code, 'event': LINK_RESOLVED})
        return link

    @beartype
    def lookup(self, code: str) -> ShortLink | None:
        """Look up `code` without recording a visit."""
        return self.table.get(code)

    @beartype
    def get_stats(self, code: str, now: datetime | None = None) -> VisitStats | None:
        """Return total/today/yesterday visit counts, or None for unknown codes.

        Viewing statistics does not count as a visit.
        """
        link = self.table.get(code)
        if link is None:
            return None
        return self.recorder.stats(link, now=now)

    @beartype
    def get_timeline(self, code: str, limit: int | None = None) -> list[datetime] | None:
        """Return the most recent visits (oldest first), or None for unknown codes."""
        link = self.table.get(code)
        if link is None:
            return None
        return self.recorder.timeline(link, limit=self.timeline_limit if limit is None else limit)

    def links(self) -> Iterator[ShortLink]:
        """Iterate over every registered link.

        Each shard of the table is snapshotted separately, so links registered
        during iteration may or may not be included.
        """
        return self.table.values()

    def _discard_persisted(self, code: str) -> None:
        try:
            self.dao.delete(code)
        except DAOError:
            logger.exception('Failed to discard persisted short link.', extra={'shortcode': code, 'event': REGISTRATION_ROLLED_BACK})

    def load(self) -> int:
        """Claim and bind every link persisted by the DAO.

        Intended to run once at startup, before serving requests. Links whose
        code is already present in this registry are skipped.

        Returns:
            int: number of links loaded

        Raises:
            DataStoreError: If the DAO cannot be read.
        """
        if self.dao is None:
            return 0

        loaded = 0
        for link in self.dao.load_all():
            if self.table.claim(link.code, lambda _, link=link: link):
                loaded += 1
            else:
                logger.warning('Persisted short link conflicts with a registered code. Skipping.', extra={'shortcode': link.code})

        logger.info('Loaded persisted short links.', extra={'count': loaded, 'event': LINKS_LOADED})
        return loaded

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self.dao is not None:
            self.dao.close()

    def __enter__(self) -> 'UrlRegistry':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self.table)

    def __contains__(self, code: object) -> bool:
        return self.table.get(code) is not None if isinstance(code, str) else False
