"""Sharded, thread-safe key table with atomic insert-if-absent.

The link table is the single shared key set of a registry: CodeAllocator
reserves codes in it and UrlRegistry reads bound ShortLink entities from it.
A key present with a `None` value is reserved but not (yet) bound.

Keys are spread over independently locked shards by their xxhash digest.
There is no table-wide lock.

Example:
    >>> table = LinkTable(shards=4)
    >>> table.claim('abc123', lambda code: f'entity:{code}')
    True
    >>> table.claim('abc123', lambda code: 'never called')
    False
    >>> table.get('abc123')
    'entity:abc123'
"""

import threading
from collections.abc import Iterator
from typing import Any

import xxhash

from linkshortener.constants import Defaults
from linkshortener.types import CodeFactory


class _Shard:
    __slots__ = ('lock', 'entries')

    def __init__(self):
        self.lock = threading.Lock()
        self.entries: dict[str, Any] = {}


class LinkTable:
    """Map of code -> entity split into `shards` lock-guarded dictionaries.

    Methods:
        claim(key: str, factory: CodeFactory | None = None) -> bool:
            Atomically insert `factory(key)` if `key` is absent.
        get(key: str) -> Any | None:
            Return the value bound to `key`, or None.
        discard(key: str) -> bool:
            Remove `key`, returning True if it was present.
        values() -> Iterator[Any]:
            Iterate over bound (non-None) values.
    """

    def __init__(self, shards: int = Defaults.SHARDS):
        if not isinstance(shards, int) or shards <= 0:
            raise ValueError(f'Shard count must be a positive integer (given value: {shards!r}).')
        self._shards = tuple(_Shard() for _ in range(shards))

    def _shard(self, key: str) -> _Shard:
        return self._shards[xxhash.xxh64_intdigest(key) % len(self._shards)]

    def claim(self, key: str, factory: CodeFactory | None = None) -> bool:
        """Atomically insert `key` if it is absent.

        The presence check, the call to `factory` and the insertion happen
        under the shard's lock, so at most one concurrent claim of the same
        key succeeds, and the stored value is visible as soon as the key is.

        Args:
            key (str): code to claim
            factory (CodeFactory | None): builds the value from the key.
                Called only when the claim succeeds. Without a factory the key
                is reserved with a None value.

        Returns:
            bool: True if the key was claimed, False if it was already present.

        Raises:
            Any exception raised by `factory`; the key is not claimed in that case.
        """
        shard = self._shard(key)
        with shard.lock:
            if key in shard.entries:
                return False
            shard.entries[key] = factory(key) if factory is not None else None
            return True

    def get(self, key: str) -> Any | None:
        shard = self._shard(key)
        with shard.lock:
            return shard.entries.get(key)

    def discard(self, key: str) -> bool:
        shard = self._shard(key)
        with shard.lock:
            return shard.entries.pop(key, _MISSING) is not _MISSING

    def values(self) -> Iterator[Any]:
        # Snapshot each shard under its own lock; no cross-shard consistency.
        for shard in self._shards:
            with shard.lock:
                snapshot = [value for value in shard.entries.values() if value is not None]
            yield from snapshot

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        shard = self._shard(key)
        with shard.lock:
            return key in shard.entries

    def __len__(self) -> int:
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += len(shard.entries)
        return total


_MISSING = object()
