"""Per-shard store manager

Keeps one long-lived ShortURLFileDAO and one lock per shard name. Every
read-modify-write sequence against a shard (read counter + encode + put,
or get + remove) must run inside a single `acquire()` block, so two
concurrent requests can never mint the same shortcode. Different shards use
different locks and proceed in parallel.

Example:
    >>> registry = ShardRegistry(data_dir='/var/lib/shardshortener')
    >>> with registry.acquire('default') as dao:
    ...     next_id = dao.count()
    ...     dao.put(ShortURLModel(target='https://example.com', shortcode=generate_shortcode(next_id)))
"""

import logging
import threading
from contextlib import contextmanager
from collections.abc import Iterator
from pathlib import Path

from shardshortener.dao.file.short_url_file_dao import ShortURLFileDAO
from shardshortener.utils.config import validate_shard


logger = logging.getLogger(__name__)


class ShardRegistry:
    """Registry of guarded, long-lived shard DAOs

    Attributes:
        data_dir (Path):
            Directory holding shard files.

    Methods:
        acquire(shard: str) -> ContextManager[ShortURLFileDAO]:
            Lock the shard and yield its DAO, opening it on first use.

        open(shard: str) -> ShortURLFileDAO:
            Open a shard eagerly (e.g., at startup to fail fast on corrupted files).

        shards() -> list[str]:
            Names of shards opened so far.
    """

    def __init__(self, data_dir: str | Path = '.'):
        self.data_dir = Path(data_dir)
        self._daos: dict[str, ShortURLFileDAO] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, shard: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(shard)
            if lock is None:
                lock = self._locks[shard] = threading.Lock()
            return lock

    def _dao_for(self, shard: str) -> ShortURLFileDAO:
        # Caller holds the shard lock
        dao = self._daos.get(shard)
        if dao is None:
            logger.debug('Opening shard.', extra={'shard': shard})
            dao = self._daos[shard] = ShortURLFileDAO(shard=shard, data_dir=self.data_dir)
        return dao

    @contextmanager
    def acquire(self, shard: str) -> Iterator[ShortURLFileDAO]:
        """Lock a shard and yield its DAO

        Raises:
            BadConfigurationError:
                If the shard name isn't usable as a store file name.
            StoreLoadError:
                If the shard is opened for the first time and its file is unreadable.
        """
        shard = validate_shard(shard)
        with self._lock_for(shard):
            yield self._dao_for(shard)

    def open(self, shard: str) -> ShortURLFileDAO:
        shard = validate_shard(shard)
        with self._lock_for(shard):
            return self._dao_for(shard)

    def shards(self) -> list[str]:
        with self._registry_lock:
            return list(self._daos)
