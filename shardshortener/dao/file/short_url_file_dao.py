"""Data Access Object (DAO) implementation for managing shortened URLs in JSON files

This module provides a file-based implementation of ShortURLBaseDAO. Each shard
is backed by one JSON file, `<data_dir>/<shard>.db`, which is loaded into memory
once and flushed after every mutation:

    {
        "counter": 3,
        "links": {
            "gY3Ab7": "https://example.com",
            ...
        }
    }

Responsibilities:
    - Load a shard file, distinguishing an absent file (new shard) from an
      unreadable one (corrupted shard);
    - Store, retrieve and delete short URLs;
    - Maintain a monotonic counter that survives deletions;
    - Flush atomically (temporary file + fsync + rename) so a crash never
      leaves a half-written shard file.

Classes:
    ShortURLFileDAO:
        DAO for storing and retrieving ShortURLModel in a shard file.

Example:
    >>> from shardshortener.models import ShortURLModel
    >>> from shardshortener.dao.file import ShortURLFileDAO

    >>> dao = ShortURLFileDAO(shard='default', data_dir='/tmp')
    >>> dao.count()
    0
    >>> dao.put(ShortURLModel(target='https://example.com/page', shortcode='gY3Ab7'))
    <ShortURLFileDAO>
    >>> dao.get('gY3Ab7').target
    'https://example.com/page'
    >>> dao.remove('gY3Ab7')
    True
    >>> dao.size(), dao.count()
    (0, 1)

NOTE:
    The DAO itself is not thread-safe. Concurrent access to a shard must go
    through ShardRegistry.acquire(), which serializes callers per shard.
"""

import os
import json
import logging
import tempfile
from pathlib import Path
from typing import NoReturn

from beartype import beartype

from shardshortener.models import ShortURLModel
from shardshortener.dao.base import ShortURLBaseDAO
from shardshortener.dao.file.helpers import handle_storage_error
from shardshortener.dao.exceptions import ShortURLNotFoundError, StoreLoadError
from shardshortener.utils.constants import DB_FILE_SUFFIX, SHARD_FILE_KEYS, STORE_CREATED, STORE_LOADED, STORE_LOAD_FAILED


logger = logging.getLogger(__name__)


class ShortURLFileDAO(ShortURLBaseDAO):
    """File-based Data Access Object (DAO) for managing short URL mappings

    This class implements the ShortURLBaseDAO interface using one JSON file per shard.

    Attributes:
        shard (str):
            Shard name; the store file is `<shard>.db`.
        path (Path):
            Absolute path to the shard file.

    Methods:
        put(short_url: ShortURLModel, **kwargs) -> ShortURLFileDAO:
            Insert or overwrite a short URL mapping and flush the shard file.
            A new shortcode advances the counter; an overwrite doesn't.
            Raises StorageWriteError if the shard file can't be written.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a short URL mapping by shortcode.
            Raises ShortURLNotFoundError when the shortcode doesn't exist.

        exists(shortcode: str, **kwargs) -> bool:
            Check whether a shortcode is stored.

        remove(shortcode: str, **kwargs) -> bool:
            Delete a short URL mapping and flush the shard file. No-op if absent.
            Raises StorageWriteError if the shard file can't be written.

        size(**kwargs) -> int:
            Number of live short URL mappings.

        count(**kwargs) -> int:
            Number of shortcodes ever stored in this shard.
    """

    def __init__(self, shard: str, data_dir: str | Path = '.'):
        """Open a shard file, creating an empty in-memory store if it doesn't exist

        Nothing is written to disk until the first mutation.

        Args:
            shard (str):
                Shard name.
            data_dir (str | Path):
                Directory holding shard files. Defaults to the current directory.

        Raises:
            StoreLoadError:
                If the shard file exists but can't be read or has an unexpected shape.
        """
        self.shard = shard
        self.path = (Path(data_dir) / f'{shard}{DB_FILE_SUFFIX}').absolute()
        self._links: dict[str, str] = {}
        self._counter = 0

        self._load()

    @classmethod
    def open(cls, shard: str, data_dir: str | Path = '.') -> 'ShortURLFileDAO':
        return cls(shard=shard, data_dir=data_dir)

    def __repr__(self) -> str:
        return f'<ShortURLFileDAO shard={self.shard!r} size={len(self._links)} count={self._counter}>'

    def _load(self) -> None:
        """Read the shard file into memory

        Raises:
            StoreLoadError:
                If the file exists but is unreadable, isn't JSON, or doesn't
                follow the {"counter": int, "links": {str: str}} layout.
        """
        try:
            raw = self.path.read_text(encoding='utf-8')
        except FileNotFoundError:
            logger.info('Shard file not found. Starting with an empty store.', extra={'path': str(self.path), 'event': STORE_CREATED})
            return
        except (OSError, UnicodeDecodeError) as e:
            self._load_failed(f"Can't read shard file at {self.path}.", e)

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            self._load_failed(f'Shard file at {self.path} is not valid JSON.', e)

        if not isinstance(document, dict):
            self._load_failed(f'Shard file at {self.path} must hold a JSON object.')
        # Only {} or the {"counter", "links"} layout is a shard file; never overwrite anything else
        if document and 'links' not in document:
            self._load_failed(f"Shard file at {self.path} has no 'links' mapping.")
        if unknown := set(document) - SHARD_FILE_KEYS:
            self._load_failed(f'Shard file at {self.path} has unexpected keys: {sorted(unknown)}.')
        links = document.get('links', {})
        counter = document.get('counter', len(links) if isinstance(links, dict) else 0)
        if not isinstance(links, dict) or not all(isinstance(k, str) and isinstance(v, str) for k, v in links.items()):
            self._load_failed(f"Shard file at {self.path} has a malformed 'links' mapping.")
        if not isinstance(counter, int) or isinstance(counter, bool) or counter < 0:
            self._load_failed(f"Shard file at {self.path} has a malformed 'counter' value.")

        self._links = links
        # A hand-edited file may carry fewer ids than links; never hand out a used id
        self._counter = max(counter, len(links))
        logger.info(
            'Loaded shard file.',
            extra={'path': str(self.path), 'size': len(self._links), 'counter': self._counter, 'event': STORE_LOADED},
        )

    def _load_failed(self, message: str, cause: Exception | None = None) -> NoReturn:
        logger.error(message, extra={'path': str(self.path), 'event': STORE_LOAD_FAILED})
        raise StoreLoadError(message) from cause

    @handle_storage_error
    def _flush(self, links: dict[str, str], counter: int) -> None:
        """Atomically replace the shard file with the given state

        The document is written to a temporary file in the shard directory,
        fsync'ed and renamed over the shard file.
        """
        payload = json.dumps({'counter': counter, 'links': links}, ensure_ascii=False, indent=2)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            dir=self.path.parent,
            prefix=f'.{self.path.name}.',
            suffix='.tmp',
            delete=False,
        )
        try:
            with tmp:
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp.name, self.path)
        except BaseException:
            Path(tmp.name).unlink(missing_ok=True)
            raise

    @beartype
    def put(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLFileDAO':
        """Insert or overwrite a short URL mapping

        The in-memory store only changes after the shard file has been
        written, so a failed flush leaves the DAO untouched.

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLFileDAO: self (for method chaining)

        Raises:
            StorageWriteError:
                If the shard file can't be written.

        Example:
            >>> dao.put(ShortURLModel(target='https://example.com', shortcode='gY3Ab7'))
            <ShortURLFileDAO>
        """
        links = dict(self._links)
        counter = self._counter if short_url.shortcode in links else self._counter + 1
        links[short_url.shortcode] = short_url.target

        self._flush(links, counter)
        self._links, self._counter = links, counter
        return self

    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL mapping by shortcode

        Raises:
            ShortURLNotFoundError:
                If the shortcode doesn't exist in this shard.

        Example:
            >>> dao.get('gY3Ab7')
            ShortURLModel(target='https://example.com', shortcode='gY3Ab7')
        """
        target = self._links.get(shortcode)
        if target is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        return ShortURLModel(target=target, shortcode=shortcode)

    @beartype
    def exists(self, shortcode: str, **kwargs) -> bool:
        return shortcode in self._links

    @beartype
    def remove(self, shortcode: str, **kwargs) -> bool:
        """Delete a short URL mapping

        Deleting a missing shortcode is a no-op and doesn't touch the shard file.
        The counter is left as is.

        Returns:
            bool: True if the mapping existed and was removed, False otherwise.

        Raises:
            StorageWriteError:
                If the shard file can't be written.
        """
        if shortcode not in self._links:
            return False

        links = {code: target for code, target in self._links.items() if code != shortcode}
        self._flush(links, self._counter)
        self._links = links
        return True

    def size(self, **kwargs) -> int:
        return len(self._links)

    def count(self, **kwargs) -> int:
        """Retrieve the shard counter

        Returns:
            int:
                Number of distinct shortcodes ever stored; the id for the
                next shortcode.

        Example:
            >>> dao.count()
            123
        """
        return self._counter
