"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism (e.g., JSON files, SQLite, Redis).

Responsibilities:
    - Provide an interface for storing, retrieving and deleting ShortURLModel objects.
    - Expose a monotonic counter used to mint new shortcodes.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shardshortener.models import ShortURLModel
        >>> from shardshortener.dao.file import ShortURLFileDAO

        >>> dao = ShortURLFileDAO(shard='default', data_dir='/var/lib/shardshortener')

        >>> short_url = ShortURLModel(
        ...     target="https://example.com/blog/article-123",
        ...     shortcode="gY3Ab7",
        ... )
        >>> dao.put(short_url)

        >>> dao.get("gY3Ab7").target
        'https://example.com/blog/article-123'

        >>> dao.remove("gY3Ab7")
        True
"""

from abc import ABC, abstractmethod

from shardshortener.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        put(short_url: ShortURLModel, **kwargs) -> ShortURLBaseDAO:
            Insert or overwrite a ShortURLModel in the data store.
            Raises StorageWriteError on write failure.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a ShortURLModel from the data store by shortcode.
            Raises ShortURLNotFoundError if the entry does not exist.

        exists(shortcode: str, **kwargs) -> bool:
            Check whether a shortcode is stored.

        remove(shortcode: str, **kwargs) -> bool:
            Delete a ShortURLModel by shortcode. No-op if absent.
            Raises StorageWriteError on write failure.

        size(**kwargs) -> int:
            Return the number of live entries.

        count(**kwargs) -> int:
            Return the monotonic counter (number of shortcodes ever stored).

    Subclassing:
        Datastore-specific implementations (e.g., ShortURLFileDAO) must extend
        this class and implement all abstract methods.

    NOTE:
        - count() must never decrease, even when entries are removed. New
          shortcodes are derived from it, so a decreasing counter would hand
          out codes that were already used.
    """

    @abstractmethod
    def put(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLBaseDAO':
        """Insert or overwrite a ShortURLModel in the data store.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be stored.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            StorageWriteError:
                If the change cannot be persisted.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a ShortURLModel from the data store by its shortcode.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given shortcode exists.
        """
        pass

    @abstractmethod
    def exists(self, shortcode: str, **kwargs) -> bool:
        pass

    @abstractmethod
    def remove(self, shortcode: str, **kwargs) -> bool:
        """Delete a ShortURLModel by its shortcode.

        Returns:
            bool: True if an entry was removed, False if it didn't exist.

        Raises:
            StorageWriteError:
                If the change cannot be persisted.
        """
        pass

    @abstractmethod
    def size(self, **kwargs) -> int:
        pass

    @abstractmethod
    def count(self, **kwargs) -> int:
        """Retrieve the current counter value from the data store.

        Returns:
            int: number of distinct shortcodes ever stored.
        """
        pass
