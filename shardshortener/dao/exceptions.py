"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLNotFoundError:
        Raised when a ShortURLModel is not found in the data store.

    DataStoreError:
        Raised when there is an error in the data store (e.g., I/O failures, corrupted files, etc.).

    StoreLoadError:
        Raised when a shard file exists but cannot be read or parsed.

    StorageWriteError:
        Raised when a shard file cannot be written (disk full, permission denied, serialization failure).

Example:
    >>> from shardshortener.dao.exceptions import StoreLoadError
    >>> raise StoreLoadError("Shard file 'default.db' is not valid JSON.")
    Traceback (most recent call last):
        ...
    shardshortener.dao.exceptions.StoreLoadError: Shard file 'default.db' is not valid JSON.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortURLNotFoundError(DAOError):
    """Exception raised when a ShortURLModel is not found in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. I/O failures, corrupted files, full disks, etc.
    """

    pass


class StoreLoadError(DataStoreError):
    """Exception raised when an existing shard file cannot be loaded."""

    pass


class StorageWriteError(DataStoreError):
    """Exception raised when a shard file cannot be flushed to disk."""

    pass
