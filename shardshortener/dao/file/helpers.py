import functools
import logging
from typing import TypeVar, Any
from collections.abc import Callable

from shardshortener.dao.exceptions import StorageWriteError
from shardshortener.utils.constants import STORE_WRITE_FAILED


__all__ = []

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def handle_storage_error(method: F) -> F:
    """Wrap shard-file writers to handle I/O and serialization errors

    Args:
        method (Callable[..., Any]):
            DAO method writing a shard file, which may raise OSError (disk full,
            permission denied) or TypeError/ValueError (unserializable data).

    Returns:
        Callable[..., Any]:
            Wrapped method which raises StorageWriteError on such failures.

    Example:
        >>> @handle_storage_error
        ... def _flush(self, links, counter):
        ...     self.path.write_text(json.dumps(...))
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (OSError, TypeError, ValueError) as e:
            logger.error(
                'Failed to write shard file.',
                extra={'path': str(self.path), 'event': STORE_WRITE_FAILED, 'reason': str(e)},
            )
            raise StorageWriteError(f"Can't write shard file at {self.path}.") from e

    return wrapper
