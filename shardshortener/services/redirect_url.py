import logging

from shardshortener.models import RedirectResult
from shardshortener.dao.file import ShardRegistry
from shardshortener.dao.exceptions import ShortURLNotFoundError
from shardshortener.utils import Config
from shardshortener.utils.config import validate_shard
from shardshortener.utils.constants import REDIRECT_SUCCESS, SHORT_URL_CONSUMED, SHORT_URL_NOT_FOUND


logger = logging.getLogger(__name__)


def redirect_url(
    shortcode: str,
    *,
    config: Config,
    registry: ShardRegistry,
    shard: str | None = None,
    delete_on_use: bool | None = None,
) -> RedirectResult:
    """Resolve a shortcode to its target URL

    This service follows this procedure to resolve shortcodes:
    - Step 1: Lock the shard's store
    - Step 2: Look up the short URL record
    - Step 3: Delete the record if delete-on-use is enabled

    Deletion happens as soon as the shortcode is resolved, whether or not the
    client ends up following the redirect.

    Args:
        shortcode (str):
            Shortcode from the request path.
        config (Config):
            Process configuration (default shard, delete-on-use policy).
        registry (ShardRegistry):
            Store manager holding the shard DAOs.
        shard (str | None):
            Shard to look in. Defaults to `config.shard`.
        delete_on_use (bool | None):
            Override for `config.delete_on_use`.

    Returns:
        RedirectResult:
            `location` holds the target URL, or None if the shortcode doesn't exist.

    Raises:
        BadConfigurationError:
            If the shard name isn't usable as a store file name.
        StorageWriteError:
            If delete-on-use is enabled and the shard file can't be written.
    """
    shard = validate_shard(shard or config.shard)
    if delete_on_use is None:
        delete_on_use = config.delete_on_use

    # 1- Lock the shard's store
    with registry.acquire(shard) as dao:
        # 2- Get short URL record
        try:
            short_url = dao.get(shortcode=shortcode)
        except ShortURLNotFoundError:
            logger.warning(
                'No url found for code %r',
                shortcode,
                extra={'shortcode': shortcode, 'shard': shard, 'event': SHORT_URL_NOT_FOUND},
            )
            return RedirectResult(shortcode=shortcode)

        logger.info(
            'REDIRECT => Found url %r for code %s',
            short_url.target,
            shortcode,
            extra={'shortcode': shortcode, 'shard': shard, 'event': REDIRECT_SUCCESS},
        )

        # 3- One-time links are consumed on resolution
        if delete_on_use:
            logger.info(
                'REDIRECT => Deleting used code %s...',
                shortcode,
                extra={'shortcode': shortcode, 'shard': shard, 'event': SHORT_URL_CONSUMED},
            )
            dao.remove(shortcode=shortcode)

    return RedirectResult(shortcode=shortcode, location=short_url.target, deleted=delete_on_use)
