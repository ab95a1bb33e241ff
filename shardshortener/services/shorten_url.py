import logging

from shardshortener.models import ShortURLModel, ShortenResult
from shardshortener.dao.file import ShardRegistry
from shardshortener.utils import Config, generate_shortcode, get_short_url
from shardshortener.utils.config import validate_shard
from shardshortener.utils.constants import SHORTCODE_LENGTH, SHORT_URL_CREATED


logger = logging.getLogger(__name__)


def shorten_url(target_url: str, *, config: Config, registry: ShardRegistry, shard: str | None = None) -> ShortenResult:
    """Mint a new shortcode for a target URL

    This service follows this procedure to shorten URLs:
    - Step 1: Lock the shard's store
    - Step 2: Read the shard counter as the next id
    - Step 3: Generate the shortcode for the id, salted with the shard name
    - Step 4: Store the shortcode -> target URL mapping (flushed to disk)
    - Step 5: Build the public short URL

    Steps 2-4 run under the shard lock, so concurrent calls never mint the
    same shortcode. The same target URL shortened twice gets two shortcodes.

    Args:
        target_url (str):
            URL to shorten. Must be non-empty; its format isn't validated.
        config (Config):
            Process configuration (URL base, default shard).
        registry (ShardRegistry):
            Store manager holding the shard DAOs.
        shard (str | None):
            Shard to store the link in. Defaults to `config.shard`.

    Returns:
        ShortenResult: the new shortcode and its public URL.

    Raises:
        ValueError:
            If target_url is empty.
        BadConfigurationError:
            If the shard name isn't usable as a store file name.
        StorageWriteError:
            If the shard file can't be written.

    Example:
        >>> result = shorten_url('https://example.com', config=config, registry=registry)
        >>> result.url
        'http://localhost:8080/gY3Ab7'
    """
    if not isinstance(target_url, str) or not target_url:
        raise ValueError('Target URL must be a non-empty string.')
    shard = validate_shard(shard or config.shard)

    # 1- Lock the shard's store
    with registry.acquire(shard) as dao:
        # 2- Use the shard counter as the next id
        next_id = dao.count()

        # 3- Generate shortcode for the new link
        shortcode = generate_shortcode(next_id, salt=shard, length=SHORTCODE_LENGTH)

        # 4- Store the mapping
        dao.put(ShortURLModel(target=target_url, shortcode=shortcode))

    # 5- Build the public short URL
    logger.info(
        'SHORTEN => URL: %s => SHORTCODE: %s',
        target_url,
        shortcode,
        extra={'shortcode': shortcode, 'shard': shard, 'event': SHORT_URL_CREATED},
    )
    return ShortenResult(code=shortcode, url=get_short_url(shortcode, config.url_base))
