"""Entry point for the shardshortener service.

Usage:
    python -m shardshortener [-u URL_BASE] [-p PORT] [-s SHARD] [-d]
                             [--host HOST] [--data-dir DIR] [--log-level LEVEL]

See shardshortener.utils.config for the environment variable fallbacks.
"""

import logging

import uvicorn

from shardshortener.api import create_app
from shardshortener.dao.file import ShardRegistry
from shardshortener.utils import load_config, initialize_logging
from shardshortener.utils.constants import SHORTCODE_LENGTH
from shardshortener.utils.shortener import shortcode_codec


logger = logging.getLogger('shardshortener')


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Steps:
        - Parse CLI arguments (once, for the whole process)
        - Initialize JSON logging
        - Validate the shortcode codec for the configured shard
        - Open the configured shard (fail fast on a corrupted store file)
        - Serve the HTTP API with uvicorn

    Raises:
        BadConfigurationError: when configuration values are invalid.
        StoreLoadError: when the configured shard file exists but is unreadable.
    """
    config = load_config(argv)
    initialize_logging(config.log_level, shard=config.shard)

    logger.info('Config value - url_base: %s', config.url_base)
    logger.info('Config value - shard: %s', config.shard)
    logger.info('Config value - delete_on_use: %s', config.delete_on_use)
    logger.info('Config value - port: %s', config.port)
    logger.info('Config value - host: %s', config.host)
    logger.info('Config value - data_dir: %s', config.data_dir)

    shortcode_codec(config.shard, SHORTCODE_LENGTH)
    registry = ShardRegistry(data_dir=config.data_dir)
    registry.open(config.shard)

    app = create_app(config, registry)
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


if __name__ == '__main__':
    main()
