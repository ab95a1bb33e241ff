from shardshortener.utils.config import Config, load_config
from shardshortener.utils.helpers import get_short_url
from shardshortener.utils.shortener import generate_shortcode, decode_shortcode
from shardshortener.utils.logging import initialize_logging


__all__ = [
    'Config',
    'load_config',
    'get_short_url',
    'generate_shortcode',
    'decode_shortcode',
    'initialize_logging',
]
