from shardshortener.services.shorten_url import shorten_url
from shardshortener.services.redirect_url import redirect_url


__all__ = [
    'shorten_url',
    'redirect_url',
]
