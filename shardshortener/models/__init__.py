from shardshortener.models.short_url_model import ShortURLModel, ShortenResult, RedirectResult


__all__ = [
    'ShortURLModel',
    'ShortenResult',
    'RedirectResult',
]
