from shardshortener.api.app import create_app


__all__ = [
    'create_app',
]
