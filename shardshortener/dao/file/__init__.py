from shardshortener.dao.file.short_url_file_dao import ShortURLFileDAO
from shardshortener.dao.file.registry import ShardRegistry


__all__ = [
    'ShortURLFileDAO',
    'ShardRegistry',
]
