from enum import StrEnum


# Shortcode length used for every minted link
SHORTCODE_LENGTH = 6

# Shard store files are named <shard><DB_FILE_SUFFIX>
DB_FILE_SUFFIX = '.db'
SHARD_FILE_KEYS = frozenset({'counter', 'links'})


class Defaults:
    """Default configuration values."""

    URL_BASE = 'http://localhost:8080/'
    HOST = '127.0.0.1'
    PORT = 8080
    SHARD = 'default'
    DATA_DIR = '.'
    LOG_LEVEL = 'INFO'


class ENV(StrEnum):
    """Environment variable names."""

    URL_BASE = 'URL_BASE'
    HOST = 'HOST'
    PORT = 'PORT'
    SHARD = 'SHARD'
    DELETE_ON_USE = 'DELETE_ON_USE'
    DATA_DIR = 'DATA_DIR'
    LOG_LEVEL = 'LOG_LEVEL'


# Log event codes
SHORT_URL_CREATED = 'SHORT_URL_CREATED'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
SHORT_URL_CONSUMED = 'SHORT_URL_CONSUMED'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
STORE_CREATED = 'STORE_CREATED'
STORE_LOADED = 'STORE_LOADED'
STORE_LOAD_FAILED = 'STORE_LOAD_FAILED'
STORE_WRITE_FAILED = 'STORE_WRITE_FAILED'
