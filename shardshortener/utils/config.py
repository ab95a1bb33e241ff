"""Utility functions for application configuration management.

The service is configured once at startup from command-line flags. Every
flag falls back to an environment variable, and then to a built-in default:

    flag                  env              default
    -u, --url-base        URL_BASE         http://localhost:8080/
    -p, --port            PORT             8080
    -s, --shard           SHARD            default
    -d, --delete-on-use   DELETE_ON_USE    false
        --host            HOST             127.0.0.1
        --data-dir        DATA_DIR         .
        --log-level       LOG_LEVEL        INFO

The resulting `Config` is immutable and passed explicitly to the HTTP app
and the services. It is never re-derived per request.

Functions:
    env_flag(name: str, default: bool = False) -> bool
        Read a boolean environment variable.

    validate_shard(shard: str) -> str
        Ensure a shard name is usable as a store file name.

    load_config(argv: list[str] | None = None) -> Config
        Parse CLI flags (with environment fallbacks) into a Config.

Example:
    >>> from shardshortener.utils.config import load_config
    >>> config = load_config(['--shard', 'links', '--delete-on-use'])
    >>> config.shard, config.delete_on_use
    ('links', True)
"""

import os
import argparse
import logging
from dataclasses import dataclass
from pathlib import Path

from shardshortener.exceptions import BadConfigurationError
from shardshortener.utils.constants import ENV, Defaults


logger = logging.getLogger(__name__)

_TRUTHY = frozenset({'1', 'true', 'yes', 'on'})
_FALSY = frozenset({'0', 'false', 'no', 'off', ''})


@dataclass(frozen=True)
class Config:
    """Process-wide service configuration.

    Attributes:
        url_base (str):
            Prefix prepended to generated shortcodes to build public URLs.
        port (int):
            Listen port.
        shard (str):
            Default shard: selects the store file and seeds the encoding salt.
        delete_on_use (bool):
            If True, a successfully resolved shortcode is deleted after its first redirect.
        host (str):
            Bind address.
        data_dir (Path):
            Directory holding the shard store files.
        log_level (str):
            Root log level.
    """

    url_base: str = Defaults.URL_BASE
    port: int = Defaults.PORT
    shard: str = Defaults.SHARD
    delete_on_use: bool = False
    host: str = Defaults.HOST
    data_dir: Path = Path(Defaults.DATA_DIR)
    log_level: str = Defaults.LOG_LEVEL


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable

    Args:
        name (str): environment variable name.
        default (bool): value when the variable is not set.

    Returns:
        bool: parsed value.

    Raises:
        BadConfigurationError:
            If the value is not one of 1/true/yes/on or 0/false/no/off.

    Example:
        >>> os.environ['DELETE_ON_USE'] = 'yes'
        >>> env_flag('DELETE_ON_USE')
        True
    """
    value = os.environ.get(name)
    if value is None:
        return default

    value = value.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise BadConfigurationError(f"Environment variable '{name}' must be a boolean (given value: {value!r}).")


def validate_shard(shard: str) -> str:
    """Ensure a shard name is usable as a store file name

    Raises:
        BadConfigurationError:
            If the shard is empty, '.', '..' or contains a path separator.
    """
    shard = shard.strip()
    if not shard:
        raise BadConfigurationError('Shard name must be a non-empty string.')
    if shard in {'.', '..'} or '/' in shard or '\\' in shard:
        raise BadConfigurationError(f'Shard name must not contain path components (given value: {shard!r}).')
    return shard


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise BadConfigurationError(f'Port must be an integer (given value: {value!r}).') from None
    if not 0 < port < 65536:
        raise BadConfigurationError(f'Port must be in range 1..65535 (given value: {port}).')
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='shardshortener',
        description='Simple service for creating short url redirects',
    )
    parser.add_argument(
        '-u',
        '--url-base',
        default=os.environ.get(ENV.URL_BASE, Defaults.URL_BASE),
        help=f'Prefix for public short URLs (default: {Defaults.URL_BASE})',
    )
    parser.add_argument(
        '-p',
        '--port',
        default=os.environ.get(ENV.PORT, str(Defaults.PORT)),
        help=f'Listen port (default: {Defaults.PORT})',
    )
    parser.add_argument(
        '-s',
        '--shard',
        default=os.environ.get(ENV.SHARD, Defaults.SHARD),
        help=f'Shard name: store file <shard>.db and encoding salt (default: {Defaults.SHARD})',
    )
    parser.add_argument(
        '-d',
        '--delete-on-use',
        action='store_true',
        default=None,
        help='Delete a short URL after its first successful redirect',
    )
    parser.add_argument('--host', default=os.environ.get(ENV.HOST, Defaults.HOST), help=f'Bind address (default: {Defaults.HOST})')
    parser.add_argument(
        '--data-dir',
        default=os.environ.get(ENV.DATA_DIR, Defaults.DATA_DIR),
        help='Directory holding shard store files (default: current directory)',
    )
    parser.add_argument(
        '--log-level',
        default=os.environ.get(ENV.LOG_LEVEL, Defaults.LOG_LEVEL),
        help=f'Log level (default: {Defaults.LOG_LEVEL})',
    )
    return parser


def load_config(argv: list[str] | None = None) -> Config:
    """Parse CLI flags (with environment fallbacks) into a Config

    Args:
        argv (list[str] | None):
            Command-line arguments, sys.argv[1:] when None.

    Returns:
        Config: immutable process configuration.

    Raises:
        BadConfigurationError:
            If any value is invalid (bad port, bad shard name, empty URL base, ...).
    """
    args = build_parser().parse_args(argv)

    url_base = args.url_base.strip()
    if not url_base:
        raise BadConfigurationError('URL base must be a non-empty string.')

    delete_on_use = args.delete_on_use
    if delete_on_use is None:
        delete_on_use = env_flag(ENV.DELETE_ON_USE)

    log_level = args.log_level.strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise BadConfigurationError(f'Unknown log level (given value: {args.log_level!r}).')

    return Config(
        url_base=url_base,
        port=_port(args.port),
        shard=validate_shard(args.shard),
        delete_on_use=delete_on_use,
        host=args.host.strip(),
        data_dir=Path(args.data_dir),
        log_level=log_level,
    )
