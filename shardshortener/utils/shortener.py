"""Shortcode generation utility

This module provides helper functions for turning a numeric counter into a
short, deterministic, non-sequential code salted with a secret value, and
for turning such a code back into its counter.

Functions:
    shortcode_codec(salt, length) -> Hashids:
        Build (and cache) the hashids codec for a salt/length combination.

    generate_shortcode(counter, salt='default', length=6) -> str:
        Generate a short hash suitable for use as a URL slug.

    decode_shortcode(shortcode, salt='default', length=6) -> int | None:
        Recover the counter a shortcode was generated from.

Example:
    >>> from shardshortener.utils import generate_shortcode, decode_shortcode
    >>> code = generate_shortcode(12345, salt='my_secret')
    >>> decode_shortcode(code, salt='my_secret')
    12345
"""

import functools
import string

from hashids import Hashids

from shardshortener.exceptions import BadConfigurationError
from shardshortener.utils.constants import SHORTCODE_LENGTH, Defaults


# 26 lowercase + 26 uppercase + 10 digits, in the conventional hashids order
ALPHABET = string.ascii_lowercase + string.ascii_uppercase + '1234567890'


@functools.lru_cache(maxsize=128)
def shortcode_codec(salt: str, length: int) -> Hashids:
    """Build the hashids codec for a salt and minimum length.

    Codecs are cached, so every request for the same shard reuses one instance.

    Args:
        salt (str):
            Secret string used to shuffle the alphabet.
        length (int):
            Minimum length of produced shortcodes.

    Returns:
        Hashids: codec instance.

    Raises:
        BadConfigurationError:
            If hashids rejects the salt/alphabet combination.
    """
    try:
        return Hashids(salt=salt, min_length=length, alphabet=ALPHABET)
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f'Invalid shortcode codec configuration (salt={salt!r}, length={length}).') from e


def _validate_codec_args(salt: str, length: int) -> None:
    if not isinstance(salt, str):
        raise TypeError(f'Salt must be of type string (given type: {type(salt)}).')
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')


def generate_shortcode(counter: int, salt: str = Defaults.SHARD, length: int = SHORTCODE_LENGTH) -> str:
    """Generate a short, deterministic URL hash from a counter and salt.

    This function encodes a numeric counter with the hashids algorithm. The
    alphabet is shuffled by the salt and the result is padded with guard
    characters up to the requested minimum length. Larger counters produce
    longer codes instead of wrapping around, so the mapping is 1:1 for every
    non-negative counter.

    Args:
        counter (int):
            Unique non-negative integer value identifying the URL.

        salt (str, optional):
            Secret string used to randomize the output space.
            Defaults to the default shard name.
            An empty salt is accepted, but codes are then trivially decodable.

        length (int, optional):
            Minimum length of the resulting hash.
            Defaults to 6.

    Returns:
        str: A short alphanumeric hash derived from the counter and salt.

    Raises:
        TypeError: If counter, salt or length have the wrong type.
        ValueError: If counter is negative or length is below 1.

    NOTE:
        - The output is not trivially predictable without knowledge of the salt
          (this is obfuscation, not encryption).
        - The alphabet is Base62 safe: [a-zA-Z0-9].
    """
    if not isinstance(counter, int) or isinstance(counter, bool):
        raise TypeError(f'Counter must be of type integer (given type: {type(counter)}).')
    if counter < 0:
        raise ValueError(f'Counter must be a non-negative integer (given value: {counter}).')
    _validate_codec_args(salt, length)

    return shortcode_codec(salt, length).encode(counter)


def decode_shortcode(shortcode: str, salt: str = Defaults.SHARD, length: int = SHORTCODE_LENGTH) -> int | None:
    """Recover the counter encoded in a shortcode.

    Args:
        shortcode (str):
            Shortcode previously produced by generate_shortcode().
        salt (str, optional):
            Salt the shortcode was generated with.
        length (int, optional):
            Minimum length the shortcode was generated with.

    Returns:
        int | None:
            The original counter, or None if the shortcode wasn't produced
            by this salt/length combination.

    Example:
        >>> decode_shortcode(generate_shortcode(7, salt='a'), salt='a')
        7
        >>> decode_shortcode('nope!', salt='a') is None
        True
    """
    if not isinstance(shortcode, str):
        raise TypeError(f'Shortcode must be of type string (given type: {type(shortcode)}).')
    _validate_codec_args(salt, length)

    # hashids re-encodes the decoded numbers and returns () on mismatch
    numbers = shortcode_codec(salt, length).decode(shortcode)
    if len(numbers) != 1:
        return None
    return numbers[0]
