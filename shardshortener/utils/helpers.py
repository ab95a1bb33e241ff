"""Helper utilities for the HTTP services.

Functions:
    get_short_url(shortcode: str, url_base: str) -> str
        Get string representation of short URL for a given shortcode
"""


def get_short_url(shortcode: str, url_base: str) -> str:
    """Get string representation of shortened URL

    The URL base is used verbatim, so it should carry its own trailing slash.

    Args:
        shortcode (str): shortcode
        url_base (str): configured public URL prefix

    Returns:
        str: short url string representation

    Example:
        >>> get_short_url('gY3Ab7', 'http://localhost:8080/')
        'http://localhost:8080/gY3Ab7'
    """
    return f'{url_base}{shortcode}'
