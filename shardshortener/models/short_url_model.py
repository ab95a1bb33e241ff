from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ShortURLModel:
    """Represent a shortend URL mapping.

    Attributes:
        target (str):
            The original long URL that the short code redirects to.
        shortcode (str):
            The unique short identifier representing the shortened URL.

    Example:
        >>> url = ShortURLModel(
        ...     target="https://example.com/article/123",
        ...     shortcode="gY3Ab7",
        ... )
        >>> url.target
        'https://example.com/article/123'
        >>> url.shortcode
        'gY3Ab7'
    """

    target: str
    shortcode: str


@dataclass(frozen=True)
class ShortenResult:
    """Outcome of shortening a URL.

    Attributes:
        code (str):
            Newly minted shortcode.
        url (str):
            Public short URL (configured URL base + code).
    """

    code: str
    url: str


@dataclass(frozen=True)
class RedirectResult:
    """Outcome of resolving a shortcode.

    Attributes:
        shortcode (str):
            The requested shortcode.
        location (Optional[str]):
            Target URL to redirect to. None if the shortcode doesn't exist.
        deleted (bool):
            True if the entry was removed after resolution (delete-on-use).
    """

    shortcode: str
    location: Optional[str] = None
    deleted: bool = False

    @property
    def found(self) -> bool:
        return self.location is not None
