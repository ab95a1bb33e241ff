"""Unit tests for the dataclasses in short_url_model.py.

Test coverage includes:

1. Model creation
   - Ensures instances can be created with valid field values.

2. Equality semantics
   - Confirms that models with identical data compare equal and differing
     data compare unequal.

3. Immutability
   - Verifies that all fields are frozen and cannot be reassigned after
     object creation.

4. Redirect results
   - Verifies the `found` property and defaults of RedirectResult.
"""

from dataclasses import FrozenInstanceError

import pytest

from shardshortener.models import ShortURLModel, ShortenResult, RedirectResult


# -------------------------------------------------
# 1. Model creation
# -------------------------------------------------

def test_valid_short_url_model_creation():
    """Ensure ShortURLModel can be created with valid data."""
    short_url = ShortURLModel(target='https://example.com/article/123', shortcode='gY3Ab7')

    assert short_url.target == 'https://example.com/article/123'
    assert short_url.shortcode == 'gY3Ab7'


def test_shorten_result_creation():
    result = ShortenResult(code='gY3Ab7', url='http://localhost:8080/gY3Ab7')

    assert result.code == 'gY3Ab7'
    assert result.url == 'http://localhost:8080/gY3Ab7'


# -------------------------------------------------
# 2. Equality semantics
# -------------------------------------------------

def test_models_with_same_data_are_equal():
    assert ShortURLModel(target='https://a.com', shortcode='abc123') == ShortURLModel(target='https://a.com', shortcode='abc123')


@pytest.mark.parametrize(
    'other',
    [
        ShortURLModel(target='https://b.com', shortcode='abc123'),
        ShortURLModel(target='https://a.com', shortcode='xyz789'),
    ],
)
def test_models_with_different_data_are_not_equal(other):
    assert ShortURLModel(target='https://a.com', shortcode='abc123') != other


# -------------------------------------------------
# 3. Immutability
# -------------------------------------------------

@pytest.mark.parametrize('field', ['target', 'shortcode'])
def test_short_url_model_is_frozen(field):
    short_url = ShortURLModel(target='https://a.com', shortcode='abc123')
    with pytest.raises(FrozenInstanceError):
        setattr(short_url, field, 'changed')


def test_results_are_frozen():
    with pytest.raises(FrozenInstanceError):
        ShortenResult(code='abc123', url='u').code = 'x'
    with pytest.raises(FrozenInstanceError):
        RedirectResult(shortcode='abc123').location = 'x'


# -------------------------------------------------
# 4. Redirect results
# -------------------------------------------------

def test_redirect_result_not_found_defaults():
    result = RedirectResult(shortcode='abc123')

    assert result.found is False
    assert result.location is None
    assert result.deleted is False


def test_redirect_result_found():
    result = RedirectResult(shortcode='abc123', location='https://a.com', deleted=True)

    assert result.found is True
    assert result.deleted is True
