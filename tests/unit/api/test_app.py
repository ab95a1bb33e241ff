"""Unit tests for the FastAPI application.

Verify the HTTP surface responds with proper status codes, headers and
bodies, and interacts correctly with the services and shard stores.

Test coverage includes:

1. POST /shorten
   - Ensures a valid body returns 200 with {code, url}.
   - Ensures malformed or incomplete bodies are rejected with 422.

2. GET /{code}
   - Ensures known shortcodes return 308 with the Location header, repeatedly.
   - Ensures the Location header is the stored URL, unchanged.
   - Ensures unknown shortcodes return 404 with an empty body.

3. Delete-on-use
   - Ensures the first redirect succeeds and the second returns 404.

4. Store failures
   - Ensures write and load failures return 500.

5. Concurrency
   - Ensures concurrent POST /shorten requests mint distinct shortcodes.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from shardshortener.api import create_app
from shardshortener.api import app as app_module
from shardshortener.dao.exceptions import StorageWriteError
from shardshortener.dao.file import ShardRegistry
from shardshortener.utils import decode_shortcode


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def client(config, registry) -> TestClient:
    return TestClient(create_app(config, registry))


@pytest.fixture
def target_url():
    return 'https://example.com/blog/chuck-norris-is-awesome'


# -------------------------------
# 1. POST /shorten
# -------------------------------


def test_shorten(client, target_url):
    response = client.post('/shorten', json={'url': target_url})
    body = response.json()

    assert response.status_code == 200
    assert set(body) == {'code', 'url'}
    assert body['url'] == f'http://localhost:8080/{body["code"]}'
    assert decode_shortcode(body['code'], salt='default') == 0


@pytest.mark.parametrize(
    'payload',
    [
        {},
        {'url': ''},
        {'target_url': 'https://example.com'},
        {'url': None},
    ],
)
def test_shorten_with_invalid_body(client, payload):
    response = client.post('/shorten', json=payload)

    assert response.status_code == 422


def test_shorten_with_malformed_json(client):
    response = client.post('/shorten', content=b'{"url": ', headers={'Content-Type': 'application/json'})

    assert response.status_code == 422


# -------------------------------
# 2. GET /{code}
# -------------------------------


def test_shorten_then_redirect(client, target_url):
    code = client.post('/shorten', json={'url': target_url}).json()['code']

    for _ in range(3):
        response = client.get(f'/{code}', follow_redirects=False)
        assert response.status_code == 308
        assert response.headers['location'] == target_url


@pytest.mark.parametrize(
    'stored_url',
    [
        'https://example.com/a b?q=x|y',
        'https://example.com/already%20encoded?next=/x&y={z}',
        'not even a url',
    ],
)
def test_redirect_location_is_the_stored_url(client, stored_url):
    code = client.post('/shorten', json={'url': stored_url}).json()['code']

    response = client.get(f'/{code}', follow_redirects=False)

    assert response.status_code == 308
    assert response.headers['location'] == stored_url


def test_redirect_location_encodes_non_ascii_only(client):
    code = client.post('/shorten', json={'url': 'https://example.com/café?q=a b'}).json()['code']

    response = client.get(f'/{code}', follow_redirects=False)

    assert response.status_code == 308
    assert response.headers['location'] == 'https://example.com/caf%C3%A9?q=a b'


def test_redirect_unknown_code(client):
    response = client.get('/doesnotexist', follow_redirects=False)

    assert response.status_code == 404
    assert response.content == b''


# -------------------------------
# 3. Delete-on-use
# -------------------------------


def test_redirect_with_delete_on_use(config, registry, target_url):
    client = TestClient(create_app(replace(config, delete_on_use=True), registry))
    code = client.post('/shorten', json={'url': target_url}).json()['code']

    first = client.get(f'/{code}', follow_redirects=False)
    second = client.get(f'/{code}', follow_redirects=False)

    assert first.status_code == 308
    assert first.headers['location'] == target_url
    assert second.status_code == 404


def test_codes_are_not_reused_after_delete_on_use(config, registry):
    client = TestClient(create_app(replace(config, delete_on_use=True), registry))

    first = client.post('/shorten', json={'url': 'https://a.com'}).json()['code']
    assert client.get(f'/{first}', follow_redirects=False).status_code == 308
    second = client.post('/shorten', json={'url': 'https://b.com'}).json()['code']

    assert first != second
    assert client.get(f'/{first}', follow_redirects=False).status_code == 404
    assert client.get(f'/{second}', follow_redirects=False).headers['location'] == 'https://b.com'


# -------------------------------
# 4. Store failures
# -------------------------------


def test_shorten_write_failure_returns_500(client, monkeypatch):
    def _failing_shorten_url(*args, **kwargs):
        raise StorageWriteError('disk full')

    monkeypatch.setattr(app_module, 'shorten_url', _failing_shorten_url)

    response = client.post('/shorten', json={'url': 'https://example.com'})

    assert response.status_code == 500
    assert response.json() == {'message': 'Internal Server Error'}


def test_corrupted_shard_returns_500(config, tmp_path):
    (tmp_path / 'default.db').write_text('not json at all')
    client = TestClient(create_app(config, ShardRegistry(data_dir=tmp_path)))

    response = client.get('/abc123', follow_redirects=False)

    assert response.status_code == 500
    assert response.json() == {'message': 'Internal Server Error'}


def test_shards_are_isolated_across_apps(config, registry):
    client_a = TestClient(create_app(replace(config, shard='a'), registry))
    client_b = TestClient(create_app(replace(config, shard='b'), registry))

    code = client_a.post('/shorten', json={'url': 'https://a.com'}).json()['code']

    assert client_a.get(f'/{code}', follow_redirects=False).status_code == 308
    assert client_b.get(f'/{code}', follow_redirects=False).status_code == 404


# -------------------------------
# 5. Concurrency
# -------------------------------


def test_concurrent_shorten_requests(client, registry):
    n = 32

    with ThreadPoolExecutor(max_workers=8) as pool:
        responses = list(pool.map(lambda i: client.post('/shorten', json={'url': f'https://example.com/{i}'}), range(n)))

    assert all(response.status_code == 200 for response in responses)
    assert len({response.json()['code'] for response in responses}) == n
    with registry.acquire('default') as dao:
        assert dao.size() == n
