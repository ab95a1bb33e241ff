"""FastAPI application factory.

HTTP responses:
    POST /shorten
        200: {"code": <shortcode>, "url": <url base + shortcode>}
        422: malformed JSON body or missing/empty 'url'
        500: {"message": "Internal Server Error"} on store failures

    GET /{code}
        308: redirect, Location: <original url>
        404: unknown shortcode (empty body)
        500: {"message": "Internal Server Error"} on store failures

The path functions are synchronous, so FastAPI runs them in its worker
thread pool and blocking shard I/O never stalls the event loop.
"""

import logging
from urllib.parse import quote

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, Response

from shardshortener.api.schemas import ShortenRequest, ShortenResponse, ErrorResponse
from shardshortener.dao.exceptions import DataStoreError
from shardshortener.dao.file import ShardRegistry
from shardshortener.services import shorten_url, redirect_url
from shardshortener.utils import Config


logger = logging.getLogger(__name__)

# Printable ASCII passes through untouched; only bytes a header can't carry get percent-encoded
_LOCATION_SAFE = ''.join(chr(c) for c in range(0x20, 0x7F))


def response_500(message: str | None = None) -> JSONResponse:
    base = 'Internal Server Error'
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'message': base if not message else f'{base} ({message})'},
    )


def create_app(config: Config, registry: ShardRegistry) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Process configuration, shared by every request
        registry: Store manager holding the shard DAOs

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title='shardshortener',
        description='Simple service for creating short url redirects',
        version='1.0.0',
    )
    app.state.config = config
    app.state.registry = registry

    @app.exception_handler(DataStoreError)
    async def handle_data_store_error(request: Request, exc: DataStoreError) -> JSONResponse:
        logger.error(
            'Data store failure. Responding with 500.',
            extra={'path': request.url.path, 'error': str(exc)},
        )
        return response_500()

    @app.post(
        '/shorten',
        response_model=ShortenResponse,
        responses={500: {'model': ErrorResponse, 'description': 'Internal server error'}},
    )
    def shorten(body: ShortenRequest, request: Request) -> ShortenResponse:
        """Create a shortened URL."""
        result = shorten_url(body.url, config=request.app.state.config, registry=request.app.state.registry)
        return ShortenResponse(code=result.code, url=result.url)

    @app.get(
        '/{code}',
        status_code=status.HTTP_308_PERMANENT_REDIRECT,
        responses={404: {'description': 'Unknown shortcode'}},
    )
    def redirect(code: str, request: Request) -> Response:
        """Redirect to the URL behind a shortcode."""
        result = redirect_url(code, config=request.app.state.config, registry=request.app.state.registry)
        if not result.found:
            return Response(status_code=status.HTTP_404_NOT_FOUND)
        return Response(
            status_code=status.HTTP_308_PERMANENT_REDIRECT,
            headers={'location': quote(result.location, safe=_LOCATION_SAFE)},
        )

    return app
