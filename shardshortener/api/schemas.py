"""Request/response schemas for the HTTP API."""

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    url: str = Field(..., min_length=1, description='URL to shorten')


class ShortenResponse(BaseModel):
    code: str = Field(..., description='Generated shortcode')
    url: str = Field(..., description='Public short URL')


class ErrorResponse(BaseModel):
    message: str
