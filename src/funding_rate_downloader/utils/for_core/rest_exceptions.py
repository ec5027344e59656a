#!/usr/bin/env python
"""Exceptions raised by the Binance funding rate REST client.

None of these are retried: every one of them aborts the download run.
"""

from typing import Optional


class RestAPIError(Exception):
    """Base class for funding rate REST API failures."""


class HTTPError(RestAPIError):
    """The API answered with an error status code."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RateLimitError(HTTPError):
    """The API answered 418 or 429: the request weight limit was exceeded."""


class JSONDecodeError(RestAPIError):
    """The response body was not the JSON document the endpoint should return."""

    def __init__(self, message: str, body: str = ""):
        super().__init__(message)
        self.body = body
