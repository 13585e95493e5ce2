"""
Response body parse dispatch.

The parser is chosen from the Accept header of the outgoing request, not the
Content-Type of the response:

- application/json         -> response.json()
- application/octet-stream -> response.content (bytes)
- anything else / absent   -> response.text
"""
import logging
from typing import Any, Callable, Dict, Optional

import httpx

logger = logging.getLogger("fetchling.body_parser")

JSON_ACCEPT = "application/json"
BINARY_ACCEPT = "application/octet-stream"


def _parse_json(response: httpx.Response) -> Any:
    return response.json()


def _parse_bytes(response: httpx.Response) -> bytes:
    return response.content


def _parse_text(response: httpx.Response) -> str:
    return response.text


PARSERS: Dict[str, Callable[[httpx.Response], Any]] = {
    JSON_ACCEPT: _parse_json,
    BINARY_ACCEPT: _parse_bytes,
}

PARSER_NAMES = {
    _parse_json: "JSON",
    _parse_bytes: "binary",
    _parse_text: "text",
}


def select_parser(accept: Optional[str]) -> Callable[[httpx.Response], Any]:
    """Pick a parser for the request's Accept header value."""
    if accept is None:
        return _parse_text
    return PARSERS.get(accept.strip().lower(), _parse_text)


def parse_response_body(response: httpx.Response) -> Optional[Any]:
    """Parse a fully read response body.

    Returns None when parsing fails; the failure is logged at DEBUG with the
    request URL, method and error.
    """
    request = response.request
    parser = select_parser(request.headers.get("Accept"))
    try:
        return parser(response)
    except Exception as e:
        logger.debug(
            f"Failed to parse {PARSER_NAMES[parser]} body for request. "
            f"URL: {request.url} Method: {request.method} Error: {e!r}"
        )
        return None
