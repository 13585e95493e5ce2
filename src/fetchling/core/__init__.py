"""
Core modules for fetchling.
"""
from .body_parser import parse_response_body, select_parser
from .handle import Fetchling, SyncFetchling
from .request_builder import (
    PreparedRequest,
    build_body,
    build_effective_init,
    build_request,
)
from .url import append_query, join_urls, resolve_url_argument, to_query_params

__all__ = [
    "Fetchling",
    "SyncFetchling",
    "PreparedRequest",
    "build_body",
    "build_effective_init",
    "build_request",
    "parse_response_body",
    "select_parser",
    "append_query",
    "join_urls",
    "resolve_url_argument",
    "to_query_params",
]
