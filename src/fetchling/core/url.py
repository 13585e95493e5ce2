"""
URL helpers for fetchling.
"""
import logging
import re
from typing import Optional

import httpx

from ..types import QueryLike, UrlLike

logger = logging.getLogger("fetchling.url")

_SLASH_RUNS = re.compile(r"/+")
_SCHEME_SLASH = re.compile(r"^(.+?):/")
_FILE_SCHEME = re.compile(r"^file:")
_SLASH_BEFORE_MARKER = re.compile(r"/(\?|&|#[^!])")


def resolve_url_argument(url: UrlLike) -> str:
    """Return the URL string for a str, httpx.URL or httpx.Request."""
    if isinstance(url, httpx.Request):
        return str(url.url)
    if isinstance(url, httpx.URL):
        return str(url)
    if isinstance(url, str):
        return url
    raise TypeError(
        f"url must be a str, httpx.URL or httpx.Request, got {type(url).__name__}"
    )


def join_urls(*parts: str) -> str:
    """Join URL segments with "/" and normalize the result.

    - runs of "/" collapse to one
    - the scheme's "://" is restored
    - "file:" keeps its empty host ("file:///path")
    - no "/" is left before "?", "&" or a "#" not followed by "!"
    - a second "?" (base already had a query) becomes "&"
    """
    joined = "/".join(parts)
    joined = _SLASH_RUNS.sub("/", joined)
    joined = _SCHEME_SLASH.sub(r"\1://", joined, count=1)
    joined = _FILE_SCHEME.sub("file:/", joined, count=1)
    joined = _SLASH_BEFORE_MARKER.sub(r"\1", joined)

    if joined.count("?") > 1:
        joined = joined.replace("?", "&").replace("&", "?", 1)

    return joined


def to_query_params(query: QueryLike) -> httpx.QueryParams:
    """Wrap a query value in httpx.QueryParams unless it already is one."""
    if isinstance(query, httpx.QueryParams):
        return query
    if isinstance(query, str):
        return httpx.QueryParams(query.lstrip("?"))
    return httpx.QueryParams(query)


def append_query(url: str, query: Optional[QueryLike]) -> str:
    """Append encoded query parameters, joining with "&" if url has a query.

    A "#fragment" stays at the end, after the query.
    """
    if query is None:
        return url

    encoded = str(to_query_params(query))
    if not encoded:
        return url

    base, hash_mark, fragment = url.partition("#")
    if "?" not in base:
        separator = "?"
    elif base.endswith(("?", "&")):
        separator = ""
    else:
        separator = "&"
    result = f"{base}{separator}{encoded}{hash_mark}{fragment}"
    logger.debug(f"append_query: {url} -> {result}")
    return result
