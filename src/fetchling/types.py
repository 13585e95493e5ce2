"""
Type definitions for fetchling.
"""
from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    List,
    Literal,
    Mapping,
    Optional,
    Tuple,
    TypedDict,
    Union,
)

import httpx


# HTTP methods
HttpMethod = Literal[
    "GET", "POST", "PUT", "DELETE", "HEAD", "OPTIONS", "TRACE", "CONNECT", "PATCH"
]

HTTP_METHODS: Tuple[str, ...] = (
    "GET",
    "POST",
    "PUT",
    "DELETE",
    "HEAD",
    "OPTIONS",
    "TRACE",
    "CONNECT",
    "PATCH",
)

# Anything that identifies a resource location
UrlLike = Union[str, httpx.URL, httpx.Request]

QueryLike = Union[
    httpx.QueryParams,
    Mapping[str, Any],
    List[Tuple[str, Any]],
    str,
]

HeadersLike = Union[httpx.Headers, Mapping[str, str]]


class RequestInit(TypedDict, total=False):
    """Configuration overlay for a fetchling resource or request.

    Request fields:
    - method: HTTP verb, one of HTTP_METHODS
    - headers: merged key-wise (case-insensitive) onto the parent's headers
    - body: raw body (str/bytes) or a mapping sent form-encoded
    - json_body: value serialized to JSON; replaces body, sets Content-Type
    - query: mapping, pair list, pre-encoded string or httpx.QueryParams
    - json: set "Accept: application/json" and force parse_body
    - parse_body: auto-parse the response body (default True)

    Transport pass-through (forwarded unchanged to httpx):
    - timeout, follow_redirects, auth, cookies, extensions
    """

    method: HttpMethod
    headers: HeadersLike
    body: Union[str, bytes, Mapping[str, Any]]
    json_body: Any
    query: QueryLike
    json: bool
    parse_body: bool
    timeout: Any
    follow_redirects: bool
    auth: Any
    cookies: Any
    extensions: Dict[str, Any]


@dataclass
class FetchlingResponse:
    """Response from a fetchling request.

    Wraps the httpx response with the auto-parsed body in ``data``. ``data``
    is None when parsing was disabled or failed.
    """

    status: int
    status_text: str
    headers: httpx.Headers
    content: bytes
    url: str
    request: httpx.Request
    raw: httpx.Response = field(repr=False)
    data: Optional[Any] = None

    @classmethod
    def from_httpx(
        cls, response: httpx.Response, data: Optional[Any] = None
    ) -> "FetchlingResponse":
        return cls(
            status=response.status_code,
            status_text=response.reason_phrase or "",
            headers=response.headers,
            content=response.content,
            url=str(response.request.url),
            request=response.request,
            raw=response,
            data=data,
        )

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def body(self) -> bytes:
        return self.content

    @property
    def text(self) -> str:
        return self.raw.text

    def json(self, **kwargs: Any) -> Any:
        return self.raw.json(**kwargs)
