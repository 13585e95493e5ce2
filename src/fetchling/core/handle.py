"""
Fetchling resource handles using httpx.

A handle is one URL plus the request configuration it passes on. Calling a
handle with a relative path derives a sub-resource; the fetch methods issue
requests. Handles are never mutated after construction.
"""
import logging
from typing import Any, Dict, Optional, Union

import httpx

from ..config import (
    FetchlingSettings,
    copy_request_init,
    create_httpx_client,
    load_settings,
    merge_request_init,
    resolve_request_init,
    validate_request_init,
)
from ..trace import trace_request, trace_response
from ..types import FetchlingResponse, HttpMethod, RequestInit, UrlLike
from .body_parser import parse_response_body
from .request_builder import PreparedRequest, build_request
from .url import join_urls, resolve_url_argument

logger = logging.getLogger("fetchling.handle")


def _with_method(init: Optional[RequestInit], method: HttpMethod) -> RequestInit:
    overlay: Dict[str, Any] = dict(init or {})
    overlay["method"] = method
    return overlay


class _BaseFetchling:
    """Shared construction and derivation for async and sync handles."""

    _client: Optional[Union[httpx.AsyncClient, httpx.Client]]

    def __init__(
        self,
        url: UrlLike,
        init: Optional[RequestInit] = None,
        *,
        client: Optional[Union[httpx.AsyncClient, httpx.Client]] = None,
        settings: Optional[FetchlingSettings] = None,
    ):
        resolve_url_argument(url)
        self._base_url_argument = url
        self._base_request_init = resolve_request_init(init)
        self._client = client
        self._settings = settings or load_settings()

    @property
    def base_url_argument(self) -> UrlLike:
        """The URL argument this handle was created with."""
        return self._base_url_argument

    @property
    def base_request_init(self) -> Dict[str, Any]:
        """A copy of this handle's request configuration."""
        return copy_request_init(self._base_request_init)

    @property
    def client(self) -> Optional[Union[httpx.AsyncClient, httpx.Client]]:
        return self._client

    @property
    def settings(self) -> FetchlingSettings:
        return self._settings

    @property
    def url(self) -> str:
        """The resolved base URL of this resource."""
        return resolve_url_argument(self._base_url_argument)

    def derive(self, path: Union[str, httpx.URL], init: Optional[RequestInit] = None):
        """Create a sub-resource at ``path`` relative to this one.

        The new handle's configuration is this handle's configuration with
        ``init`` merged on top (headers key-wise).
        """
        validate_request_init(init)
        new_url = join_urls(self.url, str(path))
        new_init = merge_request_init(self._base_request_init, init)
        logger.debug(f"derive: {self.url} + {path} -> {new_url}")
        return type(self)(
            new_url,
            new_init,
            client=self._client,
            settings=self._settings,
        )

    def __call__(self, path: Union[str, httpx.URL], init: Optional[RequestInit] = None):
        return self.derive(path, init)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.url!r})"

    def _prepare(
        self, url: Optional[UrlLike], init: Optional[RequestInit]
    ) -> PreparedRequest:
        url_arg = resolve_url_argument(url) if url is not None else self.url
        return build_request(url_arg, self._base_request_init, init)

    def _finish(
        self, prepared: PreparedRequest, response: httpx.Response
    ) -> FetchlingResponse:
        logger.debug(
            f"{type(self).__name__}: {prepared.method} {prepared.url} -> {response.status_code}"
        )
        data = parse_response_body(response) if prepared.parse_body else None

        if self._settings.trace:
            trace_request(response.request)
            trace_response(response, data)

        return FetchlingResponse.from_httpx(response, data)


class Fetchling(_BaseFetchling):
    """Asynchronous resource handle."""

    _client: Optional[httpx.AsyncClient]

    async def _do_fetch(
        self,
        url: Optional[UrlLike] = None,
        init: Optional[RequestInit] = None,
    ) -> FetchlingResponse:
        prepared = self._prepare(url, init)

        if self._client is not None:
            response = await self._client.request(**prepared.to_httpx_kwargs())
        else:
            async with create_httpx_client(settings=self._settings) as client:
                response = await client.request(**prepared.to_httpx_kwargs())

        return self._finish(prepared, response)

    async def fetch(self, init: Optional[RequestInit] = None) -> FetchlingResponse:
        """Request this resource, with optional per-call configuration."""
        return await self._do_fetch(None, init)

    async def fetch_url(
        self, url: UrlLike, init: Optional[RequestInit] = None
    ) -> FetchlingResponse:
        """Request another URL using this resource's configuration."""
        return await self._do_fetch(url, init)

    async def get(self, init: Optional[RequestInit] = None) -> FetchlingResponse:
        """GET request."""
        return await self._do_fetch(None, _with_method(init, "GET"))

    async def post(self, init: Optional[RequestInit] = None) -> FetchlingResponse:
        """POST request."""
        return await self._do_fetch(None, _with_method(init, "POST"))

    async def put(self, init: Optional[RequestInit] = None) -> FetchlingResponse:
        """PUT request."""
        return await self._do_fetch(None, _with_method(init, "PUT"))

    async def patch(self, init: Optional[RequestInit] = None) -> FetchlingResponse:
        """PATCH request."""
        return await self._do_fetch(None, _with_method(init, "PATCH"))

    async def delete(self, init: Optional[RequestInit] = None) -> FetchlingResponse:
        """DELETE request."""
        return await self._do_fetch(None, _with_method(init, "DELETE"))

    async def head(self, init: Optional[RequestInit] = None) -> FetchlingResponse:
        """HEAD request."""
        return await self._do_fetch(None, _with_method(init, "HEAD"))

    async def options(self, init: Optional[RequestInit] = None) -> FetchlingResponse:
        """OPTIONS request."""
        return await self._do_fetch(None, _with_method(init, "OPTIONS"))


class SyncFetchling(_BaseFetchling):
    """Synchronous resource handle."""

    _client: Optional[httpx.Client]

    def _do_fetch(
        self,
        url: Optional[UrlLike] = None,
        init: Optional[RequestInit] = None,
    ) -> FetchlingResponse:
        prepared = self._prepare(url, init)

        if self._client is not None:
            response = self._client.request(**prepared.to_httpx_kwargs())
        else:
            with create_httpx_client(sync=True, settings=self._settings) as client:
                response = client.request(**prepared.to_httpx_kwargs())

        return self._finish(prepared, response)

    def fetch(self, init: Optional[RequestInit] = None) -> FetchlingResponse:
        """Request this resource, with optional per-call configuration."""
        return self._do_fetch(None, init)

    def fetch_url(
        self, url: UrlLike, init: Optional[RequestInit] = None
    ) -> FetchlingResponse:
        """Request another URL using this resource's configuration."""
        return self._do_fetch(url, init)

    def get(self, init: Optional[RequestInit] = None) -> FetchlingResponse:
        """GET request."""
        return self._do_fetch(None, _with_method(init, "GET"))

    def post(self, init: Optional[RequestInit] = None) -> FetchlingResponse:
        """POST request."""
        return self._do_fetch(None, _with_method(init, "POST"))

    def put(self, init: Optional[RequestInit] = None) -> FetchlingResponse:
        """PUT request."""
        return self._do_fetch(None, _with_method(init, "PUT"))

    def patch(self, init: Optional[RequestInit] = None) -> FetchlingResponse:
        """PATCH request."""
        return self._do_fetch(None, _with_method(init, "PATCH"))

    def delete(self, init: Optional[RequestInit] = None) -> FetchlingResponse:
        """DELETE request."""
        return self._do_fetch(None, _with_method(init, "DELETE"))

    def head(self, init: Optional[RequestInit] = None) -> FetchlingResponse:
        """HEAD request."""
        return self._do_fetch(None, _with_method(init, "HEAD"))

    def options(self, init: Optional[RequestInit] = None) -> FetchlingResponse:
        """OPTIONS request."""
        return self._do_fetch(None, _with_method(init, "OPTIONS"))
