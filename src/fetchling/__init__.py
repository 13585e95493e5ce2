"""
Chainable HTTP resource clients on top of httpx.

Build a handle for a base URL, derive sub-resources by calling it with a
relative path, and issue requests. Each level can add headers, query
parameters, JSON handling and auth, and every handle passes its
configuration down without changing it.

    from fetchling import fetchling

    api = fetchling("https://api.example.com", {"json": True})
    dragon = await api("monsters")("adult-black-dragon").get()
    print(dragon.data["name"])
"""
from .types import (
    HTTP_METHODS,
    FetchlingResponse,
    HttpMethod,
    RequestInit,
    UrlLike,
)
from .config import (
    DEFAULT_REQUEST_INIT,
    FetchlingSettings,
    TimeoutConfig,
    load_settings,
    merge_request_init,
    validate_request_init,
)
from .core.handle import Fetchling, SyncFetchling
from .core.url import append_query, join_urls
from .auth import basic_auth_headers, bearer_auth_headers, encode_auth
from .resource_tree import (
    CollectionResource,
    InstanceResource,
    ResourceClient,
    ResourceNode,
    build_client,
)
from .factory import create, create_sync, fetchling

__all__ = [
    # Types
    "HTTP_METHODS",
    "FetchlingResponse",
    "HttpMethod",
    "RequestInit",
    "UrlLike",
    # Config
    "DEFAULT_REQUEST_INIT",
    "FetchlingSettings",
    "TimeoutConfig",
    "load_settings",
    "merge_request_init",
    "validate_request_init",
    # Handles
    "Fetchling",
    "SyncFetchling",
    # URL helpers
    "append_query",
    "join_urls",
    # Auth
    "basic_auth_headers",
    "bearer_auth_headers",
    "encode_auth",
    # Resource tree
    "CollectionResource",
    "InstanceResource",
    "ResourceClient",
    "ResourceNode",
    "build_client",
    # Factory
    "create",
    "create_sync",
    "fetchling",
]

__version__ = "0.1.0"
