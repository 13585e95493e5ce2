"""
Factory functions for creating fetchling handles.
"""
from typing import Optional

import httpx

from .config import FetchlingSettings
from .core.handle import Fetchling, SyncFetchling
from .types import RequestInit, UrlLike


def create(
    url: UrlLike,
    init: Optional[RequestInit] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[FetchlingSettings] = None,
) -> Fetchling:
    """
    Create an async resource handle.

    Args:
        url: Base resource as a str, httpx.URL or httpx.Request.
        init: Request configuration inherited by every sub-resource.
        client: Shared httpx.AsyncClient. Without one, each request opens
            and closes its own client.
        settings: Overrides settings read from the environment.

    Example:
        api = create("https://api.example.com/v1", {"json": True})
        monkeys = api("monkeys")
        response = await monkeys.get()
        print(response.data)
    """
    return Fetchling(url, init, client=client, settings=settings)


def create_sync(
    url: UrlLike,
    init: Optional[RequestInit] = None,
    *,
    client: Optional[httpx.Client] = None,
    settings: Optional[FetchlingSettings] = None,
) -> SyncFetchling:
    """Create a blocking resource handle. Same arguments as ``create``."""
    return SyncFetchling(url, init, client=client, settings=settings)


fetchling = create
