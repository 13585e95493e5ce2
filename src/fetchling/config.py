"""
Configuration for fetchling.
"""
import copy
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from .types import HTTP_METHODS, RequestInit

logger = logging.getLogger("fetchling.config")

# Request fields understood by fetchling itself
REQUEST_FIELDS = frozenset(
    {"method", "headers", "body", "json_body", "query", "json", "parse_body"}
)

# Fields forwarded unchanged to httpx
TRANSPORT_OPTIONS = frozenset(
    {"timeout", "follow_redirects", "auth", "cookies", "extensions"}
)

# Values copied rather than shared between a handle, its children and callers
COPIED_FIELDS = frozenset({"body", "json_body", "query", "extensions"})

# Defaults applied at the root handle
DEFAULT_REQUEST_INIT: Mapping[str, Any] = {"parse_body": True, "json": False}


@dataclass(frozen=True)
class TimeoutConfig:
    """Timeout configuration in seconds."""

    connect: float = 5.0
    read: float = 30.0
    write: float = 10.0


DEFAULT_TIMEOUT = TimeoutConfig()


@dataclass
class FetchlingSettings:
    """Process-level settings used when fetchling owns the httpx client."""

    verify_ssl: bool = True
    trace: bool = False
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)


def _env_flag(name: str) -> str:
    return os.environ.get(name, "").strip().lower()


def is_ssl_verify_disabled_by_env() -> bool:
    """
    Check if SSL verification is disabled via environment variables.

    Returns True if any of these are set:
    - NODE_TLS_REJECT_UNAUTHORIZED=0
    - SSL_CERT_VERIFY=0
    """
    return _env_flag("NODE_TLS_REJECT_UNAUTHORIZED") == "0" or _env_flag("SSL_CERT_VERIFY") == "0"


def is_trace_enabled_by_env() -> bool:
    """Check FETCHLING_TRACE for the rich request/response trace."""
    return _env_flag("FETCHLING_TRACE") in ("1", "true", "yes", "on")


def load_settings() -> FetchlingSettings:
    """Resolve settings from the environment."""
    return FetchlingSettings(
        verify_ssl=not is_ssl_verify_disabled_by_env(),
        trace=is_trace_enabled_by_env(),
    )


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return DEFAULT_TIMEOUT
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout)
    return timeout


def to_httpx_timeout(timeout: Union[TimeoutConfig, float, None]) -> httpx.Timeout:
    resolved = normalize_timeout(timeout)
    return httpx.Timeout(
        connect=resolved.connect,
        read=resolved.read,
        write=resolved.write,
        pool=resolved.connect,
    )


def create_httpx_client(
    sync: bool = False,
    settings: Optional[FetchlingSettings] = None,
) -> Union[httpx.AsyncClient, httpx.Client]:
    """Build the short-lived httpx client used when the caller supplies none."""
    settings = settings or load_settings()
    if not settings.verify_ssl:
        logger.debug("create_httpx_client: SSL verification disabled by environment")
    client_cls = httpx.Client if sync else httpx.AsyncClient
    return client_cls(
        timeout=to_httpx_timeout(settings.timeout),
        verify=settings.verify_ssl,
    )


def validate_request_init(init: Optional[Mapping[str, Any]]) -> None:
    """Validate a configuration overlay."""
    if init is None:
        return

    unknown = set(init) - REQUEST_FIELDS - TRANSPORT_OPTIONS
    if unknown:
        raise ValueError(
            f"Unknown request option(s): {sorted(unknown)}. "
            f"Must be one of: {sorted(REQUEST_FIELDS | TRANSPORT_OPTIONS)}"
        )

    method = init.get("method")
    if method is not None and str(method).upper() not in HTTP_METHODS:
        raise ValueError(f"Invalid method: {method}. Must be one of: {list(HTTP_METHODS)}")

    for flag in ("json", "parse_body"):
        if flag in init and not isinstance(init[flag], bool):
            raise ValueError(f"{flag} must be a bool, got {type(init[flag]).__name__}")


def _copy_owned_values(init: Dict[str, Any]) -> None:
    for key in COPIED_FIELDS.intersection(init):
        init[key] = copy.deepcopy(init[key])


def merge_request_init(
    base: Mapping[str, Any],
    overlay: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Merge an overlay onto a base configuration, returning a new dict.

    Every field of the overlay replaces the base value except ``headers``,
    which are merged key-wise (case-insensitive, overlay wins). Neither input
    is modified, and the result shares no mutable body or query values with
    either of them.
    """
    merged: Dict[str, Any] = dict(base)
    headers = httpx.Headers(base.get("headers"))

    if overlay:
        for key, value in overlay.items():
            if key == "headers":
                if value is not None:
                    headers.update(value)
                continue
            merged[key] = value

    merged["headers"] = headers
    _copy_owned_values(merged)
    if merged.get("method") is not None:
        merged["method"] = str(merged["method"]).upper()
    return merged


def resolve_request_init(init: Optional[RequestInit] = None) -> Dict[str, Any]:
    """Resolve a root handle's configuration with defaults applied."""
    validate_request_init(init)
    return merge_request_init(DEFAULT_REQUEST_INIT, init)


def copy_request_init(init: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy a configuration so that callers cannot reach its headers, body or query."""
    copied = dict(init)
    copied["headers"] = httpx.Headers(init.get("headers"))
    _copy_owned_values(copied)
    return copied
