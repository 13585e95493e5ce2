"""
Request builder utilities for fetchling.
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from ..config import (
    TRANSPORT_OPTIONS,
    copy_request_init,
    merge_request_init,
    validate_request_init,
)
from ..types import RequestInit
from .url import append_query

logger = logging.getLogger("fetchling.request_builder")

JSON_MEDIA_TYPE = "application/json"


@dataclass
class PreparedRequest:
    """Everything needed for one httpx call."""

    method: str
    url: str
    headers: httpx.Headers
    parse_body: bool
    content: Optional[Union[str, bytes]] = None
    data: Optional[Mapping[str, Any]] = None
    transport_options: Dict[str, Any] = field(default_factory=dict)

    def to_httpx_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "method": self.method,
            "url": self.url,
            "headers": self.headers,
        }
        if self.content is not None:
            kwargs["content"] = self.content
        if self.data is not None:
            kwargs["data"] = self.data
        kwargs.update(self.transport_options)
        return kwargs


def build_effective_init(
    base: Mapping[str, Any],
    init: Optional[RequestInit] = None,
) -> Dict[str, Any]:
    """Merge a call-site overlay onto a handle's configuration.

    Always returns a fresh copy, then applies the ``json`` and ``json_body``
    options to it.
    """
    if init:
        validate_request_init(init)
        effective = merge_request_init(base, init)
    else:
        effective = copy_request_init(base)

    headers: httpx.Headers = effective["headers"]

    if effective.get("json"):
        headers["Accept"] = JSON_MEDIA_TYPE
        effective["parse_body"] = True

    if effective.get("json_body") is not None:
        headers["Content-Type"] = JSON_MEDIA_TYPE
        effective["body"] = json.dumps(effective["json_body"])

    return effective


def build_body(
    body: Optional[Union[str, bytes, Mapping[str, Any]]],
) -> Dict[str, Any]:
    """Split a body into httpx's ``content`` (raw) or ``data`` (form) argument."""
    if body is None:
        return {}
    if isinstance(body, Mapping):
        return {"data": body}
    return {"content": body}


def build_request(
    url: str,
    base: Mapping[str, Any],
    init: Optional[RequestInit] = None,
) -> PreparedRequest:
    """Build the prepared request for a handle's configuration plus overlay."""
    effective = build_effective_init(base, init)
    method = effective.get("method") or "GET"
    request_url = append_query(url, effective.get("query"))

    transport_options = {
        key: effective[key]
        for key in sorted(TRANSPORT_OPTIONS)
        if effective.get(key) is not None
    }

    logger.debug(
        f"build_request: method={method}, url={request_url}, "
        f"parse_body={effective.get('parse_body')}, "
        f"transport_options={sorted(transport_options)}"
    )

    return PreparedRequest(
        method=method,
        url=request_url,
        headers=effective["headers"],
        parse_body=bool(effective.get("parse_body")),
        transport_options=transport_options,
        **build_body(effective.get("body")),
    )
