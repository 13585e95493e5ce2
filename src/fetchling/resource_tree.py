"""
Declarative REST clients built from a tree of resource nodes.

Example::

    api = ResourceNode(
        url="https://ip-messaging.example.com/v1",
        resources={
            "services": ResourceNode(
                url="/Services",
                methods=("GET", "POST"),
                instance_methods=("GET", "POST", "DELETE"),
                instance_resources={
                    "channels": ResourceNode(url="/Channels", methods=("GET", "POST")),
                },
            ),
        },
    )
    client = build_client(api, {"json": True}, auth=("sid", "token"))
    response = await client.services("IS123").channels.post(params={"Name": "general"})

Every resource wraps an immutable Fetchling handle. Collection resources
expose ``methods`` and child ``resources``; calling one with an id gives an
instance resource exposing ``instance_methods`` and ``instance_resources``.
"""
import functools
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

import httpx

from .auth import basic_auth_headers
from .config import FetchlingSettings, merge_request_init
from .core.handle import Fetchling
from .types import HTTP_METHODS, FetchlingResponse, RequestInit, UrlLike

logger = logging.getLogger("fetchling.resource_tree")

# Verbs whose params are sent as a query string; all others send a form body
QUERY_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


def _normalize_methods(methods: Union[str, Iterable[str]]) -> Tuple[str, ...]:
    if isinstance(methods, str):
        methods = (methods,)
    elif not isinstance(methods, Iterable) or isinstance(methods, Mapping):
        raise ValueError(f"Methods must be a verb name or a sequence of them, got {methods!r}")
    methods = tuple(methods)
    if any(not isinstance(m, str) for m in methods):
        raise ValueError(f"Methods must be a verb name or a sequence of them, got {methods!r}")
    normalized = tuple(m.upper() for m in methods)
    invalid = [m for m in normalized if m not in HTTP_METHODS]
    if invalid:
        raise ValueError(f"Invalid method(s): {invalid}. Must be one of: {list(HTTP_METHODS)}")
    return normalized


@dataclass(frozen=True, eq=False)
class ResourceNode:
    """One declared resource: URL suffix, allowed verbs, and children.

    Nodes compare and hash by identity.
    """

    url: str
    methods: Tuple[str, ...] = HTTP_METHODS
    instance_methods: Tuple[str, ...] = ()
    resources: Mapping[str, "ResourceNode"] = field(default_factory=dict)
    instance_resources: Mapping[str, "ResourceNode"] = field(default_factory=dict)

    def __post_init__(self):
        if not self.url:
            raise ValueError("Resource URL is required.")
        object.__setattr__(self, "methods", _normalize_methods(self.methods))
        object.__setattr__(self, "instance_methods", _normalize_methods(self.instance_methods))
        object.__setattr__(self, "resources", MappingProxyType(dict(self.resources)))
        object.__setattr__(
            self, "instance_resources", MappingProxyType(dict(self.instance_resources))
        )

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "ResourceNode":
        """Build a node tree from nested dicts with the same keys as the fields."""
        return cls(
            url=config.get("url", ""),
            methods=config.get("methods", HTTP_METHODS),
            instance_methods=config.get("instance_methods", ()),
            resources={
                name: cls.from_dict(child)
                for name, child in config.get("resources", {}).items()
            },
            instance_resources={
                name: cls.from_dict(child)
                for name, child in config.get("instance_resources", {}).items()
            },
        )


class TreeResource:
    """A resource handle restricted to a declared set of verbs and children."""

    def __init__(
        self,
        handle: Fetchling,
        methods: Iterable[str],
        resources: Mapping[str, ResourceNode],
    ):
        self._handle = handle
        self._methods = frozenset(methods)
        self._resources = resources

    @property
    def handle(self) -> Fetchling:
        return self._handle

    @property
    def url(self) -> str:
        return self._handle.url

    @property
    def methods(self) -> Tuple[str, ...]:
        return tuple(m for m in HTTP_METHODS if m in self._methods)

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._resources:
            return CollectionResource.from_node(self._handle, self._resources[name])
        verb = name.upper()
        if verb in self._methods:
            return functools.partial(self.request, verb)
        raise AttributeError(
            f"{type(self).__name__} at {self.url!r} has no resource or method {name!r}"
        )

    async def request(
        self,
        method: str,
        params: Optional[Mapping[str, Any]] = None,
        **init: Any,
    ) -> FetchlingResponse:
        """Send ``method`` to this resource.

        ``params`` become the query string for GET/HEAD/OPTIONS and a
        form-encoded body for every other verb. Remaining keyword arguments
        are a regular request overlay.
        """
        verb = method.upper()
        if verb not in self._methods:
            raise ValueError(f"Method {verb} is not declared for {self.url}")

        overlay: Dict[str, Any] = dict(init)
        overlay["method"] = verb
        if params is not None:
            if verb in QUERY_METHODS:
                overlay["query"] = params
            else:
                overlay["body"] = params

        logger.debug(f"TreeResource.request: {verb} {self.url}")
        return await self._handle.fetch(overlay)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.url!r}, methods={list(self.methods)})"


class InstanceResource(TreeResource):
    """A single member of a collection, e.g. /Services/IS123."""


class CollectionResource(TreeResource):
    """A collection resource, e.g. /Services."""

    def __init__(self, handle: Fetchling, node: ResourceNode):
        super().__init__(handle, node.methods, node.resources)
        self._node = node

    @classmethod
    def from_node(cls, parent: Fetchling, node: ResourceNode) -> "CollectionResource":
        return cls(parent.derive(node.url), node)

    def __call__(self, instance_id: Any) -> InstanceResource:
        return InstanceResource(
            self._handle.derive(str(instance_id)),
            self._node.instance_methods,
            self._node.instance_resources,
        )


class ResourceClient(CollectionResource):
    """The root of a declared API, with helpers for ad-hoc URLs."""

    @property
    def base_url(self) -> str:
        return self.url

    def path(self, relative: str, init: Optional[RequestInit] = None) -> Fetchling:
        """Derive a raw relative path from the root, outside the declared tree."""
        return self._handle.derive(relative, init)

    def resource(self, url: UrlLike, init: Optional[RequestInit] = None) -> Fetchling:
        """Handle for an absolute URL sharing the client's configuration and auth."""
        return Fetchling(
            url,
            merge_request_init(self._handle.base_request_init, init),
            client=self._handle.client,
            settings=self._handle.settings,
        )


def build_client(
    root: ResourceNode,
    init: Optional[RequestInit] = None,
    *,
    auth: Optional[Tuple[str, str]] = None,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[FetchlingSettings] = None,
) -> ResourceClient:
    """Walk a resource tree and return its root client.

    ``auth`` is a (username, password) pair sent as a static Basic
    Authorization header on every request.
    """
    overlay: Dict[str, Any] = dict(init or {})
    if auth is not None:
        username, password = auth
        overlay = merge_request_init(overlay, {"headers": basic_auth_headers(username, password)})

    handle = Fetchling(root.url, overlay, client=client, settings=settings)
    return ResourceClient(handle, root)
