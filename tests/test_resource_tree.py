"""
Tests for resource_tree.py
Logic testing: Decision/Branch, Path coverage, Error Path
"""
import base64

import pytest

from fetchling import (
    CollectionResource,
    InstanceResource,
    ResourceClient,
    ResourceNode,
    build_client,
)
from fetchling.types import HTTP_METHODS

BASE_URL = "http://localhost:8888"


@pytest.fixture
def api_tree():
    """A small messaging API declaration."""
    return ResourceNode.from_dict(
        {
            "url": f"{BASE_URL}/v1",
            "resources": {
                "services": {
                    "url": "/Services",
                    "methods": ["get", "post"],
                    "instance_methods": ["get", "post", "delete"],
                    "instance_resources": {
                        "channels": {
                            "url": "/Channels",
                            "methods": ["get", "post"],
                            "instance_methods": ["get"],
                            "instance_resources": {
                                "messages": {
                                    "url": "/Messages",
                                    "methods": ["get", "post"],
                                },
                            },
                        },
                    },
                },
                "echo": {"url": "/echo"},
            },
        }
    )


class TestResourceNode:
    """Tests for ResourceNode declarations."""

    # Error Path: URL required
    def test_url_required(self):
        with pytest.raises(ValueError, match="Resource URL is required."):
            ResourceNode(url="")

    # Error Path: from_dict without url
    def test_from_dict_url_required(self):
        with pytest.raises(ValueError, match="Resource URL is required."):
            ResourceNode.from_dict({"methods": ["get"]})

    # Happy Path: default method set
    def test_default_methods(self):
        node = ResourceNode(url="http://h")
        assert node.methods == HTTP_METHODS
        assert node.instance_methods == ()

    # Path: methods normalized to upper case
    def test_methods_normalized(self):
        assert ResourceNode(url="/x", methods=("get", "Post")).methods == ("GET", "POST")

    # Error Path: unknown method
    def test_invalid_method(self):
        with pytest.raises(ValueError, match="Invalid method"):
            ResourceNode(url="/x", methods=("fetch",))

    # Boundary: a single verb string
    def test_single_method_string(self):
        node = ResourceNode.from_dict({"url": "/x", "methods": "get", "instance_methods": "delete"})
        assert node.methods == ("GET",)
        assert node.instance_methods == ("DELETE",)

    # Error Path: methods that are not verb names
    @pytest.mark.parametrize("methods", [5, [1, 2], {"get": True}])
    def test_methods_wrong_type(self, methods):
        with pytest.raises(ValueError, match="Methods must be a verb name"):
            ResourceNode(url="/x", methods=methods)

    # State: nodes hash and compare by identity
    def test_hashable(self, api_tree):
        other = ResourceNode(url="/x")
        assert hash(api_tree) == hash(api_tree)
        assert {api_tree, other} == {api_tree, other}
        assert ResourceNode(url="/x") != other

    # State: children are read-only
    def test_children_read_only(self, api_tree):
        with pytest.raises(TypeError):
            api_tree.resources["extra"] = ResourceNode(url="/extra")


class TestBuildClient:
    """Tests for build_client and the resources it produces."""

    # Happy Path: root client
    def test_root(self, api_tree, settings):
        client = build_client(api_tree, settings=settings)
        assert isinstance(client, ResourceClient)
        assert client.base_url == f"{BASE_URL}/v1"
        assert client.methods == HTTP_METHODS

    # Path: nested collection and instance URLs
    def test_nested_urls(self, api_tree, settings):
        client = build_client(api_tree, settings=settings)
        services = client.services
        assert isinstance(services, CollectionResource)
        assert services.url == f"{BASE_URL}/v1/Services"

        service = services("IS123")
        assert isinstance(service, InstanceResource)
        assert service.url == f"{BASE_URL}/v1/Services/IS123"

        messages = service.channels("CH9").messages
        assert messages.url == f"{BASE_URL}/v1/Services/IS123/Channels/CH9/Messages"

    # Decision: only declared verbs exist
    def test_declared_verbs_only(self, api_tree, settings):
        client = build_client(api_tree, settings=settings)
        assert callable(client.services.get)
        assert callable(client.services.post)
        with pytest.raises(AttributeError):
            client.services.put
        assert callable(client.services("IS1").delete)
        with pytest.raises(AttributeError):
            client.services("IS1").channels("CH1").post

    # Error Path: unknown child
    def test_unknown_child(self, api_tree, settings):
        client = build_client(api_tree, settings=settings)
        with pytest.raises(AttributeError, match="no resource or method 'widgets'"):
            client.widgets

    # Decision: auth adds a static Basic header
    def test_basic_auth(self, api_tree, settings):
        client = build_client(api_tree, auth=("sid", "tkn"), settings=settings)
        header = client.services.handle.base_request_init["headers"]["Authorization"]
        assert header.startswith("Basic ")
        assert base64.b64decode(header[6:]).decode() == "sid:tkn"

    # Path: GET params become the query string
    @pytest.mark.asyncio
    async def test_get_params_query(self, api_tree, async_client, settings):
        client = build_client(api_tree, {"json": True}, client=async_client, settings=settings)
        response = await client.echo.get(params={"page": "2"})
        assert response.data["method"] == "GET"
        assert response.data["query"] == {"page": "2"}

    # Path: POST params become a form body
    @pytest.mark.asyncio
    async def test_post_params_form(self, api_tree, async_client, settings, recorded_requests):
        client = build_client(
            api_tree, {"json": True}, auth=("sid", "tkn"), client=async_client, settings=settings
        )
        messages = client.services("IS1").channels("CH1").messages
        await messages.post(params={"Body": "testing testing 123"})

        sent = recorded_requests[-1]
        assert sent.method == "POST"
        assert sent.url.path == "/v1/Services/IS1/Channels/CH1/Messages"
        assert sent.content == b"Body=testing+testing+123"
        assert sent.headers["Authorization"].startswith("Basic ")

    # Path: overlay keywords pass through
    @pytest.mark.asyncio
    async def test_overlay_keywords(self, api_tree, async_client, settings, recorded_requests):
        client = build_client(api_tree, client=async_client, settings=settings)
        await client.services.post(json_body={"Name": "svc"}, headers={"X-Trace": "1"})

        sent = recorded_requests[-1]
        assert sent.headers["Content-Type"] == "application/json"
        assert sent.headers["X-Trace"] == "1"

    # Error Path: request with an undeclared verb
    @pytest.mark.asyncio
    async def test_request_undeclared(self, api_tree, async_client, settings):
        client = build_client(api_tree, client=async_client, settings=settings)
        with pytest.raises(ValueError, match="not declared"):
            await client.services.request("PATCH")

    # Path: raw relative path outside the tree
    @pytest.mark.asyncio
    async def test_path(self, api_tree, async_client, settings):
        client = build_client(api_tree, {"json": True}, client=async_client, settings=settings)
        handle = client.path("Services/IS1/Channels/CH1/echo")
        assert handle.url == f"{BASE_URL}/v1/Services/IS1/Channels/CH1/echo"
        response = await handle.get()
        assert response.data["method"] == "GET"

    # Path: ad-hoc absolute resource shares config and auth
    @pytest.mark.asyncio
    async def test_ad_hoc_resource(self, api_tree, async_client, settings):
        client = build_client(
            api_tree, {"json": True}, auth=("sid", "tkn"), client=async_client, settings=settings
        )
        response = await client.resource(f"{BASE_URL}/headers").get()
        assert response.data["authorization"].startswith("Basic ")
        assert response.data["accept"] == "application/json"
