"""Integration tests for the aiohttp authority adapter against a real test server."""

import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from neo_rbac.application.services import CheckBatcher, InFlightTracker, PermissionResolver
from neo_rbac.core.exceptions import TransportFailure
from neo_rbac.core.value_objects import PermissionState
from neo_rbac.infrastructure.adapters import HttpAuthorityAdapter
from neo_rbac.infrastructure.repositories import MemoryPermissionStore

GRANTS = {"view": True, "edit": False, "post.publish": True}


def create_app(received):
    async def rbac(request: web.Request) -> web.Response:
        items = await request.json()
        received.append({"items": items, "headers": dict(request.headers)})
        return web.json_response({item: GRANTS.get(item, False) for item in items})

    async def broken(request: web.Request) -> web.Response:
        return web.Response(status=502, text="bad gateway")

    async def not_a_map(request: web.Request) -> web.Response:
        return web.json_response(["view"])

    async def slow(request: web.Request) -> web.Response:
        await asyncio.sleep(0.5)
        return web.json_response({})

    app = web.Application()
    app.router.add_post("/rbac", rbac)
    app.router.add_post("/broken", broken)
    app.router.add_post("/list", not_a_map)
    app.router.add_post("/slow", slow)
    return app


class TestHttpAuthorityAdapter:
    """Wire format and error mapping."""

    @pytest.mark.asyncio
    async def test_posts_items_and_reads_decisions(self):
        received = []
        async with TestServer(create_app(received)) as server:
            async with HttpAuthorityAdapter(
                str(server.make_url("/rbac")),
                headers={"Authorization": "Bearer token"},
            ) as adapter:
                result = await adapter.resolve_items(["view", "edit"])

        assert result == {"view": True, "edit": False}
        assert received[0]["items"] == ["view", "edit"]
        assert received[0]["headers"]["Authorization"] == "Bearer token"
        assert received[0]["headers"]["User-Agent"].startswith("NeoMultiTenant-RBAC")

    @pytest.mark.asyncio
    async def test_error_status_is_transport_failure(self):
        async with TestServer(create_app([])) as server:
            async with HttpAuthorityAdapter(str(server.make_url("/broken"))) as adapter:
                with pytest.raises(TransportFailure) as exc_info:
                    await adapter.resolve_items(["view"])

        assert exc_info.value.error_code == "RBAC_TRANSPORT_BAD_STATUS"
        assert exc_info.value.details["status"] == 502

    @pytest.mark.asyncio
    async def test_non_object_body_is_transport_failure(self):
        async with TestServer(create_app([])) as server:
            async with HttpAuthorityAdapter(str(server.make_url("/list"))) as adapter:
                with pytest.raises(TransportFailure) as exc_info:
                    await adapter.resolve_items(["view"])

        assert exc_info.value.error_code == "RBAC_TRANSPORT_MALFORMED"

    @pytest.mark.asyncio
    async def test_timeout_leaves_items_unknown(self):
        async with TestServer(create_app([])) as server:
            async with HttpAuthorityAdapter(str(server.make_url("/slow")), timeout_seconds=0.1) as adapter:
                store = MemoryPermissionStore()
                tracker = InFlightTracker()
                resolver = PermissionResolver(CheckBatcher(adapter, store, tracker), store, tracker)

                with pytest.raises(TransportFailure):
                    await resolver.check_access("view")

        assert resolver.get_permission("view") is PermissionState.UNKNOWN
        assert not resolver.is_pending("view")


class TestResolverOverHttp:
    """End-to-end batching over a real HTTP round-trip."""

    @pytest.mark.asyncio
    async def test_enqueued_items_share_one_request(self):
        received = []
        async with TestServer(create_app(received)) as server:
            async with HttpAuthorityAdapter(str(server.make_url("/rbac"))) as adapter:
                store = MemoryPermissionStore()
                tracker = InFlightTracker()
                resolver = PermissionResolver(CheckBatcher(adapter, store, tracker), store, tracker)

                for item in ["view", "edit", "view", "post.publish", "edit"]:
                    resolver.enqueue(item)
                result = await resolver.flush()

                # cached now, no second request
                assert await resolver.check_access("post.publish") is True

        assert len(received) == 1
        assert received[0]["items"] == ["view", "edit", "post.publish"]
        assert result == {"view": True, "edit": False, "post.publish": True}
        assert resolver.get_permission("edit") is PermissionState.DENIED

    @pytest.mark.asyncio
    async def test_error_status_reaches_caller_through_resolver(self):
        async with TestServer(create_app([])) as server:
            async with HttpAuthorityAdapter(str(server.make_url("/broken"))) as adapter:
                store = MemoryPermissionStore()
                tracker = InFlightTracker()
                resolver = PermissionResolver(CheckBatcher(adapter, store, tracker), store, tracker)

                with pytest.raises(TransportFailure) as exc_info:
                    await resolver.check_access(["view", "edit"])

        assert exc_info.value.error_code == "RBAC_TRANSPORT_BAD_STATUS"
        assert exc_info.value.details["status"] == 502
        assert exc_info.value.items == ["view", "edit"]
        assert store.snapshot() == {}
