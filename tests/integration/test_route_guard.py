"""Integration tests for the FastAPI route guard."""

import httpx
import pytest
from fastapi import Depends, FastAPI

from neo_rbac.api import RequireAuthItems, require_auth_items
from neo_rbac.config import RbacSettings
from neo_rbac.module import RbacModule

from ..conftest import FakeAuthority


def create_app(authority, publish=True):
    module = RbacModule(RbacSettings(_env_file=None, scope_name="rbac"), authority=authority)
    app = FastAPI()
    if publish:
        module.register(app.state)

    @app.get("/posts")
    async def list_posts(granted=Depends(require_auth_items("view"))):
        return {"granted": granted}

    @app.post("/posts")
    async def edit_post(granted=Depends(RequireAuthItems("view", "edit"))):
        return {"granted": granted}

    @app.get("/reports")
    async def reports(granted=Depends(RequireAuthItems("edit", "view", any_of=True))):
        return {"granted": granted}

    return app, module


async def request(app, method, path):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.request(method, path)


class TestRequireAuthItems:
    """403/503 mapping and caching through the resolver."""

    @pytest.mark.asyncio
    async def test_granted_request_passes(self):
        authority = FakeAuthority({"view": True})
        app, _ = create_app(authority)

        response = await request(app, "GET", "/posts")

        assert response.status_code == 200
        assert response.json() == {"granted": ["view"]}

    @pytest.mark.asyncio
    async def test_all_items_required_by_default(self):
        authority = FakeAuthority({"view": True, "edit": False})
        app, _ = create_app(authority)

        response = await request(app, "POST", "/posts")

        assert response.status_code == 403
        assert "edit" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_any_of(self):
        authority = FakeAuthority({"view": True, "edit": False})
        app, _ = create_app(authority)

        response = await request(app, "GET", "/reports")

        assert response.status_code == 200
        assert response.json() == {"granted": ["view"]}

    @pytest.mark.asyncio
    async def test_decisions_are_cached_between_requests(self):
        authority = FakeAuthority({"view": True})
        app, module = create_app(authority)

        await request(app, "GET", "/posts")
        await request(app, "GET", "/posts")

        assert authority.calls == [["view"]]
        assert module.resolver.is_allowed("view")

    @pytest.mark.asyncio
    async def test_transport_failure_is_503(self):
        authority = FakeAuthority()
        authority.error = ConnectionError("down")
        app, _ = create_app(authority)

        response = await request(app, "GET", "/posts")

        assert response.status_code == 503

    @pytest.mark.asyncio
    async def test_unpublished_resolver_is_500(self):
        app, _ = create_app(FakeAuthority({"view": True}), publish=False)

        response = await request(app, "GET", "/posts")

        assert response.status_code == 500

    def test_guard_requires_items(self):
        with pytest.raises(ValueError):
            RequireAuthItems()

    @pytest.mark.asyncio
    async def test_factory_reads_custom_scope_name(self):
        module = RbacModule(
            RbacSettings(_env_file=None, scope_name="permissions"),
            authority=FakeAuthority({"view": True}),
        )
        app = FastAPI()
        module.register(app.state)

        @app.get("/posts")
        async def list_posts(granted=Depends(require_auth_items("view", state_name="permissions"))):
            return {"granted": granted}

        response = await request(app, "GET", "/posts")

        assert response.status_code == 200
        assert response.json() == {"granted": ["view"]}
