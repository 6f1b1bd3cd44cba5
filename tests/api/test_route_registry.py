"""Route Registry — validation before handler, context injection, status handling.

Invariants:
    - Invalid params/query/body → 400 and the handler is never invoked
    - Handler receives decoded body, query, params and the service registry
    - Handler-set status codes are honoured; otherwise the schema default applies
    - Registered routes appear in the OpenAPI document
"""

from uuid import uuid4

import pytest
from fastapi import APIRouter, FastAPI, status
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, Field

from user_service.api import schema_builder
from user_service.api.error_handlers import register_error_handlers
from user_service.api.route_registry import RouteContext, RouteRegistry
from user_service.api.schema_builder import RouteSchema


class Item(BaseModel):
    name: str


class ItemCreate(BaseModel):
    name: str = Field(min_length=1)


class ItemQuery(BaseModel):
    prefix: str | None = None
    limit: int = 10


class SlugParams(BaseModel):
    id: str = Field(min_length=3)


SERVICES = object()


@pytest.fixture
def calls():
    return []


@pytest.fixture
async def registry_client(calls):
    app = FastAPI()
    register_error_handlers(app)
    router = APIRouter(prefix="/items")
    routes = RouteRegistry(router)

    @routes.get("", schema_builder.get_all(Item, ItemQuery))
    async def list_items(ctx: RouteContext):
        calls.append(ctx)
        return [{"name": f"{ctx.query.prefix or ''}{i}"} for i in range(ctx.query.limit)]

    @routes.get("/{id}", schema_builder.get_by_id(Item))
    async def get_item(ctx: RouteContext):
        calls.append(ctx)
        return {"name": str(ctx.params.id)}

    @routes.get("/slug/{id}", schema_builder.get_by_key(Item, SlugParams))
    async def get_by_slug(ctx: RouteContext):
        calls.append(ctx)
        return {"name": ctx.params.id}

    @routes.post("", schema_builder.post(Item, ItemCreate))
    async def create_item(ctx: RouteContext):
        calls.append(ctx)
        return {"name": ctx.body.name}

    @routes.put("/{id}", schema_builder.update(Item, ItemCreate))
    async def replace_item(ctx: RouteContext):
        calls.append(ctx)
        ctx.response.status_code = status.HTTP_202_ACCEPTED
        return {"name": ctx.body.name}

    routes.register("DELETE", "/{id}", schema_builder.delete(), _delete_item(calls))

    app.include_router(router)
    app.state.services = SERVICES
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


def _delete_item(calls):
    async def delete_item(ctx: RouteContext):
        calls.append(ctx)
        return {"success": True}
    return delete_item


async def test_handler_receives_params_and_services(registry_client, calls):
    item_id = uuid4()
    res = await registry_client.get(f"/items/{item_id}")
    assert res.status_code == 200
    assert res.json() == {"name": str(item_id)}
    ctx = calls[0]
    assert ctx.params.id == item_id
    assert ctx.services is SERVICES
    assert ctx.body is None
    assert ctx.query is None


async def test_invalid_uuid_is_400_and_handler_not_called(registry_client, calls):
    res = await registry_client.get("/items/not-a-uuid")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert calls == []


async def test_params_model_constraints_enforced(registry_client, calls):
    res = await registry_client.get("/items/slug/ab")
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "path.id"
    assert calls == []


async def test_params_model_passes_valid_key(registry_client):
    res = await registry_client.get("/items/slug/abc")
    assert res.json() == {"name": "abc"}


async def test_query_model_decoded(registry_client, calls):
    res = await registry_client.get("/items", params={"prefix": "x", "limit": 2})
    assert res.status_code == 200
    assert res.json() == [{"name": "x0"}, {"name": "x1"}]
    assert calls[0].query == ItemQuery(prefix="x", limit=2)


async def test_query_defaults_apply(registry_client):
    res = await registry_client.get("/items")
    assert len(res.json()) == 10


async def test_invalid_query_is_400(registry_client, calls):
    res = await registry_client.get("/items", params={"limit": "many"})
    assert res.status_code == 400
    assert calls == []


async def test_body_validated_and_schema_status_used(registry_client, calls):
    res = await registry_client.post("/items", json={"name": "box"})
    assert res.status_code == 201
    assert res.json() == {"name": "box"}
    assert calls[0].body == ItemCreate(name="box")


async def test_invalid_body_is_400_and_handler_not_called(registry_client, calls):
    res = await registry_client.post("/items", json={"name": ""})
    assert res.status_code == 400
    assert calls == []


async def test_missing_body_is_400(registry_client, calls):
    res = await registry_client.post("/items")
    assert res.status_code == 400
    assert calls == []


async def test_handler_set_status_is_honoured(registry_client):
    res = await registry_client.put(f"/items/{uuid4()}", json={"name": "box"})
    assert res.status_code == 202


async def test_register_directly(registry_client):
    res = await registry_client.delete(f"/items/{uuid4()}")
    assert res.status_code == 200
    assert res.json() == {"success": True}


async def test_routes_documented_in_openapi(registry_client):
    res = await registry_client.get("/openapi.json")
    paths = res.json()["paths"]
    assert set(paths) == {"/items", "/items/{id}", "/items/slug/{id}"}
    get_item = paths["/items/{id}"]["get"]
    assert "404" in get_item["responses"]
    assert get_item["parameters"][0]["name"] == "id"
    assert "requestBody" in paths["/items"]["post"]


def test_unsupported_method_rejected():
    routes = RouteRegistry(APIRouter())

    async def handler(ctx):
        return None

    with pytest.raises(ValueError, match="TRACE"):
        routes.register("trace", "/x", RouteSchema(), handler)
