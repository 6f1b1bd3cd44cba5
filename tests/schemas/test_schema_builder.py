"""Schema Builder — route descriptors derived from entity schemas.

Tests:
    - id-addressed descriptors carry IdParams and a 404 NotFoundResponse
    - create descriptor defaults to 201 with the insert body
    - get_all wraps the entity in a list and passes the query model through
    - partial() makes every field optional and honours exclude
"""

import pytest
from pydantic import BaseModel, Field, ValidationError

from user_service.api import schema_builder
from user_service.api.schema_builder import (
    IdParams, NotFoundResponse, SuccessResponse, partial,
)


class Widget(BaseModel):
    name: str


class WidgetCreate(BaseModel):
    name: str = Field(min_length=2)
    size: int


class WidgetQuery(BaseModel):
    limit: int | None = None


def test_get_by_id_schema():
    schema = schema_builder.get_by_id(Widget)
    assert schema.params is IdParams
    assert schema.body is None
    assert schema.status_code == 200
    assert schema.response_model is Widget
    assert schema.error_responses() == {404: {"model": NotFoundResponse}}


def test_get_by_key_uses_given_params():
    class KeyParams(BaseModel):
        id: str

    schema = schema_builder.get_by_key(Widget, KeyParams)
    assert schema.params is KeyParams
    assert schema.responses[404] is NotFoundResponse


def test_get_all_schema():
    schema = schema_builder.get_all(Widget, WidgetQuery)
    assert schema.query is WidgetQuery
    assert schema.params is None
    assert schema.response_model == list[Widget]


def test_get_all_without_query():
    assert schema_builder.get_all(Widget).query is None


def test_post_schema_is_201():
    schema = schema_builder.post(Widget, WidgetCreate)
    assert schema.body is WidgetCreate
    assert schema.status_code == 201
    assert schema.response_model is Widget
    assert schema.error_responses() == {}


def test_update_schema():
    schema = schema_builder.update(Widget, WidgetCreate)
    assert schema.params is IdParams
    assert schema.body is WidgetCreate
    assert schema.responses == {200: Widget, 404: NotFoundResponse}


def test_delete_schema_defaults_to_success_response():
    schema = schema_builder.delete()
    assert schema.params is IdParams
    assert schema.body is None
    assert schema.response_model is SuccessResponse


def test_id_params_rejects_non_uuid():
    with pytest.raises(ValidationError):
        IdParams(id="not-a-uuid")


def test_partial_makes_fields_optional():
    WidgetUpdate = partial(WidgetCreate, "WidgetUpdate")
    update = WidgetUpdate()
    assert update.name is None
    assert update.size is None
    assert WidgetUpdate.__name__ == "WidgetUpdate"


def test_partial_keeps_constraints():
    WidgetUpdate = partial(WidgetCreate, "WidgetUpdate")
    with pytest.raises(ValidationError):
        WidgetUpdate(name="x")


def test_partial_excludes_fields():
    WidgetUpdate = partial(WidgetCreate, "WidgetUpdate", exclude={"size"})
    assert set(WidgetUpdate.model_fields) == {"name"}


def test_partial_leaves_source_model_required():
    partial(WidgetCreate, "WidgetUpdate")
    with pytest.raises(ValidationError):
        WidgetCreate()
