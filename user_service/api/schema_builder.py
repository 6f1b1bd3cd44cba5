"""Schema Builder — derives route-shape descriptors from entity schemas.

Invariants:
    - Every id-addressed route validates its path id as a UUID (bad format → 400)
    - Not-found responses are documented as {"message": str}
    - create routes default to 201; every other route defaults to 200
    - partial() never mutates the source model's fields

Design Decisions:
    - RouteSchema is plain data: the route registry turns it into a FastAPI
      signature, and the same descriptor feeds the OpenAPI document
    - Builder is a set of module functions, not a class with state
"""

from dataclasses import dataclass, field
from typing import Annotated, Any, Optional
from uuid import UUID

from fastapi import status
from pydantic import BaseModel, Field, create_model


class IdParams(BaseModel):
    """Path parameters for routes addressed by primary key."""
    id: UUID = Field(description="Resource identifier (UUID)")


class NotFoundResponse(BaseModel):
    message: str


class SuccessResponse(BaseModel):
    success: bool


@dataclass(frozen=True)
class RouteSchema:
    """Validation and documentation shape for one route."""
    params: type[BaseModel] | None = None
    query: type[BaseModel] | None = None
    body: type[BaseModel] | None = None
    responses: dict[int, Any] = field(default_factory=dict)
    status_code: int = status.HTTP_200_OK

    @property
    def response_model(self) -> Any:
        """Model of the success response, documented and used for serialization."""
        return self.responses.get(self.status_code)

    def error_responses(self) -> dict[int, dict]:
        return {
            code: {"model": model}
            for code, model in self.responses.items()
            if code != self.status_code
        }


def get_by_id(entity: type[BaseModel]) -> RouteSchema:
    """Schema for a 'get by id' route."""
    return get_by_key(entity, IdParams)


def get_by_key(
    entity: type[BaseModel], params: type[BaseModel],
) -> RouteSchema:
    """Schema for a lookup by any path key (e.g. a secondary unique key)."""
    return RouteSchema(
        params=params,
        responses={
            status.HTTP_200_OK: entity,
            status.HTTP_404_NOT_FOUND: NotFoundResponse,
        },
    )


def get_all(
    entity: type[BaseModel], query: type[BaseModel] | None = None,
) -> RouteSchema:
    """Schema for a 'get all' route, optionally with query parameters."""
    return RouteSchema(
        query=query,
        responses={status.HTTP_200_OK: list[entity]},
    )


def post(entity: type[BaseModel], insert: type[BaseModel]) -> RouteSchema:
    """Schema for a create route."""
    return RouteSchema(
        body=insert,
        responses={status.HTTP_201_CREATED: entity},
        status_code=status.HTTP_201_CREATED,
    )


def update(entity: type[BaseModel], body: type[BaseModel]) -> RouteSchema:
    """Schema for an update (PATCH/PUT) route addressed by id."""
    return RouteSchema(
        params=IdParams,
        body=body,
        responses={
            status.HTTP_200_OK: entity,
            status.HTTP_404_NOT_FOUND: NotFoundResponse,
        },
    )


def delete(response: type[BaseModel] = SuccessResponse) -> RouteSchema:
    """Schema for a delete-by-id route."""
    return RouteSchema(
        params=IdParams,
        responses={
            status.HTTP_200_OK: response,
            status.HTTP_404_NOT_FOUND: NotFoundResponse,
        },
    )


def partial(
    model: type[BaseModel],
    name: str,
    exclude: set[str] | frozenset[str] = frozenset(),
    base: type[BaseModel] | None = None,
) -> type[BaseModel]:
    """Derive a model whose fields are all optional (defaulting to None).

    Aliases and constraints of the source fields are kept; fields named in
    ``exclude`` are dropped. ``base`` supplies config and methods for the new
    model (defaults to plain BaseModel).
    """
    fields: dict[str, Any] = {}
    for field_name, info in model.model_fields.items():
        if field_name in exclude:
            continue
        annotation = info.annotation
        if info.metadata:
            annotation = Annotated[(annotation, *info.metadata)]
        fields[field_name] = (
            Optional[annotation],
            Field(None, alias=info.alias, description=info.description),
        )
    return create_model(name, __base__=base or BaseModel, **fields)
