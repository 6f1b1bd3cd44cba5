"""Route Registry — binds verb + path + RouteSchema + handler onto a FastAPI router.

Invariants:
    - params/query/body are validated by FastAPI before the handler runs;
      a failure is a RequestValidationError (400) and the handler is never called
    - Handlers receive one RouteContext: decoded inputs plus the service registry
    - Return value serialized through the schema's success model; status is the
      schema default unless the handler sets ctx.response.status_code

Design Decisions:
    - Endpoint signature synthesized from the descriptor (inspect.Signature):
      FastAPI reads it exactly like a hand-written endpoint, so validation and
      OpenAPI docs come from the same declaration
    - Path models expanded into one Path() param per field, then validated as a
      whole; query models use FastAPI's native Query() model support
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Annotated, Any, Awaitable, Callable

from fastapi import APIRouter, Body, Depends, Path, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from user_service.api.schema_builder import RouteSchema
from user_service.services.registry import ServiceRegistry, get_services

logger = logging.getLogger(__name__)

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


@dataclass
class RouteContext:
    """Everything a handler may need for one request."""
    body: Any
    query: Any
    params: Any
    request: Request
    response: Response
    services: ServiceRegistry


Handler = Callable[[RouteContext], Awaitable[Any]]


def _path_params(model: type[BaseModel]):
    """Dependency declaring each model field as a path param, then building the model."""
    def dependency(**values: Any) -> BaseModel:
        try:
            return model.model_validate(values)
        except ValidationError as e:
            raise RequestValidationError([
                {**err, "loc": ("path", *err["loc"])} for err in e.errors()
            ])

    dependency.__signature__ = inspect.Signature([
        inspect.Parameter(
            name, inspect.Parameter.KEYWORD_ONLY,
            annotation=info.annotation,
            default=Path(description=info.description),
        )
        for name, info in model.model_fields.items()
    ])
    return dependency


def _build_signature(schema: RouteSchema) -> inspect.Signature:
    kw = inspect.Parameter.KEYWORD_ONLY
    parameters = [
        inspect.Parameter("request", kw, annotation=Request),
        inspect.Parameter("response", kw, annotation=Response),
        inspect.Parameter(
            "services", kw,
            annotation=ServiceRegistry, default=Depends(get_services),
        ),
    ]
    if schema.params is not None:
        parameters.append(inspect.Parameter(
            "params", kw,
            annotation=schema.params, default=Depends(_path_params(schema.params)),
        ))
    if schema.query is not None:
        parameters.append(inspect.Parameter(
            "query", kw, annotation=Annotated[schema.query, Query()],
        ))
    if schema.body is not None:
        parameters.append(inspect.Parameter(
            "body", kw, annotation=schema.body, default=Body(...),
        ))
    return inspect.Signature(parameters)


def _build_endpoint(handler: Handler, schema: RouteSchema):
    async def endpoint(
        *,
        request: Request,
        response: Response,
        services: ServiceRegistry,
        params: Any = None,
        query: Any = None,
        body: Any = None,
    ):
        ctx = RouteContext(
            body=body, query=query, params=params,
            request=request, response=response, services=services,
        )
        return await handler(ctx)

    endpoint.__signature__ = _build_signature(schema)
    endpoint.__name__ = handler.__name__
    endpoint.__doc__ = handler.__doc__
    return endpoint


class RouteRegistry:
    """Registers schema-described routes on a router."""

    def __init__(self, router: APIRouter):
        self.router = router

    def register(
        self,
        method: str,
        path: str,
        schema: RouteSchema,
        handler: Handler,
    ) -> Handler:
        method = method.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")
        self.router.add_api_route(
            path,
            _build_endpoint(handler, schema),
            methods=[method],
            response_model=schema.response_model,
            status_code=schema.status_code,
            responses=schema.error_responses(),
        )
        logger.debug(f"Registered {method} {self.router.prefix}{path}")
        return handler

    def get(self, path: str, schema: RouteSchema):
        return self._decorator("GET", path, schema)

    def post(self, path: str, schema: RouteSchema):
        return self._decorator("POST", path, schema)

    def put(self, path: str, schema: RouteSchema):
        return self._decorator("PUT", path, schema)

    def patch(self, path: str, schema: RouteSchema):
        return self._decorator("PATCH", path, schema)

    def delete(self, path: str, schema: RouteSchema):
        return self._decorator("DELETE", path, schema)

    def _decorator(self, method: str, path: str, schema: RouteSchema):
        def decorator(handler: Handler) -> Handler:
            return self.register(method, path, schema, handler)
        return decorator
