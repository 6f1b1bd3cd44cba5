"""User Routes — CRUD endpoints for the users resource.

Invariants:
    - Every handler receives validated input via RouteContext (no manual parsing)
    - Misses on id / auth0 id lookups raise ResourceNotFoundError → 404 {"message": "User not found"}
    - Routes never touch the database directly (delegate to services.users)

Design Decisions:
    - Duplicate auth0Id on create is not translated to 409: it surfaces as the
      generic database error from the session manager
"""

import logging

from fastapi import APIRouter, status

from user_service.api import schema_builder
from user_service.api.route_registry import RouteContext, RouteRegistry
from user_service.core.errors import ResourceNotFoundError
from user_service.schemas.user import (
    Auth0IdParams, UserCreate, UserResponse, UserUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])
routes = RouteRegistry(router)


@routes.post("", schema_builder.post(UserResponse, UserCreate))
async def create_user(ctx: RouteContext):
    """Create a user."""
    user = await ctx.services.users.create(ctx.body.to_values())
    ctx.response.status_code = status.HTTP_201_CREATED
    return user


@routes.get("", schema_builder.get_all(UserResponse))
async def list_users(ctx: RouteContext):
    """List every user."""
    return await ctx.services.users.get_all()


@routes.get("/auth0/{id}", schema_builder.get_by_key(UserResponse, Auth0IdParams))
async def get_user_by_auth0_id(ctx: RouteContext):
    """Get a user by identity-provider id."""
    user = await ctx.services.users.get_by_auth0_id(ctx.params.id)
    if user is None:
        raise ResourceNotFoundError("User", ctx.params.id)
    return user


@routes.get("/{id}", schema_builder.get_by_id(UserResponse))
async def get_user(ctx: RouteContext):
    """Get a user by id."""
    user = await ctx.services.users.get_by_id(ctx.params.id)
    if user is None:
        raise ResourceNotFoundError("User", str(ctx.params.id))
    return user


@routes.patch("/{id}", schema_builder.update(UserResponse, UserUpdate))
async def update_user(ctx: RouteContext):
    """Replace the supplied fields of a user."""
    user = await ctx.services.users.update(ctx.params.id, ctx.body.to_values())
    if user is None:
        raise ResourceNotFoundError("User", str(ctx.params.id))
    logger.info(f"Updated user {user.id}", extra={"user_id": str(user.id)})
    return user


@routes.delete("/{id}", schema_builder.delete())
async def delete_user(ctx: RouteContext):
    """Delete a user."""
    if not await ctx.services.users.delete(ctx.params.id):
        raise ResourceNotFoundError("User", str(ctx.params.id))
    logger.info(f"Deleted user {ctx.params.id}", extra={"user_id": str(ctx.params.id)})
    return {"success": True}
