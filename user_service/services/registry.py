"""Service Registry — explicit container of services handed to route handlers.

Invariants:
    - Built once at startup from the session manager; never a module global
    - Handlers reach it only through RouteContext.services (Depends(get_services))
"""

from dataclasses import dataclass

from fastapi import Request

from user_service.infrastructure.database import DatabaseSessionManager
from user_service.services.user_service import UserService


@dataclass(frozen=True)
class ServiceRegistry:
    users: UserService


def build_services(db: DatabaseSessionManager) -> ServiceRegistry:
    return ServiceRegistry(users=UserService(db))


def get_services(request: Request) -> ServiceRegistry:
    """FastAPI dependency — the registry attached to the app in lifespan."""
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Services not initialized")
    return services
