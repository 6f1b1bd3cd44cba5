"""API Layer — route registry, schema builder, routes, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Handlers validate nothing themselves; the route registry does it up front

Design Decisions:
    - Thin routes delegate to services reached through RouteContext
"""
