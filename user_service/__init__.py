"""User Service — CRUD API for users keyed by id and identity-provider id.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
