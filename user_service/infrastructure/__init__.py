"""Infrastructure Layer — database pool and logging setup.

Invariants:
    - Infrastructure never imports from api/ or services/
    - All SQLAlchemy failures mapped to core/errors.py types
"""
