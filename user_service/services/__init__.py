"""Services Layer — generic CRUD repository, per-entity services, and their registry.

Invariants:
    - One statement per operation; misses return None/False, never raise
"""
