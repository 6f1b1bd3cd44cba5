"""Fixtures — known records seeded into a database for tests and local development.

Invariants:
    - Every fixture row carries an explicit id so it can be cleared precisely
    - Fixture sets load in declaration order and clear in reverse
"""
