"""
neo4j-admin Test Suite.

This package contains:
- unit/: Unit tests (local filesystem only, no running server)
"""
