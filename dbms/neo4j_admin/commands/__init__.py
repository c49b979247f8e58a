"""
Admin commands for Neo4j.

This module provides the offline commands run by neo4j-admin:
- dump: Dump a database into a single-file archive

Invariants:
    - Commands work offline (no running server required)
    - Commands refuse to touch a database whose store lock is held
"""

from .dump import DumpCommand, DumpCommandProvider

__all__ = ["DumpCommand", "DumpCommandProvider"]
