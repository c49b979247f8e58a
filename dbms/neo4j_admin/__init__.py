"""
neo4j-admin - Offline administration commands for Neo4j databases.

This package implements the command-line side of database administration:
- Resolving database and transaction log directories from neo4j.conf
- Guarding offline operations with the store lock
- Dumping a database into a portable single-file archive

Architecture:
    ┌─────────────┐     ┌─────────────┐     ┌─────────────┐
    │ neo4j-admin │────▶│ DumpCommand │────▶│   Dumper    │
    │   (main)    │     │             │     │ (tar + gz)  │
    └─────────────┘     └──────┬──────┘     └─────────────┘
                               │
                               ▼
                        ┌─────────────┐
                        │ StoreLocker │
                        │ (store_lock)│
                        └─────────────┘

Invariants:
    - Commands never run against a database whose store lock is held
    - Operator-facing failures are CommandFailed, usage problems IncorrectUsage

Version: see _version.py.
"""

from ._version import __version__

__all__ = ["__version__"]
