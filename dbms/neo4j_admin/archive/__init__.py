"""
Archive module for neo4j-admin.

This module packs database directories into single-file archives for:
- Moving a database between servers
- Offline backups

Invariants:
    - Archives are written atomically (temp file + rename)
    - Existing archives are never overwritten
"""

from .dumper import ArchiveFormat, Dumper, DumperProtocol, ExcludePredicate

__all__ = ["ArchiveFormat", "Dumper", "DumperProtocol", "ExcludePredicate"]
