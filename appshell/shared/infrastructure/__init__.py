"""
Shared Infrastructure Module
============================

Adapters for the host's persistent storage.
"""

from appshell.shared.infrastructure.storage import (
    FileStorage,
    MemoryStorage,
    PersistenceRegistry,
    StorageGate,
)

__all__ = ["FileStorage", "MemoryStorage", "PersistenceRegistry", "StorageGate"]
