"""Storage adapters, the startup gate and the persistence registry."""

from appshell.shared.infrastructure.storage.backends import FileStorage, MemoryStorage, Storage
from appshell.shared.infrastructure.storage.gate import StorageGate
from appshell.shared.infrastructure.storage.persistence import PersistenceRegistry

__all__ = ["FileStorage", "MemoryStorage", "PersistenceRegistry", "Storage", "StorageGate"]
