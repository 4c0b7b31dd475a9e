"""
AppShell Shared Kernel
======================

Building blocks the app layer is assembled from.

Architecture:
- core: state container, registries, configuration, legacy locator
- infrastructure: storage backends, startup gate, persistence
"""

__version__ = "1.0.0"

__all__ = []
