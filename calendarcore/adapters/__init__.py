"""
Adapters layer - Data sources feeding the services.
"""

from .file_store import FileStore

__all__ = ["FileStore"]
