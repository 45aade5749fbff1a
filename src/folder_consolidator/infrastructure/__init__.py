"""Infrastructure layer for folder consolidator."""

from .adapters import FilesystemAdapter

__all__ = ["FilesystemAdapter"]
