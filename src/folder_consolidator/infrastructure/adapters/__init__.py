"""Adapters isolating the core from operating system details."""

from .filesystem_adapter import FilesystemAdapter

__all__ = ["FilesystemAdapter"]
