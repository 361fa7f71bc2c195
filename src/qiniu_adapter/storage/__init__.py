"""
Filesystem adapter for Qiniu object storage.

This module exposes the abstract filesystem interface, its exception
hierarchy and the Qiniu implementation built on the official SDK.
"""

from .filesystem import (
    AdapterConfig,
    CopyFailedError,
    DeleteFailedError,
    FileAttributes,
    FilesystemAdapter,
    ListContentsFailedError,
    MetadataUnavailableError,
    MoveFailedError,
    ReadFailedError,
    StorageError,
    VisibilityUnsupportedError,
    WriteFailedError,
)
from .qiniu_storage import DEFAULT_MIME_TYPE, QiniuAdapter
from .remote import build_url, encode_path, normalize_host
from .responses import SdkResult
from .upload import UploadManager


def create_adapter(config: AdapterConfig) -> QiniuAdapter:
    """Create a Qiniu adapter instance."""
    return QiniuAdapter(config)


__all__ = [
    # Abstract interfaces and base classes
    "FilesystemAdapter",
    "AdapterConfig",
    # Concrete implementations
    "QiniuAdapter",
    "UploadManager",
    # Factory functions
    "create_adapter",
    # Data models
    "FileAttributes",
    "SdkResult",
    "DEFAULT_MIME_TYPE",
    # Exceptions
    "StorageError",
    "WriteFailedError",
    "MoveFailedError",
    "CopyFailedError",
    "DeleteFailedError",
    "ReadFailedError",
    "ListContentsFailedError",
    "MetadataUnavailableError",
    "VisibilityUnsupportedError",
    # Utilities
    "build_url",
    "encode_path",
    "normalize_host",
]
