"""
Qiniu object storage adapter exposing a generic filesystem interface.
"""

from .storage import (
    AdapterConfig,
    FileAttributes,
    FilesystemAdapter,
    QiniuAdapter,
    StorageError,
)

__version__ = "0.1.0"

__all__ = [
    "AdapterConfig",
    "FileAttributes",
    "FilesystemAdapter",
    "QiniuAdapter",
    "StorageError",
    "__version__",
]
