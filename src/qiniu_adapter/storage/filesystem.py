"""
Abstract filesystem interface for object storage adapters.

This module defines the abstract base class, the file attribute record,
the adapter configuration and the exception hierarchy shared by
filesystem adapters, providing a consistent interface for file operations
regardless of the underlying storage provider.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, BinaryIO

from pydantic import BaseModel, ConfigDict, Field, field_validator


@dataclass(frozen=True)
class FileAttributes:
    """Normalized metadata of a stored file."""

    path: str
    file_size: int | None = None
    visibility: str | None = None
    last_modified: int | None = None
    mime_type: str | None = None
    extra_metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def is_file(self) -> bool:
        return True

    @property
    def is_dir(self) -> bool:
        return False


class AdapterConfig(BaseModel):
    """Configuration for a Qiniu bucket binding."""

    model_config = ConfigDict(frozen=True)

    access_key: str = Field(min_length=1)
    secret_key: str = Field(min_length=1)
    bucket: str = Field(min_length=1)
    domain: str = Field(min_length=1)

    # Raw content access
    allow_remote_streams: bool = True
    http_timeout: float = Field(default=30.0, gt=0)

    @field_validator("access_key", "secret_key", "bucket", "domain")
    @classmethod
    def strip_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class StorageError(Exception):
    """Base exception for storage operations."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}


class WriteFailedError(StorageError):
    """Unable to write a file."""

    def __init__(self, path: str, reason: str = "", **kwargs: Any):
        super().__init__(f"Unable to write file at location: {path}. {reason}".strip(), **kwargs)
        self.path = path
        self.reason = reason


class MoveFailedError(StorageError):
    """Unable to move a file."""

    def __init__(self, source: str, destination: str, reason: str = "", **kwargs: Any):
        super().__init__(f"Unable to move file from {source} to {destination}. {reason}".strip(), **kwargs)
        self.path = source
        self.source = source
        self.destination = destination
        self.reason = reason


class CopyFailedError(StorageError):
    """Unable to copy a file."""

    def __init__(self, source: str, destination: str, reason: str = "", **kwargs: Any):
        super().__init__(f"Unable to copy file from {source} to {destination}. {reason}".strip(), **kwargs)
        self.path = source
        self.source = source
        self.destination = destination
        self.reason = reason


class DeleteFailedError(StorageError):
    """Unable to delete a file."""

    def __init__(self, path: str, reason: str = "", **kwargs: Any):
        super().__init__(f"Unable to delete file located at: {path}. {reason}".strip(), **kwargs)
        self.path = path
        self.reason = reason


class ReadFailedError(StorageError):
    """Unable to read a file."""

    def __init__(self, path: str, reason: str = "", **kwargs: Any):
        super().__init__(f"Unable to read file from location: {path}. {reason}".strip(), **kwargs)
        self.path = path
        self.reason = reason


class ListContentsFailedError(StorageError):
    """Unable to list the contents of a location."""

    def __init__(self, path: str, reason: str = "", **kwargs: Any):
        super().__init__(f"Unable to list contents for '{path}'. {reason}".strip(), **kwargs)
        self.path = path
        self.reason = reason


class MetadataUnavailableError(StorageError):
    """Unable to retrieve a metadata attribute of a file."""

    def __init__(self, path: str, attribute: str, reason: str = "", **kwargs: Any):
        super().__init__(f"Unable to retrieve the {attribute} for file at location: {path}. {reason}".strip(), **kwargs)
        self.path = path
        self.attribute = attribute
        self.reason = reason


class VisibilityUnsupportedError(StorageError):
    """Visibility controls are not available for this adapter."""

    def __init__(self, path: str, reason: str = "Adapter does not support visibility controls.", **kwargs: Any):
        super().__init__(f"Unable to set visibility for file {path}. {reason}", **kwargs)
        self.path = path
        self.reason = reason


class FilesystemAdapter(ABC):
    """
    Abstract base class for filesystem adapters.

    Every operation either returns its documented value or raises one of
    the StorageError subclasses defined in this module.
    """

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        """Check whether a file exists at the given path."""

    @abstractmethod
    def write(self, path: str, contents: bytes | str, options: Mapping[str, Any] | None = None) -> None:
        """
        Write contents to a file, creating or overwriting it.

        Args:
            path: Storage path of the file
            contents: Bytes or text to store
            options: Write options such as ``mime``
        """

    @abstractmethod
    def write_stream(self, path: str, stream: BinaryIO, options: Mapping[str, Any] | None = None) -> None:
        """Write the contents of a readable binary stream to a file."""

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Read a file and return its contents."""

    @abstractmethod
    def read_stream(self, path: str) -> BinaryIO:
        """Open a file for reading and return a readable binary stream."""

    @abstractmethod
    def delete(self, path: str) -> None:
        """Delete a file."""

    @abstractmethod
    def delete_directory(self, path: str) -> None:
        """Delete a directory and its contents."""

    @abstractmethod
    def create_directory(self, path: str, options: Mapping[str, Any] | None = None) -> None:
        """Create a directory."""

    @abstractmethod
    def set_visibility(self, path: str, visibility: str) -> None:
        """Change the visibility of a file."""

    @abstractmethod
    def visibility(self, path: str) -> FileAttributes:
        """Retrieve the visibility of a file."""

    @abstractmethod
    def mime_type(self, path: str) -> FileAttributes:
        """Retrieve the mime type of a file."""

    @abstractmethod
    def last_modified(self, path: str) -> FileAttributes:
        """Retrieve the last modification time of a file."""

    @abstractmethod
    def file_size(self, path: str) -> FileAttributes:
        """Retrieve the size of a file in bytes."""

    @abstractmethod
    def list_contents(self, path: str = "", deep: bool = False) -> Iterator[FileAttributes]:
        """
        List the contents of a location.

        Args:
            path: Location (key prefix) to list
            deep: Whether to descend into sub-locations

        Returns:
            Lazy iterator of FileAttributes
        """

    @abstractmethod
    def move(self, source: str, destination: str, options: Mapping[str, Any] | None = None) -> None:
        """Move a file to a new location."""

    @abstractmethod
    def copy(self, source: str, destination: str, options: Mapping[str, Any] | None = None) -> None:
        """Copy a file to a new location."""


__all__ = [
    "FilesystemAdapter",
    "FileAttributes",
    "AdapterConfig",
    "StorageError",
    "WriteFailedError",
    "MoveFailedError",
    "CopyFailedError",
    "DeleteFailedError",
    "ReadFailedError",
    "ListContentsFailedError",
    "MetadataUnavailableError",
    "VisibilityUnsupportedError",
]
