"""
Qiniu object storage implementation of the filesystem interface.

This module maps filesystem style operations onto the Qiniu Python SDK
(``qiniu.Auth``, ``qiniu.BucketManager``, ``qiniu.CdnManager`` and
``qiniu.put_data``) and translates the SDK's ``(ret, info)`` responses
into return values or StorageError subclasses.

Qiniu has no directory concept: directory operations are no-ops and
listing works on key prefixes. Visibility is not supported.
"""

import io
import threading
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, BinaryIO

import httpx
import structlog
from qiniu import Auth, BucketManager, CdnManager

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
    VisibilityUnsupportedError,
    WriteFailedError,
)
from .remote import ResponseStream, build_url
from .responses import SdkResult
from .upload import UploadManager

logger = structlog.get_logger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"

# putTime is reported in units of 100 nanoseconds
PUT_TIME_UNITS_PER_SECOND = 10_000_000

STREAM_READ_CHUNK_SIZE = 1024


class QiniuAdapter(FilesystemAdapter):
    """
    Filesystem adapter backed by a single Qiniu bucket.

    The SDK handles are created lazily on first use and kept for the
    lifetime of the adapter. Any of them can be replaced through its
    setter, which is how tests substitute mocks.
    """

    def __init__(self, config: AdapterConfig):
        """Initialize the adapter with configuration."""
        self.config = config
        self._lock = threading.RLock()
        self._auth_manager: Auth | None = None
        self._bucket_manager: BucketManager | None = None
        self._upload_manager: UploadManager | None = None
        self._cdn_manager: CdnManager | None = None
        self._http_client: httpx.Client | None = None
        self._owns_http_client = False

    @property
    def bucket(self) -> str:
        return self.config.bucket

    # Filesystem operations

    def write(self, path: str, contents: bytes | str, options: Mapping[str, Any] | None = None) -> None:
        """Upload contents to the bucket under ``path``."""
        options = options or {}
        mime_type = options.get("mime") or DEFAULT_MIME_TYPE

        if isinstance(contents, str):
            contents = contents.encode("utf-8")

        ret, info = self.get_upload_manager().put(
            self.get_auth_manager().upload_token(self.bucket),
            path,
            contents,
            options.get("params"),
            mime_type,
            path,
        )
        result = SdkResult.from_response(ret, info)

        if not result.ok:
            logger.warning("Upload failed", path=path, error=result.error, status_code=result.status_code)
            raise WriteFailedError(path, result.error, status_code=result.status_code)

        logger.debug("Uploaded file", path=path, size=len(contents), mime_type=mime_type)

    def write_stream(self, path: str, stream: BinaryIO, options: Mapping[str, Any] | None = None) -> None:
        """
        Upload the contents of a stream.

        The stream is read to the end and held in memory before the upload
        starts; there is no size limit.
        """
        chunks = []
        while True:
            chunk = stream.read(STREAM_READ_CHUNK_SIZE)
            if not chunk:
                break
            chunks.append(chunk)

        # text streams are encoded by write()
        if chunks and isinstance(chunks[0], str):
            self.write(path, "".join(chunks), options)
        else:
            self.write(path, b"".join(chunks), options)

    def move(self, source: str, destination: str, options: Mapping[str, Any] | None = None) -> None:
        ret, info = self.get_bucket_manager().rename(self.bucket, source, destination)
        result = SdkResult.from_response(ret, info)

        if not result.ok:
            logger.warning("Move failed", source=source, destination=destination, error=result.error)
            raise MoveFailedError(source, destination, result.error, status_code=result.status_code)

    def copy(self, source: str, destination: str, options: Mapping[str, Any] | None = None) -> None:
        ret, info = self.get_bucket_manager().copy(self.bucket, source, self.bucket, destination)
        result = SdkResult.from_response(ret, info)

        if not result.ok:
            logger.warning("Copy failed", source=source, destination=destination, error=result.error)
            raise CopyFailedError(source, destination, result.error, status_code=result.status_code)

    def delete(self, path: str) -> None:
        ret, info = self.get_bucket_manager().delete(self.bucket, path)
        result = SdkResult.from_response(ret, info)

        if not result.ok:
            logger.warning("Delete failed", path=path, error=result.error)
            raise DeleteFailedError(path, result.error, status_code=result.status_code)

    def delete_directory(self, path: str) -> None:
        pass

    def create_directory(self, path: str, options: Mapping[str, Any] | None = None) -> None:
        pass

    def file_exists(self, path: str) -> bool:
        ret, info = self.get_bucket_manager().stat(self.bucket, path)

        return SdkResult.from_response(ret, info).ok

    def get_url(self, path: str) -> str:
        """Public URL of ``path`` on the configured domain."""
        return build_url(self.config.domain, path)

    def read(self, path: str) -> bytes:
        url = self.get_url(path)

        try:
            response = self.get_http_client().get(url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Read failed", path=path, url=url, error=str(e))
            raise ReadFailedError(path, str(e)) from e

        return response.content

    def read_stream(self, path: str) -> BinaryIO:
        if not self.config.allow_remote_streams:
            raise ReadFailedError(path, "Opening remote streams is disabled.")

        url = self.get_url(path)
        client = self.get_http_client()

        try:
            response = client.send(client.build_request("GET", url), stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Read stream failed", path=path, url=url, error=str(e))
            raise ReadFailedError(path, str(e)) from e

        if response.is_error:
            response.close()
            logger.warning("Read stream failed", path=path, url=url, status_code=response.status_code)
            raise ReadFailedError(path, f"HTTP {response.status_code}", status_code=response.status_code)

        return io.BufferedReader(ResponseStream(response))

    def list_contents(self, path: str = "", deep: bool = False) -> Iterator[FileAttributes]:
        """
        Lazily list the files whose keys start with ``path``.

        Pages are fetched on demand by following the listing marker.
        ``deep`` is accepted for interface compatibility; prefix listing
        is already recursive.
        """
        marker = None
        while True:
            ret, eof, info = self.get_bucket_manager().list(self.bucket, prefix=path, marker=marker)
            result = SdkResult.from_response(ret, info)

            if not result.ok:
                logger.warning("Listing failed", path=path, error=result.error)
                raise ListContentsFailedError(path, result.error, status_code=result.status_code)

            page = result.value or {}
            for item in page.get("items") or []:
                yield self._normalize_file_info(item)

            marker = page.get("marker")
            if eof or not marker:
                return

    def get_metadata(self, path: str, attribute: str = "metadata") -> FileAttributes:
        """
        Stat ``path`` and normalize the result.

        A failed stat raises MetadataUnavailableError naming ``attribute``.
        """
        ret, info = self.get_bucket_manager().stat(self.bucket, path)
        result = SdkResult.from_response(ret, info)

        if not result.ok:
            raise MetadataUnavailableError(path, attribute, result.error, status_code=result.status_code)

        # stat does not echo the key back
        stats = dict(result.value or {})
        stats["key"] = path

        return self._normalize_file_info(stats)

    def file_size(self, path: str) -> FileAttributes:
        meta = self.get_metadata(path, "file_size")
        if meta.file_size is None:
            raise MetadataUnavailableError(path, "file_size")

        return meta

    def mime_type(self, path: str) -> FileAttributes:
        meta = self.get_metadata(path, "mime_type")
        if meta.mime_type is None:
            raise MetadataUnavailableError(path, "mime_type")

        return meta

    def last_modified(self, path: str) -> FileAttributes:
        meta = self.get_metadata(path, "last_modified")
        if meta.last_modified is None:
            raise MetadataUnavailableError(path, "last_modified")

        return meta

    def visibility(self, path: str) -> FileAttributes:
        raise MetadataUnavailableError(path, "visibility", "Adapter does not support visibility controls.")

    def set_visibility(self, path: str, visibility: str) -> None:
        raise VisibilityUnsupportedError(path)

    # Qiniu specific operations

    def fetch(self, path: str, url: str) -> dict[str, Any] | None:
        """
        Have Qiniu fetch ``url`` into the bucket under ``path``.

        Returns:
            The SDK response on success, None on failure
        """
        ret, info = self.get_bucket_manager().fetch(url, self.bucket, path)
        result = SdkResult.from_response(ret, info)

        if not result.ok:
            logger.warning("Remote fetch failed", path=path, url=url, error=result.error)
            return None

        return result.value

    def private_download_url(self, path: str, expires: int = 3600) -> str:
        """Signed download URL for a private bucket, valid for ``expires`` seconds."""
        return self.get_auth_manager().private_download_url(self.get_url(path), expires=expires)

    def refresh(self, path: str | Iterable[str]) -> Any:
        """Ask the CDN to refresh the cached copies of one or more paths."""
        paths = [path] if isinstance(path, str) else list(path)
        urls = [self.get_url(item) for item in paths]

        logger.info("Refreshing CDN cache", urls=urls)
        return self.get_cdn_manager().refresh_urls(urls)

    def get_upload_token(
        self,
        key: str | None = None,
        expires: int = 3600,
        policy: dict[str, Any] | None = None,
        strict_policy: bool = True,
    ) -> str:
        """Upload token scoped to the bucket, and to ``key`` when given."""
        return self.get_auth_manager().upload_token(self.bucket, key, expires, policy, strict_policy)

    # SDK handles

    def get_auth_manager(self) -> Auth:
        return self._get_or_create(
            "_auth_manager", lambda: Auth(self.config.access_key, self.config.secret_key)
        )

    def set_auth_manager(self, manager: Auth) -> "QiniuAdapter":
        self._auth_manager = manager
        return self

    def get_bucket_manager(self) -> BucketManager:
        return self._get_or_create("_bucket_manager", lambda: BucketManager(self.get_auth_manager()))

    def set_bucket_manager(self, manager: BucketManager) -> "QiniuAdapter":
        self._bucket_manager = manager
        return self

    def get_upload_manager(self) -> UploadManager:
        return self._get_or_create("_upload_manager", UploadManager)

    def set_upload_manager(self, manager: UploadManager) -> "QiniuAdapter":
        self._upload_manager = manager
        return self

    def get_cdn_manager(self) -> CdnManager:
        return self._get_or_create("_cdn_manager", lambda: CdnManager(self.get_auth_manager()))

    def set_cdn_manager(self, manager: CdnManager) -> "QiniuAdapter":
        self._cdn_manager = manager
        return self

    def get_http_client(self) -> httpx.Client:
        if self._http_client is None:
            with self._lock:
                if self._http_client is None:
                    self._http_client = httpx.Client(timeout=self.config.http_timeout, follow_redirects=True)
                    self._owns_http_client = True
        return self._http_client

    def set_http_client(self, client: httpx.Client) -> "QiniuAdapter":
        with self._lock:
            if self._owns_http_client and self._http_client is not None:
                self._http_client.close()
            self._http_client = client
            self._owns_http_client = False
        return self

    def close(self) -> None:
        """Close the HTTP client if the adapter created it."""
        with self._lock:
            if self._owns_http_client and self._http_client is not None:
                self._http_client.close()
                self._http_client = None
                self._owns_http_client = False

    def __enter__(self) -> "QiniuAdapter":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _get_or_create(self, attribute: str, factory: Callable[[], Any]) -> Any:
        handle = getattr(self, attribute)
        if handle is not None:
            return handle

        with self._lock:
            handle = getattr(self, attribute)
            if handle is None:
                handle = factory()
                setattr(self, attribute, handle)
                logger.debug("Created SDK handle", handle=attribute.lstrip("_"), bucket=self.bucket)
        return handle

    def _normalize_file_info(self, stats: Mapping[str, Any]) -> FileAttributes:
        put_time = stats.get("putTime")
        extra = {
            key: value
            for key, value in stats.items()
            if key not in ("key", "fsize", "putTime", "mimeType")
        }

        return FileAttributes(
            path=stats["key"],
            file_size=stats.get("fsize"),
            last_modified=int(put_time) // PUT_TIME_UNITS_PER_SECOND if put_time is not None else None,
            mime_type=stats.get("mimeType") or None,
            extra_metadata=extra,
        )


__all__ = ["QiniuAdapter", "DEFAULT_MIME_TYPE"]
