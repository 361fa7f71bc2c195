"""
Upload handle for the Qiniu adapter.

The Python SDK exposes uploads as module level functions; UploadManager
gives them an instance so the adapter can hold and replace it like the
auth, bucket and CDN handles.
"""

from typing import Any

from qiniu import put_data


class UploadManager:
    """Uploads in-memory data to a bucket with a signed upload token."""

    def put(
        self,
        up_token: str,
        key: str | None,
        data: bytes,
        params: dict[str, str] | None = None,
        mime_type: str = "application/octet-stream",
        fname: str | None = None,
    ) -> tuple[dict[str, Any] | None, Any]:
        """
        Upload bytes under the given key.

        Args:
            up_token: Upload token from ``Auth.upload_token``
            key: Object key, or None to let the server assign one
            data: Content to upload
            params: Custom ``x:`` upload variables
            mime_type: Content type stored with the object
            fname: Original file name reported to the server

        Returns:
            The SDK ``(ret, info)`` pair
        """
        return put_data(
            up_token,
            key,
            data,
            params=params,
            mime_type=mime_type,
            fname=fname,
        )
