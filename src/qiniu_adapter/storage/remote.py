"""
Public URL construction and remote content streaming.
"""

import io
from collections.abc import Iterator
from urllib.parse import quote

import httpx


def normalize_host(domain: str) -> str:
    """Ensure the domain has a scheme and exactly one trailing slash."""
    if not domain.lower().startswith(("https://", "http://")):
        domain = f"http://{domain}"

    return domain.rstrip("/") + "/"


def encode_path(path: str) -> str:
    """
    Percent-encode each ``/`` separated segment of a key.

    Anything after the first ``?`` is treated as a query string and
    appended back untouched.
    """
    key, separator, query = path.partition("?")
    encoded = "/".join(quote(segment, safe="") for segment in key.split("/")).lstrip("/")

    if separator and query:
        return f"{encoded}?{query}"
    return encoded


def build_url(domain: str, path: str) -> str:
    """Build the public URL of a key served from the given domain."""
    return normalize_host(domain) + encode_path(path)


class ResponseStream(io.RawIOBase):
    """Readable raw stream over a streaming httpx response."""

    def __init__(self, response: httpx.Response, chunk_size: int = 64 * 1024):
        self._response = response
        self._chunks: Iterator[bytes] = response.iter_bytes(chunk_size)
        self._buffer = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        while not self._buffer:
            try:
                self._buffer = next(self._chunks)
            except StopIteration:
                return 0

        size = min(len(buffer), len(self._buffer))
        buffer[:size] = self._buffer[:size]
        self._buffer = self._buffer[size:]
        return size

    def close(self) -> None:
        if not self.closed:
            self._response.close()
        super().close()
