"""
Example showing how to build the adapter from environment settings and
use it as a filesystem.

Set QINIU_ACCESS_KEY, QINIU_SECRET_KEY, QINIU_BUCKET and QINIU_DOMAIN
(or put them in a .env file) before running.
"""

import io

import structlog

from qiniu_adapter.factories.storage_factory import create_adapter
from qiniu_adapter.storage import StorageError
from qiniu_adapter.utils.env_config import get_settings
from qiniu_adapter.utils.logging_config import configure_logging

logger = structlog.get_logger(__name__)


def main() -> None:
    settings = get_settings()
    configure_logging(settings)

    adapter = create_adapter(settings)
    if adapter is None:
        logger.error("Qiniu credentials, bucket or domain are not configured")
        return

    with adapter:
        try:
            adapter.write("examples/hello.txt", "Hello from the Qiniu adapter", {"mime": "text/plain"})
            adapter.write_stream("examples/hello-stream.txt", io.BytesIO(b"streamed upload"))

            meta = adapter.get_metadata("examples/hello.txt")
            logger.info("Uploaded file", path=meta.path, size=meta.file_size, mime_type=meta.mime_type)

            for item in adapter.list_contents("examples/"):
                logger.info("Listed file", path=item.path, last_modified=item.last_modified)

            adapter.copy("examples/hello.txt", "examples/hello-copy.txt")
            adapter.move("examples/hello-copy.txt", "examples/hello-moved.txt")

            logger.info("Public URL", url=adapter.get_url("examples/hello.txt"))
            logger.info("Private URL", url=adapter.private_download_url("examples/hello.txt", expires=600))
            logger.info("Read back", contents=adapter.read("examples/hello.txt").decode("utf-8"))

            adapter.refresh(["examples/hello.txt", "examples/hello-stream.txt"])

            for path in ("examples/hello.txt", "examples/hello-stream.txt", "examples/hello-moved.txt"):
                adapter.delete(path)
        except StorageError as e:
            logger.error("Storage operation failed", error=e.message, status_code=e.status_code)


if __name__ == "__main__":
    main()
