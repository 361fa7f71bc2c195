from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest

from qiniu_adapter.storage.filesystem import AdapterConfig
from qiniu_adapter.storage.qiniu_storage import QiniuAdapter


@pytest.fixture
def adapter_config() -> AdapterConfig:
    return AdapterConfig(access_key="accessKey", secret_key="secretKey", bucket="bucket", domain="domain.com")


@pytest.fixture
def response_info() -> Callable[..., MagicMock]:
    """Build stand-ins for ``qiniu.http.ResponseInfo``."""

    def _make(error: str | None = None, status_code: int = 200) -> MagicMock:
        info = MagicMock()
        info.error = error
        info.status_code = status_code
        info.ok.return_value = error is None and status_code // 100 == 2
        return info

    return _make


@pytest.fixture
def managers() -> dict[str, MagicMock]:
    auth_manager = MagicMock()
    auth_manager.upload_token.return_value = "token"
    return {
        "auth_manager": auth_manager,
        "bucket_manager": MagicMock(),
        "upload_manager": MagicMock(),
        "cdn_manager": MagicMock(),
    }


@pytest.fixture
def adapter(adapter_config: AdapterConfig, managers: dict[str, MagicMock]) -> QiniuAdapter:
    return (
        QiniuAdapter(adapter_config)
        .set_auth_manager(managers["auth_manager"])
        .set_bucket_manager(managers["bucket_manager"])
        .set_upload_manager(managers["upload_manager"])
        .set_cdn_manager(managers["cdn_manager"])
    )


@pytest.fixture(autouse=True)
def mock_logger(mocker: Any) -> MagicMock:
    return mocker.patch("qiniu_adapter.storage.qiniu_storage.logger")
