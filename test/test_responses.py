from collections.abc import Callable

from qiniu_adapter.storage.responses import SdkResult


def test_result_without_info_is_ok() -> None:
    result = SdkResult.from_response({"key": "a"}, None)

    assert result.ok
    assert result.value == {"key": "a"}
    assert result.error is None


def test_result_with_ok_info(response_info: Callable) -> None:
    result = SdkResult.from_response({"hash": "Fh8x"}, response_info())

    assert result.ok
    assert result.status_code == 200


def test_result_with_error_info(response_info: Callable) -> None:
    result = SdkResult.from_response(None, response_info(error="no such file or directory", status_code=612))

    assert not result.ok
    assert result.error == "no such file or directory"
    assert result.status_code == 612


def test_result_with_failed_status_and_no_message(response_info: Callable) -> None:
    info = response_info(status_code=599)

    result = SdkResult.from_response(None, info)

    assert not result.ok
    assert result.error == "request failed with status 599"
