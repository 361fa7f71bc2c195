"""
Result wrapper for Qiniu SDK responses.

The SDK returns ``(ret, info)`` pairs where ``info`` is a
``qiniu.http.ResponseInfo``. SdkResult turns that pair into an explicit
result-or-error value the adapter can branch on.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SdkResult:
    """Outcome of a single SDK call."""

    value: Any = None
    error: str | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def from_response(cls, ret: Any, info: Any) -> "SdkResult":
        """Build a result from an SDK ``(ret, info)`` pair."""
        if info is None:
            return cls(value=ret)

        status_code = getattr(info, "status_code", None)
        if info.ok():
            return cls(value=ret, status_code=status_code)

        error = getattr(info, "error", None) or f"request failed with status {status_code}"
        return cls(value=ret, error=str(error), status_code=status_code)
