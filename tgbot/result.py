"""Outcome of a single API call."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ApiResult:
    """Unwrapped ``result`` payload of a call, or a failure.

    ``payload`` may legitimately be falsy (an empty update list, ``True``
    from sendChatAction) so callers test ``ok`` or the result's truthiness,
    never the payload itself.
    """

    ok: bool
    payload: Any = None

    def __bool__(self) -> bool:
        return self.ok


FAILURE = ApiResult(ok=False)
