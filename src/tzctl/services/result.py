"""Result payloads returned by tzctl services.

Services never raise time engine errors to their callers. A failure is a
``ServiceResult`` with ``ok=False`` whose :class:`ServiceError` keeps the
engine's stable code, a JSON-safe copy of its detail, and the observance
state for resolver failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from tzctl.domain.errors import TzError


def _jsonable(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


class ServiceError(BaseModel):
    """Error code, message and detail of a failed conversion or lookup."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_tz_error(cls, exc: TzError) -> ServiceError:
        """Copy *exc* into a payload. Detail values that are not scalars become text."""
        detail = {key: _jsonable(value) for key, value in exc.detail.items()}
        state = getattr(exc, "state", None)
        if state is not None:
            detail["state"] = str(state)
        return cls(code=exc.code, message=exc.message, detail=detail)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    ``op`` names the operation: ``convert``, ``time_info``, ``rules`` or
    ``date_info``.
    ``data`` holds the validated payload on success and ``error`` the
    failure otherwise. ``meta`` carries the label of the zone that was
    consulted.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
