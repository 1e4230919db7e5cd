from dataclasses import dataclass, field
from typing import Any

VALIDATION = "validation"
NOT_FOUND = "not_found"
INVALID_AMOUNT = "invalid_amount"

HTTP_STATUS = {
    VALIDATION: 400,
    INVALID_AMOUNT: 400,
    NOT_FOUND: 404,
}


@dataclass(frozen=True)
class ServiceResult:
    """
    Outcome of a service call.

    Expected failures (bad input, unknown ids) come back as ``ok=False`` with a
    ``code``; database errors are never folded into a result and propagate.
    """

    ok: bool
    data: Any = None
    note: str | None = None
    code: str | None = None
    message: str = ""
    fields: dict = field(default_factory=dict)

    @classmethod
    def success(cls, data, note=None):
        return cls(ok=True, data=data, note=note)

    @classmethod
    def failure(cls, code, message, fields=None):
        return cls(ok=False, code=code, message=message, fields=dict(fields or {}))

    @property
    def http_status(self) -> int:
        if self.ok:
            return 200
        return HTTP_STATUS.get(self.code, 400)
