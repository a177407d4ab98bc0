from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping

# Stable machine-readable codes
UNKNOWN_CALL = "unknown_call"
BAD_ARITY = "bad_arity"
BAD_ARGUMENT = "bad_argument"
NOT_DEPLOYED = "not_deployed"
ALREADY_DEPLOYED = "already_deployed"
CORRUPT_STATE = "corrupt_state"
STORAGE = "storage"


@dataclass
class HostError(Exception):
    """
    Structured error raised by the host layer (dispatch, argument checks,
    storage). The Counter itself never raises for arithmetic reasons.

    Supported call patterns:

        HostError("simple message")

        HostError("message", code="some_code", context={...})

        # Legacy 2-positional form:
        HostError("SOME_CODE", "message")

    Attributes:
        code: short machine-readable code string
        message: human-readable message
        context: optional extra fields for debugging / CLI output
    """

    code: str
    message: str
    context: Dict[str, Any]

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        code: str = kwargs.pop("code", "host_error")
        ctx = kwargs.pop("context", None)
        context: Dict[str, Any] = dict(ctx) if isinstance(ctx, Mapping) else {}

        if len(args) == 0:
            message = ""
        elif len(args) == 1:
            message = str(args[0])
        else:
            code = str(args[0])
            message = str(args[1])

        super().__init__(message)

        object.__setattr__(self, "code", str(code))
        object.__setattr__(self, "message", message)
        object.__setattr__(self, "context", context)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": dict(self.context),
        }


__all__ = [
    "HostError",
    "UNKNOWN_CALL",
    "BAD_ARITY",
    "BAD_ARGUMENT",
    "NOT_DEPLOYED",
    "ALREADY_DEPLOYED",
    "CORRUPT_STATE",
    "STORAGE",
]
