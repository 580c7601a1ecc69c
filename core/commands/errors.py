"""
HGS Command Layer — Governance Errors
========================================
The only two ways a caller-facing operation can fail.

Both are terminal for the call: no state was changed and no event
was emitted. Callers re-invoke with a corrected identity or
corrected arguments.
"""

from __future__ import annotations

from core.commands.rejection import ReasonCode, RejectionReason


class GovernanceError(Exception):
    """Base error for rejected governance calls."""

    code: str

    def __init__(self, message: str, policy_name: str):
        self.reason = RejectionReason(
            code=self.code,
            message=message,
            policy_name=policy_name,
        )
        super().__init__(message)

    @property
    def message(self) -> str:
        return self.reason.message


class Unauthorized(GovernanceError):
    """Caller does not hold the single role the operation requires."""

    code = ReasonCode.UNAUTHORIZED


class InvalidArgument(GovernanceError):
    """A required identity or reference argument is zero/absent."""

    code = ReasonCode.INVALID_ARGUMENT


_ERRORS_BY_CODE = {
    ReasonCode.UNAUTHORIZED: Unauthorized,
    ReasonCode.INVALID_ARGUMENT: InvalidArgument,
}


def raise_for_rejection(reason) -> None:
    """Raise the error matching reason.code; no-op when reason is None."""
    if reason is None:
        return
    error_cls = _ERRORS_BY_CODE.get(reason.code)
    if error_cls is None:
        raise ValueError(f"Unknown rejection code '{reason.code}'.")
    raise error_cls(reason.message, reason.policy_name)
