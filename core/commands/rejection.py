"""
HGS Command Layer — Rejection Model
======================================
Structured rejection reasons for denied calls.

Every rejection must be:
- Deterministic (same input → same rejection)
- Auditable (code + message + policy)
- Machine-readable (reason code)
- Human-readable (message naming the violated precondition)
"""

from __future__ import annotations

from dataclasses import dataclass


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for a rejected call.

    Fields:
        code:        Machine-readable rejection code (e.g. 'UNAUTHORIZED').
        message:     Human-readable explanation.
        policy_name: Name of the guard that caused rejection.
    """

    code: str
    message: str
    policy_name: str

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
        }


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Known rejection codes.

    UNAUTHORIZED is always evaluated before INVALID_ARGUMENT.
    """

    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
