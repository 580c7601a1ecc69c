"""
HGS Registry Engine — Policies
=================================
Guards shared by every engine. Each returns None when the call may
proceed, or a RejectionReason naming the violated precondition.

Order of evaluation is fixed: role first, then arguments.
"""

from __future__ import annotations

from typing import Optional

from core.commands.rejection import ReasonCode, RejectionReason
from core.identity import is_zero_identity
from engines.registry.roles import Role


def caller_holds_role_policy(
    holder: str,
    caller: str,
    role: Role,
    operation: str,
) -> Optional[RejectionReason]:
    """
    Reject unless caller is the current holder of role.

    An unassigned role (zero holder) rejects every caller, including a
    zero caller.
    """
    if is_zero_identity(holder) or is_zero_identity(caller) or caller != holder:
        return RejectionReason(
            code=ReasonCode.UNAUTHORIZED,
            message=(
                f"Caller '{caller}' is not the {role.value.replace('_', ' ')} "
                f"and cannot {operation}."
            ),
            policy_name="caller_holds_role_policy",
        )
    return None


def string_identity_policy(
    value,
    argument: str,
    operation: str,
) -> Optional[RejectionReason]:
    """Reject an identity argument that is present but not a string."""
    if value is not None and not isinstance(value, str):
        return RejectionReason(
            code=ReasonCode.INVALID_ARGUMENT,
            message=(
                f"{argument} must be a string identity, got "
                f"{type(value).__name__} ({operation})."
            ),
            policy_name="string_identity_policy",
        )
    return None


def non_zero_identity_policy(
    value,
    argument: str,
    operation: str,
) -> Optional[RejectionReason]:
    """Reject a zero/absent identity where a real one is required."""
    if is_zero_identity(value):
        return RejectionReason(
            code=ReasonCode.INVALID_ARGUMENT,
            message=f"{argument} must not be the zero identity ({operation}).",
            policy_name="non_zero_identity_policy",
        )
    return None


def reference_present_policy(
    reference,
    argument: str,
    operation: str,
) -> Optional[RejectionReason]:
    """Reject an absent component reference."""
    if reference is None:
        return RejectionReason(
            code=ReasonCode.INVALID_ARGUMENT,
            message=f"{argument} reference is required ({operation}).",
            policy_name="reference_present_policy",
        )
    return None
