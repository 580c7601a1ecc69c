"""
HGS Identity - Caller Identity
==============================
Every call into HGS carries exactly one caller identity, attached by the
host environment. Callers cannot choose or forge it.

Identity is an opaque string. Equality is the only operation engines
perform on it.

RULES:
- ZERO_IDENTITY means "unassigned" and is never a valid stakeholder
- None, "" and any 0x-prefixed all-zero string are zero identities
- Zero identity can never satisfy a role check
"""

from __future__ import annotations

from typing import Optional

Identity = str

ZERO_IDENTITY: Identity = "0x" + "0" * 40


def is_zero_identity(value: Optional[str]) -> bool:
    """True for None, empty, or an all-zero 0x address of any width."""
    if value is None:
        return True
    if not isinstance(value, str):
        return False

    stripped = value.strip()
    if not stripped:
        return True

    if stripped[:2].lower() == "0x":
        digits = stripped[2:]
        return not digits or set(digits) == {"0"}

    return False


def normalize_identity(value: Optional[str]) -> Identity:
    """
    Canonical form used for storage and comparison.

    Zero identities collapse to ZERO_IDENTITY. Anything else is
    stripped of surrounding whitespace and otherwise kept verbatim.
    """
    if is_zero_identity(value):
        return ZERO_IDENTITY

    if not isinstance(value, str):
        raise TypeError(
            f"identity must be a string, got {type(value).__name__}."
        )

    return value.strip()
