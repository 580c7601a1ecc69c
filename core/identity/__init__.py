"""
HGS Identity - Public API
=========================
Caller identity type and zero-identity sentinel.
"""

from core.identity.address import (
    Identity,
    ZERO_IDENTITY,
    is_zero_identity,
    normalize_identity,
)

__all__ = [
    "Identity",
    "ZERO_IDENTITY",
    "is_zero_identity",
    "normalize_identity",
]
