"""Immutable snapshots consumed and produced by the withdrawal policy."""

from jar_policy.domain.claim import Claim
from jar_policy.domain.eligibility import DenialReason, EligibilityResult
from jar_policy.domain.jar import AccessControlType, JarConfig
from jar_policy.domain.membership import (
    MembershipState,
    WithdrawalCooldownState,
    WithdrawalRequest,
)

__all__ = [
    "AccessControlType",
    "Claim",
    "DenialReason",
    "EligibilityResult",
    "JarConfig",
    "MembershipState",
    "WithdrawalCooldownState",
    "WithdrawalRequest",
]
