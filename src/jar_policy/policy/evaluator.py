"""Client-side mirror of the jar contract's withdrawal checks.

Checks run in a fixed order and the first failure wins, so the reported
denial reason is deterministic:

1. jar is active
2. amount is finite and positive
3. requester is not blacklisted (applies to every access-control mode)
4. access-control mode (whitelist membership or gating balance)
5. cooldown has elapsed
6. amount is within the withdrawal cap and the current balance

The verdict can be stale by the time a transaction is mined; the contract
re-validates and has the final say.
"""
from __future__ import annotations

import math
from decimal import Decimal

from jar_policy.domain.eligibility import DenialReason, EligibilityResult
from jar_policy.domain.jar import AccessControlType, JarConfig
from jar_policy.domain.membership import (
    MembershipState,
    WithdrawalCooldownState,
    WithdrawalRequest,
)
from jar_policy.errors import InvalidSnapshotError
from jar_policy.types import Amount


def time_until_next_withdrawal(
    cooldown: WithdrawalCooldownState,
    cooldown_period: int,
    now: int,
) -> int:
    last = cooldown.last_withdrawal_timestamp
    if last is None:
        return 0
    return max(0, last + cooldown_period - now)


def withdrawal_cap(jar: JarConfig) -> int:
    """The configured per-withdrawal cap, falling back to the balance when unset or zero."""
    if jar.max_withdrawal_amount:
        return jar.max_withdrawal_amount
    return jar.balance


def effective_withdrawal_cap(jar: JarConfig) -> int:
    """The largest amount a single withdrawal can currently take out."""
    return min(withdrawal_cap(jar), jar.balance)


def _is_valid_amount(amount: Amount) -> bool:
    if isinstance(amount, int):
        return amount > 0
    if isinstance(amount, Decimal):
        return amount.is_finite() and amount > 0
    return math.isfinite(amount) and amount > 0


def _check_access(jar: JarConfig, membership: MembershipState) -> DenialReason | None:
    if membership.is_blacklisted:
        return DenialReason.BLACKLISTED

    if jar.access_control_type == AccessControlType.OPEN:
        return None

    if jar.access_control_type == AccessControlType.WHITELIST:
        if not membership.is_whitelisted:
            return DenialReason.NOT_WHITELISTED
        return None

    if jar.gating_token_amount is None:
        raise InvalidSnapshotError(
            f"gating_token_amount is required for {jar.access_control_type.value} jars"
        )
    if membership.gating_balance < jar.gating_token_amount:
        return DenialReason.INSUFFICIENT_GATING_BALANCE
    return None


def evaluate_withdrawal(
    jar: JarConfig,
    membership: MembershipState,
    cooldown: WithdrawalCooldownState,
    request: WithdrawalRequest,
    now: int,
) -> EligibilityResult:
    if not jar.is_active:
        return EligibilityResult.deny(DenialReason.NOT_ACTIVE)

    if not _is_valid_amount(request.amount):
        return EligibilityResult.deny(DenialReason.INVALID_AMOUNT)

    access_denial = _check_access(jar, membership)
    if access_denial is not None:
        return EligibilityResult.deny(access_denial)

    remaining = time_until_next_withdrawal(cooldown, jar.cooldown_period, now)
    if remaining > 0:
        return EligibilityResult.deny(
            DenialReason.IN_COOLDOWN,
            time_until_next_withdrawal=remaining,
        )

    if request.amount > withdrawal_cap(jar):
        return EligibilityResult.deny(DenialReason.EXCEEDS_MAX_AMOUNT)

    if request.amount > jar.balance:
        return EligibilityResult.deny(DenialReason.EXCEEDS_BALANCE)

    return EligibilityResult.allow()


class PolicyEvaluator:
    """Validates snapshots against the caller contract, then evaluates them.

    Malformed snapshots raise ``InvalidSnapshotError``; business denials are
    returned as ``EligibilityResult`` values.
    """

    def evaluate(
        self,
        jar: JarConfig,
        membership: MembershipState,
        cooldown: WithdrawalCooldownState,
        request: WithdrawalRequest,
        now: int,
    ) -> EligibilityResult:
        jar.ensure_canonical()
        membership.ensure_canonical()
        cooldown.ensure_canonical()
        request.ensure_canonical()
        return evaluate_withdrawal(jar, membership, cooldown, request, now)

    def time_until_next_withdrawal(
        self,
        jar: JarConfig,
        cooldown: WithdrawalCooldownState,
        now: int,
    ) -> int:
        cooldown.ensure_canonical()
        return time_until_next_withdrawal(cooldown, jar.cooldown_period, now)
