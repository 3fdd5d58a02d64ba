from __future__ import annotations

from argparse import Namespace

from jar_policy.addresses import normalize_address
from jar_policy.commands._coercion import (
    coerce_amount,
    coerce_bool,
    coerce_int,
    coerce_optional_int,
)
from jar_policy.config import AppSettings
from jar_policy.domain.jar import AccessControlType, JarConfig
from jar_policy.domain.membership import (
    MembershipState,
    WithdrawalCooldownState,
    WithdrawalRequest,
)
from jar_policy.errors import InvalidSnapshotError
from jar_policy.formatting import format_countdown
from jar_policy.policy.evaluator import PolicyEvaluator, effective_withdrawal_cap
from jar_policy.service import current_timestamp
from jar_policy.types import CommandResult, CommandStatus


def _failed(error: str) -> CommandResult:
    return CommandResult(
        command="evaluate-withdrawal",
        status=CommandStatus.FAILED,
        details={"error": error},
    )


def build_jar_config(args: Namespace, settings: AppSettings) -> JarConfig:
    raw_access = str(getattr(args, "access_control", AccessControlType.OPEN.value)).strip()
    try:
        access_control_type = AccessControlType(raw_access)
    except ValueError as exc:
        choices = ", ".join(kind.value for kind in AccessControlType)
        raise ValueError(f"access_control must be one of: {choices}") from exc

    gating_token_address = getattr(args, "gating_token_address", None) or None
    if gating_token_address is not None:
        gating_token_address = normalize_address(
            str(gating_token_address), field_name="gating_token_address"
        )

    jar = JarConfig(
        id=coerce_int(getattr(args, "jar_id", 0), field_name="jar_id"),
        access_control_type=access_control_type,
        balance=coerce_int(getattr(args, "balance", None), field_name="balance"),
        cooldown_period=coerce_int(getattr(args, "cooldown_period", 0), field_name="cooldown_period"),
        max_withdrawal_amount=coerce_optional_int(
            getattr(args, "max_withdrawal_amount", None), field_name="max_withdrawal_amount"
        ),
        is_active=coerce_bool(getattr(args, "active", True), field_name="active"),
        gating_token_address=gating_token_address,
        gating_token_amount=coerce_optional_int(
            getattr(args, "gating_token_amount", None), field_name="gating_token_amount"
        ),
        chain_id=settings.default_chain_id,
    )
    jar.ensure_canonical()
    return jar


def build_membership(args: Namespace) -> MembershipState:
    return MembershipState(
        is_whitelisted=coerce_bool(getattr(args, "whitelisted", False), field_name="whitelisted"),
        is_blacklisted=coerce_bool(getattr(args, "blacklisted", False), field_name="blacklisted"),
        is_admin=coerce_bool(getattr(args, "admin", False), field_name="admin"),
        gating_balance=coerce_int(getattr(args, "gating_balance", 0), field_name="gating_balance"),
    )


def build_cooldown(args: Namespace) -> WithdrawalCooldownState:
    return WithdrawalCooldownState(
        last_withdrawal_timestamp=coerce_optional_int(
            getattr(args, "last_withdrawal", None), field_name="last_withdrawal"
        ),
    )


def resolve_now(args: Namespace) -> int:
    raw_now = getattr(args, "now", None)
    if raw_now is None:
        return current_timestamp()
    return coerce_int(raw_now, field_name="now")


def run_evaluate_withdrawal(args: Namespace, settings: AppSettings) -> CommandResult:
    try:
        requester = normalize_address(str(getattr(args, "requester", "")), field_name="requester")
        jar = build_jar_config(args, settings)
        membership = build_membership(args)
        cooldown = build_cooldown(args)
        request = WithdrawalRequest(amount=coerce_amount(getattr(args, "amount", None)), requester=requester)
        now = resolve_now(args)
        result = PolicyEvaluator().evaluate(jar, membership, cooldown, request, now)
    except (InvalidSnapshotError, ValueError) as exc:
        return _failed(str(exc))

    return CommandResult(
        command="evaluate-withdrawal",
        status=CommandStatus.ALLOWED if result.allowed else CommandStatus.DENIED,
        details={
            **result.as_dict(),
            "jar_id": jar.id,
            "requester": requester,
            "amount": str(request.amount),
            "max_withdrawal": str(effective_withdrawal_cap(jar)),
            "countdown": format_countdown(result.time_until_next_withdrawal),
        },
    )
