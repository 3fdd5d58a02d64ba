from __future__ import annotations

from argparse import Namespace

from jar_policy.commands._coercion import coerce_int
from jar_policy.commands.evaluate_withdrawal import build_cooldown, resolve_now
from jar_policy.config import AppSettings
from jar_policy.errors import InvalidSnapshotError
from jar_policy.formatting import format_cooldown_period, format_countdown
from jar_policy.policy.evaluator import time_until_next_withdrawal
from jar_policy.types import CommandResult, CommandStatus


def run_time_until_next_withdrawal(args: Namespace, _: AppSettings) -> CommandResult:
    try:
        cooldown_period = coerce_int(
            getattr(args, "cooldown_period", 0), field_name="cooldown_period"
        )
        cooldown = build_cooldown(args)
        cooldown.ensure_canonical()
        now = resolve_now(args)
    except (InvalidSnapshotError, ValueError) as exc:
        return CommandResult(
            command="time-until-next-withdrawal",
            status=CommandStatus.FAILED,
            details={"error": str(exc)},
        )

    remaining = time_until_next_withdrawal(cooldown, cooldown_period, now)
    return CommandResult(
        command="time-until-next-withdrawal",
        status=CommandStatus.OK,
        details={
            "time_until_next_withdrawal": remaining,
            "countdown": format_countdown(remaining),
            "cooldown_period": format_cooldown_period(cooldown_period),
            "in_cooldown": remaining > 0,
        },
    )
