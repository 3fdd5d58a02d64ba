from __future__ import annotations

import json
from argparse import ArgumentParser, BooleanOptionalAction, Namespace
from collections.abc import Callable, Sequence

from jar_policy.commands import (
    run_authorize_admin_operation,
    run_contract_address,
    run_evaluate_withdrawal,
    run_time_until_next_withdrawal,
)
from jar_policy.config import AppSettings, get_settings
from jar_policy.domain.jar import AccessControlType
from jar_policy.policy.admin_operations import AdminOperation
from jar_policy.types import CommandResult, CommandStatus

CommandHandler = Callable[[Namespace, AppSettings], CommandResult]

COMMAND_HANDLERS: dict[str, CommandHandler] = {
    "evaluate-withdrawal": run_evaluate_withdrawal,
    "time-until-next-withdrawal": run_time_until_next_withdrawal,
    "authorize-admin-operation": run_authorize_admin_operation,
    "contract-address": run_contract_address,
}


def _add_cooldown_arguments(parser: ArgumentParser) -> None:
    parser.add_argument("--cooldown-period", type=int, default=0, help="seconds between withdrawals")
    parser.add_argument("--last-withdrawal", type=int, default=None, help="epoch seconds")
    parser.add_argument("--now", type=int, default=None, help="epoch seconds; defaults to the clock")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="jar-policy", description="Jar withdrawal policy CLI")
    parser.add_argument("--json", action="store_true", help="emit machine-readable JSON output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    evaluate = subparsers.add_parser("evaluate-withdrawal")
    evaluate.add_argument("--jar-id", type=int, default=0)
    evaluate.add_argument(
        "--access-control",
        default=AccessControlType.OPEN.value,
        choices=[kind.value for kind in AccessControlType],
    )
    evaluate.add_argument("--balance", required=True, type=int)
    evaluate.add_argument("--max-withdrawal-amount", type=int, default=None)
    evaluate.add_argument("--active", action=BooleanOptionalAction, default=True)
    evaluate.add_argument("--gating-token-address", default=None)
    evaluate.add_argument("--gating-token-amount", type=int, default=None)
    evaluate.add_argument("--requester", required=True)
    evaluate.add_argument("--amount", required=True)
    evaluate.add_argument("--whitelisted", action=BooleanOptionalAction, default=False)
    evaluate.add_argument("--blacklisted", action=BooleanOptionalAction, default=False)
    evaluate.add_argument("--admin", action=BooleanOptionalAction, default=False)
    evaluate.add_argument("--gating-balance", type=int, default=0)
    _add_cooldown_arguments(evaluate)

    countdown = subparsers.add_parser("time-until-next-withdrawal")
    _add_cooldown_arguments(countdown)

    authorize = subparsers.add_parser("authorize-admin-operation")
    authorize.add_argument("--jar-id", type=int, default=0)
    authorize.add_argument(
        "--operation",
        required=True,
        choices=[operation.value for operation in AdminOperation],
    )
    authorize.add_argument("--admin", action=BooleanOptionalAction, default=False)
    authorize.add_argument("--active", action=BooleanOptionalAction, default=True)

    contract = subparsers.add_parser("contract-address")
    contract.add_argument("--chain-id", type=int, default=None)

    return parser


def _emit_result(result: CommandResult, *, as_json: bool) -> None:
    if as_json:
        print(result.to_json())
        return

    print(f"{result.command}: {result.status.value}")
    if result.details:
        print(json.dumps(result.details, indent=2, sort_keys=True))


def entrypoint(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    settings = get_settings()

    handler = COMMAND_HANDLERS[str(args.command)]
    result = handler(args, settings)
    _emit_result(result, as_json=bool(args.json))
    return 1 if result.status == CommandStatus.FAILED else 0


if __name__ == "__main__":
    raise SystemExit(entrypoint())
