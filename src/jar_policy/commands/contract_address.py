from __future__ import annotations

from argparse import Namespace

from jar_policy.chains import get_contract_address, native_token_symbol, supported_chain_ids
from jar_policy.commands._coercion import coerce_int
from jar_policy.config import AppSettings
from jar_policy.types import CommandResult, CommandStatus


def run_contract_address(args: Namespace, settings: AppSettings) -> CommandResult:
    raw_chain_id = getattr(args, "chain_id", None)
    try:
        chain_id = (
            settings.default_chain_id
            if raw_chain_id is None
            else coerce_int(raw_chain_id, field_name="chain_id")
        )
    except ValueError as exc:
        return CommandResult(
            command="contract-address",
            status=CommandStatus.FAILED,
            details={"error": str(exc)},
        )

    contract_address = get_contract_address(chain_id)
    if contract_address is None:
        return CommandResult(
            command="contract-address",
            status=CommandStatus.FAILED,
            details={
                "error": f"contract not deployed on chain {chain_id}",
                "supported_chain_ids": supported_chain_ids(),
            },
        )

    return CommandResult(
        command="contract-address",
        status=CommandStatus.OK,
        details={
            "chain_id": chain_id,
            "contract_address": contract_address,
            "native_token_symbol": native_token_symbol(chain_id),
        },
    )
