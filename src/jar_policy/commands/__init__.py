"""Command handlers for the jar-policy CLI."""

from jar_policy.commands.authorize_admin_operation import run_authorize_admin_operation
from jar_policy.commands.contract_address import run_contract_address
from jar_policy.commands.evaluate_withdrawal import run_evaluate_withdrawal
from jar_policy.commands.time_until_next_withdrawal import run_time_until_next_withdrawal

__all__ = [
    "run_authorize_admin_operation",
    "run_contract_address",
    "run_evaluate_withdrawal",
    "run_time_until_next_withdrawal",
]
