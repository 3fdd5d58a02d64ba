"""Withdrawal eligibility and administrative authorization decisions."""

from jar_policy.policy.admin_operations import AdminOperation, authorize_operation
from jar_policy.policy.evaluator import (
    PolicyEvaluator,
    effective_withdrawal_cap,
    evaluate_withdrawal,
    time_until_next_withdrawal,
)

__all__ = [
    "AdminOperation",
    "PolicyEvaluator",
    "authorize_operation",
    "effective_withdrawal_cap",
    "evaluate_withdrawal",
    "time_until_next_withdrawal",
]
