from __future__ import annotations

import time
from dataclasses import dataclass, field

from jar_policy.addresses import normalize_address
from jar_policy.domain.eligibility import EligibilityResult
from jar_policy.domain.membership import WithdrawalRequest
from jar_policy.errors import InvalidSnapshotError
from jar_policy.observability.logging import get_logger
from jar_policy.policy.admin_operations import AdminOperation, authorize_operation
from jar_policy.policy.evaluator import PolicyEvaluator
from jar_policy.providers.base import JarStateProvider
from jar_policy.types import Amount


def current_timestamp() -> int:
    return int(time.time())


@dataclass(slots=True)
class EligibilityService:
    """Fetches a fresh snapshot from a provider and decides on it."""

    provider: JarStateProvider
    evaluator: PolicyEvaluator = field(default_factory=PolicyEvaluator)

    def _normalize(self, address: str, field_name: str) -> str:
        try:
            return normalize_address(address, field_name=field_name)
        except ValueError as exc:
            raise InvalidSnapshotError(str(exc)) from exc

    def check_withdrawal(
        self,
        jar_id: int,
        requester: str,
        amount: Amount,
        now: int | None = None,
    ) -> EligibilityResult:
        requester = self._normalize(requester, "requester")
        timestamp = current_timestamp() if now is None else now

        jar = self.provider.get_jar(jar_id)
        membership = self.provider.get_membership(jar_id, requester)
        cooldown = self.provider.get_cooldown(jar_id, requester)
        request = WithdrawalRequest(amount=amount, requester=requester)

        result = self.evaluator.evaluate(jar, membership, cooldown, request, timestamp)
        get_logger("eligibility").info(
            "withdrawal_evaluated",
            jar_id=jar_id,
            requester=requester,
            amount=str(amount),
            allowed=result.allowed,
            denial_reason=result.denial_reason.value if result.denial_reason else None,
            time_until_next_withdrawal=result.time_until_next_withdrawal,
        )
        return result

    def time_until_next_withdrawal(
        self,
        jar_id: int,
        requester: str,
        now: int | None = None,
    ) -> int:
        requester = self._normalize(requester, "requester")
        timestamp = current_timestamp() if now is None else now
        jar = self.provider.get_jar(jar_id)
        cooldown = self.provider.get_cooldown(jar_id, requester)
        return self.evaluator.time_until_next_withdrawal(jar, cooldown, timestamp)

    def authorize(
        self,
        jar_id: int,
        address: str,
        operation: AdminOperation,
    ) -> tuple[bool, str | None]:
        address = self._normalize(address, "address")
        jar = self.provider.get_jar(jar_id)
        membership = self.provider.get_membership(jar_id, address)
        allowed, error = authorize_operation(jar, membership, operation)
        get_logger("eligibility").info(
            "operation_authorized" if allowed else "operation_rejected",
            jar_id=jar_id,
            address=address,
            operation=operation.value,
            error=error,
        )
        return allowed, error
