from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from jar_policy.addresses import normalize_address
from jar_policy.errors import InvalidSnapshotError
from jar_policy.types import Amount


@dataclass(slots=True, frozen=True)
class MembershipState:
    is_whitelisted: bool = False
    is_blacklisted: bool = False
    is_admin: bool = False
    gating_balance: int = 0

    def ensure_canonical(self) -> None:
        for field_name in ("is_whitelisted", "is_blacklisted", "is_admin"):
            if not isinstance(getattr(self, field_name), bool):
                raise InvalidSnapshotError(f"{field_name} must be a boolean")
        if isinstance(self.gating_balance, bool) or not isinstance(self.gating_balance, int):
            raise InvalidSnapshotError("gating_balance must be an integer")
        if self.gating_balance < 0:
            raise InvalidSnapshotError("gating_balance must be non-negative")

    def as_dict(self) -> dict[str, Any]:
        return {
            "is_whitelisted": self.is_whitelisted,
            "is_blacklisted": self.is_blacklisted,
            "is_admin": self.is_admin,
            "gating_balance": str(self.gating_balance),
        }


@dataclass(slots=True, frozen=True)
class WithdrawalCooldownState:
    last_withdrawal_timestamp: int | None = None

    def ensure_canonical(self) -> None:
        last = self.last_withdrawal_timestamp
        if last is None:
            return
        if isinstance(last, bool) or not isinstance(last, int):
            raise InvalidSnapshotError("last_withdrawal_timestamp must be an integer")
        if last < 0:
            raise InvalidSnapshotError("last_withdrawal_timestamp must be non-negative")


@dataclass(slots=True, frozen=True)
class WithdrawalRequest:
    amount: Amount
    requester: str

    def ensure_canonical(self) -> None:
        # Range checks (zero, negative, NaN) are business denials, not input errors.
        if isinstance(self.amount, bool) or not isinstance(self.amount, (int, float, Decimal)):
            raise InvalidSnapshotError("amount must be numeric")
        try:
            normalize_address(self.requester, field_name="requester")
        except ValueError as exc:
            raise InvalidSnapshotError(str(exc)) from exc
