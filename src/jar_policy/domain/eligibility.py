from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class DenialReason(StrEnum):
    NOT_ACTIVE = "NotActive"
    INVALID_AMOUNT = "InvalidAmount"
    BLACKLISTED = "Blacklisted"
    NOT_WHITELISTED = "NotWhitelisted"
    INSUFFICIENT_GATING_BALANCE = "InsufficientGatingBalance"
    IN_COOLDOWN = "InCooldown"
    EXCEEDS_MAX_AMOUNT = "ExceedsMaxAmount"
    EXCEEDS_BALANCE = "ExceedsBalance"


DENIAL_MESSAGES: dict[DenialReason, str] = {
    DenialReason.NOT_ACTIVE: "this jar has been deleted",
    DenialReason.INVALID_AMOUNT: "withdrawal amount must be greater than zero",
    DenialReason.BLACKLISTED: "address is blacklisted for this jar",
    DenialReason.NOT_WHITELISTED: "address is not on this jar's whitelist",
    DenialReason.INSUFFICIENT_GATING_BALANCE: "address does not hold enough of the gating token",
    DenialReason.IN_COOLDOWN: "address must wait for the cooldown period to end",
    DenialReason.EXCEEDS_MAX_AMOUNT: "amount exceeds the jar's maximum withdrawal",
    DenialReason.EXCEEDS_BALANCE: "amount exceeds the jar's current balance",
}


@dataclass(slots=True, frozen=True)
class EligibilityResult:
    allowed: bool
    denial_reason: DenialReason | None = None
    time_until_next_withdrawal: int = 0

    @classmethod
    def allow(cls) -> EligibilityResult:
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenialReason, *, time_until_next_withdrawal: int = 0) -> EligibilityResult:
        return cls(
            allowed=False,
            denial_reason=reason,
            time_until_next_withdrawal=time_until_next_withdrawal,
        )

    @property
    def message(self) -> str | None:
        if self.denial_reason is None:
            return None
        return DENIAL_MESSAGES[self.denial_reason]

    def as_dict(self) -> dict[str, Any]:
        return {
            "allowed": self.allowed,
            "denial_reason": self.denial_reason.value if self.denial_reason else None,
            "message": self.message,
            "time_until_next_withdrawal": self.time_until_next_withdrawal,
        }
