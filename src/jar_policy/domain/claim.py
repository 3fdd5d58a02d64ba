from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from jar_policy.errors import InvalidSnapshotError


@dataclass(slots=True, frozen=True)
class Claim:
    """A recorded withdrawal from a jar."""

    claimer: str
    amount: int
    reason: str
    timestamp: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "claimer": self.claimer,
            "amount": str(self.amount),
            "reason": self.reason,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_contract_claim(cls, claim: Sequence[Any]) -> Claim:
        """Decode a ``getJarClaim`` tuple ``(claimer, amount, reason, timestamp)``."""
        if len(claim) != 4:
            raise InvalidSnapshotError(f"getJarClaim returned {len(claim)} fields, expected 4")
        claimer, amount, reason, timestamp = claim
        return cls(
            claimer=str(claimer),
            amount=int(amount),
            reason=str(reason),
            timestamp=int(timestamp),
        )
