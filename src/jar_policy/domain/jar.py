from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from jar_policy.addresses import ZERO_ADDRESS, normalize_address
from jar_policy.errors import InvalidSnapshotError


class AccessControlType(StrEnum):
    OPEN = "Open"
    WHITELIST = "Whitelist"
    ERC20_GATED = "ERC20Gated"
    NFT_GATED = "NFTGated"

    @classmethod
    def from_index(cls, index: int) -> AccessControlType:
        """Decode the contract's uint8 encoding (declaration order)."""
        members = list(cls)
        if isinstance(index, bool) or not 0 <= index < len(members):
            raise InvalidSnapshotError(f"unknown access control index: {index!r}")
        return members[index]

    @property
    def is_gated(self) -> bool:
        return self in GATED_ACCESS_TYPES


GATED_ACCESS_TYPES: frozenset[AccessControlType] = frozenset(
    {
        AccessControlType.ERC20_GATED,
        AccessControlType.NFT_GATED,
    }
)


def _require_non_negative_int(value: object, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidSnapshotError(f"{field_name} must be an integer")
    if value < 0:
        raise InvalidSnapshotError(f"{field_name} must be non-negative")


@dataclass(slots=True, frozen=True)
class JarConfig:
    """Snapshot of a jar's on-chain configuration at evaluation time.

    Amounts are in the jar token's base units (wei for the native token).
    A ``max_withdrawal_amount`` of ``None`` or ``0`` means no per-withdrawal
    limit beyond the current balance.
    """

    id: int
    access_control_type: AccessControlType
    balance: int
    cooldown_period: int = 0
    max_withdrawal_amount: int | None = None
    is_active: bool = True
    gating_token_address: str | None = None
    gating_token_amount: int | None = None
    title: str = ""
    description: str = ""
    creator: str = ZERO_ADDRESS
    token_address: str = ZERO_ADDRESS
    chain_id: int | None = None

    @property
    def has_withdrawal_limit(self) -> bool:
        return bool(self.max_withdrawal_amount)

    def ensure_canonical(self) -> None:
        _require_non_negative_int(self.id, "id")
        _require_non_negative_int(self.balance, "balance")
        _require_non_negative_int(self.cooldown_period, "cooldown_period")
        if self.max_withdrawal_amount is not None:
            _require_non_negative_int(self.max_withdrawal_amount, "max_withdrawal_amount")
        if not isinstance(self.access_control_type, AccessControlType):
            raise InvalidSnapshotError("access_control_type must be an AccessControlType")
        if not isinstance(self.is_active, bool):
            raise InvalidSnapshotError("is_active must be a boolean")
        for field_name in ("title", "description"):
            if not isinstance(getattr(self, field_name), str):
                raise InvalidSnapshotError(f"{field_name} must be a string")

        if self.access_control_type.is_gated:
            if self.gating_token_amount is None:
                raise InvalidSnapshotError(
                    f"gating_token_amount is required for {self.access_control_type.value} jars"
                )
            _require_non_negative_int(self.gating_token_amount, "gating_token_amount")
            if not self.gating_token_address:
                raise InvalidSnapshotError(
                    f"gating_token_address is required for {self.access_control_type.value} jars"
                )

        for field_name in ("creator", "token_address", "gating_token_address"):
            raw = getattr(self, field_name)
            if raw is None:
                continue
            try:
                normalize_address(raw, field_name=field_name)
            except ValueError as exc:
                raise InvalidSnapshotError(str(exc)) from exc

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "creator": self.creator,
            "token_address": self.token_address,
            "chain_id": self.chain_id,
            "access_control_type": self.access_control_type.value,
            "balance": str(self.balance),
            "max_withdrawal_amount": (
                str(self.max_withdrawal_amount) if self.has_withdrawal_limit else None
            ),
            "cooldown_period": self.cooldown_period,
            "is_active": self.is_active,
            "gating_token_address": self.gating_token_address,
            "gating_token_amount": (
                str(self.gating_token_amount) if self.gating_token_amount is not None else None
            ),
        }

    @classmethod
    def from_contract_details(
        cls,
        jar_id: int,
        details: Sequence[Any],
        *,
        chain_id: int | None = None,
        gating_token_address: str | None = None,
        gating_token_amount: int | None = None,
    ) -> JarConfig:
        """Build a snapshot from the contract's ``getJarDetails`` return tuple.

        The tuple is ``(title, description, creator, tokenAddress, balance,
        maxWithdrawalAmount, cooldownPeriod, isActive, accessControlType)``.
        Gating parameters are not part of that read and are passed separately.
        """
        if len(details) != 9:
            raise InvalidSnapshotError(
                f"getJarDetails returned {len(details)} fields, expected 9"
            )
        (
            title,
            description,
            creator,
            token_address,
            balance,
            max_withdrawal_amount,
            cooldown_period,
            is_active,
            access_control_index,
        ) = details

        jar = cls(
            id=jar_id,
            access_control_type=AccessControlType.from_index(int(access_control_index)),
            balance=int(balance),
            cooldown_period=int(cooldown_period),
            max_withdrawal_amount=int(max_withdrawal_amount) or None,
            is_active=bool(is_active),
            gating_token_address=gating_token_address,
            gating_token_amount=gating_token_amount,
            title=str(title),
            description=str(description),
            creator=str(creator),
            token_address=str(token_address),
            chain_id=chain_id,
        )
        jar.ensure_canonical()
        return jar
