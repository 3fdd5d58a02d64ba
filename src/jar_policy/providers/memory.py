from __future__ import annotations

from dataclasses import dataclass, field, replace

from jar_policy.addresses import is_zero_address, normalize_address
from jar_policy.domain.claim import Claim
from jar_policy.domain.jar import JarConfig
from jar_policy.domain.membership import MembershipState, WithdrawalCooldownState
from jar_policy.errors import InvalidSnapshotError, JarNotFoundError
from jar_policy.providers.base import MemberList


@dataclass
class _JarRecord:
    config: JarConfig
    members: dict[MemberList, set[str]] = field(
        default_factory=lambda: {kind: set() for kind in MemberList}
    )
    gating_balances: dict[str, int] = field(default_factory=dict)
    last_withdrawals: dict[str, int] = field(default_factory=dict)
    claims: list[Claim] = field(default_factory=list)


class InMemoryJarStateProvider:
    """Jar state held in process memory, for simulation and tests.

    Mirrors the contract's bookkeeping closely enough to replay a sequence of
    withdrawals. Not thread-safe.
    """

    def __init__(self) -> None:
        self._jars: dict[int, _JarRecord] = {}

    def _record(self, jar_id: int) -> _JarRecord:
        record = self._jars.get(jar_id)
        if record is None:
            raise JarNotFoundError(jar_id)
        return record

    def _active_record(self, jar_id: int) -> _JarRecord:
        record = self._record(jar_id)
        if not record.config.is_active:
            raise InvalidSnapshotError(f"jar {jar_id} is not active")
        return record

    def add_jar(self, jar: JarConfig, *, creator_is_admin: bool = True) -> None:
        jar.ensure_canonical()
        record = _JarRecord(config=jar)
        if creator_is_admin and not is_zero_address(jar.creator):
            record.members[MemberList.ADMIN].add(normalize_address(jar.creator, field_name="creator"))
        self._jars[jar.id] = record

    def add_member(self, jar_id: int, kind: MemberList, address: str) -> bool:
        members = self._record(jar_id).members[kind]
        normalized = normalize_address(address, field_name="address")
        if normalized in members:
            return False
        members.add(normalized)
        return True

    def remove_member(self, jar_id: int, kind: MemberList, address: str) -> bool:
        members = self._record(jar_id).members[kind]
        normalized = normalize_address(address, field_name="address")
        if normalized not in members:
            return False
        members.discard(normalized)
        return True

    def set_gating_balance(self, jar_id: int, address: str, balance: int) -> None:
        if balance < 0:
            raise InvalidSnapshotError("gating balance must be non-negative")
        record = self._record(jar_id)
        record.gating_balances[normalize_address(address, field_name="address")] = balance

    def fund(self, jar_id: int, amount: int) -> JarConfig:
        if amount <= 0:
            raise InvalidSnapshotError("funding amount must be greater than zero")
        record = self._active_record(jar_id)
        record.config = replace(record.config, balance=record.config.balance + amount)
        return record.config

    def deactivate(self, jar_id: int) -> JarConfig:
        record = self._record(jar_id)
        record.config = replace(record.config, is_active=False)
        return record.config

    def record_withdrawal(
        self,
        jar_id: int,
        claimer: str,
        amount: int,
        reason: str,
        timestamp: int,
    ) -> Claim:
        """Apply a withdrawal the contract has accepted.

        No eligibility check is made here; callers evaluate first.
        """
        record = self._active_record(jar_id)
        if amount <= 0:
            raise InvalidSnapshotError("withdrawal amount must be greater than zero")
        if amount > record.config.balance:
            raise InvalidSnapshotError("withdrawal amount exceeds jar balance")

        normalized = normalize_address(claimer, field_name="claimer")
        record.config = replace(record.config, balance=record.config.balance - amount)
        record.last_withdrawals[normalized] = timestamp
        claim = Claim(claimer=normalized, amount=amount, reason=reason, timestamp=timestamp)
        record.claims.append(claim)
        return claim

    def get_jar(self, jar_id: int) -> JarConfig:
        return self._record(jar_id).config

    def get_membership(self, jar_id: int, address: str) -> MembershipState:
        record = self._record(jar_id)
        normalized = normalize_address(address, field_name="address")
        return MembershipState(
            is_whitelisted=normalized in record.members[MemberList.WHITELIST],
            is_blacklisted=normalized in record.members[MemberList.BLACKLIST],
            is_admin=normalized in record.members[MemberList.ADMIN],
            gating_balance=record.gating_balances.get(normalized, 0),
        )

    def get_cooldown(self, jar_id: int, address: str) -> WithdrawalCooldownState:
        record = self._record(jar_id)
        normalized = normalize_address(address, field_name="address")
        return WithdrawalCooldownState(
            last_withdrawal_timestamp=record.last_withdrawals.get(normalized),
        )

    def list_members(self, jar_id: int, kind: MemberList) -> list[str]:
        return sorted(self._record(jar_id).members[kind])

    def list_claims(self, jar_id: int) -> list[Claim]:
        # Newest first, matching the claim history view.
        return list(reversed(self._record(jar_id).claims))
