from __future__ import annotations

from enum import StrEnum
from typing import Protocol

from jar_policy.domain.claim import Claim
from jar_policy.domain.jar import JarConfig
from jar_policy.domain.membership import MembershipState, WithdrawalCooldownState


class MemberList(StrEnum):
    WHITELIST = "whitelist"
    BLACKLIST = "blacklist"
    ADMIN = "admin"


class JarStateProvider(Protocol):
    """Read interface that yields fresh snapshots for a jar and an address.

    Implementations raise ``JarNotFoundError`` for unknown jars.
    """

    def get_jar(self, jar_id: int) -> JarConfig:
        ...

    def get_membership(self, jar_id: int, address: str) -> MembershipState:
        ...

    def get_cooldown(self, jar_id: int, address: str) -> WithdrawalCooldownState:
        ...

    def list_members(self, jar_id: int, kind: MemberList) -> list[str]:
        ...

    def list_claims(self, jar_id: int) -> list[Claim]:
        ...
