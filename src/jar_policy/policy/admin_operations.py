"""Authorization for jar management operations.

Admin status is the only bypass of ordinary membership checks, and it
applies to the operations below, never to withdrawal eligibility.
"""
from __future__ import annotations

from enum import StrEnum

from jar_policy.domain.jar import JarConfig
from jar_policy.domain.membership import MembershipState


class AdminOperation(StrEnum):
    FUND_JAR = "fund_jar"
    UPDATE_PARAMETERS = "update_parameters"
    EMERGENCY_WITHDRAW = "emergency_withdraw"
    DELETE_JAR = "delete_jar"
    ADD_TO_WHITELIST = "add_to_whitelist"
    REMOVE_FROM_WHITELIST = "remove_from_whitelist"
    ADD_TO_BLACKLIST = "add_to_blacklist"
    REMOVE_FROM_BLACKLIST = "remove_from_blacklist"
    ADD_ADMIN = "add_admin"
    REMOVE_ADMIN = "remove_admin"


PUBLIC_OPERATIONS: frozenset[AdminOperation] = frozenset({
    AdminOperation.FUND_JAR,
})


ADMIN_ONLY_OPERATIONS: frozenset[AdminOperation] = frozenset(
    operation for operation in AdminOperation if operation not in PUBLIC_OPERATIONS
)


def authorize_operation(
    jar: JarConfig,
    membership: MembershipState,
    operation: AdminOperation,
) -> tuple[bool, str | None]:
    """Return (True, None) if permitted, or (False, error_message) if rejected."""
    if not jar.is_active:
        return False, f"jar {jar.id} is not active"

    if operation in PUBLIC_OPERATIONS:
        return True, None

    if operation in ADMIN_ONLY_OPERATIONS:
        if not membership.is_admin:
            return False, f"authorization denied: {operation.value} requires jar admin"
        return True, None

    return False, f"unknown operation: {operation}"


def requires_admin(operation: AdminOperation) -> bool:
    return operation in ADMIN_ONLY_OPERATIONS
