from __future__ import annotations

from argparse import Namespace

from jar_policy.commands._coercion import coerce_bool, coerce_int
from jar_policy.config import AppSettings
from jar_policy.domain.jar import AccessControlType, JarConfig
from jar_policy.domain.membership import MembershipState
from jar_policy.policy.admin_operations import AdminOperation, authorize_operation, requires_admin
from jar_policy.types import CommandResult, CommandStatus


def _coerce_operation(raw_operation: str) -> AdminOperation | None:
    try:
        return AdminOperation(raw_operation)
    except ValueError:
        return None


def run_authorize_admin_operation(args: Namespace, _: AppSettings) -> CommandResult:
    operation = _coerce_operation(str(getattr(args, "operation", "")).strip())
    if operation is None:
        return CommandResult(
            command="authorize-admin-operation",
            status=CommandStatus.FAILED,
            details={"error": "operation must be a known jar operation"},
        )

    try:
        jar_id = coerce_int(getattr(args, "jar_id", 0), field_name="jar_id")
        is_active = coerce_bool(getattr(args, "active", True), field_name="active")
        is_admin = coerce_bool(getattr(args, "admin", False), field_name="admin")
    except ValueError as exc:
        return CommandResult(
            command="authorize-admin-operation",
            status=CommandStatus.FAILED,
            details={"error": str(exc)},
        )

    # Only activity and admin status take part in this decision.
    jar = JarConfig(
        id=jar_id,
        access_control_type=AccessControlType.OPEN,
        balance=0,
        is_active=is_active,
    )
    allowed, error = authorize_operation(jar, MembershipState(is_admin=is_admin), operation)
    return CommandResult(
        command="authorize-admin-operation",
        status=CommandStatus.ALLOWED if allowed else CommandStatus.DENIED,
        details={
            "jar_id": jar_id,
            "operation": operation.value,
            "requires_admin": requires_admin(operation),
            "error": error,
        },
    )
