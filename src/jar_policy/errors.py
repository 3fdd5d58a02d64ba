from __future__ import annotations


class JarPolicyError(Exception):
    """Base class for errors raised by jar_policy."""


class InvalidSnapshotError(JarPolicyError, ValueError):
    """A snapshot or request violates the caller contract and cannot be evaluated."""


class JarNotFoundError(JarPolicyError, LookupError):
    def __init__(self, jar_id: int) -> None:
        self.jar_id = jar_id
        super().__init__(f"jar not found: {jar_id}")
