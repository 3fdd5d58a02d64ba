"""Sources of jar state snapshots."""

from jar_policy.providers.base import JarStateProvider, MemberList
from jar_policy.providers.memory import InMemoryJarStateProvider

__all__ = [
    "InMemoryJarStateProvider",
    "JarStateProvider",
    "MemberList",
]
