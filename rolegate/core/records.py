"""Plain snapshots exchanged with the data-access layer."""

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from rolegate.core.specials import Special


def normalize_slug(slug: str) -> str:
    return slug.strip().lower()


def normalize_scope(on: Any) -> Optional[str]:
    """Scopes are compared as strings; `None` means global."""
    if on is None:
        return None
    return str(on)


@dataclass(frozen=True)
class RoleRecord:
    id: int
    slug: str
    special: Special = Special.NONE


@dataclass(frozen=True)
class PermissionRecord:
    id: int
    slug: str


@dataclass(frozen=True)
class RoleAssignment:
    """A (role, scope) edge as read from the store."""

    role: RoleRecord
    scope: Optional[str] = None
    role_type: Optional[str] = None


@dataclass(frozen=True)
class PermissionAssignment:
    permission: PermissionRecord
    scope: Optional[str] = None


@dataclass(frozen=True)
class SyncResult:
    attached: Tuple[int, ...] = field(default_factory=tuple)
    detached: Tuple[int, ...] = field(default_factory=tuple)

    @property
    def changed(self) -> bool:
        return bool(self.attached or self.detached)
