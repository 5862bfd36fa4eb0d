"""
Authorization decisions for a single principal.

A PrincipalEvaluator is built once per decision from data already fetched by
the store (see rolegate.core.access.load_principal) and answers every query as
a pure read over that snapshot.

Special roles are resolved before any permission matching:
  - a `no-access` role anywhere in the set denies, whatever else is assigned
  - otherwise an `all-access` role anywhere in the set allows
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Set

from rolegate.core.predicates import dispatch
from rolegate.core.records import PermissionRecord, normalize_scope, normalize_slug
from rolegate.core.roles import RoleEvaluator
from rolegate.core.specials import Special

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleGrant:
    role: RoleEvaluator
    scope: Optional[str] = None


@dataclass(frozen=True)
class PermissionGrant:
    permission: PermissionRecord
    scope: Optional[str] = None


class PrincipalEvaluator:
    def __init__(
        self,
        principal_id: Any,
        roles: Sequence[RoleGrant] = (),
        permissions: Sequence[PermissionGrant] = (),
    ):
        self.principal_id = principal_id
        self.roles = tuple(roles)
        self.permissions = tuple(permissions)

    # ------------------------------------------------------------------
    # Role queries
    # ------------------------------------------------------------------

    def role_slugs(self) -> List[str]:
        return [grant.role.slug for grant in self.roles]

    def has_role(self, slug: str, on: Any = None) -> bool:
        """True if a role with `slug` is assigned; with `on`, only under that scope."""
        slug = normalize_slug(slug)
        on = normalize_scope(on)

        for grant in self.roles:
            if normalize_slug(grant.role.slug) != slug:
                continue
            if on is None or grant.scope == on:
                return True
        return False

    # ------------------------------------------------------------------
    # Permission queries
    # ------------------------------------------------------------------

    def all_granted_permission_slugs(self) -> Set[str]:
        """Every slug granted by any role plus every direct permission (listing only)."""
        slugs: Set[str] = set()
        for grant in self.roles:
            slugs.update(grant.role.permission_slugs)
        slugs.update(normalize_slug(grant.permission.slug) for grant in self.permissions)
        return slugs

    def _special_verdict(self) -> Optional[bool]:
        kinds = {grant.role.special_kind for grant in self.roles}
        if Special.NO_ACCESS in kinds:
            return False
        if Special.ALL_ACCESS in kinds:
            return True
        return None

    def authorize(self, permission: str, on: Any = None) -> bool:
        """Scoped decision.

        Role grants count only when the assignment scope equals `on` (both
        NULL for a global check). A `level-access` role allows anything under
        its own scope. Direct permissions count for any scope when `on` is
        None, otherwise only under the exact scope.
        """
        permission = normalize_slug(permission)
        on = normalize_scope(on)

        verdict = self._special_verdict()
        if verdict is not None:
            logger.debug(f"Principal {self.principal_id}: special role decides '{permission}' -> {verdict}")
            return verdict

        for grant in self.roles:
            if grant.role.special_kind is Special.LEVEL_ACCESS and on is not None and grant.scope == on:
                return True
            if grant.role.grants(permission) and grant.scope == on:
                return True

        for grant in self.permissions:
            if normalize_slug(grant.permission.slug) != permission:
                continue
            if on is None or grant.scope == on:
                return True

        return False

    def is_allowed(self, permission: str) -> bool:
        """Unscoped decision: any role or direct grant counts, whatever its scope."""
        permission = normalize_slug(permission)

        verdict = self._special_verdict()
        if verdict is not None:
            return verdict

        if any(grant.role.grants(permission) for grant in self.roles):
            return True
        return any(normalize_slug(grant.permission.slug) == permission for grant in self.permissions)

    def at_least_one_of(self, permissions: Iterable[str], on: Any = None) -> bool:
        return any(self.authorize(permission, on) for permission in permissions)

    def is_allowed_any(self, permissions: Iterable[str]) -> bool:
        return any(self.is_allowed(permission) for permission in permissions)

    # ------------------------------------------------------------------
    # Dynamic predicates
    # ------------------------------------------------------------------

    def check(self, predicate: str, *args: Any) -> bool:
        """Evaluate a named predicate, e.g. check("can_edit_post_on", "doc:42")."""
        return dispatch(self, predicate, *args)

    def __repr__(self):
        return f"PrincipalEvaluator(principal_id={self.principal_id!r}, roles={self.role_slugs()!r})"
