import logging
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set

from rolegate.core.principal import PermissionGrant, PrincipalEvaluator, RoleGrant
from rolegate.core.records import SyncResult, normalize_scope
from rolegate.core.roles import RoleEvaluator
from rolegate.core.store import AuthorizationStore

logger = logging.getLogger("rolegate.access")


async def load_principal(store: AuthorizationStore, principal_id: Any) -> PrincipalEvaluator:
    """Fetch everything a decision needs for `principal_id` and build the snapshot."""
    assignments = await store.fetch_roles_of(principal_id)

    permissions_by_role: Dict[Any, FrozenSet[str]] = {}
    roles = []
    for assignment in assignments:
        role_id = assignment.role.id
        if role_id not in permissions_by_role:
            permissions_by_role[role_id] = await store.fetch_permissions_of(role_id)
        roles.append(RoleGrant(role=RoleEvaluator(assignment.role, permissions_by_role[role_id]), scope=assignment.scope))

    direct = [
        PermissionGrant(permission=assignment.permission, scope=assignment.scope)
        for assignment in await store.fetch_direct_permissions_of(principal_id)
    ]

    return PrincipalEvaluator(principal_id, roles=roles, permissions=direct)


class PrincipalAccess:
    """Role and permission management for one principal.

    Every decision method loads a fresh snapshot; call `snapshot()` directly
    to run several checks against the same data.
    """

    def __init__(self, store: AuthorizationStore, principal_id: Any):
        self.store = store
        self.principal_id = principal_id

    async def snapshot(self) -> PrincipalEvaluator:
        return await load_principal(self.store, self.principal_id)

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    async def has_role(self, slug: str, on: Any = None) -> bool:
        return (await self.snapshot()).has_role(slug, on)

    async def authorize(self, permission: str, on: Any = None) -> bool:
        allowed = (await self.snapshot()).authorize(permission, on)
        logger.debug(f"authorize user={self.principal_id} permission={permission} on={on} -> {allowed}")
        return allowed

    async def is_allowed(self, permission: str) -> bool:
        return (await self.snapshot()).is_allowed(permission)

    async def at_least_one_of(self, permissions: Iterable[str], on: Any = None) -> bool:
        return (await self.snapshot()).at_least_one_of(permissions, on)

    async def check(self, predicate: str, *args: Any) -> bool:
        return (await self.snapshot()).check(predicate, *args)

    async def role_slugs(self) -> List[str]:
        return (await self.snapshot()).role_slugs()

    async def permission_slugs(self) -> Set[str]:
        return (await self.snapshot()).all_granted_permission_slugs()

    # ------------------------------------------------------------------
    # Role assignments
    # ------------------------------------------------------------------

    async def assign_role(self, role_id: Any, on: Any = None, role_type: Optional[str] = None) -> bool:
        """Attach `role_id` under scope `on`. Returns False if that exact pair is already held."""
        on = normalize_scope(on)

        for assignment in await self.store.fetch_roles_of(self.principal_id):
            if assignment.role.id == role_id and assignment.scope == on:
                logger.debug(f"User {self.principal_id} already holds role {role_id} on {on!r}")
                return False

        written = await self.store.write_role_assignment(self.principal_id, role_id, on, role_type)
        logger.info(f"Assigned role {role_id} to user {self.principal_id} (on={on!r})")
        return written

    async def revoke_role(self, role_id: Any, on: Any = None) -> int:
        """Detach `role_id`; without `on`, every scoped and unscoped assignment goes."""
        removed = await self.store.delete_role_assignment(self.principal_id, role_id, normalize_scope(on))
        logger.info(f"Revoked role {role_id} from user {self.principal_id} (on={on!r}, removed={removed})")
        return removed

    async def sync_roles(self, role_ids: Iterable[Any]) -> SyncResult:
        result = await self.store.replace_role_assignments(self.principal_id, role_ids)
        if result.changed:
            logger.info(
                f"Synced roles for user {self.principal_id}: attached={list(result.attached)} "
                f"detached={list(result.detached)}"
            )
        return result

    async def revoke_all_roles(self) -> int:
        removed = await self.store.delete_all_role_assignments(self.principal_id)
        logger.info(f"Revoked all roles from user {self.principal_id} (removed={removed})")
        return removed

    # ------------------------------------------------------------------
    # Direct permissions
    # ------------------------------------------------------------------

    async def assign_permission(self, permission_id: Any, on: Any = None) -> bool:
        on = normalize_scope(on)

        for assignment in await self.store.fetch_direct_permissions_of(self.principal_id):
            if assignment.permission.id == permission_id and assignment.scope == on:
                logger.debug(f"User {self.principal_id} already holds permission {permission_id} on {on!r}")
                return False

        written = await self.store.write_permission_assignment(self.principal_id, permission_id, on)
        logger.info(f"Assigned permission {permission_id} to user {self.principal_id} (on={on!r})")
        return written

    async def revoke_permission(self, permission_id: Any, on: Any = None) -> int:
        removed = await self.store.delete_permission_assignment(self.principal_id, permission_id, normalize_scope(on))
        logger.info(f"Revoked permission {permission_id} from user {self.principal_id} (on={on!r}, removed={removed})")
        return removed
