"""
Data access for role and permission assignments.

`AuthorizationStore` is the narrow interface the evaluators are built from.
`SQLAuthorizationStore` implements it over the SQLModel tables in
rolegate.models. Database errors are not caught here; they propagate to the
caller.
"""

import logging
from typing import Any, FrozenSet, Iterable, List, Optional, Protocol, Union

from sqlalchemy import delete
from sqlmodel import select

from rolegate.core.records import (
    PermissionAssignment,
    PermissionRecord,
    RoleAssignment,
    RoleRecord,
    SyncResult,
    normalize_scope,
    normalize_slug,
)
from rolegate.core.specials import Special
from rolegate.models import Permission, PermissionRole, PermissionUser, Role, RoleUser, User

logger = logging.getLogger(__name__)


class AuthorizationStore(Protocol):
    async def fetch_roles_of(self, principal_id: Any) -> List[RoleAssignment]: ...

    async def fetch_direct_permissions_of(self, principal_id: Any) -> List[PermissionAssignment]: ...

    async def fetch_permissions_of(self, role_id: Any) -> FrozenSet[str]: ...

    async def write_role_assignment(
        self, principal_id: Any, role_id: Any, scope: Optional[str] = None, role_type: Optional[str] = None
    ) -> bool: ...

    async def delete_role_assignment(self, principal_id: Any, role_id: Any, scope: Optional[str] = None) -> int: ...

    async def delete_all_role_assignments(self, principal_id: Any) -> int: ...

    async def replace_role_assignments(self, principal_id: Any, role_ids: Iterable[Any]) -> SyncResult: ...

    async def write_permission_assignment(
        self, principal_id: Any, permission_id: Any, scope: Optional[str] = None
    ) -> bool: ...

    async def delete_permission_assignment(
        self, principal_id: Any, permission_id: Any, scope: Optional[str] = None
    ) -> int: ...


def _role_record(role: Role) -> RoleRecord:
    return RoleRecord(id=role.id, slug=normalize_slug(role.slug), special=Special.parse(role.special))


class SQLAuthorizationStore:
    def __init__(self, session_factory=None):
        if session_factory is None:
            from rolegate.core.db import AsyncSessionLocal

            session_factory = AsyncSessionLocal
        self._session_factory = session_factory

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def fetch_roles_of(self, principal_id: Any) -> List[RoleAssignment]:
        """Assigned roles in assignment order."""
        async with self._session_factory() as session:
            stmt = (
                select(Role, RoleUser.role_on, RoleUser.role_type)
                .join(RoleUser, RoleUser.role_id == Role.id)
                .where(RoleUser.user_id == principal_id)
                .order_by(RoleUser.id)
            )
            result = await session.execute(stmt)
            return [
                RoleAssignment(role=_role_record(role), scope=role_on, role_type=role_type)
                for role, role_on, role_type in result.all()
            ]

    async def fetch_direct_permissions_of(self, principal_id: Any) -> List[PermissionAssignment]:
        async with self._session_factory() as session:
            stmt = (
                select(Permission, PermissionUser.permission_on)
                .join(PermissionUser, PermissionUser.permission_id == Permission.id)
                .where(PermissionUser.user_id == principal_id)
                .order_by(PermissionUser.id)
            )
            result = await session.execute(stmt)
            return [
                PermissionAssignment(
                    permission=PermissionRecord(id=permission.id, slug=normalize_slug(permission.slug)),
                    scope=permission_on,
                )
                for permission, permission_on in result.all()
            ]

    async def fetch_permissions_of(self, role_id: Any) -> FrozenSet[str]:
        async with self._session_factory() as session:
            stmt = (
                select(Permission.slug)
                .join(PermissionRole, PermissionRole.permission_id == Permission.id)
                .where(PermissionRole.role_id == role_id)
            )
            result = await session.execute(stmt)
            return frozenset(normalize_slug(slug) for slug in result.scalars().all())

    # ------------------------------------------------------------------
    # Role assignment writes
    # ------------------------------------------------------------------

    async def write_role_assignment(
        self, principal_id: Any, role_id: Any, scope: Optional[str] = None, role_type: Optional[str] = None
    ) -> bool:
        async with self._session_factory() as session:
            session.add(
                RoleUser(role_id=role_id, user_id=principal_id, role_on=normalize_scope(scope), role_type=role_type)
            )
            await session.commit()
        return True

    async def delete_role_assignment(self, principal_id: Any, role_id: Any, scope: Optional[str] = None) -> int:
        """Remove assignments of `role_id`; every scope when `scope` is None."""
        async with self._session_factory() as session:
            stmt = delete(RoleUser).where(RoleUser.user_id == principal_id, RoleUser.role_id == role_id)
            if scope is not None:
                stmt = stmt.where(RoleUser.role_on == normalize_scope(scope))
            result = await session.execute(stmt)
            await session.commit()
            return result.rowcount

    async def delete_all_role_assignments(self, principal_id: Any) -> int:
        async with self._session_factory() as session:
            result = await session.execute(delete(RoleUser).where(RoleUser.user_id == principal_id))
            await session.commit()
            return result.rowcount

    async def replace_role_assignments(self, principal_id: Any, role_ids: Iterable[Any]) -> SyncResult:
        """Keep exactly `role_ids`: detach the others, attach missing ones unscoped.

        Existing assignments of a kept role (including scoped ones) are left
        untouched.
        """
        wanted = list(dict.fromkeys(role_ids))

        async with self._session_factory() as session:
            result = await session.execute(select(RoleUser.role_id).where(RoleUser.user_id == principal_id))
            current = set(result.scalars().all())

            detached = sorted(current - set(wanted))
            attached = [role_id for role_id in wanted if role_id not in current]

            if detached:
                await session.execute(
                    delete(RoleUser).where(RoleUser.user_id == principal_id, RoleUser.role_id.in_(detached))
                )
            for role_id in attached:
                session.add(RoleUser(role_id=role_id, user_id=principal_id))

            await session.commit()

        return SyncResult(attached=tuple(attached), detached=tuple(detached))

    # ------------------------------------------------------------------
    # Permission assignment writes
    # ------------------------------------------------------------------

    async def write_permission_assignment(
        self, principal_id: Any, permission_id: Any, scope: Optional[str] = None
    ) -> bool:
        async with self._session_factory() as session:
            session.add(
                PermissionUser(permission_id=permission_id, user_id=principal_id, permission_on=normalize_scope(scope))
            )
            await session.commit()
        return True

    async def delete_permission_assignment(
        self, principal_id: Any, permission_id: Any, scope: Optional[str] = None
    ) -> int:
        async with self._session_factory() as session:
            stmt = delete(PermissionUser).where(
                PermissionUser.user_id == principal_id, PermissionUser.permission_id == permission_id
            )
            if scope is not None:
                stmt = stmt.where(PermissionUser.permission_on == normalize_scope(scope))
            result = await session.execute(stmt)
            await session.commit()
            return result.rowcount

    # ------------------------------------------------------------------
    # Administration (roles, permissions, users)
    # ------------------------------------------------------------------

    async def create_user(self, username: str, email: Optional[str] = None) -> User:
        async with self._session_factory() as session:
            user = User(username=username, email=email)
            session.add(user)
            await session.commit()
            await session.refresh(user)
            return user

    async def get_user_by_username(self, username: str) -> Optional[User]:
        async with self._session_factory() as session:
            result = await session.execute(select(User).where(User.username == username))
            return result.scalars().first()

    async def create_role(
        self,
        name: str,
        slug: Optional[str] = None,
        special: Optional[Union[str, Special]] = None,
        description: Optional[str] = None,
    ) -> Role:
        async with self._session_factory() as session:
            role = Role(
                name=name,
                slug=normalize_slug(slug or name),
                special=Special.parse(special).to_column(),
                description=description,
            )
            session.add(role)
            await session.commit()
            await session.refresh(role)
            logger.info(f"Created role '{role.slug}' (id={role.id}, special={role.special})")
            return role

    async def get_role_by_slug(self, slug: str) -> Optional[Role]:
        async with self._session_factory() as session:
            result = await session.execute(select(Role).where(Role.slug == normalize_slug(slug)))
            return result.scalars().first()

    async def list_roles(self) -> List[Role]:
        async with self._session_factory() as session:
            result = await session.execute(select(Role).order_by(Role.id))
            return list(result.scalars().all())

    async def create_permission(self, name: str, slug: Optional[str] = None, description: Optional[str] = None) -> Permission:
        async with self._session_factory() as session:
            permission = Permission(name=name, slug=normalize_slug(slug or name), description=description)
            session.add(permission)
            await session.commit()
            await session.refresh(permission)
            return permission

    async def get_permission_by_slug(self, slug: str) -> Optional[Permission]:
        async with self._session_factory() as session:
            result = await session.execute(select(Permission).where(Permission.slug == normalize_slug(slug)))
            return result.scalars().first()

    async def grant_permission_to_role(self, role_id: Any, permission_id: Any) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                select(PermissionRole).where(
                    PermissionRole.role_id == role_id, PermissionRole.permission_id == permission_id
                )
            )
            if result.scalars().first():
                return False
            session.add(PermissionRole(role_id=role_id, permission_id=permission_id))
            await session.commit()
            return True

    async def revoke_permission_from_role(self, role_id: Any, permission_id: Any) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                delete(PermissionRole).where(
                    PermissionRole.role_id == role_id, PermissionRole.permission_id == permission_id
                )
            )
            await session.commit()
            return result.rowcount

