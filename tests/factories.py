"""In-memory builders for evaluator tests (no database)."""

from itertools import count
from typing import Iterable, Optional, Sequence, Tuple

from rolegate.core.principal import PermissionGrant, PrincipalEvaluator, RoleGrant
from rolegate.core.records import PermissionRecord, RoleRecord
from rolegate.core.roles import RoleEvaluator
from rolegate.core.specials import Special

_ids = count(1)


def make_role(slug: str, permissions: Iterable[str] = (), special: Special = Special.NONE) -> RoleEvaluator:
    return RoleEvaluator(RoleRecord(id=next(_ids), slug=slug, special=special), permissions)


def make_principal(
    roles: Sequence[Tuple[RoleEvaluator, Optional[str]]] = (),
    permissions: Sequence[Tuple[str, Optional[str]]] = (),
) -> PrincipalEvaluator:
    return PrincipalEvaluator(
        principal_id=next(_ids),
        roles=[RoleGrant(role=role, scope=scope) for role, scope in roles],
        permissions=[
            PermissionGrant(permission=PermissionRecord(id=next(_ids), slug=slug), scope=scope)
            for slug, scope in permissions
        ],
    )
