from typing import FrozenSet, Iterable

from rolegate.core.records import RoleRecord, normalize_slug
from rolegate.core.specials import Special


class RoleEvaluator:
    """Answers permission questions for a single role.

    Holds the role's special designation and the slugs it grants. Roles do
    not inherit from other roles, so this is a flat set lookup.
    """

    __slots__ = ("record", "_permissions")

    def __init__(self, record: RoleRecord, permissions: Iterable[str] = ()):
        self.record = record
        self._permissions: FrozenSet[str] = frozenset(normalize_slug(p) for p in permissions)

    @property
    def id(self) -> int:
        return self.record.id

    @property
    def slug(self) -> str:
        return self.record.slug

    @property
    def special_kind(self) -> Special:
        return self.record.special

    @property
    def permission_slugs(self) -> FrozenSet[str]:
        return self._permissions

    def grants(self, permission_slug: str) -> bool:
        return normalize_slug(permission_slug) in self._permissions

    def grants_any(self, permission_slugs: Iterable[str]) -> bool:
        return any(self.grants(slug) for slug in permission_slugs)

    def __repr__(self):
        return f"RoleEvaluator(slug={self.slug!r}, special={self.special_kind.value!r})"
