from enum import Enum
from typing import Optional, Union

from rolegate.core.errors import UnknownSpecialError


class Special(str, Enum):
    """Blanket behaviour a role may carry instead of per-permission matching."""

    NONE = "none"
    ALL_ACCESS = "all-access"
    NO_ACCESS = "no-access"
    LEVEL_ACCESS = "level-access"

    @classmethod
    def parse(cls, value: Optional[Union[str, "Special"]]) -> "Special":
        """Map a stored column value (NULL, '', 'all-access', ...) to a member."""
        if isinstance(value, Special):
            return value
        if value is None:
            return cls.NONE

        normalized = value.strip().lower()
        if not normalized:
            return cls.NONE
        try:
            return cls(normalized)
        except ValueError:
            raise UnknownSpecialError(f"Unknown role special '{value}'") from None

    def to_column(self) -> Optional[str]:
        return None if self is Special.NONE else self.value
