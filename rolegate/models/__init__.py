from .permission import Permission, PermissionUser
from .role import PermissionRole, Role, RoleUser
from .user import User

__all__ = [
    "User",
    "Role",
    "RoleUser",
    "Permission",
    "PermissionRole",
    "PermissionUser",
]
