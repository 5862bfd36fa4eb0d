import pytest

from rolegate.models import Permission, PermissionRole, PermissionUser, Role, RoleUser, User


@pytest.mark.parametrize(
    "instance",
    [
        User(username="alice"),
        Role(name="Editor", slug="editor"),
        Permission(name="Edit Article", slug="edit.article"),
        RoleUser(role_id=1, user_id=1),
        PermissionUser(permission_id=1, user_id=1),
    ],
)
def test_timestamps_default_to_aware_utc(instance):
    assert instance.created_at.tzinfo is not None
    assert instance.created_at.utcoffset().total_seconds() == 0


@pytest.mark.parametrize("model", [User, Role, Permission, RoleUser, PermissionUser])
def test_timestamp_columns_are_timezone_aware(model):
    assert model.__table__.c.created_at.type.timezone is True


def test_bridge_table_has_no_timestamps():
    assert "created_at" not in PermissionRole.__table__.c
