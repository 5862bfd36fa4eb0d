import pytest

from rolegate.core.errors import UnknownSpecialError
from rolegate.core.specials import Special
from tests.factories import make_role


def test_grants_is_case_insensitive():
    role = make_role("editor", ["Edit.Article"])

    assert role.grants("edit.article")
    assert role.grants("EDIT.ARTICLE")
    assert not role.grants("delete.article")


def test_grants_any():
    role = make_role("editor", ["edit.article", "view.article"])

    assert role.grants_any({"delete.article", "view.article"})
    assert not role.grants_any({"delete.article"})
    assert not role.grants_any(set())


def test_special_kind_defaults_to_none():
    assert make_role("editor").special_kind is Special.NONE
    assert make_role("owner", special=Special.ALL_ACCESS).special_kind is Special.ALL_ACCESS


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, Special.NONE),
        ("", Special.NONE),
        ("all-access", Special.ALL_ACCESS),
        ("No-Access", Special.NO_ACCESS),
        (" level-access ", Special.LEVEL_ACCESS),
        (Special.NO_ACCESS, Special.NO_ACCESS),
    ],
)
def test_special_parse(value, expected):
    assert Special.parse(value) is expected


def test_special_parse_rejects_unknown():
    with pytest.raises(UnknownSpecialError):
        Special.parse("some-access")


def test_special_to_column():
    assert Special.NONE.to_column() is None
    assert Special.LEVEL_ACCESS.to_column() == "level-access"
