import pytest

from rolegate.core.config import settings
from rolegate.core.errors import MissingScopeError, UnknownPredicateError
from rolegate.core.predicates import PredicateKind, PredicateRequest, parse_predicate
from tests.factories import make_principal, make_role


@pytest.mark.parametrize(
    "name, expected",
    [
        ("is_editor", PredicateRequest(PredicateKind.IS, "editor", False)),
        ("is_editor_in_chief", PredicateRequest(PredicateKind.IS, "editor.in.chief", False)),
        ("is_editor_on", PredicateRequest(PredicateKind.IS, "editor", True)),
        ("isEditor", PredicateRequest(PredicateKind.IS, "editor", False)),
        ("isEditorOn", PredicateRequest(PredicateKind.IS, "editor", True)),
        ("can_edit_post", PredicateRequest(PredicateKind.CAN, "edit.post", False)),
        ("can_edit_post_on", PredicateRequest(PredicateKind.CAN, "edit.post", True)),
        ("canEditPost", PredicateRequest(PredicateKind.CAN, "edit.post", False)),
        ("canEditPostOn", PredicateRequest(PredicateKind.CAN, "edit.post", True)),
        ("can_Edit_Post_on", PredicateRequest(PredicateKind.CAN, "edit.post", True)),
    ],
)
def test_parse_predicate(name, expected):
    assert parse_predicate(name) == expected


@pytest.mark.parametrize("name", ["is", "can", "can_on", "canOn", "", "island", "cancel", "has_role", "can_"])
def test_parse_predicate_rejects(name):
    assert parse_predicate(name) is None


def test_can_predicate_forwards_to_authorize():
    editor = make_role("edit", ["edit.post"])
    user = make_principal(roles=[(editor, "doc:42")])

    assert user.check("canEditPostOn", "doc:42") == user.authorize("edit.post", "doc:42")
    assert user.check("can_edit_post_on", "doc:42")
    assert not user.check("can_edit_post_on", "doc:43")
    assert not user.check("can_edit_post")


def test_is_predicate_forwards_to_has_role():
    chief = make_role("editor.in.chief")
    user = make_principal(roles=[(chief, "site:1")])

    assert user.check("is_editor_in_chief")
    assert user.check("is_editor_in_chief_on", "site:1")
    assert not user.check("is_editor_in_chief_on", "site:2")
    assert not user.check("is_editor")


def test_missing_scope_denies():
    owner = make_role("owner")
    user = make_principal(roles=[(owner, None)])

    assert not user.check("is_owner_on")


def test_missing_scope_raises_in_strict_mode(monkeypatch):
    monkeypatch.setattr(settings, "STRICT_SCOPED_PREDICATES", True)
    user = make_principal(roles=[(make_role("owner"), None)])

    with pytest.raises(MissingScopeError):
        user.check("is_owner_on")


def test_unknown_predicate_raises():
    with pytest.raises(UnknownPredicateError):
        make_principal().check("can")
