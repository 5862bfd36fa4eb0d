"""
Name-based predicates ("is_editor", "can_edit_post_on", "canEditPostOn", ...).

A predicate name is parsed into a PredicateRequest and forwarded to
`has_role` / `authorize`. Parsing never adds authorization logic of its own.

    is_<role>            -> has_role(role)
    is_<role>_on(scope)  -> has_role(role, scope)
    can_<perm>           -> authorize(perm)
    can_<perm>_on(scope) -> authorize(perm, scope)

Underscores (and camelCase word boundaries) in the subject become dots:
`is_editor_in_chief` checks the role `editor.in.chief`.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from rolegate.core.config import settings
from rolegate.core.errors import MissingScopeError, UnknownPredicateError

if TYPE_CHECKING:
    from rolegate.core.principal import PrincipalEvaluator

logger = logging.getLogger(__name__)

RESERVED_NAMES = frozenset({"is", "can", "can_on", "canOn"})

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


class PredicateKind(str, Enum):
    IS = "is"
    CAN = "can"


@dataclass(frozen=True)
class PredicateRequest:
    kind: PredicateKind
    subject: str
    scoped: bool = False


def _to_slug(fragment: str) -> str:
    fragment = _CAMEL_BOUNDARY.sub("_", fragment)
    return fragment.lower().replace("_", ".")


def _split_scope(rest: str, suffix: str):
    if rest.endswith(suffix) and len(rest) > len(suffix):
        return rest[: -len(suffix)], True
    return rest, False


def parse_predicate(name: str) -> Optional[PredicateRequest]:
    """Return the request encoded by `name`, or None if it is not a predicate."""
    if not name or name in RESERVED_NAMES:
        return None

    for kind in (PredicateKind.CAN, PredicateKind.IS):
        if name.startswith(kind.value):
            rest = name[len(kind.value):]
            break
    else:
        return None

    if rest.startswith("_"):
        subject, scoped = _split_scope(rest[1:], "_on")
    elif rest[:1].isupper():
        subject, scoped = _split_scope(rest, "On")
    else:
        # "island", "cancel", ...
        return None

    if not subject:
        return None
    return PredicateRequest(kind=kind, subject=_to_slug(subject), scoped=scoped)


def dispatch(evaluator: "PrincipalEvaluator", name: str, *args: Any) -> bool:
    request = parse_predicate(name)
    if request is None:
        raise UnknownPredicateError(f"'{name}' is not an is/can predicate")

    scope = None
    if request.scoped:
        if not args:
            if settings.STRICT_SCOPED_PREDICATES:
                raise MissingScopeError(f"Predicate '{name}' requires a scope argument")
            logger.debug(f"Predicate '{name}' called without scope, denying")
            return False
        scope = args[0]

    if request.kind is PredicateKind.IS:
        return evaluator.has_role(request.subject, scope)
    return evaluator.authorize(request.subject, scope)
