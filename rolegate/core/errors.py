class RolegateError(Exception):
    """Base class for rolegate errors."""


class UnknownSpecialError(RolegateError, ValueError):
    """A role carries a `special` value outside the known set."""


class UnknownPredicateError(RolegateError, ValueError):
    """A name does not describe an `is...` / `can...` predicate."""


class MissingScopeError(RolegateError, ValueError):
    """An `..._on` predicate was called without its scope argument."""
