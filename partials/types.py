# =============================================================================
# partials/types.py - Core Types
# =============================================================================
# Enums and marker values shared by the partials library.
#
# A property slot on a Data object holds one of three things:
#   - a plain value
#   - a Lazy value (see partials/lazy.py)
#   - the Absent marker ("no value was provided")
# =============================================================================

from __future__ import annotations

from enum import Enum


# =============================================================================
# Enums
# =============================================================================

class DirectiveKind(str, Enum):
    """The four kinds of partial directives."""
    INCLUDE = "include"
    EXCLUDE = "exclude"
    ONLY = "only"
    EXCEPT = "except"


class InclusionPolicy(str, Enum):
    """How a Lazy value decides whether it is emitted."""
    OMITTED_BY_DEFAULT = "omitted_by_default"   # needs an include
    DEFAULT_INCLUDED = "default_included"       # hidden only by an exclude
    CONDITIONAL = "conditional"                 # predicate decides
    RELATIONAL = "relational"                   # loaded relation decides
    DEFERRED = "deferred"                       # handed to a deferred adapter
    CLOSURE = "closure"                         # handed back as a callable


# =============================================================================
# Absent marker
# =============================================================================

class Absent:
    """
    Marker for a property that was never given a value.

    Distinct from None: None is a value and is emitted as null, an Absent
    property is always left out of the transformed output.

    Example:
        @dataclass
        class UserData(Data):
            name: str | Absent = ABSENT
    """

    _instance: Absent | None = None

    def __new__(cls) -> Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def create(cls) -> Absent:
        return cls()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = Absent()


def is_absent(value: object) -> bool:
    return isinstance(value, Absent)
