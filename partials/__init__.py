# =============================================================================
# partials - Partial Data Transformation Library
# =============================================================================
# Turns Data objects into partial, client-facing mappings. Which properties
# are emitted is decided at transform time by include / exclude / only /
# except directives, ad-hoc or registered as per-class conditional defaults,
# recursively into nested objects and collections.
#
# Key principles:
# - Expensive properties are Lazy and only computed when emitted
# - Directive precedence is deterministic (Only beats Except)
# - Per-class configuration lives on an explicit PartialsConfig
#
# Usage:
#   from partials import Data, Lazy, dataclass
#
#   @dataclass
#   class UserData(Data):
#       name: str
#       posts: list | Lazy = None
#
#   user = UserData("Ruben", Lazy.create(lambda: load_posts()))
#   user.include("posts.title").to_dict()
# =============================================================================

from partials.types import ABSENT, Absent, DirectiveKind, InclusionPolicy
from partials.exceptions import (
    MaxDepthExceededError,
    ParseError,
    PartialsError,
    SchemaError,
)
from partials.lazy import (
    ClosureLazy,
    ConditionalLazy,
    DeferredLazy,
    DeferredProp,
    Lazy,
    RelationalLazy,
)
from partials.parser import Selector, parse, split_directives
from partials.directives import DirectiveSet, SelectionTree
from partials.registry import PartialsConfig, default_config, get_config
from partials.schema import data_property, schema_for
from partials.data import Data, dataclass
from partials.collection import DataCollection, PaginatedDataCollection
from partials.transformer import Transformer

__version__ = "1.0.0"

__all__ = [
    # Types
    "ABSENT",
    "Absent",
    "DirectiveKind",
    "InclusionPolicy",
    # Errors
    "PartialsError",
    "ParseError",
    "SchemaError",
    "MaxDepthExceededError",
    # Lazy values
    "Lazy",
    "ConditionalLazy",
    "RelationalLazy",
    "DeferredLazy",
    "ClosureLazy",
    "DeferredProp",
    # Parsing & directives
    "Selector",
    "parse",
    "split_directives",
    "DirectiveSet",
    "SelectionTree",
    # Configuration
    "PartialsConfig",
    "default_config",
    "get_config",
    # Schema
    "data_property",
    "schema_for",
    # Data
    "Data",
    "dataclass",
    "DataCollection",
    "PaginatedDataCollection",
    # Engine
    "Transformer",
]
