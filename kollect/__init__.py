"""
'    ___  __ _______ ___    ___    _______ _______ _______
'   |   |/ /|   _   |   |  |   |  |   _   |   _   |       |
'   |     < |.  |   |.  |  |.  |  |.  1___|.  1___|.|   | |
'   |.  |  \|.  |   |.  |__|.  |__|.  __)_|.  |___`-|.  |-'
'   |:  |   |:  1   |:  1  |:  1  |:  1   |:  1   | |:  |
'   |::.| . |::.. . |::.. .|::.. .|::.. . |::.. . | |::.|
'   `--- ---`-------`------`------`-------`-------' `---'
"""
import logging

# expose the main classes
from .collection import BaseCollection, Collection
from .lazy import LazyCollection, SourceKind

# expose the factory functions
from .factories import (
    collect,
    lazy_collect,
    times,
    wrap,
    unwrap,
    empty,
    kollect,
    K,
    k
)

# expose comparison and path helpers
from .extensions.sorting import SortFlag
from .operators import OPERATORS, compare, loose_equals, strict_equals, spaceship, like_matcher
from .paths import resolve, get_path, has_path
from .registry import extend, has_extension, forget_extension

# expose supporting data classes and errors
from .types import PathLookup, RememberedSource, MISSING
from .errors import (
    CollectionError,
    InvalidOperatorError,
    UnchainedSortError,
    ItemNotFoundError,
    InvalidSourceError
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

# define what `import *` does
__all__ = [
    "BaseCollection",
    "Collection",
    "LazyCollection",
    "SourceKind",
    "collect",
    "lazy_collect",
    "times",
    "wrap",
    "unwrap",
    "empty",
    "kollect",
    "K",
    "k",
    "SortFlag",
    "OPERATORS",
    "compare",
    "loose_equals",
    "strict_equals",
    "spaceship",
    "like_matcher",
    "resolve",
    "get_path",
    "has_path",
    "extend",
    "has_extension",
    "forget_extension",
    "PathLookup",
    "RememberedSource",
    "MISSING",
    "CollectionError",
    "InvalidOperatorError",
    "UnchainedSortError",
    "ItemNotFoundError",
    "InvalidSourceError"
]
