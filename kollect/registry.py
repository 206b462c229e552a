"""
process-wide table of extension methods.

extensions are plain functions registered under (type name, method name).
collections consult the table from a single dispatch point (__getattr__ on
the shared base class), binding the receiver as the first argument. lookups
follow the mro, so an extension registered on "BaseCollection" is visible to
both the eager and the lazy collection.
"""
from __future__ import annotations

import logging
from types import MethodType

from .types import *

logger = logging.getLogger(__name__)

_extensions: Dict[Tuple[str, str], Callable[..., Any]] = {}
_types: Dict[str, type] = {}


def extensible(cls: type) -> type:
    """class decorator: make cls addressable by name in extend()"""
    _types[cls.__name__] = cls
    return cls


def extend(type_name: str, method_name: str, implementation: Callable[..., Any]) -> None:
    """
    register implementation as method_name on the named collection type.
    built-in methods cannot be replaced; registering the same name twice
    replaces the earlier extension.
    """
    if type_name not in _types:
        raise ValueError(f"unknown collection type '{type_name}'")
    if not method_name.isidentifier() or method_name.startswith('_'):
        raise ValueError(f"'{method_name}' is not a valid public method name")
    cls = _types[type_name]
    if hasattr(cls, method_name) or method_name in getattr(cls, "_reserved_attributes", ()):
        raise ValueError(f"'{method_name}' is a built-in method of {type_name} and cannot be extended")
    if not callable(implementation):
        raise TypeError("extension implementation must be callable")
    _extensions[(type_name, method_name)] = implementation
    logger.debug("registered extension %s.%s", type_name, method_name)


def has_extension(type_name: str, method_name: str) -> bool:
    return (type_name, method_name) in _extensions


def forget_extension(type_name: str, method_name: str) -> None:
    _extensions.pop((type_name, method_name), None)


def find_extension(cls: type, method_name: str) -> Optional[Callable[..., Any]]:
    for klass in cls.__mro__:
        implementation = _extensions.get((klass.__name__, method_name))
        if implementation is not None:
            return implementation
    return None


def bind_extension(receiver: Any, method_name: str) -> Callable[..., Any]:
    """the extension bound to receiver, or AttributeError like any missing attribute"""
    implementation = find_extension(type(receiver), method_name)
    if implementation is None:
        raise AttributeError(f"'{type(receiver).__name__}' object has no attribute '{method_name}'")
    logger.debug("dispatching extension %s.%s", type(receiver).__name__, method_name)
    return MethodType(implementation, receiver)
