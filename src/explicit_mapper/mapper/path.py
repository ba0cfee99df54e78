"""
Resolution of dotted paths like "order.customer.name" against nested source values.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from explicit_mapper.reflection import TypeDescriptor

from .exceptions import MappingDefinitionException


class _Missing:
    """
    Marker for absent values. `None` is a value, MISSING is not.
    """
    __slots__ = []

    def __repr__(self):
        return "MISSING"

    def __bool__(self):
        return False

MISSING: Any = _Missing()

SCALARS = (str, bytes, bytearray, bool, int, float, complex)

def is_sequence(value: Any) -> bool:
    """
    return True for lists and tuples, excluding named tuples which are treated as objects
    """
    if isinstance(value, list):
        return True

    return isinstance(value, tuple) and not hasattr(value, "_fields")

def read_segment(value: Any, segment: str) -> Any:
    """
    read a single segment of a path from the given value

    Args:
        value: a mapping, a sequence or an arbitrary object
        segment: a key, an index or a property name

    Returns:
        the value or MISSING
    """
    if value is None or isinstance(value, SCALARS):
        return MISSING

    if isinstance(value, Mapping):
        return value.get(segment, MISSING)

    if is_sequence(value):
        if not (segment.isascii() and segment.isdigit()):
            return MISSING

        index = int(segment)
        return value[index] if index < len(value) else MISSING

    prop = TypeDescriptor.for_type(type(value)).get_property(segment)
    if prop is not None:
        return prop.get(value, MISSING)

    return getattr(value, segment, MISSING)

class Path:
    """
    A compiled dot-delimited path.
    """
    __slots__ = [
        "path",
        "segments"
    ]

    # constructor

    def __init__(self, path: str):
        if not isinstance(path, str) or not path:
            raise MappingDefinitionException(f"expected a non-empty path, got {path!r}")

        segments = tuple(path.split("."))
        if not all(segments):
            raise MappingDefinitionException(f"path '{path}' contains an empty segment")

        self.path = path
        self.segments = segments

    # public

    @property
    def name(self) -> str:
        """
        the terminal segment
        """
        return self.segments[-1]

    def resolve(self, source: Any) -> Any:
        current = source
        for segment in self.segments:
            current = read_segment(current, segment)
            if current is MISSING:
                break

        return current

    def __eq__(self, other):
        return isinstance(other, Path) and other.path == self.path

    def __hash__(self):
        return hash(self.path)

    def __str__(self):
        return self.path

    def __repr__(self):
        return f"Path({self.path!r})"

def resolve_path(source: Any, path: str) -> Any:
    """
    resolve a dotted path against a source value

    Args:
        source: the source
        path: the dotted path

    Returns:
        the value or MISSING if any segment is absent
    """
    return Path(path).resolve(source)
