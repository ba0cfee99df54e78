"""
The compiled rules a mapper is made of.
"""
from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, ClassVar, Optional, TYPE_CHECKING

from .path import Path, MISSING

if TYPE_CHECKING:
    from .mapper import Mapper


def positional_arity(function: Callable, offered: int) -> int:
    """
    return the number of leading positional arguments the function accepts, capped by `offered`.
    Functions with *args or an unknown signature accept all of them.
    """
    try:
        sig = inspect.signature(function)
    except (TypeError, ValueError):
        return offered

    count = 0
    for param in sig.parameters.values():
        if param.kind is param.VAR_POSITIONAL:
            return offered
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            count += 1

    return min(count, offered)

class Callback:
    """
    A user supplied function that is invoked with as many of the offered arguments as it declares.
    """
    __slots__ = [
        "function",
        "arity"
    ]

    # constructor

    def __init__(self, function: Callable, offered: int = 3):
        self.function = function
        self.arity = positional_arity(function, offered)

    # public

    def __call__(self, *args):
        return self.function(*args[:self.arity])

    def __eq__(self, other):
        return isinstance(other, Callback) and other.function == self.function

    def __hash__(self):
        return hash(self.function)

    def __str__(self):
        return getattr(self.function, "__qualname__", repr(self.function))

class RuleKind(Enum):
    COPY = auto()
    ALIAS = auto()
    TRANSFORM = auto()
    POST_PROCESS = auto()

class Rule(ABC):
    """
    A single compiled instruction of a mapper.
    """
    kind: ClassVar[RuleKind]

    @abstractmethod
    def apply(self, source: Any, destination: dict, options: Mapping[str, Any]) -> None:
        pass

@dataclass(frozen=True)
class CopyRule(Rule):
    """
    Copies the value at `path` to a field named like the last path segment.
    """
    kind: ClassVar[RuleKind] = RuleKind.COPY

    path: Path

    @property
    def dest_name(self) -> str:
        return self.path.name

    def apply(self, source: Any, destination: dict, options: Mapping[str, Any]) -> None:
        value = self.path.resolve(source)
        if value is not MISSING:
            destination[self.dest_name] = value

    def __str__(self):
        return f"copy {self.path} -> {self.dest_name}"

@dataclass(frozen=True)
class AliasRule(Rule):
    """
    Copies the value at `path` to the field `dest_name`.
    """
    kind: ClassVar[RuleKind] = RuleKind.ALIAS

    path: Path
    dest_name: str

    def apply(self, source: Any, destination: dict, options: Mapping[str, Any]) -> None:
        value = self.path.resolve(source)
        if value is not MISSING:
            destination[self.dest_name] = value

    def __str__(self):
        return f"alias {self.path} -> {self.dest_name}"

@dataclass(frozen=True)
class TransformRule(Rule):
    """
    Writes the transformed value at `path` to `dest_name`, either by calling
    `transform(source, value, options)` or by mapping the value with a nested mapper.
    Nothing happens if the value is absent.
    """
    kind: ClassVar[RuleKind] = RuleKind.TRANSFORM

    path: Path
    dest_name: str
    transform: Optional[Callback] = None
    mapper: Optional[Mapper] = None

    def apply(self, source: Any, destination: dict, options: Mapping[str, Any]) -> None:
        value = self.path.resolve(source)
        if value is MISSING:
            return

        if self.mapper is not None:
            destination[self.dest_name] = self.mapper.map(value, options)
        else:
            destination[self.dest_name] = self.transform(source, value, options)

    def __str__(self):
        if self.mapper is not None:
            return f"nested {self.path} -> {self.dest_name}"

        return f"transform {self.path} -> {self.dest_name}"

@dataclass(frozen=True)
class PostProcessRule(Rule):
    """
    Calls `function(source, destination, options)` unconditionally.
    """
    kind: ClassVar[RuleKind] = RuleKind.POST_PROCESS

    function: Callback

    def apply(self, source: Any, destination: dict, options: Mapping[str, Any]) -> None:
        self.function(source, destination, options)

    def __str__(self):
        return f"post_process {self.function}"
