"""
The mapper compiles a declarative list of rules once and applies it to source objects.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Callable, Optional, Type

from explicit_mapper.reflection import TypeDescriptor

from .exceptions import MappingDefinitionException
from .path import Path, is_sequence
from .rules import Rule, RuleKind, CopyRule, AliasRule, TransformRule, PostProcessRule, Callback

EMPTY_OPTIONS: Mapping[str, Any] = MappingProxyType({})

SOURCE_KEYS = ("srcName", "src_name")
DESTINATION_KEYS = ("dstName", "dst_name")
TRANSFORM_KEYS = ("customTransform", "custom_transform")
MAPPER_KEYS = ("mapper",)

RESERVED_KEYS = frozenset(SOURCE_KEYS + DESTINATION_KEYS + TRANSFORM_KEYS + MAPPER_KEYS)

def _lookup(descriptor: Mapping, keys: tuple[str, ...]) -> Any:
    present = [key for key in keys if key in descriptor]
    if len(present) > 1:
        raise MappingDefinitionException(f"conflicting keys {' and '.join(present)}")

    if not present:
        return None

    value = descriptor[present[0]]
    if value is None:
        raise MappingDefinitionException(f"{present[0]} must not be None")

    return value

def _destination_name(name: Any) -> str:
    if not isinstance(name, str) or not name:
        raise MappingDefinitionException(f"expected a non-empty destination name, got {name!r}")

    return name

class Mapper:
    """
    A Mapper transforms source objects - or lists of them - into new destination objects according to a
    mapping specification. The specification is a list, where every element is one of

    - a field name or dotted path, which is copied to a field named like the last segment
    - a single-key dict `{"old.path": "new"}`, which copies the value to a renamed field
    - a dict with `srcName`, `dstName` and either `customTransform` or a nested `mapper`
    - a callable, that is invoked with `(source, destination, options)` after all field rules

    The rules are compiled once in the constructor. Mapping never modifies the mapper, so instances
    can be shared freely.
    """
    __slots__ = [
        "rules",
        "field_rules",
        "post_process_rules",
        "target",
        "construct"
    ]

    # class properties

    logger = logging.getLogger(__name__)

    # class methods

    @staticmethod
    def compile(specification: Iterable[Any]) -> tuple[Rule, ...]:
        """
        compile a raw specification into the list of rules

        Args:
            specification: the raw specification

        Returns:
            the compiled rules in specification order

        Raises:
            MappingDefinitionException: if any element is malformed
        """
        try:
            return Mapper._compile(specification)
        except MappingDefinitionException as e:
            Mapper.logger.error(str(e))

            raise

    @staticmethod
    def _compile(specification: Iterable[Any]) -> tuple[Rule, ...]:
        if isinstance(specification, (str, bytes, Mapping)) or not isinstance(specification, Iterable):
            raise MappingDefinitionException(f"a mapping specification must be a list of rules, got {type(specification).__name__}")

        rules = []
        for index, element in enumerate(specification):
            try:
                rules.append(Mapper._compile_rule(element))
            except MappingDefinitionException as e:
                raise MappingDefinitionException(f"invalid rule #{index} {element!r}: {e}") from e

        return tuple(rules)

    @staticmethod
    def _compile_rule(element: Any) -> Rule:
        if callable(element):
            return PostProcessRule(Callback(element))

        if isinstance(element, str):
            return CopyRule(Path(element))

        if isinstance(element, Mapping):
            return Mapper._compile_descriptor(element)

        raise MappingDefinitionException(f"unsupported rule type {type(element).__name__}")

    @staticmethod
    def _compile_descriptor(descriptor: Mapping) -> Rule:
        # {"old.path": "new"}

        if len(descriptor) == 1 and not RESERVED_KEYS.intersection(descriptor.keys()):
            (source, destination), = descriptor.items()

            return AliasRule(Path(source), _destination_name(destination))

        unknown = [key for key in descriptor.keys() if key not in RESERVED_KEYS]
        if unknown:
            raise MappingDefinitionException(f"unexpected keys {', '.join(map(repr, unknown))} in rule descriptor")

        source = _lookup(descriptor, SOURCE_KEYS)
        destination = _lookup(descriptor, DESTINATION_KEYS)
        if source is None or destination is None:
            raise MappingDefinitionException("a rule descriptor requires srcName and dstName")

        path = Path(source)
        destination = _destination_name(destination)

        transform = _lookup(descriptor, TRANSFORM_KEYS)
        mapper = _lookup(descriptor, MAPPER_KEYS)

        if transform is not None and mapper is not None:
            raise MappingDefinitionException("a rule descriptor accepts either customTransform or mapper, not both")

        if mapper is not None:
            return TransformRule(path, destination, mapper=Mapper._sub_mapper(mapper))

        if transform is not None:
            if not callable(transform):
                raise MappingDefinitionException(f"customTransform must be callable, got {type(transform).__name__}")

            return TransformRule(path, destination, transform=Callback(transform))

        # plain rename

        return AliasRule(path, destination)

    @staticmethod
    def _sub_mapper(mapper: Any) -> Mapper:
        if isinstance(mapper, Mapper):
            return mapper

        if isinstance(mapper, Iterable) and not isinstance(mapper, (str, bytes, Mapping)):
            return Mapper._from_rules(Mapper._compile(mapper))

        raise MappingDefinitionException(f"mapper must be a Mapper or a mapping specification, got {type(mapper).__name__}")

    # constructor

    def __init__(self, specification: Iterable[Any], target: Optional[Type] = None):
        """
        Create a new Mapper

        Args:
            specification: the list of rules
            target: optional class that is constructed with the mapped fields as keyword arguments.
                If omitted, dicts are returned.

        Raises:
            MappingDefinitionException: if the specification is malformed
        """
        if target is not None and not isinstance(target, type):
            raise MappingDefinitionException(f"target must be a class, got {target!r}")

        self._initialize(Mapper.compile(specification), target)

    @classmethod
    def _from_rules(cls, rules: tuple[Rule, ...], target: Optional[Type] = None) -> Mapper:
        mapper = cls.__new__(cls)
        mapper._initialize(rules, target)

        return mapper

    # internal

    def _initialize(self, rules: tuple[Rule, ...], target: Optional[Type]):
        self.rules = rules
        self.field_rules = tuple(rule for rule in rules if rule.kind is not RuleKind.POST_PROCESS)
        self.post_process_rules = tuple(rule for rule in rules if rule.kind is RuleKind.POST_PROCESS)
        self.target = target
        self.construct: Optional[Callable[..., Any]] = TypeDescriptor.for_type(target).constructor if target is not None else None

        if Mapper.logger.isEnabledFor(logging.DEBUG):
            Mapper.logger.debug(f"compiled {self!r}")

    def _map_object(self, source: Any, options: Mapping[str, Any]) -> Any:
        if source is None:
            return None

        destination = {}
        for rule in self.field_rules:
            rule.apply(source, destination, options)

        # post processing sees the complete destination
        for rule in self.post_process_rules:
            rule.apply(source, destination, options)

        if self.construct is not None:
            return self.construct(**destination)

        return destination

    # public

    def map(self, input: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
        """
        map a source object or a list or tuple of source objects

        Args:
            input: the source object, None, or a list or tuple of them
            options: arbitrary values that are passed to every transform and post processing function

        Returns:
            the destination object, None for a None input, or a list or tuple of the results
        """
        if options is None:
            options = EMPTY_OPTIONS

        if is_sequence(input):
            results = [self._map_object(source, options) for source in input]

            return results if isinstance(input, list) else tuple(results)

        return self._map_object(input, options)

    def __repr__(self):
        rules = ", ".join(str(rule) for rule in self.rules)
        target = f", target={self.target.__qualname__}" if self.target is not None else ""

        return f"Mapper([{rules}]{target})"

def create_mapper(specification: Iterable[Any], target: Optional[Type] = None) -> Mapper:
    """
    create a mapper for the given specification

    Args:
        specification: the list of rules
        target: optional destination class

    Returns:
        the compiled Mapper

    Raises:
        MappingDefinitionException: if the specification is malformed
    """
    return Mapper(specification, target=target)
