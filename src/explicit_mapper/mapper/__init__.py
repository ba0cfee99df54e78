"""
This module provides tools for mapping
"""
from .exceptions import MappingException, MappingDefinitionException
from .path import Path, MISSING, resolve_path
from .rules import Rule, RuleKind, CopyRule, AliasRule, TransformRule, PostProcessRule, Callback
from .mapper import Mapper, create_mapper
from .specification import MappingSpecification

__all__ = [
    # exceptions

    "MappingException",
    "MappingDefinitionException",

    # path

    "Path",
    "MISSING",
    "resolve_path",

    # rules

    "Rule",
    "RuleKind",
    "CopyRule",
    "AliasRule",
    "TransformRule",
    "PostProcessRule",
    "Callback",

    # mapper

    "Mapper",
    "create_mapper",
    "MappingSpecification"
]
