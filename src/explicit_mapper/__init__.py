"""
explicit-mapper: declarative object transformation.
"""
from .mapper import (
    Mapper,
    MappingSpecification,
    MappingException,
    MappingDefinitionException,
    MISSING,
    create_mapper,
    resolve_path
)
from .util import ConfigureLogger

__all__ = [
    "Mapper",
    "MappingSpecification",
    "MappingException",
    "MappingDefinitionException",
    "MISSING",
    "create_mapper",
    "resolve_path",

    "ConfigureLogger"
]
