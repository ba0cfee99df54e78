"""
This module provides a TypeDescriptor class that describes the readable properties of Python classes
- pydantic models, dataclasses, SQLAlchemy entities and plain classes - and how to construct them.
Descriptors are cached per class.
"""
from __future__ import annotations

import inspect
import threading
from abc import ABC, abstractmethod
from dataclasses import is_dataclass, fields
from typing import Callable, Type, Dict, Optional, Any
from weakref import WeakKeyDictionary

from pydantic import BaseModel
from sqlalchemy import inspect as sqlalchemy_inspect
from sqlalchemy.orm import class_mapper
from sqlalchemy.orm.exc import UnmappedClassError


class PropertyExtractor(ABC):
    """Base interface for all property extraction strategies."""

    @abstractmethod
    def extract(self, cls: Type) -> Optional[Dict[str, "TypeDescriptor.PropertyDescriptor"]]:
        """
        Attempt to extract property descriptors for the given class.
        Return a dict if successful, or None if not applicable.
        """
        pass

class PydanticPropertyExtractor(PropertyExtractor):
    def extract(self, cls: Type):
        if not issubclass(cls, BaseModel):
            return None

        return {name: TypeDescriptor.PropertyDescriptor(name) for name in cls.model_fields}

class DataclassPropertyExtractor(PropertyExtractor):
    def extract(self, cls: Type):
        if not is_dataclass(cls):
            return None

        return {field.name: TypeDescriptor.PropertyDescriptor(field.name) for field in fields(cls)}

class SqlAlchemyPropertyExtractor(PropertyExtractor):
    """
    Extracts column and relationship attributes of SQLAlchemy mapped classes.
    """
    def extract(self, cls: Type):
        try:
            mapper = class_mapper(cls)
        except UnmappedClassError:
            return None

        return {prop.key: SqlAlchemyPropertyDescriptor(prop.key) for prop in mapper.attrs}

class DefaultPropertyExtractor(PropertyExtractor):
    def extract(self, cls: Type):
        try:
            sig = inspect.signature(cls.__init__)
        except (TypeError, ValueError):
            return {}

        return {
            name: TypeDescriptor.PropertyDescriptor(name)
            for name, param in sig.parameters.items()
            if name != "self" and param.kind not in (param.VAR_POSITIONAL, param.VAR_KEYWORD)
        }


class TypeDescriptor:
    """
    This class describes the properties of a class and provides a constructor for it.
    """

    # static

    _extractors: list[PropertyExtractor] = [
        PydanticPropertyExtractor(),
        DataclassPropertyExtractor(),
        SqlAlchemyPropertyExtractor(),
        DefaultPropertyExtractor()
    ]

    @classmethod
    def extract_properties(cls, type: Type) -> Dict[str, "TypeDescriptor.PropertyDescriptor"]:
        for extractor in TypeDescriptor._extractors:
            properties = extractor.extract(type)
            if properties is not None:
                return properties

        return {}

    # inner classes

    class PropertyDescriptor:
        """
        Describes a readable class property (field).
        """
        __slots__ = [
            "name"
        ]

        def __init__(self, name: str):
            self.name = name

        def get(self, instance, default: Any = None):
            return getattr(instance, self.name, default)

        def __str__(self):
            return f"Property({self.name})"

    # class properties

    _cache = WeakKeyDictionary()
    _lock = threading.RLock()

    # class methods

    @classmethod
    def for_type(cls, clazz: Type) -> TypeDescriptor:
        """
        Returns a TypeDescriptor for the given class, using a cache to avoid redundant introspection.
        """
        descriptor = cls._cache.get(clazz)
        if descriptor is None:
            with cls._lock:
                descriptor = cls._cache.get(clazz)
                if descriptor is None:
                    descriptor = TypeDescriptor(clazz)
                    cls._cache[clazz] = descriptor

        return descriptor

    # constructor

    def __init__(self, cls):
        self.cls = cls
        self.properties: Dict[str, TypeDescriptor.PropertyDescriptor] = TypeDescriptor.extract_properties(cls)
        self.constructor = self._create_constructor()

    # internal

    def _create_constructor(self) -> Callable[..., object]:
        cls = self.cls

        def make(**kwargs: Any) -> object:
            return cls(**kwargs)

        return make

    # public

    def get_property(self, name: str) -> Optional[TypeDescriptor.PropertyDescriptor]:
        return self.properties.get(name)

    def __str__(self):
        return f"TypeDescriptor({self.cls.__qualname__})"

class SqlAlchemyPropertyDescriptor(TypeDescriptor.PropertyDescriptor):
    """
    Reads the loaded state of an entity only. Attributes that are not loaded count as absent,
    so no lazy load is triggered on detached instances. Note that this includes attributes
    expired by a commit.
    """
    __slots__ = []

    def get(self, instance, default: Any = None):
        state = sqlalchemy_inspect(instance)
        return state.dict.get(self.name, default)
