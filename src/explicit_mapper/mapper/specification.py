from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, Optional, Type, Union

from .mapper import Mapper


class MappingSpecification:
    """
    Fluent builder for mapping specifications.

    Example:
        mapper = (MappingSpecification()
            .copy("id", "name")
            .alias("address.city", "city")
            .transform("price", "price", lambda source, value: round(value, 2))
            .build())
    """
    __slots__ = [
        "_rules"
    ]

    # constructor

    def __init__(self):
        self._rules: list[Any] = []

    # fluent

    def copy(self, *paths: str) -> MappingSpecification:
        self._rules.extend(paths)

        return self

    def alias(self, source: str, destination: str) -> MappingSpecification:
        self._rules.append({source: destination})

        return self

    def transform(self, src_name: str, dst_name: str, function: Callable[..., Any]) -> MappingSpecification:
        self._rules.append({
            "srcName": src_name,
            "dstName": dst_name,
            "customTransform": function
        })

        return self

    def nested(self, src_name: str, dst_name: str, mapper: Union[Mapper, Iterable[Any]]) -> MappingSpecification:
        self._rules.append({
            "srcName": src_name,
            "dstName": dst_name,
            "mapper": mapper
        })

        return self

    def post_process(self, function: Callable[..., None]) -> MappingSpecification:
        self._rules.append(function)

        return self

    # public

    def build(self, target: Optional[Type] = None) -> Mapper:
        return Mapper(self, target=target)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._rules)

    def __len__(self):
        return len(self._rules)
