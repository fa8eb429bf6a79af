"""
Comparison of proxied and non-proxied objects based on their properties.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Type, Union

from testproxy.proxy import InstanceProxy

def null_safe_equals(a: Any, b: Any) -> bool:
    """
    two None values are equal, otherwise the values decide by `==`
    """
    return a is b or (a is not None and b is not None and a == b)

@dataclass(frozen=True)
class Proxied:
    """
    An operand given as InstanceProxy.
    """
    proxy: InstanceProxy

    @property
    def type(self) -> Type:
        return self.proxy.type

    def read(self, name: str) -> Any:
        return self.proxy.get_value(name)

    def property_names(self) -> list[str]:
        return self.proxy.property_names()

@dataclass(frozen=True)
class Plain:
    """
    An operand given as the object itself. Properties are read by the same reflective accessors a proxy uses.
    """
    value: Any

    @property
    def type(self) -> Type:
        return type(self.value)

    def read(self, name: str) -> Any:
        return InstanceProxy.for_instance(self.value).get_value(name)

    def property_names(self) -> list[str]:
        return InstanceProxy.for_instance(self.value).property_names()

Operand = Union[Proxied, Plain]

def operand(value: Any) -> Operand:
    """
    resolve a value into the matching operand variant
    """
    if isinstance(value, (Proxied, Plain)):
        return value

    return Proxied(value) if isinstance(value, InstanceProxy) else Plain(value)

class InstanceProxyComparer:
    """
    Compares proxied or non-proxied objects based on the specified properties.
    `compare` returns 0 for equal and 1 for different objects. This is an equality check, not an ordering:
    it may be passed to `functools.cmp_to_key`, but only membership and equality results are meaningful.
    """
    logger = logging.getLogger(__name__)

    # constructor

    def __init__(self, *properties: str):
        """
        Args:
            *properties: the properties to compare. If none are given, all public and non-public
                properties of the second operand are compared, or those of the proxied operand if only one is proxied.
        """
        self.properties = list(properties)

    # internal

    def _property_names(self, x: Proxied, y: Operand) -> list[str]:
        if self.properties:
            return self.properties

        # the proxied side defines the property set
        return (y if isinstance(y, Proxied) else x).property_names()

    def _compare_properties(self, x: Operand, y: Operand, properties: list[str]) -> int:
        for name in properties:
            a = x.read(name)
            b = y.read(name)

            if not null_safe_equals(a, b):
                InstanceProxyComparer.logger.debug(f"property {name} differs: {a!r} != {b!r}")
                return 1

        return 0

    # public

    def compare(self, x: Any, y: Any) -> int:
        x, y = operand(x), operand(y)

        if isinstance(x, Plain) and isinstance(y, Plain):
            return 0 if null_safe_equals(x.value, y.value) else 1

        if isinstance(x, Plain): # reverse call
            x, y = y, x

        return self._compare_properties(x, y, self._property_names(x, y))

    def __call__(self, x: Any, y: Any) -> int:
        return self.compare(x, y)

    def equals(self, x: Any, y: Any) -> bool:
        return self.compare(x, y) == 0

    def index_of(self, items: Iterable[Any], item: Any) -> int:
        """
        return the position of the first element equal to `item`, or -1
        """
        for index, element in enumerate(items):
            if self.compare(element, item) == 0:
                return index

        return -1

    def contains(self, items: Iterable[Any], item: Any) -> bool:
        return self.index_of(items, item) >= 0
