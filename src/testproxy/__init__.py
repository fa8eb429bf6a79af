"""
testproxy lets unit tests construct instances of non-public classes, invoke non-public methods,
read and write non-public properties and compare proxied objects property by property.
"""
from .proxy import TypeProxy, InstanceProxy, ProxyException, ArgumentException, TypeLookupException, \
    LibraryNotFoundException, TypeNotFoundException, MemberNotFoundException, ReadOnlyPropertyException, \
    ConstructionException, ConstructorNotFoundException, AmbiguousConstructorException
from .comparison import InstanceProxyComparer
from .assertions import ProxyAssert, ProxyAssertionError

__all__ = [
    "TypeProxy",
    "InstanceProxy",
    "InstanceProxyComparer",
    "ProxyAssert",
    "ProxyAssertionError",

    "ProxyException",
    "ArgumentException",
    "TypeLookupException",
    "LibraryNotFoundException",
    "TypeNotFoundException",
    "MemberNotFoundException",
    "ReadOnlyPropertyException",
    "ConstructionException",
    "ConstructorNotFoundException",
    "AmbiguousConstructorException"
]
