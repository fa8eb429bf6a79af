"""
Proxies giving tests access to non-public classes and members
"""
from .exceptions import ProxyException, ArgumentException, TypeLookupException, LibraryNotFoundException, \
    TypeNotFoundException, MemberNotFoundException, ReadOnlyPropertyException, ConstructionException, \
    ConstructorNotFoundException, AmbiguousConstructorException
from .resolution import ConstructorResolver, resolve_type
from .type_proxy import TypeProxy
from .instance_proxy import InstanceProxy

__all__ = [
    # proxies

    "TypeProxy",
    "InstanceProxy",
    "ConstructorResolver",
    "resolve_type",

    # exceptions

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
