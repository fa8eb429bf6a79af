"""
Resolution of types by name, constructor selection and helpers shared by the proxies.
"""
from __future__ import annotations

import importlib
import logging
from typing import Any, Optional, Type

from testproxy.reflection import TypeDescriptor, qualified_name
from .exceptions import ArgumentException, LibraryNotFoundException, TypeNotFoundException, \
    ConstructorNotFoundException, AmbiguousConstructorException

logger = logging.getLogger(__name__)

def require_name(argument: str, value: Optional[str]) -> str:
    if value is None:
        raise ArgumentException(argument, f"{argument} is None.")

    return value

def index_key(index: tuple) -> Any:
    """
    a single index argument is used as is, several form a tuple
    """
    return index[0] if len(index) == 1 else tuple(index)

def resolve_type(library_name: str, class_name: str) -> Type:
    """
    Resolve a class by module name and qualified class name, e.g. ("collections", "OrderedDict")
    or ("package.module", "Outer._Inner").

    Raises:
        LibraryNotFoundException: the module cannot be imported
        TypeNotFoundException: the module does not contain the class
    """
    require_name("library_name", library_name)
    require_name("class_name", class_name)

    try:
        current = importlib.import_module(library_name)
    except (ImportError, ValueError) as e:
        logger.debug(f"library {library_name} not found: {e}")
        raise LibraryNotFoundException(library_name, class_name) from e

    try:
        for part in class_name.split("."):
            current = getattr(current, part)
    except AttributeError as e:
        logger.debug(f"type {class_name} not found in {library_name}")
        raise TypeNotFoundException(library_name, class_name) from e

    if not isinstance(current, type):
        raise TypeNotFoundException(library_name, class_name)

    logger.debug(f"resolved {library_name}:{class_name} to {qualified_name(current)}")

    return current

class ConstructorResolver:
    """
    Selects the constructor for a list of arguments:

    1. the candidates are the `@overload` variants of `__init__`, or the class signature if there are none
    2. a single candidate whose annotated parameter types exactly match the argument types wins
    3. otherwise a single candidate whose parameters accept the arguments wins
    4. anything else is an error, multiple candidates are never chosen arbitrarily
    """
    # constructor

    def __init__(self, cls: Type):
        self.cls = cls
        self.descriptor = TypeDescriptor.for_type(cls)

    # internal

    @staticmethod
    def _argument_types(args: tuple, kwargs: dict) -> list[str]:
        types = [type(arg).__name__ for arg in args]
        types.extend(f"{name}={type(value).__name__}" for name, value in kwargs.items())

        return types

    # public

    def resolve(self, args: tuple, kwargs: dict) -> TypeDescriptor.ConstructorDescriptor:
        candidates = self.descriptor.get_constructors()

        for tier, matches in (("exact", lambda c: c.matches_exactly(args, kwargs)), ("arity", lambda c: c.accepts(args, kwargs))):
            selected = [candidate for candidate in candidates if matches(candidate)]

            if len(selected) == 1:
                logger.debug(f"selected constructor {selected[0]} by {tier} match")
                return selected[0]

            if len(selected) > 1:
                raise AmbiguousConstructorException(
                    self.descriptor.qualified_name,
                    self._argument_types(args, kwargs),
                    [str(candidate) for candidate in selected])

        raise ConstructorNotFoundException(self.descriptor.qualified_name, self._argument_types(args, kwargs))

    def create(self, *args, **kwargs) -> Any:
        self.resolve(args, kwargs)

        return self.cls(*args, **kwargs)
