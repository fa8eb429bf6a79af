from __future__ import annotations

import logging
from typing import Any, Type

from testproxy.reflection import TypeDescriptor
from .exceptions import ArgumentException, MemberNotFoundException
from .resolution import require_name, index_key, resolve_type

class TypeProxy:
    """
    Provides access to the static members of - possibly non-public - classes.
    Static methods and class methods can be invoked, class attributes can be read and written.
    """
    __slots__ = [
        "_type",
        "_descriptor"
    ]

    logger = logging.getLogger(__name__)

    # class methods

    @classmethod
    def for_type(cls, type_: Type) -> TypeProxy:
        """
        Create a proxy for the specified class.

        Args:
            type_: the class

        Returns:
            TypeProxy: the proxy
        """
        if type_ is None:
            raise ArgumentException("type", "type is None.")

        if not isinstance(type_, type):
            raise ArgumentException("type", f"{type_!r} is not a class.")

        return TypeProxy(type_)

    @classmethod
    def for_name(cls, library_name: str, class_name: str) -> TypeProxy:
        """
        Create a proxy for the class found by module and qualified class name.

        Args:
            library_name: the module name, e.g. "package.module"
            class_name: the class name, nested classes are separated by dots

        Returns:
            TypeProxy: the proxy

        Raises:
            LibraryNotFoundException: the module cannot be imported
            TypeNotFoundException: the class does not exist in the module
        """
        return TypeProxy(resolve_type(library_name, class_name))

    # constructor

    def __init__(self, type_: Type):
        self._type = type_
        self._descriptor = TypeDescriptor.for_type(type_)

    # properties

    @property
    def type(self) -> Type:
        """
        the proxied class
        """
        return self._type

    # public

    def invoke(self, method_name: str, *args, **kwargs) -> Any:
        """
        Invoke the named static or class method.

        Args:
            method_name: the method name
            *args: positional arguments
            **kwargs: keyword arguments

        Returns:
            the value returned by the method

        Raises:
            ArgumentException: method_name is None
            MemberNotFoundException: no such static method
        """
        require_name("method_name", method_name)

        method = self._descriptor.get_method(method_name)
        if method is None or not method.is_static():
            TypeProxy.logger.debug(f"static method {method_name} not found on {self._descriptor.qualified_name}")
            raise MemberNotFoundException("Static method", method_name, self._descriptor.qualified_name)

        TypeProxy.logger.debug(f"invoke {self._descriptor.qualified_name}.{method.get_name()}")

        return getattr(self._type, method.get_name())(*args, **kwargs)

    def get_value(self, property_name: str, *index) -> Any:
        """
        Return the value of the named static property.

        Args:
            property_name: the property name
            *index: optional index arguments applied to the value

        Returns:
            the property value
        """
        require_name("property_name", property_name)

        value = self._accessor(property_name).get()

        return value[index_key(index)] if index else value

    def set_value(self, property_name: str, value: Any = None, *index) -> None:
        """
        Set the value of the named static property.

        Args:
            property_name: the property name
            value: the new value
            *index: optional index arguments addressing an item of the property value
        """
        require_name("property_name", property_name)

        accessor = self._accessor(property_name)
        if index:
            accessor.get()[index_key(index)] = value
        else:
            accessor.set(None, value)

    # internal

    def _accessor(self, property_name: str) -> TypeDescriptor.StaticPropertyDescriptor:
        accessor = self._descriptor.get_static_accessor(property_name)
        if accessor is None:
            TypeProxy.logger.debug(f"static property {property_name} not found on {self._descriptor.qualified_name}")
            raise MemberNotFoundException("Static property", property_name, self._descriptor.qualified_name)

        return accessor

    def __repr__(self):
        return f"TypeProxy({self._descriptor.qualified_name})"
