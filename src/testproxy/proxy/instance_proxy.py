from __future__ import annotations

import logging
from typing import Any, Type, Union

from testproxy.configuration import configuration
from testproxy.reflection import TypeDescriptor, candidate_names
from .exceptions import ArgumentException, MemberNotFoundException, ReadOnlyPropertyException
from .resolution import require_name, index_key, resolve_type, ConstructorResolver
from .type_proxy import TypeProxy

class InstanceProxy:
    """
    Provides access to the members of an instance of a - possibly non-public - class.
    The proxy either wraps an existing object or constructs a new one.
    """
    __slots__ = [
        "_type",
        "_instance",
        "_descriptor"
    ]

    logger = logging.getLogger(__name__)

    # class methods

    @classmethod
    def for_instance(cls, instance: Any) -> InstanceProxy:
        """
        Create a proxy for an existing object.

        Args:
            instance: the object

        Returns:
            InstanceProxy: the proxy
        """
        if instance is None:
            raise ArgumentException("instance", "instance is None.")

        return InstanceProxy(type(instance), instance)

    @classmethod
    def for_type(cls, type_: Union[Type, TypeProxy], *args, **kwargs) -> InstanceProxy:
        """
        Create a proxy for a new instance of the class constructed with the supplied arguments.

        Args:
            type_: the class or a TypeProxy
            *args: positional constructor arguments
            **kwargs: keyword constructor arguments

        Returns:
            InstanceProxy: the proxy

        Raises:
            ConstructorNotFoundException: no constructor accepts the arguments
            AmbiguousConstructorException: more than one constructor accepts the arguments
        """
        if isinstance(type_, TypeProxy):
            type_ = type_.type
        else:
            type_ = TypeProxy.for_type(type_).type

        return cls._create(type_, args, kwargs)

    @classmethod
    def for_name(cls, library_name: str, class_name: str, *args, **kwargs) -> InstanceProxy:
        """
        Create a proxy for a new instance of the class found by module and qualified class name.

        Raises:
            LibraryNotFoundException: the module cannot be imported
            TypeNotFoundException: the class does not exist in the module
        """
        return cls._create(resolve_type(library_name, class_name), args, kwargs)

    @classmethod
    def _create(cls, type_: Type, args: tuple, kwargs: dict) -> InstanceProxy:
        InstanceProxy.logger.debug(f"create {type_.__qualname__}")

        return InstanceProxy(type_, ConstructorResolver(type_).create(*args, **kwargs))

    # constructor

    def __init__(self, type_: Type, instance: Any):
        self._type = type_
        self._instance = instance
        self._descriptor = TypeDescriptor.for_type(type_)

    # properties

    @property
    def type(self) -> Type:
        """
        the class of the proxied object
        """
        return self._type

    @property
    def instance(self) -> Any:
        """
        the proxied object itself
        """
        return self._instance

    # public

    def invoke(self, method_name: str, *args, **kwargs) -> Any:
        """
        Invoke the named method.

        Args:
            method_name: the method name, private names may be given unmangled
            *args: positional arguments
            **kwargs: keyword arguments

        Returns:
            the value returned by the method

        Raises:
            ArgumentException: method_name is None
            MemberNotFoundException: no such method
        """
        require_name("method_name", method_name)

        method = self._descriptor.get_method(method_name)
        if method is not None:
            InstanceProxy.logger.debug(f"invoke {self._descriptor.qualified_name}.{method.get_name()}")

            return getattr(self._instance, method.get_name())(*args, **kwargs)

        # callables stored on the instance

        instance_dict = getattr(self._instance, "__dict__", {})
        for name in candidate_names(self._type, method_name):
            if callable(instance_dict.get(name)):
                return instance_dict[name](*args, **kwargs)

        InstanceProxy.logger.debug(f"method {method_name} not found on {self._descriptor.qualified_name}")
        raise MemberNotFoundException("Method", method_name, self._descriptor.qualified_name)

    def get_value(self, property_name: str, *index) -> Any:
        """
        Return the value of the named property.

        Args:
            property_name: the property name, private names may be given unmangled
            *index: optional index arguments applied to the value

        Returns:
            the property value
        """
        require_name("property_name", property_name)

        value = self._accessor(property_name).get(self._instance)

        return value[index_key(index)] if index else value

    def set_value(self, property_name: str, value: Any = None, *index) -> None:
        """
        Set the value of the named property. Properties that do not exist are not created.

        Args:
            property_name: the property name, private names may be given unmangled
            value: the new value
            *index: optional index arguments addressing an item of the property value
        """
        require_name("property_name", property_name)

        accessor = self._accessor(property_name)
        if index:
            accessor.get(self._instance)[index_key(index)] = value
        else:
            if accessor.is_read_only():
                raise ReadOnlyPropertyException(property_name, self._descriptor.qualified_name)

            accessor.set(self._instance, value)

    def property_names(self) -> list[str]:
        """
        Return the names of all properties of the proxied object, public and - unless configured otherwise - non-public ones.
        """
        include_non_public = configuration().get("reflection.include_non_public", bool, True)

        return self._descriptor.get_property_names(self._instance, include_non_public)

    # internal

    def _accessor(self, property_name: str) -> TypeDescriptor.PropertyDescriptor:
        accessor = self._descriptor.get_accessor(property_name, self._instance)
        if accessor is None:
            InstanceProxy.logger.debug(f"property {property_name} not found on {self._descriptor.qualified_name}")
            raise MemberNotFoundException("Property", property_name, self._descriptor.qualified_name)

        return accessor

    def __repr__(self):
        return f"InstanceProxy({self._descriptor.qualified_name}, {self._instance!r})"
