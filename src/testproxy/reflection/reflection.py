"""
This module provides a TypeDescriptor class that allows introspection of the classes under test,
including their properties, methods and constructors - public, non-public and name-mangled ones.
Descriptors are cached per class.
"""
from __future__ import annotations

import inspect
import threading
import types
from abc import ABC, abstractmethod
from dataclasses import is_dataclass, fields, MISSING
from enum import Enum, auto
from functools import cached_property, partialmethod
from inspect import Parameter, Signature, signature
from typing import Callable, get_type_hints, get_overloads, Type, Dict, Optional, Any, ClassVar, Union, get_origin, get_args
from weakref import WeakKeyDictionary

from pydantic import BaseModel
from pydantic_core import PydanticUndefined
from sqlalchemy.orm import class_mapper, ColumnProperty

def get_safe_type_hints(obj) -> Dict[str, Any]:
    """
    Safe wrapper around typing.get_type_hints that never raises.
    Returns either the resolved hints or a best-effort fallback (raw __annotations__).
    """
    try:
        # functions use their globals so resolvable forward refs succeed
        if inspect.isfunction(obj) or inspect.ismethod(obj):
            return get_type_hints(obj, globalns=obj.__globals__, localns={})
        # classes / other objects
        return get_type_hints(obj)
    except Exception:
        # raw annotations, may contain strings
        anns = getattr(obj, "__annotations__", {})
        return dict(anns)

def qualified_name(cls: Type) -> str:
    """
    return the fully qualified name `module.QualName` of a class
    """
    return f"{cls.__module__}.{cls.__qualname__}"

def candidate_names(cls: Type, name: str) -> list[str]:
    """
    Return the attribute names a member spelled `name` may be stored under.
    Private `__name` members are mangled with the name of the declaring class, which can be any class of the mro.

    Args:
        cls: the class
        name: the member name as written in the source

    Returns:
        list[str]: `name` followed by all possible mangled variants
    """
    names = [name]
    if name.startswith("__") and not name.endswith("__"):
        for owner in cls.__mro__:
            stripped = owner.__name__.lstrip("_")
            if stripped and owner is not object:
                mangled = f"_{stripped}{name}"
                if mangled not in names:
                    names.append(mangled)

    return names

def find_class_attribute(cls: Type, name: str) -> Optional[tuple[Type, str, Any]]:
    """
    Look up a class attribute along the mro without triggering descriptors.

    Returns:
        the tuple (owner, resolved name, raw attribute) or None
    """
    for resolved in candidate_names(cls, name):
        for owner in cls.__mro__:
            if resolved in owner.__dict__:
                return owner, resolved, owner.__dict__[resolved]

    return None

def is_class_var(hint) -> bool:
    if hint is ClassVar or get_origin(hint) is ClassVar:
        return True

    return isinstance(hint, str) and (hint.startswith("ClassVar") or hint.startswith("typing.ClassVar"))

def matches_type(value: Any, hint: Any) -> bool:
    """
    Return True if the runtime type of `value` is exactly the annotated type.
    Unannotated parameters, `object` and `Any` only match `None`, every other value merely fits them;
    `None` matches optional types as well.
    """
    if hint is Parameter.empty or hint is object or hint is Any:
        return value is None

    if isinstance(hint, str): # unresolved forward reference
        return value is not None and type(value).__name__ == hint.rsplit(".", 1)[-1]

    origin = get_origin(hint)
    if origin is Union or origin is types.UnionType:
        return any(matches_type(value, arg) for arg in get_args(hint))

    if value is None:
        return hint is None or hint is type(None)

    if origin is not None:
        hint = origin

    return type(value) is hint

_ABSENT = object()

def make_setter(cls: Type, field_name: str) -> Optional[Callable[[Any, Any], None]]:
    """
    Create a setter for the field. Returns None if the field is a read-only property.
    """
    attr = getattr(cls, field_name, None)

    # properties call fset directly
    if isinstance(attr, property):
        if attr.fset is None:
            return None

        fset = attr.fset
        def setter(instance: Any, value: Any):
            fset(instance, value)
        return setter

    # default: setattr
    def setter(instance: Any, value: Any):
        setattr(instance, field_name, value)

    return setter

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
        if not (isinstance(cls, type) and issubclass(cls, BaseModel)):
            return None

        props = {}
        for name, field in cls.model_fields.items():
            props[name] = TypeDescriptor.PropertyDescriptor(
                cls,
                name,
                field.annotation,
                field.default if field.default is not PydanticUndefined else None
            )

        # private attributes are the non-public state of a model

        for name, private in getattr(cls, "__private_attributes__", {}).items():
            props[name] = TypeDescriptor.PropertyDescriptor(cls, name, object, private.get_default())

        return props

class DataclassPropertyExtractor(PropertyExtractor):
    def extract(self, cls: Type):
        if not is_dataclass(cls):
            return None

        props = {}
        for field in fields(cls):
            props[field.name] = TypeDescriptor.PropertyDescriptor(
                cls,
                field.name,
                field.type,
                field.default if field.default is not MISSING else None
            )
        return props

class SqlAlchemyPropertyExtractor(PropertyExtractor):
    def extract(self, cls: Type):
        if getattr(cls, "__mapper__", None) is None:
            return None

        props = {}
        for prop in class_mapper(cls).iterate_properties:
            if isinstance(prop, ColumnProperty):
                try:
                    typ = prop.columns[0].type.python_type
                except NotImplementedError:
                    typ = object

                props[prop.key] = TypeDescriptor.PropertyDescriptor(cls, prop.key, typ)

        return props

class DefaultPropertyExtractor(PropertyExtractor):
    """
    Plain classes: annotated attributes and `__slots__` along the mro.
    """
    def extract(self, cls: Type):
        hints = get_safe_type_hints(cls)

        props = {}
        for name, hint in hints.items():
            if not is_class_var(hint):
                props[name] = TypeDescriptor.PropertyDescriptor(cls, name, hint)

        for owner in reversed(cls.__mro__):
            slots = owner.__dict__.get("__slots__", ())
            if isinstance(slots, str):
                slots = [slots]

            for slot in slots:
                if slot in ("__dict__", "__weakref__"):
                    continue

                if slot.startswith("__") and not slot.endswith("__"):
                    slot = f"_{owner.__name__.lstrip('_')}{slot}"

                if slot not in props:
                    props[slot] = TypeDescriptor.PropertyDescriptor(cls, slot, hints.get(slot, object))

        return props

class MethodKind(Enum):
    INSTANCE = auto()
    CLASS = auto()
    STATIC = auto()

class TypeDescriptor:
    """
    This class provides a way to introspect Python classes: properties, methods and constructors.
    """

    # static

    _extractors: list[PropertyExtractor] = [
        PydanticPropertyExtractor(),
        DataclassPropertyExtractor(),
        SqlAlchemyPropertyExtractor()
    ]

    _default_extractor = DefaultPropertyExtractor()

    @classmethod
    def register_extractor(cls, extractor: PropertyExtractor):
        """
        register an additional extractor which takes precedence over the existing ones.
        Descriptors already cached are discarded.
        """
        with cls._lock:
            TypeDescriptor._extractors.insert(0, extractor)
            cls._cache.clear()

    @classmethod
    def extract_properties(cls, type: Type) -> tuple[Dict[str, TypeDescriptor.PropertyDescriptor], bool]:
        """
        Returns the declared properties and a flag telling whether a declarative extractor supplied them.
        """
        for extractor in TypeDescriptor._extractors:
            properties = extractor.extract(type)
            if properties is not None:
                return properties, True

        return TypeDescriptor._default_extractor.extract(type), False

    # inner classes

    class PropertyDescriptor:
        """
        Describes a class property (field), which can be read and written via reflection.
        """
        def __init__(self, cls: Type, name: str, typ: Optional[Type] = None, default: Any = None):
            self.clazz = cls
            self.name = name
            self.type = typ or object
            self.default = default
            self.setter = make_setter(cls, name)

        def is_read_only(self) -> bool:
            return self.setter is None

        def get(self, instance):
            try:
                return getattr(instance, self.name)
            except AttributeError:
                # only an attribute that is really absent falls back to the declared default
                if inspect.getattr_static(instance, self.name, _ABSENT) is _ABSENT:
                    return self.default

                raise

        def set(self, instance, value):
            self.setter(instance, value)

        def __str__(self):
            return f"Property({self.name}: {getattr(self.type, '__name__', self.type)})"

    class StaticPropertyDescriptor(PropertyDescriptor):
        """
        A class attribute. Values are written on the class that defines it.
        """
        def __init__(self, cls: Type, owner: Type, name: str):
            super().__init__(cls, name)

            self.owner = owner

        def get(self, instance = None):
            return getattr(self.clazz, self.name)

        def set(self, instance, value):
            setattr(self.owner, self.name, value)

    class MethodDescriptor:
        """
        A method of a class together with its kind.
        """
        # constructor

        def __init__(self, cls, name: str, method: Callable, kind: MethodKind):
            self.clazz = cls
            self.name = name
            self.method = method
            self.kind = kind

        # public

        def get_name(self) -> str:
            """
            return the resolved - possibly mangled - method name

            Returns:
                str: the method name
            """
            return self.name

        def is_static(self) -> bool:
            """
            return True for static and class methods, which can be called without an instance
            """
            return self.kind is not MethodKind.INSTANCE

        def __str__(self):
            return f"Method({self.name})"

    class ConstructorDescriptor:
        """
        One way to construct an instance: an `@overload` variant of `__init__` or the class signature itself.
        A `signature` of None stands for a constructor that cannot be introspected and accepts anything.
        """
        def __init__(self, cls: Type, signature: Optional[Signature], hints: Dict[str, Any]):
            self.clazz = cls
            self.signature = signature
            self.hints = hints

        # internal

        def _bind(self, args: tuple, kwargs: dict):
            try:
                return self.signature.bind(*args, **kwargs)
            except TypeError:
                return None

        # public

        def accepts(self, args: tuple, kwargs: dict) -> bool:
            """
            return True if the arguments bind to the parameters
            """
            return self.signature is None or self._bind(args, kwargs) is not None

        def matches_exactly(self, args: tuple, kwargs: dict) -> bool:
            """
            return True if the arguments bind and every argument has exactly the annotated type
            """
            if self.signature is None:
                return False

            bound = self._bind(args, kwargs)
            if bound is None:
                return False

            for name, value in bound.arguments.items():
                param = self.signature.parameters[name]
                hint = self.hints.get(name, param.annotation)

                if param.kind is Parameter.VAR_POSITIONAL:
                    values = value
                elif param.kind is Parameter.VAR_KEYWORD:
                    values = value.values()
                else:
                    values = [value]

                if not all(matches_type(v, hint) for v in values):
                    return False

            return True

        def __str__(self):
            return f"{self.clazz.__name__}{self.signature if self.signature is not None else '(...)'}"

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
        self.qualified_name = qualified_name(cls)
        self.methods: Dict[str, Optional[TypeDescriptor.MethodDescriptor]] = {}

        # properties

        self.properties, self.declarative = TypeDescriptor.extract_properties(cls)

        for owner in reversed(cls.__mro__):
            if self._is_framework_class(owner):
                continue

            for name, attr in owner.__dict__.items():
                if isinstance(attr, (property, cached_property)) and name not in self.properties:
                    self.properties[name] = TypeDescriptor.PropertyDescriptor(cls, name)

        # constructors

        self.constructors = self._create_constructors()

    # internal

    def _is_framework_class(self, cls):
        if cls is object:
            return True

        module = getattr(cls, "__module__", "")

        return module == "builtins" or module.startswith("pydantic.") or module.startswith("sqlalchemy.")

    def _create_constructors(self) -> list[TypeDescriptor.ConstructorDescriptor]:
        cls = self.cls
        init = cls.__init__

        overloads = get_overloads(init) if inspect.isfunction(init) else []
        if overloads:
            result = []
            for overload in overloads:
                sig = signature(overload)
                params = list(sig.parameters.values())[1:] # self

                result.append(TypeDescriptor.ConstructorDescriptor(cls, sig.replace(parameters=params), get_safe_type_hints(overload)))

            return result

        try:
            sig = signature(cls)
        except (TypeError, ValueError):
            return [TypeDescriptor.ConstructorDescriptor(cls, None, {})]

        hints = get_safe_type_hints(init) if inspect.isfunction(init) else {}

        return [TypeDescriptor.ConstructorDescriptor(cls, sig, hints)]

    @staticmethod
    def _method_kind(attr) -> Optional[MethodKind]:
        if isinstance(attr, staticmethod):
            return MethodKind.STATIC
        if isinstance(attr, classmethod):
            return MethodKind.CLASS
        if inspect.isroutine(attr) or isinstance(attr, partialmethod):
            return MethodKind.INSTANCE

        return None

    # public

    def get_property_names(self, instance = None, include_non_public = True) -> list[str]:
        """
        Return the names of all properties. For plain classes the attributes of the passed instance are added,
        since those are usually created in `__init__`.

        Args:
            instance: optional instance of the class
            include_non_public: if False, names starting with '_' are skipped

        Returns:
            list[str]: the property names in declaration order
        """
        names = list(self.properties.keys())

        if instance is not None and not self.declarative:
            for name in getattr(instance, "__dict__", {}):
                if name not in self.properties:
                    names.append(name)

        if not include_non_public:
            names = [name for name in names if not name.startswith("_")]

        return names

    def get_property(self, name: str) -> Optional[TypeDescriptor.PropertyDescriptor]:
        for resolved in candidate_names(self.cls, name):
            prop = self.properties.get(resolved)
            if prop is not None:
                return prop

        return None

    def get_accessor(self, name: str, instance: Any) -> Optional[TypeDescriptor.PropertyDescriptor]:
        """
        Return an accessor for an instance property of the passed instance. Besides the declared properties
        this covers instance attributes, slots and other data descriptors as well as plain class attributes.
        Methods are not properties.
        """
        prop = self.get_property(name)
        if prop is not None:
            return prop

        instance_dict = getattr(instance, "__dict__", {})
        for resolved in candidate_names(self.cls, name):
            if resolved in instance_dict:
                return TypeDescriptor.PropertyDescriptor(self.cls, resolved)

        found = find_class_attribute(self.cls, name)
        if found is not None:
            owner, resolved, attr = found
            if inspect.isdatadescriptor(attr) or (self._method_kind(attr) is None and not callable(attr)):
                return TypeDescriptor.PropertyDescriptor(self.cls, resolved)

        return None

    def get_static_accessor(self, name: str) -> Optional[TypeDescriptor.StaticPropertyDescriptor]:
        """
        Return an accessor for a static property, that is a non-callable class attribute.
        """
        found = find_class_attribute(self.cls, name)
        if found is None:
            return None

        owner, resolved, attr = found
        if inspect.isdatadescriptor(attr) or isinstance(attr, cached_property) or self._method_kind(attr) is not None or callable(attr):
            return None

        return TypeDescriptor.StaticPropertyDescriptor(self.cls, owner, resolved)

    def get_method(self, name: str) -> Optional[TypeDescriptor.MethodDescriptor]:
        """
        Returns a MethodDescriptor for the method with the given name, including inherited and mangled ones.
        """
        if name in self.methods:
            return self.methods[name]

        method = None
        found = find_class_attribute(self.cls, name)
        if found is not None:
            owner, resolved, attr = found
            kind = self._method_kind(attr)
            if kind is not None:
                function = attr.__func__ if isinstance(attr, (staticmethod, classmethod)) else attr
                method = TypeDescriptor.MethodDescriptor(owner, resolved, function, kind)

        with self._lock:
            self.methods[name] = method

        return method

    def get_constructors(self) -> list[TypeDescriptor.ConstructorDescriptor]:
        return self.constructors
