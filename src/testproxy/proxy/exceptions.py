"""
Exceptions raised by the proxies.
"""

class ProxyException(Exception):
    """
    Base class of all exceptions raised by testproxy.
    """
    pass

class ArgumentException(ProxyException, ValueError):
    """
    Raised if a required argument, such as a member name, is missing.
    """
    def __init__(self, argument: str, message: str):
        super().__init__(message)

        self.argument = argument

class TypeLookupException(ProxyException, LookupError):
    """
    Raised if a type cannot be resolved by name.
    """
    def __init__(self, library_name: str, class_name: str, message: str):
        super().__init__(message)

        self.library_name = library_name
        self.class_name = class_name

class LibraryNotFoundException(TypeLookupException):
    def __init__(self, library_name: str, class_name: str):
        super().__init__(library_name, class_name, f"Library '{library_name}' could not be found.")

class TypeNotFoundException(TypeLookupException):
    def __init__(self, library_name: str, class_name: str):
        super().__init__(library_name, class_name, f"Type '{class_name}' could not be found in library '{library_name}'.")

class MemberNotFoundException(ProxyException, AttributeError):
    """
    Raised if a method or property does not exist on the proxied type.
    """
    def __init__(self, kind: str, member: str, type_name: str):
        super().__init__(f"{kind} '{member}' does not exist on type '{type_name}'.")

        self.kind = kind
        self.member = member
        self.type_name = type_name

class ReadOnlyPropertyException(ProxyException, AttributeError):
    def __init__(self, member: str, type_name: str):
        super().__init__(f"Property '{member}' of type '{type_name}' is read-only.")

        self.member = member
        self.type_name = type_name

class ConstructionException(ProxyException, TypeError):
    """
    Raised if no constructor can be selected for the supplied arguments.
    """
    def __init__(self, type_name: str, message: str):
        super().__init__(message)

        self.type_name = type_name

class ConstructorNotFoundException(ConstructionException):
    def __init__(self, type_name: str, argument_types: list[str]):
        super().__init__(type_name, f"Type '{type_name}' has no constructor accepting ({', '.join(argument_types)}).")

        self.argument_types = argument_types

class AmbiguousConstructorException(ConstructionException):
    def __init__(self, type_name: str, argument_types: list[str], candidates: list[str]):
        super().__init__(type_name, f"Ambiguous constructor call on type '{type_name}' with ({', '.join(argument_types)}), candidates: {', '.join(candidates)}.")

        self.argument_types = argument_types
        self.candidates = candidates
