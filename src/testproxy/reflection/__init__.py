"""
This module provides tools for introspecting classes
"""
from .reflection import TypeDescriptor, PropertyExtractor, MethodKind, candidate_names, find_class_attribute, qualified_name, get_safe_type_hints

__all__ = [
    "TypeDescriptor",
    "PropertyExtractor",
    "MethodKind",

    "candidate_names",
    "find_class_attribute",
    "qualified_name",
    "get_safe_type_hints"
]
