"""
Reflection primitives used by the introspector.
"""
from .reflection import (
    Decorators,
    DecoratorDescriptor,
    MemberMetadata,
    ReflectionProvider,
    PythonReflectionProvider,
    raises,
    declared_exceptions,
    get_safe_type_hints,
    is_list_type,
    get_list_element_type,
    is_assignable,
    is_subclass,
    simple_name,
    type_name
)

__all__ = [
    "Decorators",
    "DecoratorDescriptor",
    "MemberMetadata",
    "ReflectionProvider",
    "PythonReflectionProvider",
    "raises",
    "declared_exceptions",
    "get_safe_type_hints",
    "is_list_type",
    "get_list_element_type",
    "is_assignable",
    "is_subclass",
    "simple_name",
    "type_name"
]
