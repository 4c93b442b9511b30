"""
beanspyx discovers the properties, event sets and methods of Python classes by naming convention.
"""
from .beans import (
    Introspector,
    OverrideMode,
    get_bean_info,
    flush_caches,
    flush_from_caches,
    decapitalize
)

__all__ = [
    "Introspector",
    "OverrideMode",
    "get_bean_info",
    "flush_caches",
    "flush_from_caches",
    "decapitalize"
]
