"""
Lookup of members by name along a class hierarchy.
"""
from __future__ import annotations

import threading
from typing import Callable, Optional, Sequence, Type

from beanspyx.reflection import MemberMetadata, PythonReflectionProvider, ReflectionProvider

class MethodFinder:
    """
    Finds public, non static members of a class or its ancestors. Member lists are obtained
    through `members`, which the introspector points at its member-list cache.
    """
    __slots__ = [
        "provider",
        "members"
    ]

    # class properties

    _default: Optional[MethodFinder] = None
    _lock = threading.Lock()

    # class methods

    @classmethod
    def default(cls) -> MethodFinder:
        if cls._default is None:
            with cls._lock:
                if cls._default is None:
                    cls._default = MethodFinder(PythonReflectionProvider())

        return cls._default

    # constructor

    def __init__(self, provider: ReflectionProvider, members: Optional[Callable[[Type], Sequence[MemberMetadata]]] = None):
        self.provider = provider
        self.members = members if members is not None else provider.list_public_members

    # public

    def find_method(self, cls: Optional[Type], name: Optional[str], arg_count: int, args: Optional[Sequence] = None) -> Optional[MemberMetadata]:
        """
        return the first matching member walking from `cls` upwards, or None

        Args:
            cls: the class to start with
            name: the member name
            arg_count: the required number of parameters
            args: if given, the exact parameter types
        """
        if cls is None or name is None:
            return None

        current = cls
        while current is not None:
            for member in self.members(current):
                if member.static or member.name != name or member.param_count() != arg_count:
                    continue

                if args is not None and any(actual != expected for actual, expected in zip(member.param_types, args)):
                    continue

                return member

            current = self.provider.get_superclass(current)

        return None

    def find_any(self, cls: Optional[Type], names: Sequence[str], arg_count: int, args: Optional[Sequence] = None) -> Optional[MemberMetadata]:
        """
        return the first member matching one of several spellings
        """
        for name in names:
            member = self.find_method(cls, name, arg_count, args)
            if member is not None:
                return member

        return None
