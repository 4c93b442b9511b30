"""
Introspection cache.
"""
from __future__ import annotations

import threading
import weakref
from typing import Optional, Sequence, Type

from beanspyx.reflection import MemberMetadata

from .bean_info import BeanInfo

class IntrospectionCache:
    """
    Two maps keyed weakly by class: the public members of a class and its resolved bean info.
    Entries vanish together with their class; `remove` and `clear` evict explicitly.
    All operations are atomic, concurrent puts for the same class keep the last value.
    """
    __slots__ = [
        "_lock",
        "_members",
        "_bean_infos"
    ]

    def __init__(self):
        self._lock = threading.RLock()
        self._members: weakref.WeakKeyDictionary[Type, tuple[MemberMetadata, ...]] = weakref.WeakKeyDictionary()
        self._bean_infos: weakref.WeakKeyDictionary[Type, BeanInfo] = weakref.WeakKeyDictionary()

    # members

    def get_members(self, cls: Type) -> Optional[tuple[MemberMetadata, ...]]:
        with self._lock:
            return self._members.get(cls)

    def put_members(self, cls: Type, members: Sequence[MemberMetadata]) -> tuple[MemberMetadata, ...]:
        members = tuple(members)
        with self._lock:
            self._members[cls] = members

        return members

    # bean infos

    def get_bean_info(self, cls: Type) -> Optional[BeanInfo]:
        with self._lock:
            return self._bean_infos.get(cls)

    def put_bean_info(self, cls: Type, info: BeanInfo):
        with self._lock:
            self._bean_infos[cls] = info

    def bean_info_count(self) -> int:
        with self._lock:
            return len(self._bean_infos)

    def member_count(self) -> int:
        with self._lock:
            return len(self._members)

    # eviction

    def remove(self, cls: Type):
        with self._lock:
            self._members.pop(cls, None)
            self._bean_infos.pop(cls, None)

    def clear(self):
        with self._lock:
            self._members.clear()
            self._bean_infos.clear()
