"""
Classification of single members by naming pattern, arity and result shape.
"""
from __future__ import annotations

from enum import Enum, auto
from typing import Optional, Type

from beanspyx.reflection import MemberMetadata, get_list_element_type, is_list_type, is_subclass, simple_name

from .events import EventListener, PropertyVetoException, TooManyListenersException
from .naming import ADD_PREFIX, GET_PREFIX, IS_PREFIX, REMOVE_PREFIX, SET_PREFIX, camelize, strip_prefix

class Role(Enum):
    GETTER = auto()
    SETTER = auto()
    INDEXED_GETTER = auto()
    INDEXED_SETTER = auto()
    ADD_LISTENER = auto()
    REMOVE_LISTENER = auto()
    GET_LISTENERS = auto()
    METHOD = auto()

PROPERTY_ROLES = (Role.GETTER, Role.SETTER, Role.INDEXED_GETTER, Role.INDEXED_SETTER)
EVENT_ROLES = (Role.ADD_LISTENER, Role.REMOVE_LISTENER, Role.GET_LISTENERS)

class Candidate:
    """
    A role a member may play. `key` is the property base name (e.g. "Foo") for property roles,
    the listener name (e.g. "FooListener") for event roles and the member name otherwise.
    `flagged` marks constrained setters and unicast registrations.
    """
    __slots__ = [
        "role",
        "key",
        "member",
        "flagged"
    ]

    def __init__(self, role: Role, key: str, member: MemberMetadata, flagged: bool = False):
        self.role = role
        self.key = key
        self.member = member
        self.flagged = flagged

    def __eq__(self, other):
        return (isinstance(other, Candidate) and self.role is other.role and self.key == other.key
                and self.member == other.member and self.flagged == other.flagged)

    def __hash__(self):
        return hash((self.role, self.key, self.member))

    def __repr__(self):
        return f"Candidate({self.role.name}, {self.key}, {self.member.name}{', flagged' if self.flagged else ''})"

def _property_candidate(member: MemberMetadata) -> Optional[Candidate]:
    name = member.name
    arg_count = member.param_count()
    result = member.return_type

    # names too short to carry a prefix and a base
    if arg_count == 0:
        if len(name) < 3:
            return None
    elif arg_count > 2 or len(name) < 4:
        return None

    if arg_count == 0:
        base = strip_prefix(name, GET_PREFIX)
        if result is not None and base is not None:
            return Candidate(Role.GETTER, base, member)

        base = strip_prefix(name, IS_PREFIX)
        if result is bool and base is not None:
            return Candidate(Role.GETTER, base, member)

    elif arg_count == 1:
        if result is None:
            base = strip_prefix(name, SET_PREFIX)
            if base is not None:
                return Candidate(Role.SETTER, base, member, member.declares(PropertyVetoException))
        else:
            base = strip_prefix(name, GET_PREFIX)
            if base is not None and member.param_types[0] is int:
                return Candidate(Role.INDEXED_GETTER, base, member)

    else:
        base = strip_prefix(name, SET_PREFIX)
        if result is None and base is not None and member.param_types[0] is int:
            return Candidate(Role.INDEXED_SETTER, base, member, member.declares(PropertyVetoException))

    return None

def _registration_candidate(member: MemberMetadata, prefix: str, role: Role, listener_type: Type) -> Optional[Candidate]:
    if member.return_type is not None or member.param_count() != 1:
        return None

    remainder = strip_prefix(member.name, prefix)
    argument = member.param_types[0]
    if remainder is None or not is_subclass(argument, listener_type):
        return None

    listener_name = camelize(remainder)
    if not listener_name or not simple_name(argument).endswith(listener_name):
        return None

    return Candidate(role, listener_name, member, role is Role.ADD_LISTENER and member.declares(TooManyListenersException))

def _event_candidate(member: MemberMetadata, listener_type: Type) -> Optional[Candidate]:
    name = member.name
    if name.startswith(ADD_PREFIX):
        return _registration_candidate(member, ADD_PREFIX, Role.ADD_LISTENER, listener_type)

    if name.startswith(REMOVE_PREFIX):
        return _registration_candidate(member, REMOVE_PREFIX, Role.REMOVE_LISTENER, listener_type)

    if name.startswith(GET_PREFIX) and member.param_count() == 0 and is_list_type(member.return_type):
        element = get_list_element_type(member.return_type)
        remainder = strip_prefix(name, GET_PREFIX)
        if remainder is None or not is_subclass(element, listener_type):
            return None

        # getFooListeners -> FooListener
        listener_name = camelize(remainder[:-1])
        if listener_name and simple_name(element).endswith(listener_name):
            return Candidate(Role.GET_LISTENERS, listener_name, member)

    return None

def classify_member(member: MemberMetadata, listener_type: Type = EventListener) -> list[Candidate]:
    """
    Return the candidate roles of a member: at most one property role, at most one event role
    and always a plain method role. Static members yield nothing.

    Args:
        member: the member
        listener_type: the marker type listener arguments have to extend
    """
    if member.static:
        return []

    result = []

    candidate = _property_candidate(member)
    if candidate is not None:
        result.append(candidate)

    candidate = _event_candidate(member, listener_type)
    if candidate is not None:
        result.append(candidate)

    result.append(Candidate(Role.METHOD, member.name, member))

    return result
