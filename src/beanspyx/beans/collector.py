"""
Per level collection of candidate descriptors.

The stores accumulate the candidates of one class level: first whatever the ancestor level or an
override provider supplies, then the descriptors built from the members the class declares itself.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Sequence, Type

from beanspyx.reflection import MemberMetadata, is_subclass
from beanspyx.util import StringBuilder

from .classifier import Candidate, Role, classify_member
from .event_set import EventSetDescriptor
from .events import EventListener, EventObject
from .exceptions import IntrospectionException
from .finder import MethodFinder
from .merge import merge_event_sets, merge_method_descriptors
from .method import MethodDescriptor
from .naming import LISTENER_SUFFIX, PROPERTY_CHANGE, decapitalize
from .property import IndexedPropertyDescriptor, PropertyDescriptor

logger = logging.getLogger(__name__)

class PropertyStore:
    """
    Maps property names to the list of candidates in discovery order, i.e. from the most abstract
    to the most specific class.
    """
    __slots__ = [
        "properties",
        "default_property_name"
    ]

    def __init__(self):
        self.properties: Dict[str, list[PropertyDescriptor]] = {}
        self.default_property_name: Optional[str] = None

    def add_properties(self, descriptors: Optional[Iterable[PropertyDescriptor]]):
        for descriptor in descriptors or ():
            self.add_property(descriptor)

    def add_property(self, descriptor: PropertyDescriptor):
        self.properties.setdefault(descriptor.get_name(), []).append(descriptor)

    def get_property_lists(self) -> Iterable[list[PropertyDescriptor]]:
        return self.properties.values()

class EventStore:
    """
    Maps event set names to a single descriptor; same named event sets are merged on arrival.
    """
    __slots__ = [
        "events",
        "default_event_name",
        "property_change_source"
    ]

    def __init__(self):
        self.events: Dict[str, EventSetDescriptor] = {}
        self.default_event_name: Optional[str] = None
        self.property_change_source = False

    def add_events(self, descriptors: Optional[Iterable[EventSetDescriptor]]):
        for descriptor in descriptors or ():
            self.add_event(descriptor)

    def add_event(self, descriptor: EventSetDescriptor):
        name = descriptor.get_name()
        if name == PROPERTY_CHANGE:
            self.property_change_source = True

        old = self.events.get(name)
        self.events[name] = descriptor if old is None else merge_event_sets(old, descriptor)

    def get_event_sets(self) -> list[EventSetDescriptor]:
        return list(self.events.values())

class MethodStore:
    """
    Maps method names to descriptors. Same named methods with equal signatures are merged, differing
    signatures are kept apart under a key qualified by the parameter type names.
    """
    __slots__ = [
        "methods"
    ]

    def __init__(self):
        self.methods: Dict[str, MethodDescriptor] = {}

    def add_methods(self, descriptors: Optional[Iterable[MethodDescriptor]]):
        for descriptor in descriptors or ():
            self.add_method(descriptor)

    def add_method(self, descriptor: MethodDescriptor):
        name = descriptor.get_name()

        old = self.methods.get(name)
        if old is None:
            self.methods[name] = descriptor
            return

        if old.get_param_names() == descriptor.get_param_names():
            self.methods[name] = merge_method_descriptors(old, descriptor)
            return

        key = self.qualified_name(name, descriptor.get_param_names())
        old = self.methods.get(key)
        self.methods[key] = descriptor if old is None else merge_method_descriptors(old, descriptor)

    @staticmethod
    def qualified_name(name: str, param_names: Sequence[str]) -> str:
        builder = StringBuilder(name).append("=")
        for param_name in param_names:
            builder.append(":").append(param_name)

        return str(builder)

    def get_methods(self) -> list[MethodDescriptor]:
        return list(self.methods.values())

class LevelCollector:
    """
    Builds the candidate descriptors contributed by the members a single class declares.
    Candidates violating the accessor rules are dropped without failing the level.
    """
    __slots__ = [
        "bean_class",
        "finder",
        "listener_type",
        "candidates"
    ]

    # constructor

    def __init__(self, bean_class: Type, finder: MethodFinder, listener_type: Type = EventListener):
        self.bean_class = bean_class
        self.finder = finder
        self.listener_type = listener_type
        self.candidates: list[Candidate] = [
            candidate for member in finder.members(bean_class) for candidate in classify_member(member, listener_type)
        ]

    # internal

    def _with_role(self, *roles: Role) -> Iterable[Candidate]:
        return (candidate for candidate in self.candidates if candidate.role in roles)

    def _is_event_handler(self, member: MemberMetadata) -> bool:
        return not member.static and member.param_count() == 1 and is_subclass(member.param_types[0], EventObject)

    def _listener_methods(self, listener_type: Type) -> list[MemberMetadata]:
        result: Dict[str, MemberMetadata] = {}

        current = listener_type
        while current is not None:
            for member in self.finder.members(current):
                if member.name not in result and self._is_event_handler(member):
                    result[member.name] = member

            current = self.finder.provider.get_superclass(current)

        return list(result.values())

    def _property_candidate(self, candidate: Candidate, bound: bool) -> PropertyDescriptor:
        name = decapitalize(candidate.key)
        member = candidate.member
        role = candidate.role

        if role is Role.GETTER:
            return PropertyDescriptor(name, member, None, bean_class=self.bean_class, base_name=candidate.key, bound=bound)
        if role is Role.SETTER:
            return PropertyDescriptor(name, None, member, bean_class=self.bean_class, base_name=candidate.key,
                                      bound=bound, constrained=candidate.flagged)
        if role is Role.INDEXED_GETTER:
            return IndexedPropertyDescriptor(name, None, None, member, None, bean_class=self.bean_class,
                                             base_name=candidate.key, bound=bound)

        return IndexedPropertyDescriptor(name, None, None, None, member, bean_class=self.bean_class,
                                         base_name=candidate.key, bound=bound, constrained=candidate.flagged)

    # public

    def collect_events(self, store: EventStore):
        adds: Dict[str, Candidate] = {}
        removes: Dict[str, MemberMetadata] = {}
        gets: Dict[str, MemberMetadata] = {}

        for candidate in self._with_role(Role.ADD_LISTENER, Role.REMOVE_LISTENER, Role.GET_LISTENERS):
            if candidate.role is Role.ADD_LISTENER:
                adds[candidate.key] = candidate
            elif candidate.role is Role.REMOVE_LISTENER:
                removes[candidate.key] = candidate.member
            else:
                gets[candidate.key] = candidate.member

        for listener_name, add in adds.items():
            remove = removes.get(listener_name)
            if remove is None or not listener_name.endswith(LISTENER_SUFFIX):
                continue

            event_name = decapitalize(listener_name[:-len(LISTENER_SUFFIX)])
            if not event_name:
                continue

            listener_type = add.member.param_types[0]
            try:
                store.add_event(EventSetDescriptor(event_name, listener_type, self._listener_methods(listener_type),
                                                   add.member, remove, gets.get(listener_name), unicast=add.flagged))
            except IntrospectionException as e:
                logger.debug("skip event set %s of %s: %s", event_name, self.bean_class.__qualname__, e)

    def collect_properties(self, store: PropertyStore, property_change_source: bool):
        for candidate in self._with_role(Role.GETTER, Role.SETTER, Role.INDEXED_GETTER, Role.INDEXED_SETTER):
            try:
                store.add_property(self._property_candidate(candidate, property_change_source))
            except IntrospectionException as e:
                logger.debug("skip %s of %s: %s", candidate, self.bean_class.__qualname__, e)

    def collect_methods(self, store: MethodStore):
        for candidate in self._with_role(Role.METHOD):
            store.add_method(MethodDescriptor(candidate.member))
