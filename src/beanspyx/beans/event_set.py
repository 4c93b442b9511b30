"""
Event set descriptor.
"""
from __future__ import annotations

from typing import Optional, Sequence, Type, Union

from beanspyx.reflection import MemberMetadata, simple_name
from beanspyx.util import StringBuilder

from .exceptions import IntrospectionException
from .feature import DescriptorData, DescriptorType, FeatureDescriptor
from .finder import MethodFinder
from .method import MethodDescriptor
from .naming import ADD_PREFIX, GET_PREFIX, REMOVE_PREFIX

class EventSetDescriptor(FeatureDescriptor):
    """
    Describes a group of events a bean fires to listeners of one listener type: the callback methods
    of that type plus the members used to register, unregister and enumerate listeners.
    """
    __slots__ = [
        "_bean_class",
        "_listener_type",
        "_listener_method_descriptors",
        "_add_method",
        "_remove_method",
        "_get_method",
        "_unicast",
        "_in_default_event_set"
    ]

    descriptor_type = DescriptorType.EVENT_SET

    # class methods

    @classmethod
    def of(cls, source_class: Type, event_set_name: str, listener_type: Type, listener_method_names: Sequence[str],
           add_name: Optional[str] = None, remove_name: Optional[str] = None, get_name: Optional[str] = None,
           finder: Optional[MethodFinder] = None, data: Optional[DescriptorData] = None) -> EventSetDescriptor:
        """
        create a descriptor by looking up the named members. Registration members default to
        `add<Listener>` / `remove<Listener>`, the optional enumeration member to `get<Listener>s`.

        Raises:
            IntrospectionException: if a listener method or a registration member does not exist
        """
        finder = finder or MethodFinder.default()
        listener_name = simple_name(listener_type)

        def required(cls_: Type, name: str, args: int) -> MemberMetadata:
            method = finder.find_method(cls_, name, args)
            if method is None:
                raise IntrospectionException(f"Method not found: {name} on class {simple_name(cls_)}")

            return method

        listener_methods = [required(listener_type, name, 1) for name in listener_method_names]
        add_method = required(source_class, add_name or ADD_PREFIX + listener_name, 1)
        remove_method = required(source_class, remove_name or REMOVE_PREFIX + listener_name, 1)
        get_method = finder.find_method(source_class, get_name or GET_PREFIX + listener_name + "s", 0)

        return cls(event_set_name, listener_type, listener_methods, add_method, remove_method, get_method, data=data)

    # constructor

    def __init__(self, name: str, listener_type: Optional[Type],
                 listener_methods: Optional[Sequence[Union[MethodDescriptor, MemberMetadata]]],
                 add_method: Optional[MemberMetadata], remove_method: Optional[MemberMetadata],
                 get_method: Optional[MemberMetadata] = None, *,
                 unicast: bool = False, in_default_event_set: bool = True, data: Optional[DescriptorData] = None):
        if not name:
            raise IntrospectionException("bad event set name")

        if add_method is not None and remove_method is not None:
            if add_method.param_count() != 1 or remove_method.param_count() != 1 or add_method.param_types[0] != remove_method.param_types[0]:
                raise IntrospectionException(f"add and remove methods of event set {name} disagree on the listener type")

        super().__init__(name, data)

        self._listener_type = listener_type
        self._listener_method_descriptors = tuple(
            method if isinstance(method, MethodDescriptor) else MethodDescriptor(method) for method in listener_methods
        ) if listener_methods is not None else None
        self._add_method = add_method
        self._remove_method = remove_method
        self._get_method = get_method
        self._unicast = unicast
        self._in_default_event_set = in_default_event_set
        self._bean_class = next((method.declaring_type for method in (add_method, remove_method, get_method) if method is not None), None)

    # public

    def get_bean_class(self) -> Optional[Type]:
        return self._bean_class

    def get_listener_type(self) -> Optional[Type]:
        return self._listener_type

    def get_listener_methods(self) -> tuple[MemberMetadata, ...]:
        return tuple(descriptor.get_method() for descriptor in self._listener_method_descriptors or ())

    def get_listener_method_descriptors(self) -> Optional[tuple[MethodDescriptor, ...]]:
        return self._listener_method_descriptors

    def get_add_listener_method(self) -> Optional[MemberMetadata]:
        return self._add_method

    def get_remove_listener_method(self) -> Optional[MemberMetadata]:
        return self._remove_method

    def get_get_listener_method(self) -> Optional[MemberMetadata]:
        return self._get_method

    def is_unicast(self) -> bool:
        return self._unicast

    def is_in_default_event_set(self) -> bool:
        return self._in_default_event_set

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, EventSetDescriptor):
            return False

        return (self._name == other._name
                and self._listener_type is other._listener_type
                and self._listener_method_descriptors == other._listener_method_descriptors
                and self._add_method == other._add_method
                and self._remove_method == other._remove_method
                and self._get_method == other._get_method
                and self._unicast == other._unicast
                and self._in_default_event_set == other._in_default_event_set)

    def __hash__(self):
        return hash((self._name, self._add_method, self._remove_method))

    def __str__(self):
        builder = StringBuilder(f"EventSetDescriptor[name={self._name}")
        builder.append_if(self._unicast, "; unicast")
        builder.append_if(not self._in_default_event_set, "; inDefaultEventSet=false")
        builder.append_if(self._listener_type is not None, f"; listenerType={simple_name(self._listener_type)}")
        builder.append_if(self._add_method is not None, f"; addListenerMethod={self._add_method}")
        builder.append_if(self._remove_method is not None, f"; removeListenerMethod={self._remove_method}")
        builder.append_if(self._get_method is not None, f"; getListenerMethod={self._get_method}")

        return str(builder.append("]"))
