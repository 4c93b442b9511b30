"""
Bean infos: the resolved description of a class, and the hand authored override providers
a class may supply to replace reflected information.
"""
from __future__ import annotations

import importlib
import inspect
import logging
import sys
import threading
import weakref
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Type

from beanspyx.reflection import Decorators, MemberMetadata, is_subclass

from .bean import BeanDescriptor
from .event_set import EventSetDescriptor
from .method import MethodDescriptor
from .property import PropertyDescriptor

class BeanInfo(ABC):
    """
    Description of a class. Every accessor may answer None for "not supplied", in which case
    the introspector derives that part by reflection.
    """
    @abstractmethod
    def get_bean_descriptor(self) -> Optional[BeanDescriptor]:
        pass

    @abstractmethod
    def get_property_descriptors(self) -> Optional[Sequence[PropertyDescriptor]]:
        pass

    @abstractmethod
    def get_default_property_index(self) -> int:
        pass

    @abstractmethod
    def get_event_set_descriptors(self) -> Optional[Sequence[EventSetDescriptor]]:
        pass

    @abstractmethod
    def get_default_event_index(self) -> int:
        pass

    @abstractmethod
    def get_method_descriptors(self) -> Optional[Sequence[MethodDescriptor]]:
        pass

    @abstractmethod
    def get_additional_bean_info(self) -> Optional[Sequence[BeanInfo]]:
        pass

class SimpleBeanInfo(BeanInfo):
    """
    Convenience base for override providers that supply only some of the categories.
    """
    def get_bean_descriptor(self) -> Optional[BeanDescriptor]:
        return None

    def get_property_descriptors(self) -> Optional[Sequence[PropertyDescriptor]]:
        return None

    def get_default_property_index(self) -> int:
        return -1

    def get_event_set_descriptors(self) -> Optional[Sequence[EventSetDescriptor]]:
        return None

    def get_default_event_index(self) -> int:
        return -1

    def get_method_descriptors(self) -> Optional[Sequence[MethodDescriptor]]:
        return None

    def get_additional_bean_info(self) -> Optional[Sequence[BeanInfo]]:
        return None

class GenericBeanInfo(BeanInfo):
    """
    The immutable result of an introspection.
    """
    __slots__ = [
        "_bean_descriptor",
        "_events",
        "_default_event_index",
        "_properties",
        "_default_property_index",
        "_methods"
    ]

    def __init__(self, bean_descriptor: BeanDescriptor, events: Sequence[EventSetDescriptor], default_event_index: int,
                 properties: Sequence[PropertyDescriptor], default_property_index: int, methods: Sequence[MethodDescriptor]):
        self._bean_descriptor = bean_descriptor
        self._events = tuple(events)
        self._default_event_index = default_event_index
        self._properties = tuple(properties)
        self._default_property_index = default_property_index
        self._methods = tuple(methods)

    # implement

    def get_bean_descriptor(self) -> BeanDescriptor:
        return self._bean_descriptor

    def get_property_descriptors(self) -> tuple[PropertyDescriptor, ...]:
        return self._properties

    def get_default_property_index(self) -> int:
        return self._default_property_index

    def get_event_set_descriptors(self) -> tuple[EventSetDescriptor, ...]:
        return self._events

    def get_default_event_index(self) -> int:
        return self._default_event_index

    def get_method_descriptors(self) -> tuple[MethodDescriptor, ...]:
        return self._methods

    def get_additional_bean_info(self) -> None:
        return None

    # public

    def get_property_descriptor(self, name: str) -> Optional[PropertyDescriptor]:
        return next((descriptor for descriptor in self._properties if descriptor.get_name() == name), None)

    def get_event_set_descriptor(self, name: str) -> Optional[EventSetDescriptor]:
        return next((descriptor for descriptor in self._events if descriptor.get_name() == name), None)

    def get_method_descriptor(self, name: str) -> Optional[MethodDescriptor]:
        return next((descriptor for descriptor in self._methods if descriptor.get_name() == name), None)

    def __str__(self):
        return (f"GenericBeanInfo[bean={self._bean_descriptor.get_name()}; properties={len(self._properties)}; "
                f"events={len(self._events)}; methods={len(self._methods)}]")

def bean_info(target: Type):
    """
    Class decorator registering the decorated BeanInfo as override provider of `target`.
    """
    def decorator(cls):
        Decorators.add(cls, bean_info, target)

        BeanInfoFinder.register(target, cls)

        return cls

    return decorator

class BeanInfoFinder:
    """
    Locates the override provider of a class. In order, it consults

    - providers registered with `@bean_info(Target)`
    - a `<Name>BeanInfo` attribute of the module defining the class
    - the class itself, if it is a BeanInfo
    - a `<Name>BeanInfo` attribute of every module on the search path

    A located provider is used only if it actually describes the class. Missing modules or
    attributes just mean "not found"; errors raised while importing a search path module, or while instantiating
    or querying a provider, propagate.
    """
    logger = logging.getLogger(__name__)

    # class properties

    _registry: weakref.WeakKeyDictionary[Type, Type[BeanInfo]] = weakref.WeakKeyDictionary()
    _lock = threading.Lock()

    # class methods

    @classmethod
    def register(cls, target: Type, info_class: Type[BeanInfo]):
        with cls._lock:
            cls._registry[target] = info_class

    @classmethod
    def unregister(cls, target: Type):
        with cls._lock:
            cls._registry.pop(target, None)

    # constructor

    def __init__(self, search_path: Sequence[str] = ()):
        self._search_path = tuple(search_path)

    # internal

    @staticmethod
    def _is_valid(bean_class: Type, method: Optional[MemberMetadata]) -> bool:
        return method is not None and is_subclass(bean_class, method.declaring_type)

    def _accept(self, bean_class: Type, info: BeanInfo) -> Optional[BeanInfo]:
        descriptor = info.get_bean_descriptor()
        if descriptor is not None:
            return info if descriptor.get_bean_class() is bean_class else None

        properties = info.get_property_descriptors()
        if properties is not None:
            for descriptor in properties:
                method = descriptor.get_read_method() or descriptor.get_write_method()
                if self._is_valid(bean_class, method):
                    return info

            return None

        for method in info.get_method_descriptors() or ():
            if self._is_valid(bean_class, method.get_method()):
                return info

        return None

    def _instantiate(self, bean_class: Type, info_class) -> Optional[BeanInfo]:
        if not isinstance(info_class, type) or not issubclass(info_class, BeanInfo):
            return None
        if inspect.isabstract(info_class) or issubclass(info_class, GenericBeanInfo):
            return None

        return self._accept(bean_class, info_class())

    def _from_module(self, bean_class: Type, module_name: str) -> Optional[BeanInfo]:
        module = sys.modules.get(module_name)
        if module is None:
            try:
                module = importlib.import_module(module_name)
            except ModuleNotFoundError as e:
                # a module that fails its own imports is broken, not missing
                if e.name is None or not (module_name == e.name or module_name.startswith(e.name + ".")):
                    raise

                self.logger.debug("bean info module %s not found", module_name)
                return None

        return self._instantiate(bean_class, getattr(module, f"{bean_class.__name__}BeanInfo", None))

    # public

    def get_search_path(self) -> tuple[str, ...]:
        return self._search_path

    def set_search_path(self, search_path: Sequence[str]):
        self._search_path = tuple(search_path)

    def find(self, bean_class: Optional[Type]) -> Optional[BeanInfo]:
        """
        return the override provider of `bean_class` or None
        """
        if bean_class is None:
            return None

        with self._lock:
            registered = self._registry.get(bean_class)

        info = self._instantiate(bean_class, registered) if registered is not None else None

        if info is None:
            info = self._from_module(bean_class, bean_class.__module__)

        if info is None:
            info = self._instantiate(bean_class, bean_class)

        for module_name in self._search_path:
            if info is not None:
                break

            info = self._from_module(bean_class, module_name)

        if info is not None:
            self.logger.debug("found bean info %s for %s", type(info).__qualname__, bean_class.__qualname__)

        return info
