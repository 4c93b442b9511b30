"""
The introspector walks a class hierarchy from the root down, layering the features every class
declares, or its override provider supplies, on top of the already resolved ancestor.
"""
from __future__ import annotations

import logging
import threading
from enum import Enum, auto
from typing import Optional, Sequence, Type

from beanspyx.configuration import ConfigurationManager
from beanspyx.reflection import MemberMetadata, PythonReflectionProvider, ReflectionProvider
from beanspyx.util import ConfigureLogger

from .bean import BeanDescriptor
from .bean_info import BeanInfo, BeanInfoFinder, GenericBeanInfo
from .cache import IntrospectionCache
from .collector import EventStore, LevelCollector, MethodStore, PropertyStore
from .events import EventListener
from .exceptions import IntrospectionConfigurationException
from .finder import MethodFinder
from .resolver import FeatureResolver, find_feature_index

class OverrideMode(Enum):
    """
    Controls which override providers are consulted:

    - USE_ALL: every class of the hierarchy
    - IGNORE_IMMEDIATE: all but the introspected class itself
    - IGNORE_ALL: none
    """
    USE_ALL = auto()
    IGNORE_IMMEDIATE = auto()
    IGNORE_ALL = auto()

class Introspector:
    """
    Computes the bean info of classes.

    Only canonical introspections, without stop class and consulting all override providers,
    are cached. Ancestors of a partial introspection may still be served from, and stored into,
    the cache as long as their own walk is canonical.
    """
    logger = logging.getLogger(__name__)

    # class properties

    _default: Optional[Introspector] = None
    _lock = threading.Lock()

    # class methods

    @classmethod
    def default(cls) -> Introspector:
        """
        return the process wide instance
        """
        if cls._default is None:
            with cls._lock:
                if cls._default is None:
                    cls._default = Introspector()

        return cls._default

    @classmethod
    def from_configuration(cls, manager: ConfigurationManager, provider: Optional[ReflectionProvider] = None) -> Introspector:
        """
        create an introspector from the `beanspyx.*` configuration values:

        - `beanspyx.search_path`: comma separated modules searched for override providers
        - `beanspyx.cache`: False disables caching of bean infos
        - `beanspyx.log_level`: level of the `beanspyx` logger
        """
        search_path = manager.get("beanspyx.search_path", list, [])
        use_cache = manager.get("beanspyx.cache", bool, True)
        log_level = manager.get("beanspyx.log_level", str)

        if log_level is not None:
            try:
                logging.getLogger("beanspyx").setLevel(ConfigureLogger.parse_level(log_level))
            except ValueError as e:
                raise IntrospectionConfigurationException(str(e)) from e

        return cls(provider, bean_info_finder=BeanInfoFinder(search_path), use_cache=use_cache)

    # constructor

    def __init__(self, provider: Optional[ReflectionProvider] = None, bean_info_finder: Optional[BeanInfoFinder] = None,
                 cache: Optional[IntrospectionCache] = None, use_cache: bool = True, listener_type: Type = EventListener):
        self.provider = provider if provider is not None else PythonReflectionProvider()
        self.bean_info_finder = bean_info_finder if bean_info_finder is not None else BeanInfoFinder()
        self.cache = cache if cache is not None else IntrospectionCache()
        self.use_cache = use_cache
        self.listener_type = listener_type
        self.finder = MethodFinder(self.provider, self.get_public_members)
        self.resolver = FeatureResolver(self.finder)

    # internal

    def _check_stop_class(self, bean_class: Type, stop_class: Type):
        if stop_class is object and bean_class is not object:
            return

        current = self.provider.get_superclass(bean_class)
        while current is not None:
            if current is stop_class:
                return

            current = self.provider.get_superclass(current)

        raise IntrospectionConfigurationException(f"{getattr(stop_class, '__qualname__', stop_class)} not superclass of {bean_class.__qualname__}")

    def _get_bean_info(self, bean_class: Type, stop_class: Optional[Type], mode: OverrideMode, use_cache: bool) -> BeanInfo:
        if use_cache:
            info = self.cache.get_bean_info(bean_class)
            if info is not None:
                self.logger.debug("cache hit for %s", bean_class.__qualname__)
                return info

        super_info = None
        superclass = self.provider.get_superclass(bean_class)
        if superclass is not None and superclass is not stop_class:
            super_mode = OverrideMode.USE_ALL if mode is OverrideMode.IGNORE_IMMEDIATE else mode
            super_use_cache = self.use_cache and (use_cache or (stop_class is None and super_mode is OverrideMode.USE_ALL))

            super_info = self._get_bean_info(superclass, stop_class, super_mode, super_use_cache)

        info = self._introspect(bean_class, super_info, mode is OverrideMode.USE_ALL)

        if use_cache:
            self.cache.put_bean_info(bean_class, info)

        return info

    def _introspect(self, bean_class: Type, super_info: Optional[BeanInfo], use_bean_info: bool) -> GenericBeanInfo:
        self.logger.debug("introspect %s", bean_class.__qualname__)

        explicit = self.bean_info_finder.find(bean_class) if use_bean_info else None
        additional: Sequence[BeanInfo] = ()
        explicit_events = explicit_properties = explicit_methods = None
        if explicit is not None:
            additional = [info for info in explicit.get_additional_bean_info() or () if info is not None]
            explicit_events = explicit.get_event_set_descriptors()
            explicit_properties = explicit.get_property_descriptors()
            explicit_methods = explicit.get_method_descriptors()

        collector = None
        if explicit_events is None or explicit_properties is None or explicit_methods is None:
            collector = LevelCollector(bean_class, self.finder, self.listener_type)

        # bean

        bean_descriptor = explicit.get_bean_descriptor() if explicit is not None else None
        if bean_descriptor is None:
            bean_descriptor = BeanDescriptor(bean_class)

        # methods

        method_store = MethodStore()
        if explicit_methods is None and super_info is not None:
            method_store.add_methods(super_info.get_method_descriptors())

        for info in additional:
            method_store.add_methods(info.get_method_descriptors())

        if explicit_methods is not None:
            method_store.add_methods(explicit_methods)
        else:
            collector.collect_methods(method_store)

        # events

        event_store = EventStore()
        if explicit_events is not None:
            index = explicit.get_default_event_index()
            if 0 <= index < len(explicit_events):
                event_store.default_event_name = explicit_events[index].get_name()
        elif super_info is not None:
            event_store.add_events(super_info.get_event_set_descriptors())

        for info in additional:
            event_store.add_events(info.get_event_set_descriptors())

        if explicit_events is not None:
            event_store.add_events(explicit_events)
        else:
            collector.collect_events(event_store)

        events = event_store.get_event_sets()

        # properties

        property_store = PropertyStore()
        if explicit_properties is not None:
            index = explicit.get_default_property_index()
            if 0 <= index < len(explicit_properties):
                property_store.default_property_name = explicit_properties[index].get_name()
        elif super_info is not None:
            property_store.add_properties(super_info.get_property_descriptors())

        for info in additional:
            property_store.add_properties(info.get_property_descriptors())

        if explicit_properties is not None:
            property_store.add_properties(explicit_properties)
        else:
            collector.collect_properties(property_store, event_store.property_change_source)

        properties = self.resolver.resolve_properties(property_store.get_property_lists())

        return GenericBeanInfo(
            bean_descriptor,
            events,
            find_feature_index(events, event_store.default_event_name),
            properties,
            find_feature_index(properties, property_store.default_property_name),
            method_store.get_methods()
        )

    # public

    def get_public_members(self, cls: Type) -> tuple[MemberMetadata, ...]:
        """
        return the public members declared by `cls`, served from the member cache
        """
        members = self.cache.get_members(cls)
        if members is None:
            members = self.cache.put_members(cls, self.provider.list_public_members(cls))

        return members

    def get_bean_info(self, bean_class: Type, stop_class: Optional[Type] = None, mode: OverrideMode = OverrideMode.USE_ALL) -> BeanInfo:
        """
        Introspect a class.

        Args:
            bean_class: the class
            stop_class: an ancestor whose features, and those of its own ancestors, are left out
            mode: which override providers to consult

        Returns:
            the bean info

        Raises:
            IntrospectionConfigurationException: for an invalid mode, or a stop class that is no ancestor
        """
        if not isinstance(bean_class, type):
            raise IntrospectionConfigurationException(f"{bean_class!r} is not a class")
        if not isinstance(mode, OverrideMode):
            raise IntrospectionConfigurationException(f"invalid override mode {mode!r}")
        if stop_class is not None:
            self._check_stop_class(bean_class, stop_class)

        use_cache = self.use_cache and stop_class is None and mode is OverrideMode.USE_ALL

        return self._get_bean_info(bean_class, stop_class, mode, use_cache)

    def flush_caches(self):
        """
        forget everything cached so far
        """
        self.logger.debug("flush caches")

        self.cache.clear()

    def flush_from_caches(self, cls: Type):
        """
        forget what is cached for a single class, subclasses are not affected
        """
        if cls is None:
            raise IntrospectionConfigurationException("class must not be None")

        self.logger.debug("flush %s from caches", cls.__qualname__)

        self.cache.remove(cls)

# module api

def get_bean_info(bean_class: Type, stop_class: Optional[Type] = None, mode: OverrideMode = OverrideMode.USE_ALL) -> BeanInfo:
    return Introspector.default().get_bean_info(bean_class, stop_class, mode)

def flush_caches():
    Introspector.default().flush_caches()

def flush_from_caches(cls: Type):
    Introspector.default().flush_from_caches(cls)
