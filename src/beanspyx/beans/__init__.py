"""
Introspection of classes following bean naming conventions.
"""
from .exceptions import IntrospectionException, IntrospectionConfigurationException
from .events import EventListener, EventObject, PropertyChangeEvent, PropertyChangeListener, PropertyVetoException, TooManyListenersException
from .naming import decapitalize, capitalize
from .feature import DescriptorType, DescriptorData, FeatureDescriptor
from .bean import BeanDescriptor
from .method import MethodDescriptor, ParameterDescriptor
from .property import PropertyDescriptor, IndexedPropertyDescriptor
from .event_set import EventSetDescriptor
from .finder import MethodFinder
from .classifier import Role, Candidate, classify_member
from .merge import (
    merge_property_descriptors,
    merge_indexed_property_descriptors,
    merge_with_indexed,
    merge_event_sets,
    merge_method_descriptors
)
from .resolver import FeatureResolver, find_feature_index
from .bean_info import BeanInfo, SimpleBeanInfo, GenericBeanInfo, BeanInfoFinder, bean_info
from .cache import IntrospectionCache
from .introspector import OverrideMode, Introspector, get_bean_info, flush_caches, flush_from_caches

__all__ = [
    "IntrospectionException",
    "IntrospectionConfigurationException",

    "EventListener",
    "EventObject",
    "PropertyChangeEvent",
    "PropertyChangeListener",
    "PropertyVetoException",
    "TooManyListenersException",

    "decapitalize",
    "capitalize",

    "DescriptorType",
    "DescriptorData",
    "FeatureDescriptor",
    "BeanDescriptor",
    "MethodDescriptor",
    "ParameterDescriptor",
    "PropertyDescriptor",
    "IndexedPropertyDescriptor",
    "EventSetDescriptor",

    "MethodFinder",
    "Role",
    "Candidate",
    "classify_member",
    "merge_property_descriptors",
    "merge_indexed_property_descriptors",
    "merge_with_indexed",
    "merge_event_sets",
    "merge_method_descriptors",
    "FeatureResolver",
    "find_feature_index",

    "BeanInfo",
    "SimpleBeanInfo",
    "GenericBeanInfo",
    "BeanInfoFinder",
    "bean_info",
    "IntrospectionCache",

    "OverrideMode",
    "Introspector",
    "get_bean_info",
    "flush_caches",
    "flush_from_caches"
]
