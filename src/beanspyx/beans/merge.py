"""
Pairwise merge rules for same named descriptors.

All functions are pure: they return a new descriptor and never touch their arguments.
The second argument is the higher priority one (the descendant, or the later discovered candidate).
A merge that cannot satisfy the descriptor invariants degrades to the less informative alternative
instead of raising.
"""
from __future__ import annotations

import logging
from typing import Optional, Type, TypeVar

from beanspyx.reflection import MemberMetadata, get_list_element_type, is_assignable, is_list_type, is_subclass

from .event_set import EventSetDescriptor
from .exceptions import IntrospectionException
from .feature import DescriptorData
from .finder import MethodFinder
from .method import MethodDescriptor
from .naming import GET_PREFIX, IS_PREFIX, SET_PREFIX, accessor_names
from .property import IndexedPropertyDescriptor, PropertyDescriptor, find_indexed_property_type, find_property_type

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=PropertyDescriptor)

def prefers_second(m1: Optional[MemberMetadata], m2: Optional[MemberMetadata]) -> bool:
    """
    Return True if `m2` should be chosen over `m1` as a read method. `m1` is kept only if it is
    more specific: declared later in the hierarchy, or narrowing the return or parameter types.
    """
    if m1 is None:
        return True
    if m2 is None:
        return False
    if m1.name != m2.name:
        return True
    if not is_subclass(m2.declaring_type, m1.declaring_type):
        return False # m1 is declared later
    if not is_assignable(m1.return_type, m2.return_type):
        return False # m1 overrides the return type
    if m1.param_count() != m2.param_count():
        return True

    for p1, p2 in zip(m1.param_types, m2.param_types):
        if not is_assignable(p1, p2):
            return False # m1 overrides a parameter

    return True

def _prefers_is_getter(xr: Optional[MemberMetadata], yr: Optional[MemberMetadata]) -> bool:
    return (xr is not None and yr is not None
            and xr.declaring_type is yr.declaring_type
            and xr.return_type is bool and yr.return_type is bool
            and xr.name.startswith(IS_PREFIX) and yr.name.startswith(GET_PREFIX))

def _merge_plain(result_class: Type[P], x: PropertyDescriptor, y: PropertyDescriptor) -> P:
    result = object.__new__(result_class)
    result._name = y._name
    result._bean_class = y._bean_class if y._bean_class is not None else x._bean_class
    result._base_name = y._base_name if y._base_name is not None else x._base_name

    xr, yr = x._read_method, y._read_method
    read = yr if prefers_second(xr, yr) else xr
    if _prefers_is_getter(xr, yr):
        read = xr

    write = None
    for candidate in (y._write_method, x._write_method):
        if candidate is None:
            continue
        try:
            find_property_type(read, candidate)
            write = candidate
            break
        except IntrospectionException:
            logger.debug("drop write method %s of property %s: it does not match %s", candidate, result._name, read)

    result._read_method = read
    result._write_method = write
    result._property_type = find_property_type(read, write)
    for method in (read, write):
        if method is not None:
            result._set_class0(method.declaring_type)

    result._bound = x._bound or y._bound
    result._constrained = x._constrained or y._constrained
    result._data = DescriptorData.merge(x._data, y._data)

    return result

def merge_property_descriptors(x: PropertyDescriptor, y: PropertyDescriptor) -> PropertyDescriptor:
    """
    Merge the plain accessor state of two descriptors; the result is always a plain descriptor.
    """
    return _merge_plain(PropertyDescriptor, x, y)

def _more_informative(x: PropertyDescriptor, y: PropertyDescriptor) -> PropertyDescriptor:
    return x if x.accessor_count() > y.accessor_count() else y

def merge_indexed_property_descriptors(x: PropertyDescriptor, y: PropertyDescriptor) -> PropertyDescriptor:
    """
    Merge two descriptors of which at least one is indexed. Indexed accessors of `x` are kept,
    those of `y` replace them if `y` belongs to the most specific class of the result.
    If the merged accessors violate the indexed invariants, the more informative argument is returned.
    """
    try:
        result = _merge_plain(IndexedPropertyDescriptor, x, y)
    except IntrospectionException:
        return _more_informative(x, y)

    indexed_read = indexed_write = None
    if x.is_indexed():
        indexed_read, indexed_write = x._indexed_read_method, x._indexed_write_method
        for method in (indexed_read, indexed_write):
            if method is not None:
                result._set_class0(method.declaring_type)

    # the level of `y` counts, mixin members keep the mixin as declaring type
    if y.is_indexed() and y._bean_class is result._bean_class:
        if y._indexed_read_method is not None:
            indexed_read = y._indexed_read_method
        if y._indexed_write_method is not None:
            indexed_write = y._indexed_write_method

    try:
        result._indexed_property_type = find_indexed_property_type(indexed_read, indexed_write, result._property_type, result._name)
    except IntrospectionException as e:
        logger.debug("cannot merge indexed property %s: %s", result._name, e)

        return _more_informative(x, y)

    result._indexed_read_method = indexed_read
    result._indexed_write_method = indexed_write

    return result

def combine_property_descriptors(pd1: PropertyDescriptor, pd2: PropertyDescriptor) -> PropertyDescriptor:
    """
    merge two plain descriptors, giving priority to the one of the more specific class
    """
    if is_subclass(pd2._bean_class, pd1._bean_class):
        return merge_property_descriptors(pd1, pd2)

    return merge_property_descriptors(pd2, pd1)

def combine_indexed_property_descriptors(ipd1: IndexedPropertyDescriptor, ipd2: IndexedPropertyDescriptor) -> PropertyDescriptor:
    """
    merge two indexed descriptors, giving priority to the one of the more specific class
    """
    if is_subclass(ipd2._bean_class, ipd1._bean_class):
        return merge_indexed_property_descriptors(ipd1, ipd2)

    return merge_indexed_property_descriptors(ipd2, ipd1)

def _with_accessors(pd: PropertyDescriptor, read: Optional[MemberMetadata], write: Optional[MemberMetadata]) -> PropertyDescriptor:
    find_property_type(read, write)

    result = pd.to_property_descriptor() if pd.is_indexed() else pd._copy()
    result._read_method = read
    result._write_method = write
    result._property_type = find_property_type(read, write)

    return result

def merge_with_indexed(ipd: IndexedPropertyDescriptor, pd: PropertyDescriptor, finder: MethodFinder) -> PropertyDescriptor:
    """
    Combine an indexed descriptor with a plain one of the same name. If the plain type is a list of the
    indexed type both are merged; otherwise the descriptor of the more specific class survives and, if it
    is the plain one, a missing accessor is recovered by naming convention.
    """
    property_type = pd._property_type
    if is_list_type(property_type) and get_list_element_type(property_type) == ipd._indexed_property_type:
        if is_subclass(ipd._bean_class, pd._bean_class):
            return merge_indexed_property_descriptors(pd, ipd)

        return merge_indexed_property_descriptors(ipd, pd)

    if is_subclass(ipd._bean_class, pd._bean_class):
        return ipd

    result = pd
    read, write = result._read_method, result._write_method
    if read is None and write is not None:
        read = finder.find_any(result._bean_class, accessor_names(GET_PREFIX, result._name), 0)
        if read is not None:
            try:
                result = _with_accessors(result, read, write)
            except IntrospectionException:
                read = None

    if write is None and read is not None:
        write = finder.find_any(result._bean_class, accessor_names(SET_PREFIX, result._name), 1, [read.return_type])
        if write is not None and write.return_type is None:
            try:
                result = _with_accessors(result, read, write)
            except IntrospectionException:
                pass

    return result

def merge_event_sets(x: EventSetDescriptor, y: EventSetDescriptor) -> EventSetDescriptor:
    """
    `y` wins for every member it supplies, `unicast` is or-ed and membership in the default set and-ed
    """
    result = y._copy()
    result._bean_class = y._bean_class if y._bean_class is not None else x._bean_class
    result._listener_method_descriptors = y._listener_method_descriptors if y._listener_method_descriptors is not None else x._listener_method_descriptors
    result._listener_type = y._listener_type if y._listener_type is not None else x._listener_type
    result._add_method = y._add_method if y._add_method is not None else x._add_method
    result._remove_method = y._remove_method if y._remove_method is not None else x._remove_method
    result._get_method = y._get_method if y._get_method is not None else x._get_method
    result._unicast = x._unicast or y._unicast
    result._in_default_event_set = x._in_default_event_set and y._in_default_event_set
    result._data = DescriptorData.merge(x._data, y._data)

    return result

def merge_method_descriptors(x: MethodDescriptor, y: MethodDescriptor) -> MethodDescriptor:
    """
    merge two descriptors of the same signature, keeping the member of `y`
    """
    result = y._copy()
    result._bean_class = y._bean_class if y._bean_class is not None else x._bean_class
    result._method = y._method if y._method is not None else x._method
    result._param_names = y._param_names if y._param_names is not None else x._param_names
    result._parameter_descriptors = y._parameter_descriptors if y._parameter_descriptors is not None else x._parameter_descriptors
    result._data = DescriptorData.merge(x._data, y._data)

    return result
