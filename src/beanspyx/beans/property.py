"""
Property and indexed property descriptors.

A property is described by an optional read and write member. Its value type is derived
from the members and must agree between them; an indexed property additionally carries
an indexed read/write pair taking an `int` index, and if the plain type is known it has to be
a list of the indexed type.
"""
from __future__ import annotations

from typing import Any, Optional, Type

from beanspyx.reflection import MemberMetadata, get_list_element_type, is_assignable, is_list_type, is_subclass, simple_name
from beanspyx.util import StringBuilder

from .events import PropertyChangeListener
from .exceptions import IntrospectionException
from .feature import DescriptorData, DescriptorType, FeatureDescriptor
from .finder import MethodFinder
from .naming import GET_PREFIX, IS_PREFIX, SET_PREFIX, accessor_names, capitalize

ADD_PROPERTY_CHANGE_LISTENER = ["addPropertyChangeListener", "add_property_change_listener"]

def find_property_type(read_method: Optional[MemberMetadata], write_method: Optional[MemberMetadata]) -> Any:
    property_type = None
    if read_method is not None:
        if read_method.param_count() != 0:
            raise IntrospectionException(f"bad read method arg count: {read_method}")

        property_type = read_method.return_type
        if property_type is None:
            raise IntrospectionException(f"read method {read_method.name} returns nothing")

    if write_method is not None:
        if write_method.param_count() != 1:
            raise IntrospectionException(f"bad write method arg count: {write_method}")

        param_type = write_method.param_types[0]
        if property_type is not None and not is_assignable(param_type, property_type):
            raise IntrospectionException("type mismatch between read and write methods")

        property_type = param_type

    return property_type

def find_indexed_property_type(indexed_read_method: Optional[MemberMetadata], indexed_write_method: Optional[MemberMetadata],
                               property_type: Any, name: str) -> Any:
    indexed_type = None
    if indexed_read_method is not None:
        if indexed_read_method.param_count() != 1:
            raise IntrospectionException("bad indexed read method arg count")
        if indexed_read_method.param_types[0] is not int:
            raise IntrospectionException("non int index to indexed read method")

        indexed_type = indexed_read_method.return_type
        if indexed_type is None:
            raise IntrospectionException("indexed read method returns nothing")

    if indexed_write_method is not None:
        if indexed_write_method.param_count() != 2:
            raise IntrospectionException("bad indexed write method arg count")
        if indexed_write_method.param_types[0] is not int:
            raise IntrospectionException("non int index to indexed write method")
        if indexed_type is not None and indexed_type != indexed_write_method.param_types[1]:
            raise IntrospectionException(f"type mismatch between indexed read and indexed write methods: {name}")

        indexed_type = indexed_write_method.param_types[1]

    if property_type is not None and (not is_list_type(property_type) or get_list_element_type(property_type) != indexed_type):
        raise IntrospectionException(f"type mismatch between indexed and non-indexed methods: {name}")

    return indexed_type

def _same_member(a: Optional[MemberMetadata], b: Optional[MemberMetadata]) -> bool:
    return a is b or a == b

class PropertyDescriptor(FeatureDescriptor):
    """
    Describes a property exported through a pair of accessor members.
    """
    __slots__ = [
        "_bean_class",
        "_base_name",
        "_read_method",
        "_write_method",
        "_property_type",
        "_bound",
        "_constrained"
    ]

    descriptor_type = DescriptorType.PROPERTY

    # class methods

    @classmethod
    def of(cls, name: str, bean_class: Type, read_name: Optional[str] = None, write_name: Optional[str] = None,
           finder: Optional[MethodFinder] = None, data: Optional[DescriptorData] = None) -> PropertyDescriptor:
        """
        create a descriptor by looking up the accessors of `bean_class`. Accessors not named explicitly are searched
        by convention (`isFoo`, `getFoo`, `setFoo` and their snake case spellings) and may be absent.

        Raises:
            IntrospectionException: if an explicitly named accessor does not exist, or no accessor is found at all
        """
        if not name:
            raise IntrospectionException("bad property name")

        finder = finder or MethodFinder.default()

        if read_name is not None:
            read_method = finder.find_method(bean_class, read_name, 0)
            if read_method is None:
                raise IntrospectionException(f"Method not found: {read_name}")
        else:
            read_method = finder.find_any(bean_class, accessor_names(IS_PREFIX, name), 0)
            if read_method is None or read_method.return_type is not bool:
                read_method = finder.find_any(bean_class, accessor_names(GET_PREFIX, name), 0)

        args = [read_method.return_type] if read_method is not None else None
        if write_name is not None:
            write_method = finder.find_method(bean_class, write_name, 1, args)
            if write_method is None:
                raise IntrospectionException(f"Method not found: {write_name}")
        else:
            write_method = finder.find_any(bean_class, accessor_names(SET_PREFIX, name), 1, args)
            if write_method is not None and write_method.return_type is not None:
                write_method = None

        if read_method is None and write_method is None:
            raise IntrospectionException(f"no accessors found for property {name}")

        bound = finder.find_any(bean_class, ADD_PROPERTY_CHANGE_LISTENER, 1, [PropertyChangeListener]) is not None

        return cls(name, read_method, write_method, bean_class=bean_class, bound=bound, data=data)

    # constructor

    def __init__(self, name: str, read_method: Optional[MemberMetadata] = None, write_method: Optional[MemberMetadata] = None, *,
                 bean_class: Optional[Type] = None, base_name: Optional[str] = None, bound: bool = False, constrained: bool = False,
                 data: Optional[DescriptorData] = None):
        if not name:
            raise IntrospectionException("bad property name")

        super().__init__(name, data)

        self._bean_class = None
        self._base_name = base_name
        self._read_method = read_method
        self._write_method = write_method
        self._property_type = find_property_type(read_method, write_method)
        self._bound = bound
        self._constrained = constrained

        for type_ in (bean_class, getattr(read_method, "declaring_type", None), getattr(write_method, "declaring_type", None)):
            if type_ is not None:
                self._set_class0(type_)

    # internal

    def _set_class0(self, cls: Type):
        # keep the most specific class
        if self._bean_class is None or not is_subclass(self._bean_class, cls):
            self._bean_class = cls

    def _plain_equals(self, other: PropertyDescriptor) -> bool:
        return (_same_member(self._read_method, other._read_method)
                and _same_member(self._write_method, other._write_method)
                and self._property_type == other._property_type
                and self._bound == other._bound
                and self._constrained == other._constrained)

    # public

    def is_indexed(self) -> bool:
        return self.descriptor_type is DescriptorType.INDEXED_PROPERTY

    def get_bean_class(self) -> Optional[Type]:
        return self._bean_class

    def get_base_name(self) -> str:
        return self._base_name if self._base_name is not None else capitalize(self._name)

    def get_read_method(self) -> Optional[MemberMetadata]:
        return self._read_method

    def get_write_method(self) -> Optional[MemberMetadata]:
        return self._write_method

    def get_property_type(self) -> Any:
        return self._property_type

    def is_bound(self) -> bool:
        return self._bound

    def is_constrained(self) -> bool:
        return self._constrained

    def accessor_count(self) -> int:
        return (self._read_method is not None) + (self._write_method is not None)

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, PropertyDescriptor) or other.is_indexed() != self.is_indexed():
            return False

        return self._name == other._name and self._plain_equals(other)

    def __hash__(self):
        return hash((self._name, self.descriptor_type, self._read_method, self._write_method))

    def _append_to(self, builder: StringBuilder):
        pass

    def __str__(self):
        builder = StringBuilder(f"{type(self).__name__}[name={self._name}")
        builder.append_if(self._bound, "; bound")
        builder.append_if(self._constrained, "; constrained")
        builder.append_if(self._property_type is not None, f"; propertyType={simple_name(self._property_type)}")
        builder.append_if(self._read_method is not None, f"; readMethod={self._read_method}")
        builder.append_if(self._write_method is not None, f"; writeMethod={self._write_method}")
        self._append_to(builder)

        return str(builder.append("]"))

class IndexedPropertyDescriptor(PropertyDescriptor):
    """
    A property whose elements can also be accessed individually through an `int` index.
    """
    __slots__ = [
        "_indexed_read_method",
        "_indexed_write_method",
        "_indexed_property_type"
    ]

    descriptor_type = DescriptorType.INDEXED_PROPERTY

    # class methods

    @classmethod
    def of(cls, name: str, bean_class: Type, read_name: Optional[str] = None, write_name: Optional[str] = None,
           finder: Optional[MethodFinder] = None, data: Optional[DescriptorData] = None) -> IndexedPropertyDescriptor:
        """
        create an indexed descriptor by convention lookup of the plain and the indexed accessors of `bean_class`.
        `read_name` and `write_name` name the indexed accessors.

        Raises:
            IntrospectionException: if no indexed accessor is found
        """
        if not name:
            raise IntrospectionException("bad property name")

        finder = finder or MethodFinder.default()

        if read_name is not None:
            indexed_read = finder.find_method(bean_class, read_name, 1, [int])
        else:
            indexed_read = finder.find_any(bean_class, accessor_names(GET_PREFIX, name), 1, [int])

        if write_name is not None:
            indexed_write = finder.find_method(bean_class, write_name, 2)
        else:
            indexed_write = finder.find_any(bean_class, accessor_names(SET_PREFIX, name), 2)

        if indexed_write is not None and (indexed_write.param_types[0] is not int or indexed_write.return_type is not None):
            indexed_write = None

        if indexed_read is None and indexed_write is None:
            raise IntrospectionException(f"no indexed accessors found for property {name}")

        read = finder.find_any(bean_class, accessor_names(GET_PREFIX, name), 0)
        write = finder.find_any(bean_class, accessor_names(SET_PREFIX, name), 1, [read.return_type] if read is not None else None)

        try:
            return cls(name, read, write, indexed_read, indexed_write, bean_class=bean_class, data=data)
        except IntrospectionException:
            # plain accessors of an unrelated type do not belong to this property
            return cls(name, None, None, indexed_read, indexed_write, bean_class=bean_class, data=data)

    # constructor

    def __init__(self, name: str, read_method: Optional[MemberMetadata] = None, write_method: Optional[MemberMetadata] = None,
                 indexed_read_method: Optional[MemberMetadata] = None, indexed_write_method: Optional[MemberMetadata] = None, *,
                 bean_class: Optional[Type] = None, base_name: Optional[str] = None, bound: bool = False, constrained: bool = False,
                 data: Optional[DescriptorData] = None):
        super().__init__(name, read_method, write_method, bean_class=bean_class, base_name=base_name, bound=bound, constrained=constrained, data=data)

        self._indexed_read_method = indexed_read_method
        self._indexed_write_method = indexed_write_method
        self._indexed_property_type = find_indexed_property_type(indexed_read_method, indexed_write_method, self._property_type, name)

        for method in (indexed_read_method, indexed_write_method):
            if method is not None:
                self._set_class0(method.declaring_type)

    # public

    def get_indexed_read_method(self) -> Optional[MemberMetadata]:
        return self._indexed_read_method

    def get_indexed_write_method(self) -> Optional[MemberMetadata]:
        return self._indexed_write_method

    def get_indexed_property_type(self) -> Any:
        return self._indexed_property_type

    def indexed_accessor_count(self) -> int:
        return (self._indexed_read_method is not None) + (self._indexed_write_method is not None)

    def accessor_count(self) -> int:
        return super().accessor_count() + self.indexed_accessor_count()

    def to_property_descriptor(self) -> PropertyDescriptor:
        """
        return a plain descriptor with the same non indexed state
        """
        result = object.__new__(PropertyDescriptor)
        for klass in PropertyDescriptor.__mro__:
            for slot in getattr(klass, "__slots__", ()):
                object.__setattr__(result, slot, getattr(self, slot))

        return result

    def __eq__(self, other):
        if not super().__eq__(other):
            return False

        return (_same_member(self._indexed_read_method, other._indexed_read_method)
                and _same_member(self._indexed_write_method, other._indexed_write_method)
                and self._indexed_property_type == other._indexed_property_type)

    def __hash__(self):
        return hash((super().__hash__(), self._indexed_read_method, self._indexed_write_method))

    def _append_to(self, builder: StringBuilder):
        builder.append_if(self._indexed_property_type is not None, f"; indexedPropertyType={simple_name(self._indexed_property_type)}")
        builder.append_if(self._indexed_read_method is not None, f"; indexedReadMethod={self._indexed_read_method}")
        builder.append_if(self._indexed_write_method is not None, f"; indexedWriteMethod={self._indexed_write_method}")
