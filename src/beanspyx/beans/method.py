"""
Method and parameter descriptors.
"""
from __future__ import annotations

from typing import Optional, Sequence

from beanspyx.reflection import MemberMetadata, type_name
from beanspyx.util import StringBuilder

from .feature import DescriptorData, DescriptorType, FeatureDescriptor

class ParameterDescriptor(FeatureDescriptor):
    """
    Informational description of a method parameter; it is not tied to any member.
    """
    __slots__ = []

    descriptor_type = DescriptorType.PARAMETER

    def __init__(self, name: str, data: Optional[DescriptorData] = None):
        super().__init__(name, data)

class MethodDescriptor(FeatureDescriptor):
    """
    Describes a single callable member. The canonical parameter type names are kept
    to tell overloads apart without going back to the member.
    """
    __slots__ = [
        "_method",
        "_bean_class",
        "_param_names",
        "_parameter_descriptors"
    ]

    descriptor_type = DescriptorType.METHOD

    # constructor

    def __init__(self, method: MemberMetadata, parameter_descriptors: Optional[Sequence[ParameterDescriptor]] = None,
                 data: Optional[DescriptorData] = None):
        super().__init__(method.name, data)

        self._method = method
        self._bean_class = method.declaring_type
        self._param_names = tuple(type_name(param) for param in method.param_types)
        self._parameter_descriptors = tuple(parameter_descriptors) if parameter_descriptors is not None else None

    # public

    def get_method(self) -> MemberMetadata:
        return self._method

    def get_bean_class(self):
        return self._bean_class

    def get_param_names(self) -> tuple[str, ...]:
        return self._param_names

    def get_parameter_descriptors(self) -> Optional[tuple[ParameterDescriptor, ...]]:
        return self._parameter_descriptors

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, MethodDescriptor):
            return False

        return self._name == other._name and self._method == other._method and self._param_names == other._param_names

    def __hash__(self):
        return hash((self._name, self._param_names))

    def __str__(self):
        builder = StringBuilder(f"MethodDescriptor[name={self._name}")
        builder.append_if(self._method is not None, f"; method={self._method}")
        if self._parameter_descriptors:
            builder.append("; parameters={").extend((parameter.get_name() for parameter in self._parameter_descriptors), ", ").append("}")

        return str(builder.append("]"))
