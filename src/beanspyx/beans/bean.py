"""
Bean level descriptor.
"""
from __future__ import annotations

import weakref
from typing import Optional, Type

from .feature import DescriptorData, DescriptorType, FeatureDescriptor

class BeanDescriptor(FeatureDescriptor):
    """
    Describes the class itself. The class is only referenced weakly.
    """
    __slots__ = [
        "_bean_class_ref"
    ]

    descriptor_type = DescriptorType.BEAN

    def __init__(self, bean_class: Type, data: Optional[DescriptorData] = None):
        super().__init__(bean_class.__name__, data)

        self._bean_class_ref = weakref.ref(bean_class)

    def get_bean_class(self) -> Optional[Type]:
        return self._bean_class_ref()

    def __str__(self):
        bean_class = self.get_bean_class()
        suffix = f"; beanClass={bean_class.__module__}.{bean_class.__qualname__}" if bean_class is not None else ""

        return f"BeanDescriptor[name={self._name}{suffix}]"
