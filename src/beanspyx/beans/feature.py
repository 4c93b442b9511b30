"""
Extra metadata attachable to every descriptor kind, and the common descriptor base.
"""
from __future__ import annotations

from enum import Enum, auto
from typing import Any, Dict, Iterable, Optional

from beanspyx.util import StringBuilder

class DescriptorType(Enum):
    """
    Discriminant of the descriptor kinds.
    """
    BEAN = auto()
    METHOD = auto()
    EVENT_SET = auto()
    PROPERTY = auto()
    INDEXED_PROPERTY = auto()
    PARAMETER = auto()

class DescriptorData:
    """
    Display name, short description, expert/hidden/preferred flags and a free-form attribute table.
    Descriptors only ever hand out clones, so a DescriptorData obtained from one can be modified freely.
    """
    __slots__ = [
        "display_name",
        "short_description",
        "expert",
        "hidden",
        "preferred",
        "table"
    ]

    # class methods

    @classmethod
    def merge(cls, x: Optional[DescriptorData], y: Optional[DescriptorData]) -> Optional[DescriptorData]:
        """
        merge two records, `y` taking priority for scalar values and attributes; flags are or-ed
        """
        if x is None:
            return y.clone() if y is not None else None
        if y is None:
            return x.clone()

        result = DescriptorData()
        result.expert = x.expert or y.expert
        result.hidden = x.hidden or y.hidden
        result.preferred = x.preferred or y.preferred
        result.short_description = y.short_description if y.short_description is not None else x.short_description
        result.display_name = y.display_name if y.display_name is not None else x.display_name
        result.add_table(x.table)
        result.add_table(y.table)

        return result

    # constructor

    def __init__(self, display_name: Optional[str] = None, short_description: Optional[str] = None,
                 expert: bool = False, hidden: bool = False, preferred: bool = False,
                 attributes: Optional[Dict[str, Any]] = None):
        self.display_name = display_name
        self.short_description = short_description
        self.expert = expert
        self.hidden = hidden
        self.preferred = preferred
        self.table: Optional[Dict[str, Any]] = None

        self.add_table(attributes)

    # public

    def clone(self) -> DescriptorData:
        return DescriptorData(self.display_name, self.short_description, self.expert, self.hidden, self.preferred, self.table)

    def get_display_name(self) -> Optional[str]:
        return self.display_name

    def set_display_name(self, display_name: Optional[str]):
        self.display_name = display_name

    def get_short_description(self) -> Optional[str]:
        if self.short_description is None:
            return self.display_name

        return self.short_description

    def set_short_description(self, text: Optional[str]):
        self.short_description = text

    def is_expert(self) -> bool:
        return self.expert

    def set_expert(self, expert: bool):
        self.expert = expert

    def is_hidden(self) -> bool:
        return self.hidden

    def set_hidden(self, hidden: bool):
        self.hidden = hidden

    def is_preferred(self) -> bool:
        return self.preferred

    def set_preferred(self, preferred: bool):
        self.preferred = preferred

    def set_value(self, attribute_name: str, value: Any):
        if self.table is None:
            self.table = {}

        self.table[attribute_name] = value

    def get_value(self, attribute_name: str) -> Any:
        return self.table.get(attribute_name) if self.table is not None else None

    def has_attributes(self) -> bool:
        return bool(self.table)

    def attribute_names(self) -> Iterable[str]:
        return list(self.table.keys()) if self.table else []

    def add_table(self, table: Optional[Dict[str, Any]]):
        if table:
            if self.table is None:
                self.table = {}

            self.table.update(table)

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, DescriptorData):
            return False

        return (self.expert == other.expert and self.hidden == other.hidden and self.preferred == other.preferred
                and self.display_name == other.display_name and self.short_description == other.short_description
                and (self.table or {}) == (other.table or {}))

    def __hash__(self):
        return hash((self.display_name, self.short_description, self.expert, self.hidden, self.preferred))

    def __str__(self):
        builder = StringBuilder().append("DescriptorData[")
        for name in ("display_name", "short_description"):
            value = getattr(self, name)
            if value is not None:
                builder.append(f"{name}={value}; ")
        for name in ("preferred", "hidden", "expert"):
            if getattr(self, name):
                builder.append(f"{name}; ")
        if self.table:
            builder.append("values={").append("; ".join(f"{key}={value}" for key, value in self.table.items())).append("}")

        return str(builder.append("]"))

class FeatureDescriptor:
    """
    Common base of all descriptors: a name plus optional extra metadata.
    Descriptors are immutable; metadata is only exposed as a copy.
    """
    __slots__ = [
        "_name",
        "_data"
    ]

    descriptor_type = DescriptorType.METHOD

    # constructor

    def __init__(self, name: str, data: Optional[DescriptorData] = None):
        self._name = name
        self._data = data.clone() if data is not None else None

    # internal

    def _copy(self) -> FeatureDescriptor:
        copy = object.__new__(type(self))
        for klass in type(self).__mro__:
            for slot in getattr(klass, "__slots__", ()):
                if hasattr(self, slot):
                    object.__setattr__(copy, slot, getattr(self, slot))

        return copy

    # public

    def get_name(self) -> str:
        return self._name

    def get_descriptor_type(self) -> DescriptorType:
        return self.descriptor_type

    def get_display_name(self) -> str:
        display_name = self._data.get_display_name() if self._data is not None else None
        return display_name if display_name is not None else self._name

    def get_short_description(self) -> str:
        description = self._data.short_description if self._data is not None else None
        return description if description is not None else self.get_display_name()

    def is_expert(self) -> bool:
        return self._data is not None and self._data.is_expert()

    def is_hidden(self) -> bool:
        return self._data is not None and self._data.is_hidden()

    def is_preferred(self) -> bool:
        return self._data is not None and self._data.is_preferred()

    def has_attributes(self) -> bool:
        return self._data is not None and self._data.has_attributes()

    def get_value(self, attribute_name: str) -> Any:
        return self._data.get_value(attribute_name) if self._data is not None else None

    def attribute_names(self) -> Iterable[str]:
        return self._data.attribute_names() if self._data is not None else []

    def get_descriptor_data(self) -> Optional[DescriptorData]:
        return self._data.clone() if self._data is not None else None

    def with_descriptor_data(self, data: Optional[DescriptorData]) -> FeatureDescriptor:
        """
        return a copy of this descriptor carrying the given metadata
        """
        copy = self._copy()
        copy._data = data.clone() if data is not None else None

        return copy

    def __str__(self):
        return f"{type(self).__name__}[name={self._name}]"

    def __repr__(self):
        return str(self)
