"""
Final resolution of the accumulated property candidates into one descriptor per name.
"""
from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .feature import FeatureDescriptor
from .finder import MethodFinder
from .merge import (
    combine_indexed_property_descriptors,
    combine_property_descriptors,
    merge_indexed_property_descriptors,
    merge_property_descriptors,
    merge_with_indexed
)
from .naming import IS_PREFIX
from .property import PropertyDescriptor

def find_feature_index(descriptors: Sequence[FeatureDescriptor], name: Optional[str]) -> int:
    """
    Return the index of the last descriptor called `name`, or -1 if there is none or no name is given.
    """
    index = -1
    if name is not None:
        for i, descriptor in enumerate(descriptors):
            if descriptor.get_name() == name:
                index = i

    return index

class FeatureResolver:
    """
    Picks the best property descriptor out of each candidate list.

    The first pass merges all getters, the second all setters whose type agrees with the chosen getter.
    Indexed and plain candidates are tracked separately and combined afterwards, preferring a complete
    indexed pair over a complete plain pair over partial ones.
    """
    __slots__ = [
        "finder"
    ]

    def __init__(self, finder: MethodFinder):
        self.finder = finder

    # internal

    def _getters(self, candidates: list[PropertyDescriptor]):
        gpd = igpd = None
        for pd in candidates:
            if pd.is_indexed():
                if pd.get_indexed_read_method() is not None:
                    igpd = pd if igpd is None else merge_indexed_property_descriptors(igpd, pd)

            elif pd.get_read_method() is not None:
                if gpd is None:
                    gpd = pd
                elif not gpd.get_read_method().name.startswith(IS_PREFIX):
                    gpd = merge_property_descriptors(gpd, pd)

        return gpd, igpd

    def _setters(self, candidates: list[PropertyDescriptor], gpd: Optional[PropertyDescriptor], igpd: Optional[PropertyDescriptor]):
        spd = ispd = None
        for pd in candidates:
            if pd.is_indexed():
                if pd.get_indexed_write_method() is None:
                    continue
                if igpd is not None and igpd.get_indexed_property_type() != pd.get_indexed_property_type():
                    continue

                ispd = pd if ispd is None else merge_indexed_property_descriptors(ispd, pd)

            elif pd.get_write_method() is not None:
                if gpd is not None and gpd.get_property_type() != pd.get_property_type():
                    continue

                spd = pd if spd is None else merge_property_descriptors(spd, pd)

        return spd, ispd

    # public

    def resolve_property(self, candidates: list[PropertyDescriptor]) -> Optional[PropertyDescriptor]:
        """
        Resolve the candidates of a single name.
        """
        gpd, igpd = self._getters(candidates)
        spd, ispd = self._setters(candidates, gpd, igpd)

        pd = None
        if igpd is not None and ispd is not None:
            # complete indexed pair, absorb compatible plain accessors
            if gpd is not None:
                merged = merge_with_indexed(igpd, gpd, self.finder)
                if merged.is_indexed():
                    igpd = merged
            if spd is not None:
                merged = merge_with_indexed(ispd, spd, self.finder)
                if merged.is_indexed():
                    ispd = merged

            pd = igpd if igpd is ispd else combine_indexed_property_descriptors(igpd, ispd)

        elif gpd is not None and spd is not None:
            pd = gpd if gpd is spd else combine_property_descriptors(gpd, spd)

        elif ispd is not None:
            pd = ispd
            if spd is not None:
                pd = merge_with_indexed(ispd, spd, self.finder)
            if gpd is not None:
                pd = merge_with_indexed(ispd, gpd, self.finder)

        elif igpd is not None:
            pd = igpd
            if gpd is not None:
                pd = merge_with_indexed(igpd, gpd, self.finder)
            if spd is not None:
                pd = merge_with_indexed(igpd, spd, self.finder)

        elif spd is not None:
            pd = spd

        elif gpd is not None:
            pd = gpd

        if pd is None and candidates:
            pd = candidates[0]

        # an indexed descriptor must carry at least one indexed accessor
        if pd is not None and pd.is_indexed() and pd.indexed_accessor_count() == 0:
            pd = pd.to_property_descriptor()

        return pd

    def resolve_properties(self, property_lists: Iterable[list[PropertyDescriptor]]) -> list[PropertyDescriptor]:
        """
        Resolve all candidate lists, the result is sorted by name.
        """
        properties = {}
        for candidates in property_lists:
            pd = self.resolve_property(candidates)
            if pd is not None:
                properties[pd.get_name()] = pd

        return [properties[name] for name in sorted(properties)]
