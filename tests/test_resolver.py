import unittest

from beanspyx.beans import (
    BeanDescriptor,
    DescriptorData,
    FeatureResolver,
    IndexedPropertyDescriptor,
    Introspector,
    MethodFinder,
    PropertyDescriptor,
    SimpleBeanInfo
)
from beanspyx.reflection import MemberMetadata


class Bag:
    pass


class BagBeanInfo(SimpleBeanInfo):
    def get_bean_descriptor(self):
        return BeanDescriptor(Bag)

    def get_property_descriptors(self):
        return [IndexedPropertyDescriptor("tags", bean_class=Bag, data=DescriptorData(display_name="Tags"))]


class TestFeatureResolver(unittest.TestCase):
    def setUp(self):
        self.resolver = FeatureResolver(MethodFinder.default())

    def test_indexed_without_indexed_accessors_is_downgraded(self):
        tags = IndexedPropertyDescriptor("tags", bean_class=Bag, data=DescriptorData(display_name="Tags"))

        resolved = self.resolver.resolve_property([tags])

        self.assertFalse(resolved.is_indexed())
        self.assertNotIsInstance(resolved, IndexedPropertyDescriptor)
        self.assertEqual(resolved.get_name(), "tags")
        self.assertIs(resolved.get_bean_class(), Bag)
        self.assertEqual(resolved.get_display_name(), "Tags")

        # the candidate stays untouched
        self.assertTrue(tags.is_indexed())

    def test_indexed_with_indexed_accessor_stays_indexed(self):
        read = MemberMetadata(name="getTags", declaring_type=Bag, param_types=(int,), return_type=str)

        resolved = self.resolver.resolve_property([IndexedPropertyDescriptor("tags", None, None, read, None)])

        self.assertTrue(resolved.is_indexed())
        self.assertEqual(resolved.indexed_accessor_count(), 1)

    def test_accessor_less_candidates_fall_back_to_the_first(self):
        first = PropertyDescriptor("tags", bean_class=Bag, data=DescriptorData(display_name="First"))
        second = PropertyDescriptor("tags", bean_class=Bag, data=DescriptorData(display_name="Second"))

        self.assertIs(self.resolver.resolve_property([first, second]), first)

    def test_no_candidates(self):
        self.assertIsNone(self.resolver.resolve_property([]))

    def test_override_without_accessors(self):
        tags = Introspector().get_bean_info(Bag).get_property_descriptor("tags")

        self.assertFalse(tags.is_indexed())
        self.assertEqual(tags.get_display_name(), "Tags")
        self.assertIsNone(tags.get_read_method())


if __name__ == '__main__':
    unittest.main()
