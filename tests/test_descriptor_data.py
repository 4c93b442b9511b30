import unittest

from beanspyx.beans import DescriptorData, ParameterDescriptor


class TestDescriptorData(unittest.TestCase):
    def test_defaults(self):
        data = DescriptorData()

        self.assertFalse(data.is_expert())
        self.assertFalse(data.is_hidden())
        self.assertFalse(data.is_preferred())
        self.assertFalse(data.has_attributes())
        self.assertEqual(list(data.attribute_names()), [])

    def test_clone_isolates_attributes(self):
        data1 = DescriptorData()
        data1.set_value("test1", "value1")

        self.assertTrue(data1.has_attributes())
        self.assertEqual(list(data1.attribute_names()), ["test1"])
        self.assertEqual(data1.get_value("test1"), "value1")

        data2 = data1.clone()
        self.assertTrue(data2.has_attributes())
        self.assertIsNone(data1.get_value("test2"))
        self.assertIsNone(data2.get_value("test2"))

        data1.set_value("test2", "value2")
        self.assertEqual(data1.get_value("test2"), "value2")
        self.assertIsNone(data2.get_value("test2"))

        data2.set_value("test3", "value3")
        self.assertIsNone(data1.get_value("test3"))
        self.assertEqual(data2.get_value("test3"), "value3")

    def test_clone_isolates_flags(self):
        data1 = DescriptorData()
        data2 = data1.clone()

        data1.set_expert(True)
        self.assertTrue(data1.is_expert())
        self.assertFalse(data1.is_hidden())
        self.assertFalse(data2.is_expert())

        data1.set_hidden(True)
        data2.set_preferred(True)
        self.assertTrue(data1.is_hidden())
        self.assertFalse(data1.is_preferred())
        self.assertFalse(data2.is_hidden())
        self.assertTrue(data2.is_preferred())

    def test_short_description_defaults_to_display_name(self):
        data = DescriptorData(display_name="Foo")

        self.assertEqual(data.get_short_description(), "Foo")

        data.set_short_description("the foo")
        self.assertEqual(data.get_short_description(), "the foo")

    def test_merge(self):
        x = DescriptorData(display_name="x", expert=True, attributes={"a": 1, "b": 2})
        y = DescriptorData(short_description="y", hidden=True, attributes={"b": 3})

        merged = DescriptorData.merge(x, y)

        self.assertEqual(merged.get_display_name(), "x")
        self.assertEqual(merged.get_short_description(), "y")
        self.assertTrue(merged.is_expert())
        self.assertTrue(merged.is_hidden())
        self.assertFalse(merged.is_preferred())
        self.assertEqual(merged.get_value("a"), 1)
        self.assertEqual(merged.get_value("b"), 3)

        # arguments are untouched
        self.assertFalse(x.is_hidden())
        self.assertEqual(x.get_value("b"), 2)

    def test_merge_with_missing_side(self):
        x = DescriptorData(display_name="x")

        self.assertIsNone(DescriptorData.merge(None, None))
        self.assertEqual(DescriptorData.merge(x, None), x)
        self.assertIsNot(DescriptorData.merge(None, x), x)

    def test_descriptor_hands_out_clones(self):
        data = DescriptorData(display_name="Count", attributes={"unit": "pcs"})
        parameter = ParameterDescriptor("count", data)

        copy = parameter.get_descriptor_data()
        copy.set_value("unit", "kg")
        data.set_value("unit", "t")

        self.assertEqual(parameter.get_value("unit"), "pcs")
        self.assertEqual(parameter.get_display_name(), "Count")

    def test_with_descriptor_data(self):
        parameter = ParameterDescriptor("count")
        other = parameter.with_descriptor_data(DescriptorData(expert=True))

        self.assertFalse(parameter.is_expert())
        self.assertTrue(other.is_expert())
        self.assertEqual(other.get_name(), "count")
        self.assertEqual(parameter.get_display_name(), "count")


if __name__ == '__main__':
    unittest.main()
