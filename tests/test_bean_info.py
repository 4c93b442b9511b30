import unittest

from beanspyx.beans import (
    BeanDescriptor,
    BeanInfoFinder,
    DescriptorData,
    EventListener,
    EventObject,
    EventSetDescriptor,
    Introspector,
    MethodDescriptor,
    MethodFinder,
    OverrideMode,
    PropertyDescriptor,
    SimpleBeanInfo,
    bean_info
)
from external_beans import External

# module lookup

class Widget:
    def getSize(self) -> int:
        return 0

    def setSize(self, size: int) -> None:
        pass

    def getTitle(self) -> str:
        return ""


class WidgetBeanInfo(SimpleBeanInfo):
    def get_bean_descriptor(self):
        return BeanDescriptor(Widget, DescriptorData(attributes={"test": True}))

    def get_property_descriptors(self):
        return [PropertyDescriptor.of("size", Widget, data=DescriptorData(preferred=True))]

    def get_default_property_index(self):
        return 0


class FancyWidget(Widget):
    def getColor(self) -> str:
        return ""

# registration

class Gadget:
    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass


@bean_info(Gadget)
class GadgetDescription(SimpleBeanInfo):
    def get_bean_descriptor(self):
        return BeanDescriptor(Gadget, DescriptorData(attributes={"test": True}))

    def get_method_descriptors(self):
        return [MethodDescriptor(MethodFinder.default().find_method(Gadget, "start", 0))]

# the class is its own bean info

class SelfDescribing(SimpleBeanInfo):
    def get_bean_descriptor(self):
        return BeanDescriptor(SelfDescribing, DescriptorData(attributes={"test": True}))

# events and defaults

class ActionEvent(EventObject):
    pass


class ActionListener(EventListener):
    def actionPerformed(self, event: ActionEvent) -> None:
        pass


class Toolbar:
    def addActionListener(self, listener: ActionListener) -> None:
        pass

    def removeActionListener(self, listener: ActionListener) -> None:
        pass

    def getHeight(self) -> int:
        return 0


class ToolbarBeanInfo(SimpleBeanInfo):
    def get_bean_descriptor(self):
        return BeanDescriptor(Toolbar)

    def get_event_set_descriptors(self):
        return [EventSetDescriptor.of(Toolbar, "action", ActionListener, ["actionPerformed"], data=DescriptorData(expert=True))]

    def get_default_event_index(self):
        return 0

# additional infos

class Panel:
    def getWidth(self) -> int:
        return 0


class PanelExtras(SimpleBeanInfo):
    def get_property_descriptors(self):
        return [PropertyDescriptor.of("width", Panel, data=DescriptorData(display_name="Width"))]


class PanelBeanInfo(SimpleBeanInfo):
    def get_bean_descriptor(self):
        return BeanDescriptor(Panel)

    def get_additional_bean_info(self):
        return [PanelExtras(), None]

# invalid and failing infos

class Orphan:
    pass


class OrphanBeanInfo(SimpleBeanInfo):
    def get_bean_descriptor(self):
        return BeanDescriptor(Widget)


class Unrelated:
    pass


class Broken:
    pass


class BrokenBeanInfo(SimpleBeanInfo):
    def __init__(self):
        raise RuntimeError("broken")


def names(descriptors):
    return [descriptor.get_name() for descriptor in descriptors]


class TestBeanInfoFinder(unittest.TestCase):
    def test_module_lookup(self):
        self.assertIsInstance(BeanInfoFinder().find(Widget), WidgetBeanInfo)

    def test_registration(self):
        self.assertIsInstance(BeanInfoFinder().find(Gadget), GadgetDescription)

    def test_self_describing(self):
        self.assertIsInstance(BeanInfoFinder().find(SelfDescribing), SelfDescribing)

    def test_unregister(self):
        class Temporary:
            pass

        class TemporaryInfo(SimpleBeanInfo):
            def get_bean_descriptor(self):
                return BeanDescriptor(Temporary)

        BeanInfoFinder.register(Temporary, TemporaryInfo)
        self.assertIsInstance(BeanInfoFinder().find(Temporary), TemporaryInfo)

        BeanInfoFinder.unregister(Temporary)
        self.assertIsNone(BeanInfoFinder().find(Temporary))

    def test_search_path(self):
        finder = BeanInfoFinder()
        self.assertIsNone(finder.find(External))

        finder.set_search_path(["no_such_module", "external_infos"])
        self.assertEqual(finder.get_search_path(), ("no_such_module", "external_infos"))

        info = finder.find(External)
        self.assertEqual(type(info).__name__, "ExternalBeanInfo")
        self.assertEqual(info.get_property_descriptors()[0].get_display_name(), "Label")

    def test_missing_search_path_modules(self):
        self.assertIsNone(BeanInfoFinder(["no_such_package.infos", "no_such_module"]).find(External))

    def test_search_path_module_failing_its_imports(self):
        with self.assertRaises(ModuleNotFoundError) as context:
            BeanInfoFinder(["broken_infos", "external_infos"]).find(External)

        self.assertEqual(context.exception.name, "missing_dependency_of_broken_infos")

    def test_info_must_describe_the_class(self):
        self.assertIsNone(BeanInfoFinder().find(Orphan))
        self.assertIsNone(BeanInfoFinder(["external_infos"]).find(Unrelated))

    def test_nothing_found(self):
        self.assertIsNone(BeanInfoFinder().find(FancyWidget))
        self.assertIsNone(BeanInfoFinder().find(None))

    def test_failures_propagate(self):
        with self.assertRaises(RuntimeError):
            BeanInfoFinder().find(Broken)


class TestOverrides(unittest.TestCase):
    def setUp(self):
        self.introspector = Introspector()

    def test_marked_bean_info(self):
        for cls in (Widget, Gadget, SelfDescribing):
            info = self.introspector.get_bean_info(cls)

            self.assertIs(info.get_bean_descriptor().get_value("test"), True, cls.__name__)

    def test_override_replaces_reflection(self):
        info = self.introspector.get_bean_info(Widget)

        self.assertEqual(names(info.get_property_descriptors()), ["size"])
        self.assertTrue(info.get_property_descriptor("size").is_preferred())
        self.assertEqual(info.get_default_property_index(), 0)

        # categories not supplied are reflected
        self.assertIn("getTitle", names(info.get_method_descriptors()))

    def test_override_methods(self):
        info = self.introspector.get_bean_info(Gadget)

        self.assertEqual(names(info.get_method_descriptors()), ["start"])

    def test_descendant_layers_on_override(self):
        info = self.introspector.get_bean_info(FancyWidget)

        self.assertEqual(names(info.get_property_descriptors()), ["color", "size"])
        self.assertTrue(info.get_property_descriptor("size").is_preferred())
        self.assertEqual(info.get_bean_descriptor().get_name(), "FancyWidget")
        self.assertIsNone(info.get_bean_descriptor().get_value("test"))
        self.assertEqual(info.get_default_property_index(), -1)

    def test_ignore_immediate(self):
        info = self.introspector.get_bean_info(Widget, mode=OverrideMode.IGNORE_IMMEDIATE)

        self.assertEqual(names(info.get_property_descriptors()), ["size", "title"])
        self.assertIsNone(info.get_bean_descriptor().get_value("test"))

        # ancestors still consult their override
        info = self.introspector.get_bean_info(FancyWidget, mode=OverrideMode.IGNORE_IMMEDIATE)
        self.assertEqual(names(info.get_property_descriptors()), ["color", "size"])

    def test_ignore_all(self):
        info = self.introspector.get_bean_info(FancyWidget, mode=OverrideMode.IGNORE_ALL)

        self.assertEqual(names(info.get_property_descriptors()), ["color", "size", "title"])
        self.assertFalse(info.get_property_descriptor("size").is_preferred())

    def test_default_event(self):
        info = self.introspector.get_bean_info(Toolbar)

        self.assertEqual(names(info.get_event_set_descriptors()), ["action"])
        self.assertEqual(info.get_default_event_index(), 0)
        self.assertTrue(info.get_event_set_descriptors()[0].is_expert())
        self.assertEqual(names(info.get_property_descriptors()), ["height"])

    def test_additional_bean_info(self):
        width = self.introspector.get_bean_info(Panel).get_property_descriptor("width")

        self.assertEqual(width.get_display_name(), "Width")
        self.assertEqual(width.get_read_method().name, "getWidth")

    def test_failure_is_not_cached(self):
        with self.assertRaises(RuntimeError):
            self.introspector.get_bean_info(Broken)

        self.assertIsNone(self.introspector.cache.get_bean_info(Broken))

        info = self.introspector.get_bean_info(Broken, mode=OverrideMode.IGNORE_ALL)
        self.assertEqual(info.get_bean_descriptor().get_name(), "Broken")

    def test_rejected_info_is_ignored(self):
        self.assertEqual(self.introspector.get_bean_info(Orphan).get_bean_descriptor().get_name(), "Orphan")


if __name__ == '__main__':
    unittest.main()
