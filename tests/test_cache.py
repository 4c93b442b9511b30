import threading
import unittest
from concurrent.futures import ThreadPoolExecutor

import beanspyx
from beanspyx.beans import Introspector, IntrospectionCache, OverrideMode
from beanspyx.reflection import PythonReflectionProvider


class CountingProvider(PythonReflectionProvider):
    def __init__(self):
        super().__init__()

        self.calls = {}
        self.lock = threading.Lock()

    def list_public_members(self, cls):
        with self.lock:
            self.calls[cls] = self.calls.get(cls, 0) + 1

        return super().list_public_members(cls)


class Vehicle:
    def getWheels(self) -> int:
        return 4

    def setWheels(self, wheels: int) -> None:
        pass


class Car(Vehicle):
    def getBrand(self) -> str:
        return ""

    def isElectric(self) -> bool:
        return False


class Boat:
    def getLength(self) -> float:
        return 0.0


class TestCache(unittest.TestCase):
    def setUp(self):
        self.provider = CountingProvider()
        self.introspector = Introspector(self.provider)

    def test_same_instance(self):
        info = self.introspector.get_bean_info(Car)

        self.assertIs(self.introspector.get_bean_info(Car), info)
        self.assertEqual(self.provider.calls[Car], 1)

        # ancestors are cached as well
        self.assertIsNotNone(self.introspector.cache.get_bean_info(Vehicle))

    def test_flush_from_caches(self):
        info = self.introspector.get_bean_info(Car)

        self.introspector.flush_from_caches(Car)

        self.assertIsNone(self.introspector.cache.get_bean_info(Car))
        self.assertIsNotNone(self.introspector.cache.get_bean_info(Vehicle))

        again = self.introspector.get_bean_info(Car)

        self.assertIsNot(again, info)
        self.assertEqual(again.get_property_descriptors(), info.get_property_descriptors())
        self.assertEqual(self.provider.calls[Car], 2)
        self.assertEqual(self.provider.calls[Vehicle], 1)

    def test_flush_caches(self):
        self.introspector.get_bean_info(Car)
        self.introspector.get_bean_info(Boat)

        self.introspector.flush_caches()

        self.assertEqual(self.introspector.cache.bean_info_count(), 0)
        self.assertEqual(self.introspector.cache.member_count(), 0)

        self.introspector.get_bean_info(Boat)
        self.assertEqual(self.provider.calls[Boat], 2)

    def test_flush_none(self):
        with self.assertRaises(beanspyx.beans.IntrospectionConfigurationException):
            self.introspector.flush_from_caches(None)

    def test_partial_introspection_is_not_cached(self):
        self.introspector.get_bean_info(Car, mode=OverrideMode.IGNORE_ALL)

        self.assertIsNone(self.introspector.cache.get_bean_info(Car))

    def test_disabled(self):
        introspector = Introspector(self.provider, use_cache=False)

        first = introspector.get_bean_info(Car)
        second = introspector.get_bean_info(Car)

        self.assertIsNot(first, second)
        self.assertEqual(introspector.cache.bean_info_count(), 0)
        self.assertEqual(first.get_property_descriptors(), second.get_property_descriptors())

    def test_shared_cache(self):
        cache = IntrospectionCache()

        info = Introspector(cache=cache).get_bean_info(Boat)

        self.assertIs(Introspector(cache=cache).get_bean_info(Boat), info)

    def test_concurrent_access(self):
        with ThreadPoolExecutor(max_workers=8) as executor:
            infos = list(executor.map(lambda _: self.introspector.get_bean_info(Car), range(32)))

        expected = infos[0].get_property_descriptors()
        for info in infos:
            self.assertEqual(info.get_property_descriptors(), expected)
            self.assertEqual(info.get_method_descriptors(), infos[0].get_method_descriptors())

        self.assertIsNotNone(self.introspector.cache.get_bean_info(Car))
        self.assertIs(self.introspector.get_bean_info(Car), self.introspector.cache.get_bean_info(Car))


class TestModuleApi(unittest.TestCase):
    def test_default_introspector(self):
        info = beanspyx.get_bean_info(Boat)

        self.assertIs(beanspyx.get_bean_info(Boat), info)
        self.assertEqual([descriptor.get_name() for descriptor in info.get_property_descriptors()], ["length"])

        beanspyx.flush_from_caches(Boat)
        self.assertIsNot(beanspyx.get_bean_info(Boat), info)

        beanspyx.flush_caches()
        self.assertIsNone(Introspector.default().cache.get_bean_info(Boat))


if __name__ == '__main__':
    unittest.main()
