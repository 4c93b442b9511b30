from __future__ import annotations

import logging
import os
import unittest
from unittest import mock

from beanspyx.beans import Introspector, IntrospectionConfigurationException
from beanspyx.configuration import (
    ConfigurationException,
    ConfigurationManager,
    ConfigurationSource,
    DictConfigurationSource,
    EnvConfigurationSource,
    explode_key,
    merge_dicts
)
from beanspyx.util import ConfigureLogger


class SampleConfigurationSource(ConfigurationSource):
    # constructor

    def __init__(self, manager: ConfigurationManager):
        super().__init__(manager)

    def load(self) -> dict:
        return {
            "a": 1,
            "b": {
                "d": "2",
                "e": 3,
                "f": 4
                }
            }


class TestConfiguration(unittest.TestCase):
    def test_sources(self):
        manager = ConfigurationManager()
        SampleConfigurationSource(manager)
        DictConfigurationSource(manager, {"b.e": 5, "c": "x, y"})

        manager.load()

        self.assertEqual(manager.get("a", int), 1)
        self.assertEqual(manager.get("b.d", int), 2)
        self.assertEqual(manager.get("b.e", int), 5)
        self.assertEqual(manager.get("b.f", int), 4)
        self.assertEqual(manager.get("c", list), ["x", "y"])
        self.assertEqual(manager.get("b.x", int, 7), 7)
        self.assertIsNone(manager.get("a.b", int))

    def test_coercions(self):
        manager = ConfigurationManager()
        DictConfigurationSource(manager, {"yes": "True", "no": "off", "ratio": "0.5", "bad": "x"})

        manager.load()

        self.assertTrue(manager.get("yes", bool))
        self.assertFalse(manager.get("no", bool))
        self.assertEqual(manager.get("ratio", float), 0.5)

        with self.assertRaises(ConfigurationException):
            manager.get("bad", int)

        with self.assertRaises(ConfigurationException):
            manager.get("bad", dict)

    def test_helpers(self):
        self.assertEqual(explode_key("a.b/c", 1), {"a": {"b": {"c": 1}}})
        self.assertEqual(merge_dicts({"a": {"b": 1, "c": 2}}, {"a": {"b": 3}}), {"a": {"b": 3, "c": 2}})

    @mock.patch.dict(os.environ, {"beanspyx.search_path": "a,b", "BEANSPYX_PLAIN": "1"})
    def test_environment(self):
        manager = ConfigurationManager()
        EnvConfigurationSource(manager)

        manager.load()

        self.assertEqual(manager.get("beanspyx.search_path", list), ["a", "b"])
        self.assertEqual(manager.get("BEANSPYX_PLAIN", int), 1)


class TestIntrospectorConfiguration(unittest.TestCase):
    def setUp(self):
        self.level = logging.getLogger("beanspyx").level

    def tearDown(self):
        logging.getLogger("beanspyx").setLevel(self.level)

    def manager(self, values: dict) -> ConfigurationManager:
        manager = ConfigurationManager()
        DictConfigurationSource(manager, values)

        return manager.load()

    def test_defaults(self):
        introspector = Introspector.from_configuration(self.manager({}))

        self.assertTrue(introspector.use_cache)
        self.assertEqual(introspector.bean_info_finder.get_search_path(), ())

    def test_values(self):
        introspector = Introspector.from_configuration(self.manager({
            "beanspyx.search_path": "external_infos, other_infos",
            "beanspyx.cache": "false",
            "beanspyx.log_level": "debug"
        }))

        self.assertFalse(introspector.use_cache)
        self.assertEqual(introspector.bean_info_finder.get_search_path(), ("external_infos", "other_infos"))
        self.assertEqual(logging.getLogger("beanspyx").level, logging.DEBUG)

    def test_parse_level(self):
        self.assertEqual(ConfigureLogger.parse_level("warning"), logging.WARNING)
        self.assertEqual(ConfigureLogger.parse_level(logging.ERROR), logging.ERROR)

        with self.assertRaises(ValueError):
            ConfigureLogger.parse_level("chatty")

    def test_bad_log_level(self):
        with self.assertRaises(IntrospectionConfigurationException):
            Introspector.from_configuration(self.manager({"beanspyx.log_level": "chatty"}))


if __name__ == '__main__':
    unittest.main()
