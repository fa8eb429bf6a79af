from __future__ import annotations

import os
import tempfile
import unittest
from unittest import mock

from testproxy.configuration import ConfigurationManager, ConfigurationSource, DictConfigurationSource, \
    EnvConfigurationSource, ConfigurationException, configuration, DEFAULTS


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
                "f": "yes"
                }
            }

class TestConfiguration(unittest.TestCase):
    def setUp(self):
        self.manager = ConfigurationManager()

        SampleConfigurationSource(self.manager)

        self.manager.load()

    def test_get(self):
        self.assertEqual(self.manager.get("a", int), 1)
        self.assertEqual(self.manager.get("b.e", int), 3)

    def test_coercion(self):
        self.assertEqual(self.manager.get("b.d", int), 2)
        self.assertEqual(self.manager.get("b.f", bool), True)
        self.assertEqual(self.manager.get("a", str), "1")

    def test_default(self):
        self.assertEqual(self.manager.get("b.x", int, 7), 7)
        self.assertIsNone(self.manager.get("x.y", int))

    def test_failed_coercion(self):
        with self.assertRaises(ConfigurationException):
            self.manager.get("b", int)

    def test_later_sources_win(self):
        DictConfigurationSource(self.manager, {"b": {"e": 4}})

        self.manager.load()

        self.assertEqual(self.manager.get("b.e", int), 4)
        self.assertEqual(self.manager.get("b.d", int), 2)

    def test_override(self):
        with self.manager.override({"b": {"e": 5}}):
            self.assertEqual(self.manager.get("b.e", int), 5)
            self.assertEqual(self.manager.get("a", int), 1)

        self.assertEqual(self.manager.get("b.e", int), 3)

    def test_environment(self):
        manager = ConfigurationManager()

        DictConfigurationSource(manager, DEFAULTS)
        EnvConfigurationSource(manager)

        with mock.patch.dict(os.environ, {"TESTPROXY_ASSERTIONS__LEGACY_SEMANTICS": "true"}):
            manager.load()

        self.assertTrue(manager.get("assertions.legacy_semantics", bool))
        self.assertTrue(manager.get("reflection.include_non_public", bool))

    def test_dotenv_file(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, ".env")
            with open(path, "w") as file:
                file.write("TESTPROXY_ASSERTIONS__LEGACY_SEMANTICS=true\n")
                file.write("TESTPROXY_REFLECTION__INCLUDE_NON_PUBLIC=true\n")

            manager = ConfigurationManager()

            DictConfigurationSource(manager, DEFAULTS)
            EnvConfigurationSource(manager, dotenv_path=path)

            with mock.patch.dict(os.environ, {"TESTPROXY_REFLECTION__INCLUDE_NON_PUBLIC": "false"}):
                os.environ.pop("TESTPROXY_ASSERTIONS__LEGACY_SEMANTICS", None)

                manager.load()

                self.assertNotIn("TESTPROXY_ASSERTIONS__LEGACY_SEMANTICS", os.environ)

        self.assertTrue(manager.get("assertions.legacy_semantics", bool))
        self.assertFalse(manager.get("reflection.include_non_public", bool)) # environment wins

    def test_defaults(self):
        self.assertIs(configuration(), configuration())
        self.assertIn("legacy_semantics", configuration().get("assertions", dict))


if __name__ == '__main__':
    unittest.main()
