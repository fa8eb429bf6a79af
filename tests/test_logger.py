from __future__ import annotations

import logging
import unittest

from testproxy.configuration import configuration
from testproxy.util import ConfigureLogger


class TestConfigureLogger(unittest.TestCase):
    def tearDown(self):
        for name in ("testproxy", "sqlalchemy"):
            logging.getLogger(name).setLevel(logging.NOTSET)

    def test_trace(self):
        logger = ConfigureLogger(default_level=logging.WARNING, trace=True)

        self.assertTrue(logger.is_tracing())
        self.assertTrue(logger.is_tracing("testproxy.proxy.resolution"))
        self.assertEqual(logger.levels, {"testproxy": logging.DEBUG})

    def test_no_trace(self):
        logger = ConfigureLogger(default_level=logging.WARNING, trace=False)

        self.assertFalse(logger.is_tracing())
        self.assertEqual(logging.getLogger("testproxy").level, logging.WARNING)

    def test_trace_from_configuration(self):
        with configuration().override({"logging": {"trace": True}}):
            logger = ConfigureLogger(default_level=logging.WARNING)

        self.assertTrue(logger.trace)
        self.assertTrue(logger.is_tracing())

    def test_explicit_levels_win(self):
        logger = ConfigureLogger(trace=True, levels={"testproxy": logging.ERROR, "sqlalchemy": logging.WARNING})

        self.assertFalse(logger.is_tracing())
        self.assertEqual(logging.getLogger("sqlalchemy").level, logging.WARNING)


if __name__ == '__main__':
    unittest.main()
