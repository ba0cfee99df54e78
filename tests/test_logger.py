import logging
import unittest

from explicit_mapper import ConfigureLogger, create_mapper


class TestConfigureLogger(unittest.TestCase):
    def setUp(self):
        self.previous = {name: logging.getLogger(name).level for name in ["explicit_mapper", "other"]}

    def tearDown(self):
        for name, level in self.previous.items():
            logging.getLogger(name).setLevel(level)

    def test_levels(self):
        configuration = ConfigureLogger(default_level=logging.WARNING, levels={"other": logging.ERROR})

        self.assertEqual(configuration.levels, {"explicit_mapper": logging.WARNING, "other": logging.ERROR})
        self.assertEqual(logging.getLogger("explicit_mapper").level, logging.WARNING)
        self.assertEqual(logging.getLogger("other").level, logging.ERROR)

    def test_package_level_override(self):
        ConfigureLogger(levels={"explicit_mapper": logging.DEBUG})

        with self.assertLogs("explicit_mapper", level=logging.DEBUG) as logs:
            create_mapper(["a"])

        self.assertEqual(len(logs.records), 1)
        self.assertEqual(logs.records[0].levelno, logging.DEBUG)


if __name__ == '__main__':
    unittest.main()
