import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from vt_bundle.util import basename_hash, human_units


class TestHumanUnits(unittest.TestCase):

    def test_units(self):
        self.assertEqual(human_units(0), "0.00 B")
        self.assertEqual(human_units(1023), "1023.00 B")
        self.assertEqual(human_units(1536), "1.50 KiB")
        self.assertEqual(human_units(5 << 20), "5.00 MiB")
        self.assertEqual(human_units(2048 << 40), "2048.00 TiB")


class TestBasenameHash(unittest.TestCase):

    def test_hex_name(self):
        self.assertEqual(basename_hash("/data/bundle/9e13b2414b41b842"), 0x9E13B2414B41B842)
        self.assertEqual(basename_hash("9e13b2414b41b842.patch_001"), 0x9E13B2414B41B842)

    def test_non_hex_name(self):
        self.assertIsNone(basename_hash("/data/bundle/level.bundle"))
