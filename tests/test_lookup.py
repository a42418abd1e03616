import io
import os
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from vt_bundle.errors import ParseError, TooLong
from vt_bundle.lookup import HashDictionary, HashEntry
from vt_bundle.murmur import hash_text


class TestAppendFind(unittest.TestCase):

    def setUp(self):
        self.hd = HashDictionary()

    def test_append_then_find(self):
        self.hd.append("foo")
        self.hd.rebuild()
        self.assertEqual(self.hd.find(hash_text("foo")), "foo")

    def test_find_rebuilds_implicitly(self):
        self.hd.append("lua")
        self.assertTrue(self.hd.dirty)
        self.assertEqual(self.hd.find(0xA14E8DFA2CD117E2), "lua")
        self.assertFalse(self.hd.dirty)

    def test_not_found(self):
        self.assertIsNone(self.hd.find(0x1234))
        self.hd.append("foo")
        self.assertIsNone(self.hd.find(hash_text("foo") + 1))
        self.assertIsNone(self.hd.find(0xFFFFFFFFFFFFFFFF))
        self.assertNotIn(0, self.hd)

    def test_append_returns_entry(self):
        entry = self.hd.append("unit")
        self.assertEqual(entry, HashEntry("unit", 0xE0A48D0BE9A7453F))

    def test_too_long_leaves_dictionary_unchanged(self):
        self.hd.append("foo")
        self.hd.rebuild()
        with self.assertRaises(TooLong):
            self.hd.append("x" * 256)
        self.assertEqual(len(self.hd), 1)
        self.assertFalse(self.hd.dirty)

    def test_width_is_measured_in_utf8_bytes(self):
        self.hd.append("x" * 255)
        with self.assertRaises(TooLong):
            self.hd.append("é" * 128)         # 256 bytes
        self.assertEqual(len(self.hd), 1)

    def test_too_long_is_a_value_error(self):
        with self.assertRaises(ValueError):
            self.hd.append("y" * 300)

    def test_rebuild_is_idempotent(self):
        self.hd.append("a")
        self.assertTrue(self.hd.rebuild())
        self.assertFalse(self.hd.rebuild())
        self.assertEqual(self.hd.find(hash_text("a")), "a")

    def test_resolve(self):
        self.hd.append("texture")
        self.assertEqual(self.hd.resolve(0xCD4238C6A0C69E32), "texture")
        self.assertEqual(self.hd.resolve(0xABC), "abc")

    def test_new_entries_after_rebuild_are_found(self):
        self.hd.append("a")
        self.hd.find(hash_text("a"))
        self.hd.append("b")
        self.assertEqual(self.hd.find(hash_text("b")), "b")
        self.assertEqual(self.hd.find(hash_text("a")), "a")


class TestLoadDump(unittest.TestCase):

    def test_dump_is_ordered_by_hash(self):
        hd = HashDictionary()
        self.assertEqual(hd.load(["b\n", "a\n", "c\n"]), 3)
        out = io.StringIO()
        hd.dump(out)
        lines = out.getvalue().splitlines()
        # a=071717d2..., c=d8788d18..., b=ea8bfc7d...
        self.assertEqual(lines, ["071717d2d36b6b11 a",
                                 "d8788d18ba82e0b5 c",
                                 "ea8bfc7d922a2a37 b"])
        hashes = [int(line.split()[0], 16) for line in lines]
        self.assertEqual(hashes, sorted(hashes))

    def test_dump_empty(self):
        out = io.StringIO()
        HashDictionary().dump(out)
        self.assertEqual(out.getvalue(), "")

    def test_load_prepends_newest_first(self):
        hd = HashDictionary()
        hd.append("first")
        hd.load(["x", "y"])
        self.assertEqual([e.text for e in hd.entries()], ["y", "x", "first"])

    def test_load_is_atomic(self):
        hd = HashDictionary(["lua"])
        hd.rebuild()
        with self.assertRaises(TooLong):
            hd.load(["unit\n", "z" * 400 + "\n", "texture\n"])
        self.assertEqual(len(hd), 1)
        self.assertFalse(hd.dirty)
        self.assertIsNone(hd.find(hash_text("unit")))

    def test_load_rejects_nul(self):
        hd = HashDictionary()
        with self.assertRaises(ParseError):
            hd.load(["ok", "bad\0text"])
        self.assertEqual(len(hd), 0)

    def test_load_bytes_and_crlf(self):
        hd = HashDictionary()
        hd.load([b"lua\r\n", b"unit"])
        self.assertEqual(hd.find(0xA14E8DFA2CD117E2), "lua")
        self.assertEqual(hd.find(0xE0A48D0BE9A7453F), "unit")

    def test_load_rejects_bad_utf8(self):
        hd = HashDictionary()
        with self.assertRaises(ParseError):
            hd.load([b"\xff\xfe\n"])
        self.assertEqual(len(hd), 0)

    def test_load_empty_batch_keeps_clean(self):
        hd = HashDictionary()
        self.assertEqual(hd.load([]), 0)
        self.assertFalse(hd.dirty)

    def test_load_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "dictionary.txt")
            with open(path, "w", encoding="utf-8") as f:
                f.write("lua\ntexture\nunit\n")
            hd = HashDictionary()
            self.assertEqual(hd.load_file(path), 3)
        out = io.StringIO()
        hd.dump(out)
        self.assertEqual(out.getvalue(),
                         "a14e8dfa2cd117e2 lua\n"
                         "cd4238c6a0c69e32 texture\n"
                         "e0a48d0be9a7453f unit\n")

    def test_collisions_are_kept(self):
        hd = HashDictionary(["same", "same"])
        self.assertEqual(len(hd), 2)
        self.assertEqual(hd.find(hash_text("same")), "same")


if __name__ == "__main__":
    unittest.main()
