from __future__ import annotations

import unittest

from aont import InvalidParameterLength
from aont.public import derive_public, parse_public_hex, public_from_bytes, public_from_text


class PublicParameterTests(unittest.TestCase):
    def test_text(self):
        self.assertEqual(public_from_text("abcdeabcdeabcdeabcde", 20), b"abcdeabcdeabcdeabcde")
        with self.assertRaises(InvalidParameterLength):
            public_from_text("abcde", 20)

    def test_hex(self):
        self.assertEqual(parse_public_hex("00" * 20, 20), bytes(20))
        self.assertEqual(parse_public_hex("0a0b 0c0d", 4), b"\x0a\x0b\x0c\x0d")
        with self.assertRaises(InvalidParameterLength):
            parse_public_hex("00" * 40, 20)
        with self.assertRaises(ValueError):
            parse_public_hex("zz" * 20, 20)

    def test_raw_bytes(self):
        with self.assertRaises(InvalidParameterLength):
            public_from_bytes(b"\x00" * 21, 20)

    def test_derive_is_deterministic(self):
        a = derive_public("correct horse battery staple", 20)
        b = derive_public("correct horse battery staple", 20)
        c = derive_public("correct horse battery stapler", 20)
        self.assertEqual(len(a), 20)
        self.assertEqual(a, b)
        self.assertNotEqual(a, c)
        self.assertEqual(len(derive_public("correct horse battery staple", 64)), 64)

    def test_derive_rejects_empty(self):
        with self.assertRaises(ValueError):
            derive_public("", 20)


if __name__ == "__main__":
    unittest.main()
