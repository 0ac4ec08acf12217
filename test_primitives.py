from __future__ import annotations

import hashlib
import hmac
import unittest

from aont import FixedRandomSource, SystemRandomSource, UnknownHashError, available_hashes, get_block_hash
from aont.blockhash import counter_bytes
from aont.randsrc import draw_key
from aont.xorutil import xor_bytes, xor_into


class XorTests(unittest.TestCase):
    def test_in_place_and_chained(self):
        dest = bytearray(b"\x00\xff\x0f\xf0")
        res = xor_into(dest, b"\xff\xff\xff\xff")
        self.assertIs(res, dest)
        self.assertEqual(dest, bytearray(b"\xff\x00\xf0\x0f"))
        xor_into(xor_into(dest, b"\x01\x01\x01\x01"), b"\x01\x01\x01\x01")
        self.assertEqual(dest, bytearray(b"\xff\x00\xf0\x0f"))

    def test_length_mismatch(self):
        dest = bytearray(4)
        with self.assertRaises(ValueError):
            xor_into(dest, b"\x00" * 3)
        self.assertEqual(dest, bytearray(4))
        with self.assertRaises(ValueError):
            xor_bytes(b"ab", b"abc")

    def test_xor_bytes(self):
        self.assertEqual(xor_bytes(b"abc", b"abc"), b"\x00\x00\x00")
        self.assertEqual(xor_bytes(b"\x0f", b"\xf0"), b"\xff")


class BlockHashTests(unittest.TestCase):
    def test_output_lengths(self):
        expected = {
            "sha1": 20,
            "sha224": 28,
            "sha256": 32,
            "sha384": 48,
            "sha512": 64,
            "sha3-256": 32,
            "sha3-512": 64,
        }
        self.assertEqual(sorted(expected), available_hashes())
        for name, size in expected.items():
            h = get_block_hash(name)
            self.assertEqual(h.output_length(), size)
            self.assertEqual(len(h.digest(b"abc")), size)

    def test_matches_hashlib(self):
        for name, ref in (("sha1", hashlib.sha1), ("sha256", hashlib.sha256), ("sha3-256", hashlib.sha3_256)):
            h = get_block_hash(name)
            self.assertEqual(h.digest(b"all or nothing"), ref(b"all or nothing").digest())

    def test_deterministic(self):
        h = get_block_hash()
        self.assertEqual(h.name, "sha1")
        self.assertEqual(h.digest(b"x" * 44), h.digest(b"x" * 44))

    def test_name_normalisation(self):
        self.assertEqual(get_block_hash("SHA3_256").name, "sha3-256")

    def test_hmac_matches_stdlib(self):
        token = b"\x01\x02\x03"
        h = get_block_hash("sha1", hmac_token=token)
        self.assertEqual(h.name, "hmac-sha1")
        self.assertEqual(h.output_length(), 20)
        self.assertEqual(h.digest(b"block"), hmac.new(token, b"block", hashlib.sha1).digest())

    def test_empty_hmac_token(self):
        with self.assertRaises(ValueError):
            get_block_hash("sha1", hmac_token=b"")

    def test_unknown_hash(self):
        with self.assertRaises(UnknownHashError):
            get_block_hash("md4")

    def test_counter_bytes(self):
        self.assertEqual(counter_bytes(1), b"\x00\x00\x00\x01")
        self.assertEqual(counter_bytes(0x01020304), b"\x01\x02\x03\x04")
        self.assertEqual(counter_bytes(0xFFFFFFFF), b"\xff\xff\xff\xff")
        with self.assertRaises(ValueError):
            counter_bytes(0)
        with self.assertRaises(ValueError):
            counter_bytes(1 << 32)


class RandomSourceTests(unittest.TestCase):
    def test_system_source(self):
        a = draw_key(SystemRandomSource(), 32)
        b = draw_key(SystemRandomSource(), 32)
        self.assertEqual(len(a), 32)
        self.assertNotEqual(a, b)

    def test_fixed_source_cycles(self):
        self.assertEqual(draw_key(FixedRandomSource(b"abc"), 7), b"abcabca")

    def test_fixed_source_rejects_empty(self):
        with self.assertRaises(ValueError):
            FixedRandomSource(b"")


if __name__ == "__main__":
    unittest.main()
