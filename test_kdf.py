from __future__ import annotations

import hashlib
import unittest

from fcrypto.kdf import derive_key, normalize_password
from fcrypto.errors import EmptyPassword, InvalidPasswordEncoding, PasswordError


class NormalizeTests(unittest.TestCase):
    def test_plain_ascii_unchanged(self):
        self.assertEqual(normalize_password("hunter2"), "hunter2")

    def test_nfkc_composition(self):
        self.assertEqual(normalize_password("e\u0301"), "\u00e9")
        # compatibility ligature
        self.assertEqual(normalize_password("\ufb01le"), "file")

    def test_bytes_are_decoded(self):
        self.assertEqual(normalize_password("pässword".encode("utf-8")), "pässword")

    def test_empty(self):
        with self.assertRaises(EmptyPassword):
            normalize_password("")
        with self.assertRaises(EmptyPassword):
            normalize_password(b"")

    def test_invalid_encoding(self):
        with self.assertRaises(InvalidPasswordEncoding):
            normalize_password("bad\ud800")
        with self.assertRaises(InvalidPasswordEncoding):
            normalize_password(b"\xff\xfe")

    def test_errors_are_value_errors(self):
        self.assertTrue(issubclass(EmptyPassword, PasswordError))
        self.assertTrue(issubclass(InvalidPasswordEncoding, ValueError))


class DeriveKeyTests(unittest.TestCase):
    def test_template_hash(self):
        self.assertEqual(derive_key("bar"), hashlib.sha256(b"[bar][fcrypto]").digest())

    def test_deterministic_and_sized(self):
        a = derive_key("secret")
        b = derive_key("secret")
        self.assertEqual(a, b)
        self.assertEqual(len(a), 32)

    def test_distinct_passwords(self):
        self.assertNotEqual(derive_key("bar"), derive_key("baz"))

    def test_equivalent_forms_share_key(self):
        self.assertEqual(derive_key("caf\u00e9"), derive_key("cafe\u0301"))
        self.assertEqual(derive_key("caf\u00e9"), derive_key("caf\u00e9".encode("utf-8")))

    def test_domain_tag_differs_from_plain_hash(self):
        self.assertNotEqual(derive_key("bar"), hashlib.sha256(b"bar").digest())

    def test_validation_propagates(self):
        with self.assertRaises(EmptyPassword):
            derive_key("")


if __name__ == "__main__":
    unittest.main()
