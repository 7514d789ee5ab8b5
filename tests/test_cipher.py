import random
import unittest

import config
from cryptogram import cipher


class CipherGenerationTests(unittest.TestCase):
    def test_mappings_are_inverse_bijections(self):
        result = cipher.generate("Hello, World!", random.Random(7))
        self.assertEqual(set(result.encrypt_map), set(config.ALPHABET))
        self.assertEqual(set(result.encrypt_map.values()), set(config.ALPHABET))
        for letter in config.ALPHABET:
            self.assertEqual(result.decrypt_map[result.encrypt_map[letter]], letter)
            self.assertEqual(result.encrypt_map[result.decrypt_map[letter]], letter)

    def test_ciphertext_is_uppercase_and_keeps_punctuation(self):
        result = cipher.generate("it's 9 o'clock.", random.Random(3))
        self.assertEqual(len(result.ciphertext), len("it's 9 o'clock."))
        for plain, encrypted in zip("IT'S 9 O'CLOCK.", result.ciphertext):
            if plain in config.ALPHABET:
                self.assertEqual(encrypted, result.encrypt_map[plain])
            else:
                self.assertEqual(encrypted, plain)

    def test_repeated_letters_encrypt_consistently(self):
        result = cipher.generate("AAA BBB", random.Random(11))
        a, b = result.encrypt_map["A"], result.encrypt_map["B"]
        self.assertEqual(result.ciphertext, f"{a * 3} {b * 3}")

    def test_empty_plaintext(self):
        result = cipher.generate("")
        self.assertEqual(result.ciphertext, "")
        self.assertEqual(len(result.decrypt_map), 26)

    def test_seeded_generation_is_reproducible(self):
        first = cipher.generate("HELLO WORLD", random.Random(42))
        second = cipher.generate("HELLO WORLD", random.Random(42))
        self.assertEqual(first, second)

    def test_identity_mapping_is_supported(self):
        identity = {letter: letter for letter in config.ALPHABET}
        self.assertEqual(cipher.apply_mapping("ABC-XYZ", identity), "ABC-XYZ")
        self.assertEqual(cipher.invert_mapping(identity), identity)

    def test_apply_partial_mapping(self):
        self.assertEqual(cipher.apply_mapping("AB, C", {"A": "Z"}), "ZB, C")
