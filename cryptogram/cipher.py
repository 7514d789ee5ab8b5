"""Substitution cipher generation."""

import random
from dataclasses import dataclass
from typing import Dict, Optional

import config


@dataclass(frozen=True)
class CipherResult:
    """A generated cipher and the text it encrypts."""
    ciphertext: str
    encrypt_map: Dict[str, str]  # plain -> cipher
    decrypt_map: Dict[str, str]  # cipher -> plain


def is_letter(ch: str) -> bool:
    """Check if a character belongs to the cipher alphabet."""
    return len(ch) == 1 and ch in config.ALPHABET


def invert_mapping(mapping: Dict[str, str]) -> Dict[str, str]:
    """Return the inverse of a letter mapping."""
    return {value: key for key, value in mapping.items()}


def apply_mapping(text: str, mapping: Dict[str, str]) -> str:
    """Substitute every mapped letter of text, leaving everything else as-is."""
    return "".join(mapping.get(ch, ch) if is_letter(ch) else ch for ch in text)


def build_encrypt_map(rng=None) -> Dict[str, str]:
    """
    Build a random bijection over the alphabet.

    Letters are paired position by position with a shuffled copy of the
    alphabet, so a letter may map to itself.
    """
    rng = rng or random
    shuffled = list(config.ALPHABET)
    rng.shuffle(shuffled)
    return dict(zip(config.ALPHABET, shuffled))


def generate(plaintext: str, rng: Optional[random.Random] = None) -> CipherResult:
    """
    Encrypt plaintext with a fresh substitution cipher.

    Args:
        plaintext: Any text, case-insensitive
        rng: Random source with a ``shuffle`` method (defaults to ``random``)

    Returns:
        CipherResult with the upper-cased ciphertext and both mappings
    """
    encrypt_map = build_encrypt_map(rng)
    ciphertext = apply_mapping((plaintext or "").upper(), encrypt_map)
    return CipherResult(
        ciphertext=ciphertext,
        encrypt_map=encrypt_map,
        decrypt_map=invert_mapping(encrypt_map),
    )
