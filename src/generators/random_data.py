"""
Random values for RANDOM-tagged fields.
"""

import string
from typing import Optional

import numpy as np


DEFAULT_LENGTH = 10
DEFAULT_PREFIX = "test_"
DEFAULT_ALPHABET = string.ascii_letters


class Randomizer:
    """
    Produces random strings of a fixed format.

    Without a seed every call draws from its own freshly seeded generator,
    so one instance can be used from several threads. With a seed the
    instance owns a private generator and runs are reproducible.
    """

    def __init__(
        self,
        length: int = DEFAULT_LENGTH,
        prefix: str = DEFAULT_PREFIX,
        alphabet: str = DEFAULT_ALPHABET,
        seed: Optional[int] = None,
    ):
        if length < 1:
            raise ValueError(f"length must be >= 1, got {length}")
        if not alphabet:
            raise ValueError("alphabet must not be empty")

        self.length = length
        self.prefix = prefix
        self._alphabet = np.array(list(alphabet))
        self._rng = np.random.default_rng(seed) if seed is not None else None

    def _generator(self) -> np.random.Generator:
        if self._rng is not None:
            return self._rng
        return np.random.default_rng()

    def random_string(self, length: Optional[int] = None) -> str:
        """Return prefix followed by `length` characters from the alphabet."""
        size = self.length if length is None else length
        if size < 1:
            raise ValueError(f"length must be >= 1, got {size}")
        chars = self._generator().choice(self._alphabet, size=size)
        return self.prefix + "".join(chars)


def get_string(length: Optional[int] = None) -> str:
    """Random string with the default format."""
    return Randomizer().random_string(length)
