"""Short code generation utility

This module provides random candidate codes drawn uniformly from a fixed
alphabet. The generator does not guarantee uniqueness; callers check each
candidate against the registry and draw again on collision.

Classes:
    CodeGenerator(length=7, alphabet=ALPHABET, rng=None):
        Draw random codes suitable for use as a URL slug.

Example:
    >>> from linkregistry.utils import CodeGenerator
    >>> generator = CodeGenerator()
    >>> len(generator.generate())
    7
"""

import random
import string

from linkregistry.constants import DEFAULT_CODE_LENGTH
from linkregistry.utils.validators import is_valid_custom_code


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # base62: 26 lowercase + 26 uppercase + 10 digits


class CodeGenerator:
    """Random code source over a fixed alphabet.

    Attributes:
        length (int):
            Default number of characters per generated code.
        alphabet (str):
            Characters codes are drawn from. Must itself be a valid custom code
            so that every generated code passes `is_valid_custom_code()`.
        rng (random.Random):
            Randomness source. Defaults to `random.SystemRandom()` (OS entropy,
            safe to share between threads). Inject a seeded `random.Random`
            for reproducible tests.
    """

    def __init__(self, length: int = DEFAULT_CODE_LENGTH, alphabet: str = ALPHABET, rng: random.Random | None = None):
        if not isinstance(length, int) or isinstance(length, bool):
            raise TypeError(f'Code length must be of type integer (given type: {type(length)}).')
        if length < 1:
            raise ValueError(f'Code length must be a positive integer (given value: {length}).')
        if not is_valid_custom_code(alphabet):
            raise ValueError(f'Alphabet must only contain [A-Za-z0-9_-] characters (given value: {alphabet!r}).')
        if len(set(alphabet)) < 2:
            raise ValueError(f'Alphabet must contain at least two distinct characters (given value: {alphabet!r}).')

        self.length = length
        self.alphabet = ''.join(dict.fromkeys(alphabet))  # drop duplicates, keep order
        self.rng = rng if rng is not None else random.SystemRandom()

    def generate(self, length: int | None = None) -> str:
        """Draw a random code.

        Each character is chosen independently and uniformly from the alphabet.

        Args:
            length (int | None):
                Number of characters. Defaults to the generator's length.

        Returns:
            str: the candidate code

        Example:
            >>> code = CodeGenerator(length=6).generate()
            >>> len(code), code.isalnum()
            (6, True)
        """
        length = self.length if length is None else length
        return ''.join(self.rng.choices(self.alphabet, k=length))

    def space_size(self, length: int | None = None) -> int:
        """Return the number of distinct codes of `length` characters."""
        length = self.length if length is None else length
        return len(self.alphabet) ** length
