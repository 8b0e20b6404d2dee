"""Shortcode generation utility

This module provides a helper function for generating random, fixed-length
Base62 shortcodes. Uniqueness is NOT guaranteed here: callers reserve the
generated code in the link table and retry on collision (see CodeAllocator).

Functions:
    generate_shortcode(length=6, alphabet=ALPHABET, rng=None):
        Generate a random shortcode suitable for use as a URL slug.

Example:
    >>> from linkshortener.utils import generate_shortcode
    >>> code = generate_shortcode(length=6)
    >>> len(code)
    6
"""

import random
import secrets

from linkshortener.constants import ALPHABET, Defaults


_system_random = secrets.SystemRandom()


def generate_shortcode(length: int = Defaults.CODE_LENGTH, alphabet: str = ALPHABET, rng: random.Random | None = None) -> str:
    """Generate a random, fixed-length shortcode.

    Every character is drawn independently and uniformly from `alphabet`.
    With the default 62-character alphabet and length 6 the code space holds
    62**6 (~56.8 billion) codes.

    Args:
        length (int, optional):
            Exact length of the resulting code. Defaults to 6.

        alphabet (str, optional):
            Characters to draw from. Defaults to Base62 [0-9A-Za-z].

        rng (random.Random, optional):
            Source of randomness. Defaults to a shared `secrets.SystemRandom`
            so codes are not predictable from previous codes. Pass a seeded
            `random.Random` for reproducible tests.

    Returns:
        str: A random code of exactly `length` characters.

    Raises:
        TypeError: If `length` is not an integer or `alphabet` is not a string.
        ValueError: If `length` is not positive or `alphabet` is empty or has duplicates.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')
    if not isinstance(alphabet, str):
        raise TypeError(f'Alphabet must be of type string (given type: {type(alphabet)}).')
    if not alphabet:
        raise ValueError('Alphabet must be a non-empty string.')
    if len(set(alphabet)) != len(alphabet):
        raise ValueError(f'Alphabet must not contain duplicate characters (given value: {alphabet}).')

    rng = rng or _system_random
    return ''.join(rng.choice(alphabet) for _ in range(length))
