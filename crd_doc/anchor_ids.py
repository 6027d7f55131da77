"""Anchor id generators for documentation trees.

A generator is created for each tree build and never shared, so concurrent
builds keep independent id spaces. Ids only need to be unique within the
page fragment a single build produces.
"""

import secrets
import string

from crd_doc.domain.constants import RANDOM_ANCHOR_LENGTH

_ALPHABET = string.ascii_lowercase + string.digits
_BASE36 = string.digits + string.ascii_lowercase


def _base36(n: int) -> str:
    if n == 0:
        return '0'
    digits = []
    while n:
        n, r = divmod(n, 36)
        digits.append(_BASE36[r])
    return ''.join(reversed(digits))


class AnchorIdGenerator:
    """Monotonic counter encoded as a short base-36 token (``f0``, ``f1``, ... ``fa``)."""

    def __init__(self, prefix: str = 'f'):
        self._prefix = prefix
        self._next = 0

    def __call__(self) -> str:
        token = f"{self._prefix}{_base36(self._next)}"
        self._next += 1
        return token

    @property
    def issued(self) -> int:
        return self._next


class RandomAnchorIdGenerator:
    """Random lowercase alphanumeric tokens, regenerated on collision.

    Args:
        length: Token length.
        token_source: Callable returning a candidate token; defaults to a
            ``secrets``-backed source.
    """

    def __init__(self, length: int = RANDOM_ANCHOR_LENGTH, token_source=None):
        self._length = length
        self._token_source = token_source or self._random_token
        self._seen: set[str] = set()

    def _random_token(self) -> str:
        return ''.join(secrets.choice(_ALPHABET) for _ in range(self._length))

    def __call__(self) -> str:
        token = self._token_source()
        while token in self._seen:
            token = self._token_source()
        self._seen.add(token)
        return token

    @property
    def issued(self) -> int:
        return len(self._seen)


def new_generator(style: str = 'counter'):
    """Create a fresh generator for one build."""
    if style == 'random':
        return RandomAnchorIdGenerator()
    return AnchorIdGenerator()
