"""
Rabin-Karp rolling hash over a token stream, as used for document
fingerprinting in "Winnowing: Local Algorithms for Document Fingerprinting"
(Schleimer, Wilkerson, Aiken).

The hash of a k-gram c_1..c_k is

    H = c_1 * B^(k-1) + c_2 * B^(k-2) + ... + c_k        (mod M when modular)

and sliding the window by one token is

    H' = (H - c_1 * B^(k-1)) * B + c_{k+1}

so every advance after warm-up is O(1). Warm-up feeds the first k tokens
through the same update with a zero outgoing value.

Two arithmetic modes:
- modular: base 257, modulus 1_000_000_007. Hashes stay below the modulus;
  distinct k-grams may collide.
- unbounded: base 101, no modulus. Python ints never overflow, hashes grow
  with k and equal hashes mean equal k-grams whenever every value < base.
"""
from __future__ import annotations
import logging
from collections import deque
from enum import Enum
from typing import Any, Deque, Iterator, List, NamedTuple, Optional

from .config import HashMode, RollingHashConfig
from .errors import InvalidWindowSize
from .filters import CaseFoldAdapter, FilterAdapter
from .sources import Token, TokenSource, make_source

logger = logging.getLogger(__name__)

__all__ = ["HashMode", "HasherState", "Triple", "RollingHasher", "build_hasher", "prepare_source", "direct_hash", "kgram_hashes"]


class HasherState(str, Enum):
    COLD = "cold"
    WARM = "warm"
    EXHAUSTED = "exhausted"


class Triple(NamedTuple):
    hash: int
    start: Any
    end: Any


def _check_window_size(k) -> int:
    if isinstance(k, bool) or not isinstance(k, int) or k < 1:
        raise InvalidWindowSize(k)
    return k


class RollingHasher:
    """
    Emits one Triple per k-token window of ``source``.

    ``source`` is anything ``make_source`` accepts. The hasher owns its window
    and consumes the source; build a new source to hash the same text twice.
    """

    def __init__(self, k: int, source, config: Optional[RollingHashConfig] = None):
        self.k = _check_window_size(k)
        self.config = config if config is not None else RollingHashConfig()
        self.config.validate()
        self._source: TokenSource = make_source(source)

        self.base = self.config.effective_base
        self.modulus: Optional[int] = self.config.modulus if self.config.bounded else None
        if self.modulus is None:
            self.rm_k = self.base ** (self.k - 1)
        else:
            self.rm_k = pow(self.base, self.k - 1, self.modulus)

        self._window: Deque[Token] = deque()
        self._hash = 0
        self._exhausted = False
        logger.debug("rolling hasher k=%d mode=%s base=%d", self.k, HashMode(self.config.mode).value, self.base)

    @property
    def state(self) -> HasherState:
        if self._exhausted:
            return HasherState.EXHAUSTED
        if len(self._window) == self.k:
            return HasherState.WARM
        return HasherState.COLD

    @property
    def source(self) -> TokenSource:
        return self._source

    def _roll(self, outgoing: int, incoming: int) -> int:
        h = (self._hash - outgoing * self.rm_k) * self.base + incoming
        if self.modulus is not None:
            h %= self.modulus
        return h

    def advance(self) -> Optional[Triple]:
        """
        Return the triple for the next window, or None once the source is
        exhausted. The first call pulls k tokens; later calls pull one.
        """
        if self._exhausted:
            return None

        while True:
            token = self._source.pull()
            if token is None:
                self._exhausted = True
                logger.debug("source exhausted with %d buffered tokens", len(self._window))
                return None

            # the window is only touched after a successful pull
            outgoing = self._window.popleft().value if len(self._window) == self.k else 0
            self._hash = self._roll(outgoing, token.value)
            self._window.append(token)
            if len(self._window) == self.k:
                break

        return Triple(self._hash, self._window[0].position, self._window[-1].position)

    def __iter__(self) -> Iterator[Triple]:
        return self

    def __next__(self) -> Triple:
        triple = self.advance()
        if triple is None:
            raise StopIteration
        return triple

    def values(self) -> List[Triple]:
        """All remaining triples. Never call this on an infinite source."""
        return list(self)

    def close(self) -> None:
        self._source.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def direct_hash(values, config: Optional[RollingHashConfig] = None) -> int:
    """Hash a whole k-gram from scratch in O(k), without rolling."""
    cfg = config if config is not None else RollingHashConfig()
    cfg.validate()
    base = cfg.effective_base
    h = 0
    for v in values:
        h = h * base + v
        if cfg.bounded:
            h %= cfg.modulus
    return h


def prepare_source(origin, config: Optional[RollingHashConfig] = None) -> TokenSource:
    """Wrap ``origin`` in the case folding and skip pattern ``config`` asks for."""
    cfg = config if config is not None else RollingHashConfig()
    source = make_source(origin)
    if cfg.casefold:
        source = CaseFoldAdapter(source)
    if cfg.skip_pattern:
        source = FilterAdapter(source, cfg.skip_pattern)
    return source


def build_hasher(k: int, origin, config: Optional[RollingHashConfig] = None) -> RollingHasher:
    cfg = config if config is not None else RollingHashConfig()
    _check_window_size(k)
    return RollingHasher(k, prepare_source(origin, cfg), cfg)


def kgram_hashes(origin, k: int, config: Optional[RollingHashConfig] = None) -> List[Triple]:
    with build_hasher(k, origin, config) as hasher:
        return hasher.values()
