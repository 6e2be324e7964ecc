"""
Adapters over token sources. An adapter is itself a TokenSource, so adapters
compose with each other and with the hasher transparently.
"""
from __future__ import annotations
import re
from typing import Callable, Optional, Union

from .sources import Token, TokenSource, make_source

Predicate = Union[str, re.Pattern, Callable[[Optional[str]], bool]]

_MAX_CODE_POINT = 0x10FFFF


def decode(value: int) -> Optional[str]:
    if 0 <= value <= _MAX_CODE_POINT:
        return chr(value)
    return None


def _compile_predicate(predicate: Predicate) -> Callable[[Optional[str]], bool]:
    if isinstance(predicate, str):
        predicate = re.compile(predicate)
    if isinstance(predicate, re.Pattern):
        pattern = predicate
        return lambda ch: ch is not None and pattern.search(ch) is not None
    if callable(predicate):
        return predicate
    raise TypeError(f"filter predicate must be a pattern or callable, got {type(predicate).__name__!r}")


class FilterAdapter(TokenSource):
    """
    Drops every token whose decoded character satisfies ``predicate``.
    Surviving tokens are forwarded unchanged, original positions included.
    """

    def __init__(self, source: TokenSource, predicate: Predicate):
        self._source = source
        self._skip = _compile_predicate(predicate)

    def pull(self) -> Optional[Token]:
        while True:
            token = self._source.pull()
            if token is None:
                return None
            if not self._skip(decode(token.value)):
                return token

    def close(self) -> None:
        self._source.close()


class CaseFoldAdapter(TokenSource):
    """Lower-cases every token that decodes to a character."""

    def __init__(self, source: TokenSource):
        self._source = source

    def pull(self) -> Optional[Token]:
        token = self._source.pull()
        if token is None:
            return None
        ch = decode(token.value)
        if ch is None:
            return token
        lowered = ch.lower()
        # multi-character lowercase forms (e.g. "İ") are left alone
        if len(lowered) != 1:
            return token
        return Token(ord(lowered), token.position)

    def close(self) -> None:
        self._source.close()


def filter_regexp(pattern: Union[str, re.Pattern], origin) -> FilterAdapter:
    """Skip every character of ``origin`` matching ``pattern``."""
    return FilterAdapter(make_source(origin), pattern)
