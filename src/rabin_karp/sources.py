"""
Token sources: lazy (value, position) streams feeding the rolling hasher.

Every source exposes ``pull()`` which returns the next Token or None once the
origin is exhausted. Reading past exhaustion keeps returning None.
Positions always refer to the original, unfiltered origin.
"""
from __future__ import annotations
import io
import logging
import os
from collections.abc import Iterable, Sequence
from typing import Any, Callable, Iterator, NamedTuple, Optional, Union

from .errors import InvalidSource

logger = logging.getLogger(__name__)


class Token(NamedTuple):
    value: int
    position: Any


class TokenSource:
    """Single-pass, single-owner stream of tokens."""

    def pull(self) -> Optional[Token]:
        raise NotImplementedError

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.pull()
        if token is None:
            raise StopIteration
        return token

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class StringSource(TokenSource):
    def __init__(self, text: Union[str, bytes, bytearray, memoryview]):
        if isinstance(text, memoryview):
            text = text.tobytes()
        self._text = text
        self._pos = 0
        self._as_bytes = not isinstance(text, str)

    def pull(self) -> Optional[Token]:
        if self._pos >= len(self._text):
            return None
        unit = self._text[self._pos]
        value = unit if self._as_bytes else ord(unit)
        token = Token(value, self._pos)
        self._pos += 1
        return token


class HandleSource(TokenSource):
    """
    Reads a file-like handle one unit at a time.

    The position of a token is the handle's own offset taken before the unit
    is read (``tell()``). For text handles that is an opaque cookie, for
    binary handles a byte offset. Handles that cannot ``tell`` are numbered by
    counting the units read instead.

    Text handles call ``tell()`` for every character, which is slow on
    ``TextIOWrapper``; open files in binary mode (the ``open`` default) for
    large inputs.
    """

    def __init__(self, handle, owns_handle: bool = False):
        if not callable(getattr(handle, "read", None)):
            raise InvalidSource(handle)
        self._handle = handle
        self._owns_handle = owns_handle
        self._exhausted = False
        self._count = 0
        self._use_tell = _can_tell(handle)

    @classmethod
    def open(cls, path: Union[str, os.PathLike], mode: str = "rb", encoding: Optional[str] = None) -> "HandleSource":
        if "b" not in mode and encoding is None:
            encoding = "utf-8"
        handle = open(path, mode, encoding=encoding)
        logger.debug("opened %s for token streaming", path)
        return cls(handle, owns_handle=True)

    @property
    def closed(self) -> bool:
        return bool(getattr(self._handle, "closed", False))

    def pull(self) -> Optional[Token]:
        if self._exhausted:
            return None
        position = self._handle.tell() if self._use_tell else self._count
        unit = self._handle.read(1)
        if not unit:
            self._exhausted = True
            return None
        self._count += 1
        value = unit[0] if isinstance(unit, (bytes, bytearray)) else ord(unit)
        return Token(value, position)

    def close(self) -> None:
        if self._owns_handle and not self.closed:
            self._handle.close()
            logger.debug("closed owned handle %r", getattr(self._handle, "name", self._handle))


def _can_tell(handle) -> bool:
    seekable = getattr(handle, "seekable", None)
    if seekable is None:
        return callable(getattr(handle, "tell", None))
    try:
        return bool(seekable())
    except (OSError, ValueError, io.UnsupportedOperation):
        return False


class CallbackSource(TokenSource):
    """
    Wraps a zero-argument producer. The producer returns None when it has
    nothing more, a ``(value, position)`` pair, or a bare int whose position
    is then unknown (None).
    """

    def __init__(self, fn: Callable[[], Any]):
        self._fn = fn

    def pull(self) -> Optional[Token]:
        return _as_token(self._fn(), None)


class IterableSource(TokenSource):
    """Adapts any iterable or generator of ``(value, position)`` pairs or ints."""

    def __init__(self, iterable: Iterable):
        self._it = iter(iterable)
        self._index = 0
        self._exhausted = False

    def pull(self) -> Optional[Token]:
        if self._exhausted:
            return None
        try:
            item = next(self._it)
        except StopIteration:
            self._exhausted = True
            return None
        token = _as_token(item, self._index)
        self._index += 1
        return token


def _as_token(item, default_position) -> Optional[Token]:
    if item is None:
        return None
    if isinstance(item, Token):
        return item
    if isinstance(item, Sequence) and not isinstance(item, (str, bytes, bytearray)):
        if len(item) == 0:
            return None
        if len(item) == 1:
            return Token(int(item[0]), default_position)
        return Token(int(item[0]), item[1])
    return Token(int(item), default_position)


def make_source(origin) -> TokenSource:
    """
    Resolve an origin into a TokenSource once, at construction time.

    - TokenSource: returned as is
    - str / bytes / bytearray / memoryview: StringSource
    - object with a ``read`` method: HandleSource
    - callable: CallbackSource
    - any other iterable: IterableSource
    """
    if isinstance(origin, TokenSource):
        return origin
    if isinstance(origin, (str, bytes, bytearray, memoryview)):
        return StringSource(origin)
    if callable(getattr(origin, "read", None)):
        return HandleSource(origin)
    if callable(origin):
        return CallbackSource(origin)
    if isinstance(origin, Iterable):
        return IterableSource(origin)
    raise InvalidSource(origin)
