from __future__ import annotations


class RabinKarpError(Exception):
    """Base class for errors raised while building sources and hashers."""


class InvalidSource(RabinKarpError, TypeError):
    def __init__(self, origin: object):
        self.kind = type(origin).__name__
        super().__init__(
            f"unsupported token source {self.kind!r}: expected str, bytes, "
            "a file-like handle, a callable or an iterable of tokens"
        )


class InvalidWindowSize(RabinKarpError, ValueError):
    def __init__(self, k: object):
        self.k = k
        super().__init__(f"window size must be a positive integer, got {k!r}")
