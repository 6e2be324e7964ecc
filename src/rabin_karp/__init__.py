"""
Rabin-Karp rolling hash for k-gram document fingerprinting.

    from rabin_karp import RollingHasher
    for h, start, end in RollingHasher(5, "A do run run run, a do run run"):
        ...
"""
from .collect import BatchCollector, drain, find_candidates, occurrences
from .config import HashMode, RollingHashConfig
from .errors import InvalidSource, InvalidWindowSize, RabinKarpError
from .filters import CaseFoldAdapter, FilterAdapter, filter_regexp
from .rolling_hash import (
    HasherState,
    RollingHasher,
    Triple,
    build_hasher,
    direct_hash,
    kgram_hashes,
    prepare_source,
)
from .sources import (
    CallbackSource,
    HandleSource,
    IterableSource,
    StringSource,
    Token,
    TokenSource,
    make_source,
)
from .tokens import word_source

__version__ = "0.33.0"

__all__ = [
    "BatchCollector",
    "CallbackSource",
    "CaseFoldAdapter",
    "FilterAdapter",
    "HandleSource",
    "HashMode",
    "HasherState",
    "InvalidSource",
    "InvalidWindowSize",
    "IterableSource",
    "RabinKarpError",
    "RollingHashConfig",
    "RollingHasher",
    "StringSource",
    "Token",
    "TokenSource",
    "Triple",
    "build_hasher",
    "direct_hash",
    "drain",
    "filter_regexp",
    "find_candidates",
    "kgram_hashes",
    "make_source",
    "occurrences",
    "prepare_source",
    "word_source",
]
