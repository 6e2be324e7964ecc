"""
Word-level tokens: each word becomes one 32-bit token so the rolling hash
runs over word k-grams instead of character k-grams.
"""
from __future__ import annotations
import hashlib
import re
from typing import Iterator, Union

import xxhash
from blake3 import blake3

from .sources import IterableSource, Token

HASH_NAMES = ("xxhash64", "blake3", "blake2b")


def _stable_hash_64(data: bytes, seed: int = 0, hash_name: str = "xxhash64") -> int:
    if hash_name == "xxhash64":
        return xxhash.xxh3_64_intdigest(data, seed=seed & 0xFFFFFFFFFFFFFFFF)
    s = seed.to_bytes(8, "big", signed=False)
    if hash_name == "blake3":
        return int.from_bytes(blake3(s + data).digest()[:8], "big", signed=False)
    if hash_name == "blake2b":
        h = hashlib.blake2b(s + data, digest_size=8, person=b"rabinkrp")
        return int.from_bytes(h.digest(), "big", signed=False)
    raise ValueError(f"unknown hash_name {hash_name!r}, expected one of {HASH_NAMES}")


def word_value(word: str, seed: int = 0, hash_name: str = "xxhash64") -> int:
    return _stable_hash_64(word.encode("utf-8"), seed=seed, hash_name=hash_name) & ((1 << 32) - 1)


def _words(text: str, pattern: re.Pattern, seed: int, hash_name: str) -> Iterator[Token]:
    for m in pattern.finditer(text):
        yield Token(word_value(m.group(0), seed=seed, hash_name=hash_name), m.start())


def word_source(text: str,
                pattern: Union[str, re.Pattern] = r"\w+",
                hash_name: str = "xxhash64",
                seed: int = 0) -> IterableSource:
    """
    One token per match of ``pattern`` in ``text``; the position is the
    character offset where the word starts.
    """
    if hash_name not in HASH_NAMES:
        raise ValueError(f"unknown hash_name {hash_name!r}, expected one of {HASH_NAMES}")
    if isinstance(pattern, str):
        pattern = re.compile(pattern)
    return IterableSource(_words(text, pattern, seed, hash_name))
