import pytest

from rabin_karp.collect import BatchCollector, drain, find_candidates, occurrences
from rabin_karp.config import RollingHashConfig
from rabin_karp.errors import InvalidSource
from rabin_karp.rolling_hash import RollingHasher


def test_drain_collects_in_order_and_is_idempotent():
    h = RollingHasher(3, "abcdef")
    triples = drain(h)
    assert [t.start for t in triples] == [0, 1, 2, 3]
    assert drain(h) == []
    assert drain(h) == []


def test_batch_collector_counts():
    bc = BatchCollector(RollingHasher(2, "banana"))
    assert len(bc.drain()) == 5
    assert bc.drain() == []
    assert bc.collected == 5


def test_drain_after_partial_advance():
    h = RollingHasher(2, "banana")
    h.advance()
    assert len(drain(h)) == 4


def test_occurrences_groups_spans():
    occ = occurrences(RollingHasher(2, "banana", RollingHashConfig(mode="unbounded")))
    an = 97 * 101 + 110
    assert occ[an] == [(1, 2), (3, 4)]
    assert sum(len(v) for v in occ.values()) == 5


def test_find_candidates():
    haystack = "hay needle hay hay needle"
    spans = list(find_candidates("needle", haystack))
    assert spans == [(4, 9), (19, 24)]
    for start, end in spans:
        assert haystack[start:end + 1] == "needle"


def test_find_candidates_with_config():
    cfg = RollingHashConfig(casefold=True, skip_pattern=r"\s")
    spans = list(find_candidates("Need Le", "a NEEDLE b", cfg))
    assert spans == [(2, 7)]


def test_find_candidates_empty_needle():
    assert list(find_candidates("", "anything")) == []


def test_find_candidates_validates_on_call():
    with pytest.raises(InvalidSource):
        find_candidates("needle", 42)
    with pytest.raises(ValueError):
        find_candidates("needle", "haystack", RollingHashConfig(mode="crc"))
