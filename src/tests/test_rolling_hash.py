import random

import pytest
from rabin_karp.config import RollingHashConfig
from rabin_karp.errors import InvalidSource, InvalidWindowSize
from rabin_karp.rolling_hash import (
    HasherState,
    RollingHasher,
    Triple,
    direct_hash,
    kgram_hashes,
)

MODULAR = RollingHashConfig(mode="modular")
UNBOUNDED = RollingHashConfig(mode="unbounded")


@pytest.mark.parametrize("cfg", [MODULAR, UNBOUNDED])
def test_triple_count_is_n_minus_k_plus_one(cfg):
    text = "a do run run run, a do run run"
    for k in range(1, len(text) + 1):
        triples = RollingHasher(k, text, cfg).values()
        assert len(triples) == len(text) - k + 1


def test_shorter_than_window_emits_nothing():
    h = RollingHasher(7, "banana")
    assert h.advance() is None
    assert h.state is HasherState.EXHAUSTED
    assert RollingHasher(3, "").values() == []


def test_banana_modular():
    triples = RollingHasher(2, "banana", MODULAR).values()
    assert len(triples) == 5
    assert [(t.start, t.end) for t in triples] == [(0, 1), (1, 2), (2, 3), (3, 4), (4, 5)]
    an_1, an_2 = triples[1], triples[3]
    assert an_1.hash == an_2.hash == 97 * 257 + 110
    assert triples[2].hash == 110 * 257 + 97
    assert triples[2].hash != an_1.hash


def test_banana_unbounded():
    triples = RollingHasher(2, "banana", UNBOUNDED).values()
    assert triples[1].hash == triples[3].hash == 97 * 101 + 110
    assert triples[2].hash != triples[1].hash


@pytest.mark.parametrize("cfg", [MODULAR, UNBOUNDED])
def test_rolling_matches_direct_computation(cfg):
    rng = random.Random(1234)
    for _ in range(20):
        text = "".join(rng.choice("abcdxyz ") for _ in range(rng.randint(1, 60)))
        k = rng.randint(1, len(text))
        for h, start, end in RollingHasher(k, text, cfg):
            assert end - start == k - 1
            assert h == direct_hash([ord(c) for c in text[start:end + 1]], cfg)


def test_warmup_equals_direct_hash_of_first_window():
    text = "the quick brown fox"
    for k in (1, 2, 5, len(text)):
        first = RollingHasher(k, text).advance()
        assert first == Triple(direct_hash(map(ord, text[:k])), 0, k - 1)


def test_equal_kgrams_hash_equal():
    text = "abcXabcYabc"
    occ = {}
    for h, start, end in RollingHasher(3, text, UNBOUNDED):
        occ.setdefault(text[start:end + 1], set()).add(h)
    assert len(occ["abc"]) == 1


def test_unbounded_grows_past_machine_width():
    k = 40
    h, _, _ = RollingHasher(k, "z" * k, UNBOUNDED).advance()
    assert h.bit_length() > 64
    assert h == direct_hash([ord("z")] * k, UNBOUNDED)


def test_modular_stays_below_modulus():
    cfg = RollingHashConfig(mode="modular", modulus=97)
    for h, _, _ in RollingHasher(4, "lorem ipsum dolor sit amet", cfg):
        assert 0 <= h < 97


def test_state_machine_and_idempotent_exhaustion():
    h = RollingHasher(2, "abc")
    assert h.state is HasherState.COLD
    assert h.advance() == Triple(direct_hash([97, 98]), 0, 1)
    assert h.state is HasherState.WARM
    assert h.advance().end == 2
    assert h.advance() is None
    assert h.state is HasherState.EXHAUSTED
    assert h.advance() is None
    assert h.values() == []
    assert list(h) == []


def test_failed_pull_keeps_last_window():
    h = RollingHasher(2, "ab")
    first = h.advance()
    assert h.advance() is None
    assert [t.position for t in h._window] == [first.start, first.end]


@pytest.mark.parametrize("k", [0, -1, -10, 1.5, "3", True, None])
def test_invalid_window_size(k):
    with pytest.raises(InvalidWindowSize):
        RollingHasher(k, "banana")


def test_invalid_window_size_is_a_value_error():
    with pytest.raises(ValueError):
        RollingHasher(0, "banana")


def test_invalid_source():
    with pytest.raises(InvalidSource) as exc:
        RollingHasher(2, 42)
    assert "int" in str(exc.value)


def test_invalid_config_rejected():
    with pytest.raises(ValueError):
        RollingHasher(2, "banana", RollingHashConfig(mode="crc"))
    with pytest.raises(ValueError):
        RollingHasher(2, "banana", RollingHashConfig(base=1))


def test_callback_positions_may_be_non_contiguous():
    data = iter([(10, 0), (20, 5), (30, 6), (40, 100)])
    h = RollingHasher(2, lambda: next(data, None))
    spans = [(s, e) for _, s, e in h]
    assert spans == [(0, 5), (5, 6), (6, 100)]


def test_kgram_hashes_applies_config():
    cfg = RollingHashConfig(skip_pattern=r"\s", casefold=True)
    spaced = kgram_hashes("Ab Ra Ca", 3, cfg)
    plain = kgram_hashes("abraca", 3)
    assert [t.hash for t in spaced] == [t.hash for t in plain]
    assert spaced[0].start == 0 and spaced[0].end == 3


def test_hashers_over_same_text_are_independent():
    text = "mississippi"
    a = RollingHasher(4, text)
    b = RollingHasher(4, text)
    a.advance()
    assert b.values()[0] == RollingHasher(4, text).advance()


def test_exhaustion_is_permanent_when_callback_resumes():
    items = iter([(1, 0), (2, 1), None, (3, 2), (4, 3)])
    h = RollingHasher(2, lambda: next(items, None), UNBOUNDED)
    assert h.advance() == Triple(1 * 101 + 2, 0, 1)
    assert h.advance() is None
    assert h.state is HasherState.EXHAUSTED
    for _ in range(3):
        assert h.advance() is None
    assert h.values() == []


def test_list_pairs_from_callback():
    items = iter([[97, 0], [98, 1]])
    triples = RollingHasher(1, lambda: next(items, None)).values()
    assert [(t.hash, t.start) for t in triples] == [(97, 0), (98, 1)]
