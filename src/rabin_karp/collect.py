"""
Draining hashers into materialized results, plus the two lookups that every
fingerprinting caller ends up writing: "where does each k-gram occur" and
"where might this needle occur in that haystack".
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .config import RollingHashConfig
from .rolling_hash import RollingHasher, Triple, direct_hash, prepare_source

logger = logging.getLogger(__name__)

Span = Tuple[Any, Any]


def drain(hasher: RollingHasher) -> List[Triple]:
    """Advance ``hasher`` until it is exhausted and return every triple in order."""
    out: List[Triple] = []
    while True:
        triple = hasher.advance()
        if triple is None:
            return out
        out.append(triple)


class BatchCollector:
    def __init__(self, hasher: RollingHasher):
        self.hasher = hasher
        self.collected = 0

    def drain(self) -> List[Triple]:
        triples = drain(self.hasher)
        self.collected += len(triples)
        logger.debug("collected %d triples (%d total)", len(triples), self.collected)
        return triples


def occurrences(hasher: RollingHasher) -> Dict[int, List[Span]]:
    occ: Dict[int, List[Span]] = defaultdict(list)
    for h, start, end in drain(hasher):
        occ[h].append((start, end))
    return dict(occ)


def find_candidates(needle, haystack, config: Optional[RollingHashConfig] = None) -> Iterator[Span]:
    """
    Iterate the (start, end) spans of ``haystack`` whose hash equals the hash of
    the whole of ``needle``. In modular mode a span may be a collision, so
    callers that need certainty compare the text itself.
    """
    cfg = config if config is not None else RollingHashConfig()
    cfg.validate()
    hay_source = prepare_source(haystack, cfg)
    with prepare_source(needle, cfg) as source:
        needle_values = [t.value for t in source]
    if not needle_values:
        hay_source.close()
        return iter(())
    target = direct_hash(needle_values, cfg)
    hay = RollingHasher(len(needle_values), hay_source, cfg)
    return _matching_spans(hay, target)


def _matching_spans(hay: RollingHasher, target: int) -> Iterator[Span]:
    with hay:
        for h, start, end in hay:
            if h == target:
                yield start, end
