"""
Adapter for the citation parser.

Scriptural grammar lives outside this package: the parser is run over the
cleaned citation strings ahead of time and its results are handed over as
JSON, one record per cleaned citation:

    {"Rom 5:12, 17-19": {"osis": "Rom.5.12,Rom.5.17-Rom.5.19",
                         "entities": [{"type": "sequence", "entities": [...]}]}}
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .util import warn
from .verses import Entity, entity_from_dict

_WS = re.compile(r"\s+")

@dataclass(frozen=True)
class ParseResult:
    osis: str
    entities: Tuple[Entity, ...] = ()

def _key(text: str) -> str:
    return _WS.sub(" ", text or "").strip()

class ParsedCitations:
    """Lookup of precomputed parse results by cleaned citation text."""

    def __init__(self, results: Dict[str, ParseResult]):
        self._exact = {_key(k): v for k, v in results.items()}
        self._folded = {k.casefold(): v for k, v in self._exact.items()}

    @classmethod
    def from_dict(cls, data: dict) -> "ParsedCitations":
        results: Dict[str, ParseResult] = {}
        for text, rec in data.items():
            if not isinstance(rec, dict):
                continue
            osis = str(rec.get("osis") or "")
            try:
                entities = tuple(entity_from_dict(e) for e in rec.get("entities") or [])
            except ValueError as e:
                warn(f"unusable parse for {text!r}: {e}")
                continue
            results[text] = ParseResult(osis, entities)
        return cls(results)

    def __len__(self) -> int:
        return len(self._exact)

    def parse(self, text: str) -> Optional[ParseResult]:
        k = _key(text)
        hit = self._exact.get(k) or self._folded.get(k.casefold())
        if hit is None or not hit.osis:
            return None
        return hit
