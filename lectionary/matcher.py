"""
Resolve a DayDescription to one catalogue definition.

Steps, first hit wins:
  1. feast keyword -> known id fragment
  2. fixed date -> generated calendar for the reference year; not for
     season/week days, which move from year to year
  3. season + week (+ weekday) + cycle
  4. season + week (+ weekday), cycle ignored
  5. keyword scoring over id and name (heuristic; every hit is logged)

Ties always go to the earliest entry in catalogue order.
"""

from __future__ import annotations
import re
from typing import Iterable, List, Optional, Tuple

from . import config
from .catalogue import Calendar, Catalogue, CatalogueEntry
from .days import FEAST_IDS, DayDescription
from .util import log, warn

STOPWORDS = {"the", "of", "and", "in", "on", "at", "a", "an", "for", "to", "mass", "year", "cycle"}

def keywords(desc: DayDescription) -> List[str]:
    text = desc.feast_keyword or desc.raw_text
    words = re.findall(r"[a-z]+", text.lower())
    return list(dict.fromkeys(w for w in words if len(w) > 2 and w not in STOPWORDS))

# ===== Steps =====
def _by_feast_id(desc: DayDescription, catalogue: Catalogue) -> Optional[CatalogueEntry]:
    fragment = FEAST_IDS.get(desc.feast_keyword or "")
    if not fragment:
        return None
    return next((e for e in catalogue.values() if fragment in e.id), None)

def _by_date(desc: DayDescription, catalogue: Catalogue,
             calendar: Optional[Calendar], year: int) -> Optional[CatalogueEntry]:
    if not desc.date or not calendar:
        return None
    if desc.week_number is not None and not desc.is_special_feast:
        return None
    for day in calendar.get(f"{year}-{desc.date}", []):
        if day.id in catalogue:
            return catalogue[day.id]
    return None

def _season_week(desc: DayDescription, catalogue: Catalogue,
                 with_cycle: bool) -> Optional[CatalogueEntry]:
    if not desc.season or desc.week_number is None:
        return None
    season = desc.season.lower()
    dow = desc.day_of_week_index
    for e in catalogue.values():
        if (e.season or "").lower() != season or e.week_of_season != desc.week_number:
            continue
        if dow is not None and e.day_of_week_index is not None and e.day_of_week_index != dow:
            continue
        if with_cycle and e.cycle != desc.cycle_letter:
            continue
        return e
    return None

def score_entries(words: Iterable[str], catalogue: Catalogue) -> List[Tuple[int, CatalogueEntry]]:
    words = list(words)
    scored = []
    for e in catalogue.values():
        if not e.id or not e.name:
            continue
        ident, name = e.id.lower(), e.name.lower()
        score = sum(1 for w in words if w in ident) + 2 * sum(1 for w in words if w in name)
        if score > 0:
            scored.append((score, e))
    return scored

def _by_keywords(desc: DayDescription, catalogue: Catalogue) -> Optional[CatalogueEntry]:
    best = None
    for score, e in score_entries(keywords(desc), catalogue):
        # strict '>' keeps the earliest entry on ties
        if best is None or score > best[0]:
            best = (score, e)
    return best[1] if best else None

# ===== Public =====
def find_match(desc: DayDescription, catalogue: Catalogue,
               calendar: Optional[Calendar] = None,
               year: Optional[int] = None) -> Optional[Tuple[str, CatalogueEntry]]:
    """(step name, entry) for the first step that succeeds, else None."""
    year = year or config.REFERENCE_YEAR
    steps = (
        ("feast_id", lambda: _by_feast_id(desc, catalogue)),
        ("date", lambda: _by_date(desc, catalogue, calendar, year)),
        ("season_week_cycle", lambda: _season_week(desc, catalogue, with_cycle=True)),
        ("season_week", lambda: _season_week(desc, catalogue, with_cycle=False)),
        ("keywords", lambda: _by_keywords(desc, catalogue)),
    )
    for name, step in steps:
        entry = step()
        if entry is not None:
            if name == "keywords":
                warn(f"fuzzy match {desc.raw_text!r} -> {entry.id} (check by hand)")
            else:
                log(f"matched {desc.raw_text!r} -> {entry.id} via {name}")
            return name, entry
    return None

def match_day(desc: DayDescription, catalogue: Catalogue,
              calendar: Optional[Calendar] = None,
              year: Optional[int] = None) -> Optional[CatalogueEntry]:
    hit = find_match(desc, catalogue, calendar, year)
    return hit[1] if hit else None
