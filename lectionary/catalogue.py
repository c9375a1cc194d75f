"""
Adapter for the liturgical-calendar generator's exports.

Two inputs, both read-only:

- the definition catalogue: a list (or id-keyed mapping) of day definitions;
  its iteration order is kept as-is because the matcher's tie-breaking
  depends on it;
- a generated calendar for one year: {"YYYY-MM-DD": [day, ...]} or a flat
  list of days carrying a "date".
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

AUX_GROUPS = ("properOfSaints", "commons", "ritualMasses", "votiveMasses", "massesForTheDead")

@dataclass(frozen=True)
class CatalogueEntry:
    id: str
    name: str = ""
    season: Optional[str] = None
    week_of_season: Optional[int] = None
    day_of_week_index: Optional[int] = None
    rank: Optional[str] = None
    cycle: Optional[str] = None
    date: Optional[str] = None
    raw_definition: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

@dataclass(frozen=True)
class CalendarDay:
    date: str
    id: str
    name: str = ""
    season: Optional[str] = None
    week_of_season: Optional[int] = None
    day_of_week_index: Optional[int] = None
    rank: Optional[str] = None
    sunday_cycle: Optional[str] = None
    weekday_cycle: Optional[str] = None
    from_calendar_id: Optional[str] = None

    @property
    def mm_dd(self) -> Optional[str]:
        return normalize_date(self.date)

Catalogue = Dict[str, CatalogueEntry]
Calendar = Dict[str, List[CalendarDay]]

# ===== Field normalizers =====
def season_tag(value: Any) -> Optional[str]:
    """'Christmas Time' / 'christmas_time' / 'CHRISTMAS_TIME' -> 'CHRISTMAS_TIME'."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if not value:
        return None
    return re.sub(r"[\s-]+", "_", str(value).strip()).upper()

def cycle_tag(value: Any) -> Optional[str]:
    s = re.sub(r"^(?:YEAR|CYCLE)[\s_]*", "", str(value or "").strip().upper())
    return {"1": "I", "2": "II"}.get(s, s) if s in {"A", "B", "C", "I", "II", "1", "2"} else None

def normalize_date(value: Any) -> Optional[str]:
    """ISO dates by month and day; anything else from its last four digits."""
    s = str(value or "")
    m = re.match(r"\s*\d{4}-(\d{2})-(\d{2})", s)
    if m:
        return f"{m.group(1)}-{m.group(2)}"
    digits = re.sub(r"[^0-9]", "", s)[-4:]
    if len(digits) != 4:
        return None
    return f"{digits[:2]}-{digits[2:]}"

def _int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None

def _nested(d: dict, outer: str, inner: str) -> Any:
    sub = d.get(outer)
    return sub.get(inner) if isinstance(sub, dict) else None

def _calendar_field(d: dict, name: str) -> Any:
    v = _nested(d, "calendar", name)
    return v if v is not None else d.get(name)

# ===== Loaders =====
def entry_from_dict(d: dict, key: str = "") -> Optional[CatalogueEntry]:
    ident = str(d.get("id") or key or "").strip()
    if not ident:
        return None
    rank = d.get("rankName") or d.get("rank")
    if isinstance(rank, dict):
        rank = rank.get("name")
    cycle = d.get("cycle") or _nested(d, "cycles", "sundayCycle")
    return CatalogueEntry(
        id=ident,
        name=str(d.get("name") or ""),
        season=season_tag(d.get("season") or d.get("seasons") or d.get("seasonNames")),
        week_of_season=_int(_calendar_field(d, "weekOfSeason")),
        day_of_week_index=_int(_calendar_field(d, "dayOfWeek")),
        rank=str(rank) if rank else None,
        cycle=cycle_tag(cycle),
        date=normalize_date(d.get("date")) if d.get("date") else None,
        raw_definition=d,
    )

def day_from_dict(d: dict, date: str = "") -> CalendarDay:
    return CalendarDay(
        date=str(d.get("date") or date),
        id=str(d.get("id") or ""),
        name=str(d.get("name") or ""),
        season=season_tag(d.get("seasons") or d.get("season") or d.get("seasonNames")),
        week_of_season=_int(_calendar_field(d, "weekOfSeason")),
        day_of_week_index=_int(_calendar_field(d, "dayOfWeek")),
        rank=d.get("rankName") or d.get("rank"),
        sunday_cycle=cycle_tag(_nested(d, "cycles", "sundayCycle")),
        weekday_cycle=cycle_tag(_nested(d, "cycles", "weekdayCycle")),
        from_calendar_id=d.get("fromCalendarId"),
    )

def load_calendar(data: Any) -> Calendar:
    cal: Calendar = {}
    if isinstance(data, dict):
        for date, days in data.items():
            days = days if isinstance(days, list) else [days]
            cal[date] = [day_from_dict(d, date) for d in days if isinstance(d, dict)]
    elif isinstance(data, list):
        for d in data:
            if isinstance(d, dict) and d.get("date"):
                day = day_from_dict(d)
                cal.setdefault(day.date[:10], []).append(day)
    return cal

def load_catalogue(data: Any, calendar: Optional[Calendar] = None) -> Catalogue:
    """
    Catalogue keyed by definition id, in source order. Week, weekday and date
    missing from a definition are filled from its first calendar instance.
    """
    items = data.items() if isinstance(data, dict) else ((None, d) for d in data or [])
    cat: Catalogue = {}
    for key, d in items:
        if not isinstance(d, dict):
            continue
        entry = entry_from_dict(d, key or "")
        if entry and entry.id not in cat:
            cat[entry.id] = entry

    if calendar:
        first: Dict[str, CalendarDay] = {}
        for days in calendar.values():
            for day in days:
                first.setdefault(day.id, day)
        for ident, entry in cat.items():
            day = first.get(ident)
            if day is None:
                continue
            cat[ident] = replace(
                entry,
                season=entry.season or day.season,
                week_of_season=entry.week_of_season if entry.week_of_season is not None else day.week_of_season,
                day_of_week_index=(entry.day_of_week_index if entry.day_of_week_index is not None
                                   else day.day_of_week_index),
                date=entry.date or day.mm_dd,
            )
    return cat
