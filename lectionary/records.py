"""
Liturgical-day records and the output lectionary document.

Rows from the lectionary tables are normalized per cycle letter, matched
against the catalogue and filed under cycles.sundays / cycles.weekdays.
Days of the generated calendar that belong to an auxiliary sub-catalogue
(proper of saints, commons, ritual, votive, dead) or to the weekday cycle are
filed as well, with empty readings.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Tuple

from . import config
from .boundaries import BoundaryTable
from .catalogue import AUX_GROUPS, Calendar, CalendarDay, Catalogue, CatalogueEntry
from .days import (ADVENT, CHRISTMAS_TIME, EASTER_TIME, LENT, ORDINARY_TIME, PASCHAL_TRIDUUM,
                   WEEKDAYS, DayDescription, MalformedDescription, expand_cycle_tag,
                   ordinal_suffix, parse_day_description)
from .extract import SourceRow
from .matcher import match_day
from .parses import ParsedCitations
from .references import SLOTS, NormalizerOptions, ReadingOption, normalize_citation
from .util import log, warn

SUNDAY_CYCLES = ("A", "B", "C")
WEEKDAY_CYCLES = ("I", "II")

SEASON_NAMES = {
    ADVENT: "Advent",
    CHRISTMAS_TIME: "Christmas Time",
    LENT: "Lent",
    PASCHAL_TRIDUUM: "Paschal Triduum",
    EASTER_TIME: "Easter Time",
    ORDINARY_TIME: "Ordinary Time",
}

Readings = Dict[str, Tuple[ReadingOption, ...]]

@dataclass(frozen=True)
class LiturgicalDayRecord:
    identifier: str
    name: str
    season: Optional[str]
    week: Optional[int]
    day_of_week: Optional[str]
    date: Optional[str]
    rank: Optional[str]
    mass_type: Optional[str]
    readings: Readings

    def to_dict(self) -> dict:
        return {
            "identifier": self.identifier,
            "name": self.name,
            "season": self.season,
            "week": self.week,
            "dayOfWeek": self.day_of_week,
            "date": self.date,
            "rank": self.rank,
            "massType": self.mass_type,
            "readings": {slot: [o.to_dict() for o in self.readings.get(slot, ())] for slot in SLOTS},
        }

def empty_readings() -> Readings:
    return {slot: () for slot in SLOTS}

def new_document(title: str = "") -> dict:
    return {
        "lectionaryTitle": title or config.LECTIONARY_TITLE,
        "schemaVersion": config.SCHEMA_VERSION,
        "cycles": {
            "sundays": {c: [] for c in SUNDAY_CYCLES},
            "weekdays": {c: [] for c in WEEKDAY_CYCLES},
        },
        **{g: [] for g in AUX_GROUPS},
    }

# ===== Local naming (used when the catalogue has no entry) =====
def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", (text or "").lower()).strip("_")

def local_identifier(desc: DayDescription) -> str:
    if desc.feast_keyword:
        ident = _slug(desc.feast_keyword)
        return f"{ident}_{desc.mass_type}" if desc.mass_type else ident
    parts = [(desc.season or "unknown").lower(), str(desc.week_number or 0)]
    parts.append(desc.day_of_week or "week")
    return "_".join(parts)

def local_name(desc: DayDescription) -> str:
    season = SEASON_NAMES.get(desc.season or "", desc.season or "")
    if desc.week_number is not None and season:
        nth = f"{desc.week_number}{ordinal_suffix(desc.week_number)}"
        if desc.is_sunday:
            return f"{nth} Sunday of {season}"
        if desc.day_of_week:
            return f"{desc.day_of_week.title()} of the {nth} Week of {season}"
        return f"{nth} Week of {season}"
    return re.sub(r"\s*[-–—]\s*(?:Year\s+|Cycle\s+)?[ABCI]+\s*$", "", desc.raw_text).strip()

def local_rank(desc: DayDescription) -> Optional[str]:
    if desc.is_special_feast:
        return None
    if desc.is_sunday:
        return "Sunday"
    return "Weekday" if desc.day_of_week else None

def assemble_record(desc: DayDescription, readings: Readings,
                    entry: Optional[CatalogueEntry] = None) -> LiturgicalDayRecord:
    week = desc.week_number
    dow = desc.day_of_week
    if entry is not None:
        if entry.week_of_season is not None:
            week = entry.week_of_season
        if dow is None and entry.day_of_week_index is not None and 0 <= entry.day_of_week_index < 7:
            dow = WEEKDAYS[entry.day_of_week_index]
    return LiturgicalDayRecord(
        identifier=entry.id if entry else local_identifier(desc),
        name=(entry.name if entry and entry.name else local_name(desc)),
        season=(entry.season if entry and entry.season else desc.season),
        week=week,
        day_of_week=dow,
        date=desc.date or (entry.date if entry else None),
        rank=(entry.rank if entry and entry.rank else local_rank(desc)),
        mass_type=desc.mass_type,
        readings={slot: tuple(readings.get(slot, ())) for slot in SLOTS},
    )

def calendar_record(day: CalendarDay, entry: Optional[CatalogueEntry]) -> LiturgicalDayRecord:
    dow = day.day_of_week_index
    return LiturgicalDayRecord(
        identifier=day.id,
        name=(entry.name if entry and entry.name else day.name),
        season=day.season or (entry.season if entry else None),
        week=day.week_of_season,
        day_of_week=WEEKDAYS[dow] if dow is not None and 0 <= dow < 7 else None,
        date=day.mm_dd,
        rank=(entry.rank if entry and entry.rank else day.rank),
        mass_type=None,
        readings=empty_readings(),
    )

# ===== Rows =====
def cycles_for(desc: DayDescription) -> List[str]:
    """Cycle letters a row applies to; untagged rows apply to every cycle of their kind."""
    if desc.cycle_letter is not None:
        return expand_cycle_tag(desc.cycle_letter)
    weekday = desc.day_of_week not in (None, "sunday") and not desc.is_special_feast
    return list(WEEKDAY_CYCLES if weekday else SUNDAY_CYCLES)

def records_from_rows(rows: Iterable[SourceRow], parser: ParsedCitations,
                      table: Optional[BoundaryTable] = None,
                      catalogue: Optional[Catalogue] = None,
                      calendar: Optional[Calendar] = None,
                      options: Optional[NormalizerOptions] = None,
                      year: Optional[int] = None,
                      failures: Optional[List[str]] = None) -> List[Tuple[str, LiturgicalDayRecord]]:
    out: List[Tuple[str, LiturgicalDayRecord]] = []
    for row in rows:
        try:
            desc = parse_day_description(row.day, row.date)
            letters = cycles_for(desc)
        except MalformedDescription as e:
            warn(f"skipping row {row.day!r} ({row.source or 'input'}): {e}")
            continue

        for letter in letters:
            d = replace(desc, cycle_letter=letter)
            readings = {
                slot: tuple(normalize_citation(cell, slot, letter, parser, table, options, failures))
                for slot, cell in row.cells().items()
            }
            entry = match_day(d, catalogue, calendar, year) if catalogue else None
            if entry is None:
                warn(f"no catalogue entry for {d.raw_text!r} [{letter}]; keeping local identifier")
            out.append((letter, assemble_record(d, readings, entry)))
    return out

def _aux_group(from_calendar_id: Optional[str]) -> Optional[str]:
    key = re.sub(r"[_\s-]", "", from_calendar_id or "").lower()
    return next((g for g in AUX_GROUPS if g.lower() == key), None)

def records_from_calendar(calendar: Calendar,
                          catalogue: Optional[Catalogue] = None) -> List[Tuple[str, LiturgicalDayRecord]]:
    """(group, record) for the primary day of every calendar date that belongs to a group."""
    catalogue = catalogue or {}
    out: List[Tuple[str, LiturgicalDayRecord]] = []
    for date, days in calendar.items():
        if not days:
            continue
        day = days[0]
        group = _aux_group(day.from_calendar_id)
        if group:
            entry = catalogue.get(day.id)
            if entry is None:
                warn(f"{date}: {day.id} is not in the catalogue; skipping {group} entry")
                continue
            out.append((group, calendar_record(day, entry)))
        elif day.weekday_cycle in WEEKDAY_CYCLES and day.day_of_week_index != 0:
            out.append((day.weekday_cycle, calendar_record(day, catalogue.get(day.id))))
    return out

# ===== Document =====
def _bucket(doc: dict, group: str) -> List[dict]:
    if group in SUNDAY_CYCLES:
        return doc["cycles"]["sundays"][group]
    if group in WEEKDAY_CYCLES:
        return doc["cycles"]["weekdays"][group]
    return doc[group]

def sort_by_date(items: List[dict]) -> None:
    items.sort(key=lambda r: (r.get("date") is None, r.get("date") or ""))

def build_document(grouped: Iterable[Tuple[str, LiturgicalDayRecord]], title: str = "") -> dict:
    """File records into their groups (first record per identifier and mass wins), then sort by date."""
    doc = new_document(title)
    seen = set()
    for group, rec in grouped:
        key = (group, rec.identifier, rec.mass_type)
        if key in seen:
            log(f"duplicate {rec.identifier} in {group}; keeping the first")
            continue
        seen.add(key)
        _bucket(doc, group).append(rec.to_dict())

    for c in SUNDAY_CYCLES:
        sort_by_date(doc["cycles"]["sundays"][c])
    for c in WEEKDAY_CYCLES:
        sort_by_date(doc["cycles"]["weekdays"][c])
    for g in AUX_GROUPS:
        sort_by_date(doc[g])

    counts = {f"sundays.{c}": len(doc["cycles"]["sundays"][c]) for c in SUNDAY_CYCLES}
    counts.update({f"weekdays.{c}": len(doc["cycles"]["weekdays"][c]) for c in WEEKDAY_CYCLES})
    counts.update({g: len(doc[g]) for g in AUX_GROUPS})
    log("final counts:", ", ".join(f"{k}={v}" for k, v in counts.items()))
    return doc
