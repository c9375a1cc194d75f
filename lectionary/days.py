"""
Day descriptions: the free-text "day" column of a lectionary table.

    "1st Sunday of Advent - A"
    "Monday of the 3rd Week of Easter - II"
    "The Nativity of the Lord (Christmas) - Mass at Dawn - ABC"
    "Palm Sunday of the Passion of the Lord (Year B)"
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

class MalformedDescription(ValueError):
    """Text that none of the day grammars recognise."""

# ===== Seasons (calendar collaborator's tags) =====
ADVENT, CHRISTMAS_TIME, LENT = "ADVENT", "CHRISTMAS_TIME", "LENT"
PASCHAL_TRIDUUM, EASTER_TIME, ORDINARY_TIME = "PASCHAL_TRIDUUM", "EASTER_TIME", "ORDINARY_TIME"

SEASON_WORDS = {
    "advent": ADVENT,
    "christmas": CHRISTMAS_TIME,
    "christmas time": CHRISTMAS_TIME,
    "christmastide": CHRISTMAS_TIME,
    "lent": LENT,
    "triduum": PASCHAL_TRIDUUM,
    "easter": EASTER_TIME,
    "easter time": EASTER_TIME,
    "eastertide": EASTER_TIME,
    "ordinary time": ORDINARY_TIME,
    "ordinary": ORDINARY_TIME,
}

WEEKDAYS = ["sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]

# feast keyword -> (season it falls in or None, fragment of the calendar generator's definition id)
FEASTS = {
    "immaculate conception": (ADVENT, "immaculate_conception_of_mary"),
    "christmas": (CHRISTMAS_TIME, "nativity_of_the_lord"),
    "nativity of the lord": (CHRISTMAS_TIME, "nativity_of_the_lord"),
    "holy family": (CHRISTMAS_TIME, "holy_family"),
    "mary, mother of god": (CHRISTMAS_TIME, "mary_mother_of_god"),
    "mary mother of god": (CHRISTMAS_TIME, "mary_mother_of_god"),
    "epiphany": (CHRISTMAS_TIME, "epiphany"),
    "baptism of the lord": (CHRISTMAS_TIME, "baptism_of_the_lord"),
    "ash wednesday": (LENT, "ash_wednesday"),
    "palm sunday": (LENT, "palm_sunday"),
    "holy thursday": (PASCHAL_TRIDUUM, "thursday_of_the_lords_supper"),
    "lord's supper": (PASCHAL_TRIDUUM, "thursday_of_the_lords_supper"),
    "good friday": (PASCHAL_TRIDUUM, "friday_of_the_passion_of_the_lord"),
    "easter vigil": (PASCHAL_TRIDUUM, "easter_vigil"),
    "easter sunday": (EASTER_TIME, "easter_sunday"),
    "resurrection of the lord": (EASTER_TIME, "easter_sunday"),
    "divine mercy": (EASTER_TIME, "divine_mercy_sunday"),
    "ascension": (EASTER_TIME, "ascension_of_the_lord"),
    "pentecost": (EASTER_TIME, "pentecost_sunday"),
    "trinity": (ORDINARY_TIME, "most_holy_trinity"),
    "body and blood of christ": (ORDINARY_TIME, "most_holy_body_and_blood_of_christ"),
    "corpus christi": (ORDINARY_TIME, "most_holy_body_and_blood_of_christ"),
    "sacred heart": (ORDINARY_TIME, "most_sacred_heart_of_jesus"),
    "christ the king": (ORDINARY_TIME, "our_lord_jesus_christ_king_of_the_universe"),
    "king of the universe": (ORDINARY_TIME, "our_lord_jesus_christ_king_of_the_universe"),
    "presentation of the lord": (None, "presentation_of_the_lord"),
    "transfiguration": (None, "transfiguration_of_the_lord"),
    "assumption": (None, "assumption_of_the_blessed_virgin_mary"),
    "all saints": (None, "all_saints"),
    "all souls": (None, "commemoration_of_all_the_faithful_departed"),
}
FEAST_SEASONS = {k: season for k, (season, _) in FEASTS.items()}
FEAST_IDS = {k: fragment for k, (_, fragment) in FEASTS.items()}
_FEAST_RES = {k: re.compile(rf"(?<![a-z']){re.escape(k)}(?![a-z])") for k in FEASTS}

# ===== Regex =====
_ORD = r"(\d+)(?:st|nd|rd|th)"
SUNDAY_RE  = re.compile(rf"^{_ORD}\s+Sunday\s+(?:of|in|after)\s+(.+)$", re.I)
WEEKDAY_RE = re.compile(rf"^(Monday|Tuesday|Wednesday|Thursday|Friday|Saturday)\s+"
                        rf"(?:of|in)\s+(?:the\s+)?{_ORD}\s+Week\s+(?:of|in)\s+(.+)$", re.I)
WEEK_RE    = re.compile(rf"^{_ORD}\s+Week\s+(?:of|in)\s+(.+)$", re.I)
# generic "<n>th <day> of <season>" as written in older tables
LOOSE_RE   = re.compile(rf"{_ORD}\s+(?:Week\s+of\s+)?(\w+)\s+of\s+(\w+(?:\s+Time)?)", re.I)
# "Monday within the Octave of Christmas", "Friday in the Octave of Easter"
OCTAVE_RE  = re.compile(r"\bOctave\s+of\s+(Christmas|Easter)\b", re.I)

CYCLE_TAG_RE = re.compile(r"\s*(?:[-–—]\s*(?:Year\s+|Cycle\s+)?([ABCI]+)|\(\s*(?:Year|Cycle)\s+([ABCI]+)\s*\))\s*$")
DATE_CELL_RE = re.compile(r"^\s*(\d{1,2})\s*[/.-]\s*(\d{1,2})")

MASS_TYPES = (
    ("vigil", re.compile(r"\bvigil\b", re.I)),
    ("night", re.compile(r"\b(?:midnight|night)\b", re.I)),
    ("dawn",  re.compile(r"\bdawn\b", re.I)),
    ("day",   re.compile(r"\bduring\s+the\s+day\b|\bmass\s+of\s+the\s+day\b", re.I)),
)

VALID_CYCLE_TAGS = {"A": ["A"], "B": ["B"], "C": ["C"], "ABC": ["A", "B", "C"],
                    "I": ["I"], "II": ["II"]}

@dataclass(frozen=True)
class DayDescription:
    raw_text: str
    season: Optional[str] = None
    week_number: Optional[int] = None
    cycle_letter: Optional[str] = None
    feast_keyword: Optional[str] = None
    is_special_feast: bool = False
    day_of_week: Optional[str] = None
    date: Optional[str] = None
    mass_type: Optional[str] = None

    @property
    def is_sunday(self) -> bool:
        return self.day_of_week == "sunday"

    @property
    def day_of_week_index(self) -> Optional[int]:
        return WEEKDAYS.index(self.day_of_week) if self.day_of_week in WEEKDAYS else None

# ===== Helpers =====
def ordinal_suffix(n: int) -> str:
    j, k = n % 10, n % 100
    if j == 1 and k != 11:
        return "st"
    if j == 2 and k != 12:
        return "nd"
    if j == 3 and k != 13:
        return "rd"
    return "th"

def format_mm_dd(cell: str) -> Optional[str]:
    """'12/25' -> '12-25'; anything else -> None."""
    m = DATE_CELL_RE.match(cell or "")
    if not m:
        return None
    month, day = int(m.group(1)), int(m.group(2))
    if not (1 <= month <= 12 and 1 <= day <= 31):
        return None
    return f"{month:02d}-{day:02d}"

def season_of(text: str) -> Optional[str]:
    key = re.sub(r"\s+", " ", (text or "").strip().lower())
    key = re.sub(r"^(?:the\s+)?season\s+of\s+", "", key)
    return SEASON_WORDS.get(key) or SEASON_WORDS.get(key.split(" ")[0] if key else "")

def expand_cycle_tag(tag: Optional[str]) -> List[Optional[str]]:
    """'ABC' -> ['A', 'B', 'C']; None -> [None]; malformed tags raise."""
    if tag is None:
        return [None]
    letters = VALID_CYCLE_TAGS.get(tag.strip().upper())
    if letters is None:
        raise MalformedDescription(f"unsupported cycle tag {tag!r}")
    return list(letters)

def split_cycle_tag(text: str) -> Tuple[str, Optional[str]]:
    m = CYCLE_TAG_RE.search(text)
    if not m:
        return text.strip(), None
    return text[:m.start()].strip(), (m.group(1) or m.group(2)).upper()

def mass_type_of(text: str) -> Optional[str]:
    for name, rx in MASS_TYPES:
        if rx.search(text or ""):
            return name
    return None

def feast_of(text: str) -> Optional[str]:
    low = (text or "").lower()
    hits = [k for k, rx in _FEAST_RES.items() if rx.search(low)]
    # longest keyword wins ("easter vigil" over "easter sunday" etc.)
    return max(hits, key=len) if hits else None

# ===== Parser =====
def parse_day_description(text: str, date_cell: str = "") -> DayDescription:
    """
    Returns the description with at most one cycle tag kept as written; callers
    expand multi-cycle tags with expand_cycle_tag.
    """
    raw = re.sub(r"\s+", " ", text or "").strip()
    if not raw:
        raise MalformedDescription("empty day description")
    body, tag = split_cycle_tag(raw)
    common = dict(raw_text=raw, cycle_letter=tag, date=format_mm_dd(date_cell),
                  mass_type=mass_type_of(body))

    m = SUNDAY_RE.match(body)
    if m and season_of(m.group(2)):
        return DayDescription(season=season_of(m.group(2)), week_number=int(m.group(1)),
                              day_of_week="sunday", **common)

    m = WEEKDAY_RE.match(body)
    if m and season_of(m.group(3)):
        return DayDescription(season=season_of(m.group(3)), week_number=int(m.group(2)),
                              day_of_week=m.group(1).lower(), **common)

    m = WEEK_RE.match(body)
    if m and season_of(m.group(2)):
        return DayDescription(season=season_of(m.group(2)), week_number=int(m.group(1)), **common)

    feast = feast_of(body)
    dow = next((d for d in WEEKDAYS if re.search(rf"\b{d}\b", body, re.I)), None)

    # octave weekdays are the first week of their season, not the feast itself
    m = OCTAVE_RE.search(body)
    if m and feast in (None, "christmas"):
        return DayDescription(season=season_of(m.group(1)), week_number=1, day_of_week=dow, **common)

    if feast:
        return DayDescription(season=FEAST_SEASONS[feast], feast_keyword=feast, is_special_feast=True,
                              day_of_week=dow, **common)

    m = LOOSE_RE.search(body)
    if m and season_of(m.group(3)):
        day = m.group(2).lower()
        return DayDescription(season=season_of(m.group(3)), week_number=int(m.group(1)),
                              day_of_week=day if day in WEEKDAYS else None, **common)

    raise MalformedDescription(f"unrecognised day description: {raw!r}")
