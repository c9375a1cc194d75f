import pytest

from lectionary.boundaries import BoundaryTable
from lectionary.catalogue import load_calendar, load_catalogue
from lectionary.parses import ParsedCitations

# A cut-down versification: real counts for Matthew and Romans, truncated
# Genesis/Exodus so book roll-over is easy to exercise.
VERSIFICATION = {
    "books": ["Gen", "Exod", "Obad", "Matt", "Rom"],
    "chapters": {
        "Gen": [31, 25, 24],
        "Exod": [22, 25],
        "Obad": [21],
        "Matt": [25, 23, 17, 25, 48, 34, 29, 34, 38, 42, 30, 50, 58, 36,
                 39, 28, 27, 35, 30, 34, 46, 46, 39, 51, 46, 75, 66, 20],
        "Rom": [32, 29, 31, 25, 21, 23, 25, 39, 33, 21, 36, 21, 14, 23, 33, 27],
    },
}

def _range(b, c1, v1, c2, v2, partial=None):
    start = {"b": b, "c": c1, "v": v1}
    if partial:
        start["partial_verse"] = partial
    return {"type": "range", "start": start, "end": {"b": b, "c": c2, "v": v2}}

def _bcv(b, c, v):
    return {"type": "bcv", "start": {"b": b, "c": c, "v": v}}

PARSES = {
    "Rom 5:12-19": {"osis": "Rom.5.12-Rom.5.19", "entities": [_range("Rom", 5, 12, 5, 19)]},
    "Rom 5:12, 17-19": {
        "osis": "Rom.5.12,Rom.5.17-Rom.5.19",
        "entities": [{"type": "sequence", "entities": [_bcv("Rom", 5, 12), _range("Rom", 5, 17, 5, 19)]}],
    },
    "Rom 1:1, 3": {"osis": "Rom.1.1,Rom.1.3",
                   "entities": [{"type": "sequence", "entities": [_bcv("Rom", 1, 1), _bcv("Rom", 1, 3)]}]},
    "Rom 1:1+3": {"osis": "Rom.1.1,Rom.1.3",
                  "entities": [{"type": "sequence", "entities": [_bcv("Rom", 1, 1), _bcv("Rom", 1, 3)]}]},
    "Rom 16:25-17:3": {"osis": "Rom.16.25-Rom.17.3", "entities": [_range("Rom", 16, 25, 17, 3)]},
    "Matt 1:1-25": {"osis": "Matt.1.1-Matt.1.25", "entities": [_range("Matt", 1, 1, 1, 25)]},
    "Matt 1:18-25": {"osis": "Matt.1.18-Matt.1.25", "entities": [_range("Matt", 1, 18, 1, 25)]},
    "Matt 4:1-11": {"osis": "Matt.4.1-Matt.4.11", "entities": [_range("Matt", 4, 1, 4, 11)]},
    "Matt 5:1-12a": {"osis": "Matt.5.1-Matt.5.12", "entities": [_range("Matt", 5, 1, 5, 12)]},
    "Matt 11:28": {"osis": "Matt.11.28", "entities": [_bcv("Matt", 11, 28)]},
    "Matt 26:14-27:66": {"osis": "Matt.26.14-Matt.27.66", "entities": [_range("Matt", 26, 14, 27, 66)]},
    "Gen 2:7-9": {"osis": "Gen.2.7-Gen.2.9", "entities": [_range("Gen", 2, 7, 2, 9)]},
    "Obad 1:1-21": {"osis": "Obad.1.1-Obad.1.21", "entities": [_range("Obad", 1, 1, 1, 21)]},
    "Exod 1": {"osis": "Exod.1", "entities": [{"type": "bc", "start": {"b": "Exod", "c": 1}}]},
    "Gen 9": {"osis": "Gen.9", "entities": [{"type": "bc", "start": {"b": "Gen", "c": 9}}]},
}

CATALOGUE = [
    {"id": "advent_1_sunday_year_b", "name": "First Sunday of Advent (Year B)", "season": "ADVENT",
     "weekOfSeason": 1, "dayOfWeek": 0, "cycle": "B", "rank": "Sunday"},
    {"id": "advent_1_sunday", "name": "First Sunday of Advent", "season": "ADVENT",
     "weekOfSeason": 1, "dayOfWeek": 0, "cycle": "A", "rank": "Sunday"},
    {"id": "nativity_of_the_lord", "name": "The Nativity of the Lord", "seasons": ["CHRISTMAS_TIME"],
     "rankName": "Solemnity"},
    {"id": "ordinary_time_5_sunday", "name": "Fifth Sunday in Ordinary Time", "season": "Ordinary Time",
     "weekOfSeason": 5, "dayOfWeek": 0, "rank": "Sunday"},
    {"id": "saint_joseph_spouse_of_mary", "name": "Saint Joseph, Spouse of the Blessed Virgin Mary",
     "rank": "Solemnity"},
    {"id": "joseph_the_worker", "name": "Saint Joseph the Worker", "rank": "Optional Memorial"},
    {"id": "christmas_time_2_sunday", "name": "Second Sunday after Christmas", "season": "CHRISTMAS_TIME",
     "weekOfSeason": 2, "dayOfWeek": 0, "rank": "Sunday"},
    {"id": "nameless_definition"},
]

CALENDAR = {
    "2025-03-19": [{
        "id": "saint_joseph_spouse_of_mary", "name": "Saint Joseph, Spouse of the Blessed Virgin Mary",
        "date": "2025-03-19", "seasons": ["LENT"], "rankName": "Solemnity",
        "calendar": {"weekOfSeason": 2, "dayOfWeek": 3},
        "cycles": {"sundayCycle": "YEAR_C", "weekdayCycle": "YEAR_1"},
        "fromCalendarId": "generalRoman",
    }],
    "2025-05-01": [{
        "id": "joseph_the_worker", "name": "Saint Joseph the Worker", "date": "2025-05-01",
        "seasons": ["EASTER_TIME"], "rankName": "Optional Memorial",
        "calendar": {"weekOfSeason": 2, "dayOfWeek": 4},
        "cycles": {"sundayCycle": "YEAR_C", "weekdayCycle": "YEAR_1"},
        "fromCalendarId": "properOfSaints",
    }],
    "2025-05-02": [{
        "id": "friday_of_the_2nd_week_of_easter", "name": "Friday of the 2nd Week of Easter",
        "date": "2025-05-02", "seasons": ["EASTER_TIME"], "rankName": "Weekday",
        "calendar": {"weekOfSeason": 2, "dayOfWeek": 5},
        "cycles": {"sundayCycle": "YEAR_C", "weekdayCycle": "YEAR_1"},
        "fromCalendarId": "proper_of_time",
    }],
    "2025-05-04": [{
        "id": "easter_time_3_sunday", "name": "Third Sunday of Easter", "date": "2025-05-04",
        "seasons": ["EASTER_TIME"], "rankName": "Sunday",
        "calendar": {"weekOfSeason": 3, "dayOfWeek": 0},
        "cycles": {"sundayCycle": "YEAR_C", "weekdayCycle": "YEAR_1"},
        "fromCalendarId": "proper_of_time",
    }],
}

@pytest.fixture
def table():
    return BoundaryTable.from_dict(VERSIFICATION, name="fixture")

@pytest.fixture
def parser():
    return ParsedCitations.from_dict(PARSES)

@pytest.fixture
def calendar():
    return load_calendar(CALENDAR)

@pytest.fixture
def catalogue(calendar):
    return load_catalogue(CATALOGUE, calendar)

SAMPLE_HTML = """
<html><body>
<table>
  <tr><th>Date</th><th>No.</th><th>Day</th><th>I</th><th>Ps</th><th>II</th><th>Accl.</th><th>Gospel</th></tr>
  <tr><td>11/30</td><td>1</td><td>1st Sunday of Advent - A</td><td>Gen 2:7-9</td>
      <td>Obad 1:1-21</td><td>Rom 5:12-19 or 5:12, 17-19</td><td>(no bibl. ref.)</td>
      <td>Matt 4:1-11 &ndash; Temptation</td></tr>
  <tr><td></td><td>2</td><td>Lorem ipsum</td><td>x</td><td>x</td><td>x</td><td>x</td><td>x</td></tr>
  <tr><td></td><td>3</td><td>Monday of the 5th Week in Ordinary Time - AB</td><td>Gen 2:7-9</td>
      <td>x</td><td>x</td><td>x</td><td>Matt 11:28</td></tr>
</table>
<table>
  <tr><td></td><td>16</td><td>The Nativity of the Lord - Mass during the Day - ABC</td><td>Exod 1</td>
      <td>x</td><td>Rom 1:1 + 3</td><td>Matt 1:1-25 or 1:18-25</td></tr>
  <tr><td></td><td>280</td><td>Monday of the 3rd Week of Easter - II</td><td>opt: cf. Matt 11:28</td>
      <td>x</td><td></td><td>x</td><td>Matt 5:1-12a</td></tr>
  <tr><td colspan="7">Header spanning the table</td></tr>
</table>
</body></html>
"""

@pytest.fixture
def data_files(tmp_path):
    """Collaborator JSON files plus one input table, laid out the way the CLI expects."""
    import json
    paths = {
        "versification": tmp_path / "nab.json",
        "parses": tmp_path / "parses.json",
        "catalogue": tmp_path / "romcal_enhanced.json",
        "calendar": tmp_path / "romcal_2025.json",
    }
    paths["versification"].write_text(json.dumps(VERSIFICATION), encoding="utf-8")
    paths["parses"].write_text(json.dumps(PARSES), encoding="utf-8")
    paths["catalogue"].write_text(json.dumps(CATALOGUE), encoding="utf-8")
    paths["calendar"].write_text(json.dumps(CALENDAR), encoding="utf-8")
    inp = tmp_path / "input"
    inp.mkdir()
    (inp / "lectionary.html").write_text(SAMPLE_HTML, encoding="utf-8")
    paths["input"] = inp
    paths["output"] = tmp_path / "output" / "lectionary.json"
    return paths
