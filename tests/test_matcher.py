from lectionary.catalogue import load_calendar, load_catalogue
from lectionary.days import (ADVENT, FEAST_IDS, FEAST_SEASONS, ORDINARY_TIME, DayDescription,
                             parse_day_description)
from lectionary.matcher import find_match, keywords, match_day, score_entries

from conftest import CATALOGUE

def _advent(cycle):
    return DayDescription(raw_text=f"1st Sunday of Advent - {cycle}", season=ADVENT, week_number=1,
                          cycle_letter=cycle, day_of_week="sunday")

def test_feast_keyword(catalogue):
    desc = parse_day_description("The Nativity of the Lord - Mass during the Day - ABC")
    step, entry = find_match(desc, catalogue)
    assert (step, entry.id) == ("feast_id", "nativity_of_the_lord")

def test_fixed_date(catalogue, calendar):
    desc = DayDescription(raw_text="Saint Joseph", date="03-19")
    step, entry = find_match(desc, catalogue, calendar, year=2025)
    assert (step, entry.id) == ("date", "saint_joseph_spouse_of_mary")

def test_fixed_date_needs_the_right_year(catalogue, calendar):
    desc = DayDescription(raw_text="Zzz", date="03-19")
    assert find_match(desc, catalogue, calendar, year=2031) is None

def test_season_week_and_cycle(catalogue):
    step, entry = find_match(_advent("A"), catalogue)
    assert (step, entry.id) == ("season_week_cycle", "advent_1_sunday")

def test_cycle_ignored_when_nothing_carries_it(catalogue):
    step, entry = find_match(_advent("C"), catalogue)
    assert (step, entry.id) == ("season_week", "advent_1_sunday_year_b")

def test_weekday_must_agree(catalogue, capsys):
    desc = DayDescription(raw_text="Monday of the 5th Week in Ordinary Time", season=ORDINARY_TIME,
                          week_number=5, day_of_week="monday")
    step, entry = find_match(desc, catalogue)
    assert (step, entry.id) == ("keywords", "ordinary_time_5_sunday")
    assert "fuzzy match" in capsys.readouterr().err

def test_keyword_ties_go_to_the_earlier_entry(catalogue):
    desc = DayDescription(raw_text="Joseph")
    scores = {e.id: s for s, e in score_entries(keywords(desc), catalogue)}
    assert scores["saint_joseph_spouse_of_mary"] == scores["joseph_the_worker"]
    assert match_day(desc, catalogue).id == "saint_joseph_spouse_of_mary"

def test_entries_without_a_name_are_not_scored(catalogue):
    assert "nameless_definition" not in {e.id for _, e in score_entries(["nameless"], catalogue)}

def test_no_match(catalogue):
    assert find_match(DayDescription(raw_text="Zzz qqq"), catalogue) is None
    assert match_day(DayDescription(raw_text="Zzz qqq"), catalogue) is None

def test_deterministic(catalogue, calendar):
    desc = _advent("B")
    first = find_match(desc, catalogue, calendar)
    assert all(find_match(desc, catalogue, calendar) == first for _ in range(5))

def test_keywords_prefer_feast_and_skip_stopwords():
    assert keywords(DayDescription(raw_text="The Mass of the Holy Family")) == ["holy", "family"]
    assert keywords(DayDescription(raw_text="whatever", feast_keyword="palm sunday")) == ["palm", "sunday"]

def test_dated_sunday_row_still_matches_by_season_and_cycle(calendar):
    andrew = {"id": "andrew_apostle", "name": "Saint Andrew, Apostle", "date": "2025-11-30",
              "seasons": ["ADVENT"], "rankName": "Feast", "fromCalendarId": "generalRoman"}
    cal = dict(calendar)
    cal.update(load_calendar({"2025-11-30": [andrew]}))
    cat = load_catalogue(CATALOGUE + [andrew], cal)

    desc = parse_day_description("1st Sunday of Advent - A", "11/30")
    step, entry = find_match(desc, cat, cal, year=2025)
    assert (step, entry.id) == ("season_week_cycle", "advent_1_sunday")

    feast = DayDescription(raw_text="Saint Andrew", date="11-30")
    assert find_match(feast, cat, cal, year=2025)[1].id == "andrew_apostle"

def test_sunday_after_christmas_is_not_the_nativity(catalogue):
    desc = parse_day_description("2nd Sunday after Christmas")
    step, entry = find_match(desc, catalogue)
    assert (step, entry.id) == ("season_week_cycle", "christmas_time_2_sunday")

def test_feast_ids_cover_every_feast_keyword():
    assert set(FEAST_IDS) == set(FEAST_SEASONS)
