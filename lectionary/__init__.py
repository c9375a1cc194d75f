"""Lectionary citation normalization and liturgical-day matching."""

from .boundaries import BoundaryTable
from .days import DayDescription, MalformedDescription, parse_day_description
from .matcher import find_match, match_day
from .references import NormalizerOptions, ParseFailure, ReadingOption, normalize_citation
from .verses import BoundaryOverrun, VerseId, enumerate_verses, sort_verses

__version__ = "1.1.0"
