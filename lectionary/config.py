"""
Runtime knobs for the lectionary builder.

Everything here is read from the environment once at import time; the
command line overrides these defaults per run.
"""

import os

# ===== Collaborator sources (local path or http(s) URL) =====
VERSIFICATION_SOURCE = os.getenv("LECTIONARY_VERSIFICATION", "data/versification/nab.json")
PARSES_SOURCE        = os.getenv("LECTIONARY_PARSES", "data/parses.json")
CATALOGUE_SOURCE     = os.getenv("LECTIONARY_CATALOGUE", "data/romcal_enhanced.json")
CALENDAR_SOURCE      = os.getenv("LECTIONARY_CALENDAR", "")

INPUT_DIR   = os.getenv("LECTIONARY_INPUT", "input")
OUTPUT_PATH = os.getenv("LECTIONARY_OUTPUT", "output/lectionary.json")

# ===== Reference handling =====
TRANSLATION    = os.getenv("LECTIONARY_TRANSLATION", "nab")
KEEP_PLUS      = os.getenv("LECTIONARY_KEEP_PLUS", "0") == "1"
COMPLETE_BOOKS = os.getenv("LECTIONARY_COMPLETE_BOOKS", "1") == "1"

# Calendar year used to resolve fixed-date rows against the generated calendar
REFERENCE_YEAR = int(os.getenv("LECTIONARY_YEAR", "2025"))

# ===== Output =====
LECTIONARY_TITLE = os.getenv("LECTIONARY_TITLE", "USCCB Lectionary (based on 1998)")
SCHEMA_VERSION   = "1.1"

# ===== HTTP =====
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "25"))
HEADERS = {
    "User-Agent": "LectionaryBuilder/1.0 (+https://dailylectio.org)",
    "Accept": "application/json,text/html;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

VERBOSE = os.getenv("VERBOSE", "1") != "0"
