"""
Citation cleaning and reading options.

One lectionary cell ("Rom 5:12-19 or 5:12, 17-19", "cf. John 8:12",
"Matt 4:1-11 – Temptation", "A: Isa 7:10-14 B: ... C: ...") becomes an
ordered list of ReadingOption. The grammar itself is the parser's job; this
module decides what text the parser sees and what notes each option carries.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

from . import config
from .boundaries import BoundaryTable
from .parses import ParsedCitations
from .util import warn
from .verses import BoundaryOverrun, VerseId, enumerate_verses, sort_verses

SLOTS = ("first_reading", "responsorial_psalm", "second_reading", "gospel_acclamation", "gospel")

NO_REFERENCE_NOTE = "no biblical reference"
NOTE_OPTIONAL     = "optional"
NOTE_CF           = "cf."
NOTE_ALTERNATIVE  = "alternative/option"
NOTE_SHORT_FORM   = "short form"

class ParseFailure(Exception):
    """The parser produced no canonical code for a cleaned citation."""

@dataclass(frozen=True)
class ReadingOption:
    canonical_code: Optional[str]
    standard_text: str
    note: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "referenceCanonical": self.canonical_code,
            "referenceStandard": self.standard_text,
            "note": self.note,
        }

@dataclass(frozen=True)
class NormalizerOptions:
    keep_plus: bool = False
    handle_cf: bool = True
    handle_opt: bool = True
    complete_books: bool = True
    # slots that spell out "no biblical reference"; the others just stay empty
    explicit_no_reference_slots: FrozenSet[str] = field(
        default_factory=lambda: frozenset({"first_reading", "gospel_acclamation"}))

    @classmethod
    def from_config(cls) -> "NormalizerOptions":
        return cls(keep_plus=config.KEEP_PLUS, complete_books=config.COMPLETE_BOOKS)

# ===== Regex =====
_NO_REF_KEYS = {"nobiblref", "nobiblicalref", "nobiblicalreference", "noref", "noreference"}

CYCLE_BLOCK_RE = re.compile(r"(?<![A-Za-z0-9])([ABC]):\s*")
GOSPEL_TITLE_RE = re.compile(r"\s*[–—]\s*(?=[^\d\s–—])")
VARIANT_RE = re.compile(r"\(\s*(?:diff|new)\s*\)", re.I)
OR_RE = re.compile(r"\s*\bor\b\s*", re.I)

OPT_RE = re.compile(r"^\s*opt\.?\s*:\s*", re.I)
CF_RE = re.compile(r"^\s*cf(?:\.\s*|\s+)", re.I)
CITED_IN_RE = re.compile(r"\(\s*cited\s+in\s+([^)]*?)\s*\)", re.I)
SHORT_FORM_RE = re.compile(r"\(\s*short(?:er)?\s+form\s*\)|^\s*short(?:er)?\s+form\s*:\s*", re.I)

BARE_CV_RE = re.compile(r"^\d+\s*:\s*\d+")
BOOK_RE = re.compile(r"^((?:[1-3]\s*)?[A-Za-z][A-Za-z.]*(?:\s+[A-Za-z][A-Za-z.]*)*?)\s*(?=\d)")

DASHES_RE = re.compile(r"[‐-―−]")

# ===== Small predicates =====
def is_no_reference(text: str) -> bool:
    return re.sub(r"[^a-z]", "", (text or "").casefold()) in _NO_REF_KEYS

def is_omitted(text: str) -> bool:
    return (text or "").strip().casefold() == "x"

def has_cycle_blocks(text: str) -> bool:
    return {"A", "B", "C"} <= set(CYCLE_BLOCK_RE.findall(text or ""))

def select_cycle_block(text: str, cycle: Optional[str]) -> Optional[str]:
    parts = CYCLE_BLOCK_RE.split(text)
    # [lead, letter, block, letter, block, ...]
    for letter, block in zip(parts[1::2], parts[2::2]):
        if letter == cycle:
            return block.strip(" ;,/") or None
    return None

def split_gospel_title(text: str) -> Tuple[str, Optional[str]]:
    parts = GOSPEL_TITLE_RE.split(text, maxsplit=1)
    if len(parts) == 2 and parts[1].strip():
        return parts[0].strip(), parts[1].strip()
    return text, None

def book_of(text: str) -> Optional[str]:
    m = BOOK_RE.match((text or "").strip())
    return m.group(1).strip() if m else None

def clean_citation(text: str, keep_plus: bool = False) -> str:
    """Punctuation clean-up; the result is both the parser input and the display form."""
    s = DASHES_RE.sub("-", text or "")
    s = re.sub(r"\s+", " ", s)
    s = re.sub(r"\s*,\s*", ", ", s)
    s = re.sub(r"(\d+)\s*:\s*(\d+)", r"\1:\2", s)
    s = re.sub(r"\s*-\s*", "-", s)
    if keep_plus:
        s = re.sub(r"\s*\+\s*", "+", s)
    else:
        s = re.sub(r"\s*\+\s*", ", ", s)
    s = re.sub(r"[^\x00-\x7F]", "-", s)
    return s.strip(" ,;")

# ===== Parsing one cleaned option =====
def parse_option(cleaned: str, parser: ParsedCitations,
                 table: Optional[BoundaryTable] = None) -> Tuple[str, List[VerseId]]:
    """
    Canonical code plus the sorted verses it spans. Raises ParseFailure when
    the parser has nothing, or when the verses cannot be laid out on the table.
    """
    result = parser.parse(cleaned)
    if result is None:
        raise ParseFailure(f"no parse for {cleaned!r}")
    if table is None:
        return result.osis, []
    try:
        verses = enumerate_verses(result.entities, table)
    except BoundaryOverrun as e:
        raise ParseFailure(str(e)) from e
    return result.osis, sort_verses(verses, table)

# ===== Cell normalizer =====
def normalize_citation(raw: str, slot: str, cycle: Optional[str],
                       parser: ParsedCitations,
                       table: Optional[BoundaryTable] = None,
                       options: Optional[NormalizerOptions] = None,
                       failures: Optional[List[str]] = None) -> List[ReadingOption]:
    options = options or NormalizerOptions()
    text = (raw or "").strip()
    if not text or is_omitted(text):
        return []
    if is_no_reference(text):
        if slot in options.explicit_no_reference_slots:
            return [ReadingOption(None, "", NO_REFERENCE_NOTE)]
        return []

    if has_cycle_blocks(text):
        block = select_cycle_block(text, cycle)
        if not block:
            return []
        return normalize_citation(block, slot, cycle, parser, table, options, failures)

    title = None
    if slot == "gospel":
        text, title = split_gospel_title(text)

    text = VARIANT_RE.sub(" ", text)
    candidates = [c for c in (p.strip() for p in OR_RE.split(text)) if c]
    multiple = len(candidates) > 1

    out: List[ReadingOption] = []
    first_book = None
    for i, cand in enumerate(candidates):
        optional = cf = short = False
        cited_in = None

        if options.handle_opt and OPT_RE.match(cand):
            cand, optional = OPT_RE.sub("", cand, count=1), True
        if options.handle_cf and CF_RE.match(cand):
            cand, cf = CF_RE.sub("", cand, count=1), True
        m = CITED_IN_RE.search(cand)
        if m:
            cited_in = m.group(1).strip() or None
            cand = CITED_IN_RE.sub(" ", cand)
        if SHORT_FORM_RE.search(cand):
            cand, short = SHORT_FORM_RE.sub(" ", cand), True
        cand = cand.strip()

        if i == 0:
            first_book = book_of(cand)
        elif options.complete_books and first_book and BARE_CV_RE.match(cand):
            cand = f"{first_book} {cand}"

        cleaned = clean_citation(cand, keep_plus=options.keep_plus)
        if not cleaned:
            continue

        try:
            osis, _ = parse_option(cleaned, parser, table)
        except ParseFailure as e:
            warn(f"{slot}: dropping option {cleaned!r} ({e})")
            if failures is not None:
                failures.append(cleaned)
            continue

        notes: List[str] = []
        if optional:
            notes.append(NOTE_OPTIONAL)
        if cf:
            notes.append(NOTE_CF)
        if short:
            notes.append(NOTE_SHORT_FORM)
        elif multiple:
            notes.append(NOTE_ALTERNATIVE)
        if cited_in:
            notes.append(f"cited in {cited_in}")
        if title:
            notes.append(title)
        notes = list(dict.fromkeys(notes))
        out.append(ReadingOption(osis, cleaned, "; ".join(notes) or None))
    return out
