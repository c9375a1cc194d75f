"""
Verse enumeration and canonical ordering.

A parsed citation is a tree of entities (single verse, verse range, whole
chapter, whole book, sequence). `enumerate_verses` expands one entity into
the literal verses it covers, walking chapter and book boundaries with the
translation's BoundaryTable; `sort_verses` puts them in reading order.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple, Union

from .boundaries import BoundaryTable

class BoundaryOverrun(Exception):
    """A range walked off the end of the versification table."""

@dataclass(frozen=True)
class VerseId:
    book: str
    chapter: int
    verse: int
    partial: Optional[str] = None

    @property
    def osis(self) -> str:
        return f"{self.book}.{self.chapter}.{self.verse}{self.partial or ''}"

    def __str__(self) -> str:
        return self.osis

# ===== Parse entities =====
@dataclass(frozen=True)
class Verse:
    book: str
    chapter: int
    verse: int
    partial: Optional[str] = None

@dataclass(frozen=True)
class Range:
    start: Verse
    # end.verse == 0 means "last verse of end.chapter"
    end: Verse

@dataclass(frozen=True)
class Chapter:
    book: str
    chapter: int

@dataclass(frozen=True)
class Book:
    book: str

@dataclass(frozen=True)
class Sequence:
    entities: Tuple["Entity", ...]

Entity = Union[Verse, Range, Chapter, Book, Sequence]

def _point(d: dict, default_verse: int = 1) -> Verse:
    if not d or not d.get("b") or not d.get("c"):
        raise ValueError(f"entity point without book/chapter: {d!r}")
    v = d.get("v")
    return Verse(
        book=str(d["b"]),
        chapter=int(d["c"]),
        verse=int(v) if v not in (None, "") else default_verse,
        partial=d.get("partial_verse") or None,
    )

def entity_from_dict(d: dict) -> Entity:
    """Decode one entity as emitted by the citation parser."""
    kind = d.get("type")
    if kind == "sequence":
        return Sequence(tuple(entity_from_dict(e) for e in d.get("entities") or []))
    if kind == "range":
        return Range(_point(d.get("start") or {}), _point(d.get("end") or {}, default_verse=0))
    if kind in ("bcv", "integer", "v"):
        start = d.get("start") or d.get("context") or {}
        if kind == "integer" and start.get("v") in (None, "") and d.get("value") is not None:
            start = dict(start, v=d["value"])
        return _point(start)
    if kind == "bc":
        p = _point(d.get("start") or {})
        return Chapter(p.book, p.chapter)
    if kind == "b":
        book = (d.get("start") or {}).get("b")
        if not book:
            raise ValueError(f"book entity without a book: {d!r}")
        return Book(str(book))
    if d.get("entities"):
        return Sequence(tuple(entity_from_dict(e) for e in d["entities"]))
    raise ValueError(f"unsupported entity type: {kind!r}")

# ===== Enumeration =====
def _walk_range(r: Range, table: BoundaryTable) -> Iterable[VerseId]:
    book, chapter, verse = r.start.book, r.start.chapter, r.start.verse
    if not (1 <= chapter <= table.chapter_count(book)) or not (1 <= verse <= table.verse_count(book, chapter)):
        raise BoundaryOverrun(f"range starts outside {table.name or 'table'}: {book} {chapter}:{verse}")
    end_verse = r.end.verse or table.verse_count(r.end.book, r.end.chapter)
    end = (r.end.book, r.end.chapter, end_verse)

    partial = r.start.partial
    while True:
        yield VerseId(book, chapter, verse, partial)
        partial = None
        if (book, chapter, verse) == end:
            return
        verse += 1
        if verse > table.verse_count(book, chapter):
            verse = 1
            chapter += 1
            if chapter > table.chapter_count(book):
                chapter = 1
                nxt = table.next_book(book)
                if nxt is None:
                    raise BoundaryOverrun(
                        f"range {r.start.book} {r.start.chapter}:{r.start.verse} - "
                        f"{r.end.book} {r.end.chapter}:{end_verse} runs past the end of {table.name or 'table'}"
                    )
                book = nxt

def _expand(entity: Entity, table: BoundaryTable) -> Iterable[VerseId]:
    if isinstance(entity, Sequence):
        for e in entity.entities:
            yield from _expand(e, table)
    elif isinstance(entity, Range):
        yield from _walk_range(entity, table)
    elif isinstance(entity, Verse):
        yield VerseId(entity.book, entity.chapter, entity.verse, entity.partial)
    elif isinstance(entity, Chapter):
        count = table.verse_count(entity.book, entity.chapter)
        if not count:
            raise BoundaryOverrun(f"{entity.book} {entity.chapter} is not in {table.name or 'table'}")
        for v in range(1, count + 1):
            yield VerseId(entity.book, entity.chapter, v)
    elif isinstance(entity, Book):
        if not table.chapter_count(entity.book):
            raise BoundaryOverrun(f"{entity.book} is not in {table.name or 'table'}")
        for c in range(1, table.chapter_count(entity.book) + 1):
            for v in range(1, table.verse_count(entity.book, c) + 1):
                yield VerseId(entity.book, c, v)
    else:
        raise TypeError(f"not a parse entity: {entity!r}")

def enumerate_verses(entities: Union[Entity, Iterable[Entity]], table: BoundaryTable) -> List[VerseId]:
    """All verses the entities cover, without duplicates, in encounter order."""
    if isinstance(entities, (Verse, Range, Chapter, Book, Sequence)):
        entities = [entities]
    seen = {}
    for e in entities:
        for vid in _expand(e, table):
            seen.setdefault(vid, None)
    return list(seen)

# ===== Canonical order =====
def verse_sort_key(table: BoundaryTable) -> Callable[[VerseId], Tuple[int, int, int]]:
    unknown = len(table.books)

    def key(v: VerseId) -> Tuple[int, int, int]:
        i = table.book_index(v.book)
        return (i if i >= 0 else unknown, v.chapter, v.verse)
    return key

def compare_verses(a: VerseId, b: VerseId, table: BoundaryTable) -> int:
    key = verse_sort_key(table)
    ka, kb = key(a), key(b)
    return (ka > kb) - (ka < kb)

def sort_verses(verses: Iterable[VerseId], table: BoundaryTable) -> List[VerseId]:
    return sorted(verses, key=verse_sort_key(table))
