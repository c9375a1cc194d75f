"""
Per-translation versification: the ordered book list and the verse count of
every chapter. The table comes from the citation parser's translation info;
it is loaded here, never computed.

JSON shape (same as the parser's translation_info):

    {"books": ["Gen", "Exod", ...],
     "chapters": {"Gen": [31, 25, 24, ...], ...}}
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

@dataclass(frozen=True)
class BoundaryTable:
    name: str
    books: Tuple[str, ...]
    chapters: Dict[str, Tuple[int, ...]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict, name: str = "") -> "BoundaryTable":
        books = tuple(str(b) for b in data.get("books") or [])
        chapters = {
            str(b): tuple(int(n) for n in counts)
            for b, counts in (data.get("chapters") or {}).items()
        }
        missing = [b for b in books if b not in chapters]
        if missing:
            raise ValueError(f"versification {name or '?'}: no chapter table for {', '.join(missing)}")
        return cls(name=name or str(data.get("name", "")), books=books, chapters=chapters)

    def book_index(self, book: str) -> int:
        """Position in canonical order, or -1 for a book this translation lacks."""
        try:
            return self.books.index(book)
        except ValueError:
            return -1

    def has_book(self, book: str) -> bool:
        return book in self.chapters

    def chapter_count(self, book: str) -> int:
        return len(self.chapters.get(book, ()))

    def verse_count(self, book: str, chapter: int) -> int:
        counts = self.chapters.get(book, ())
        if 1 <= chapter <= len(counts):
            return counts[chapter - 1]
        return 0

    def next_book(self, book: str) -> Optional[str]:
        i = self.book_index(book)
        if i < 0 or i >= len(self.books) - 1:
            return None
        return self.books[i + 1]

def load_tables(data: dict) -> Dict[str, BoundaryTable]:
    """A file may hold one table or several keyed by translation name."""
    if "books" in data:
        return {str(data.get("name", "")): BoundaryTable.from_dict(data)}
    out: Dict[str, BoundaryTable] = {}
    for name, table in data.items():
        out[name] = BoundaryTable.from_dict(table, name=name)
    return out

def pick_table(data: dict, translation: str) -> BoundaryTable:
    tables = load_tables(data)
    if len(tables) == 1:
        return next(iter(tables.values()))
    try:
        return tables[translation]
    except KeyError:
        names: List[str] = sorted(tables)
        raise KeyError(f"no versification for {translation!r} (have: {', '.join(names)})") from None
