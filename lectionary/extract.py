"""
Pull reading rows out of lectionary HTML tables.

Table layout (one row per day):
  0 date | 1 lectionary no. | 2 day | 3 first reading | 4 psalm |
  5 second reading | 6 acclamation | 7 gospel
Some tables drop the acclamation column; the gospel then sits in column 6.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from bs4 import BeautifulSoup, Tag

from .util import log

MIN_CELLS = 7

@dataclass(frozen=True)
class SourceRow:
    date: str
    number: str
    day: str
    first_reading: str
    psalm: str
    second_reading: str
    acclamation: str
    gospel: str
    source: str = ""

    def cells(self) -> dict:
        """Citation cells keyed by reading slot."""
        return {
            "first_reading": self.first_reading,
            "responsorial_psalm": self.psalm,
            "second_reading": self.second_reading,
            "gospel_acclamation": self.acclamation,
            "gospel": self.gospel,
        }

def text_of(node: Tag) -> str:
    return node.get_text(" ", strip=True)

def rows_from_html(html: str, source: str = "") -> List[SourceRow]:
    soup = BeautifulSoup(html, "html.parser")
    out: List[SourceRow] = []
    for t_idx, table in enumerate(soup.find_all("table"), start=1):
        count = 0
        for tr in table.find_all("tr"):
            cells = [text_of(td) for td in tr.find_all("td")]
            if len(cells) < MIN_CELLS:
                continue
            gospel = (cells[7] if len(cells) > 7 else "") or cells[6]
            acclamation = cells[6] if len(cells) > 7 else ""
            out.append(SourceRow(
                date=cells[0], number=cells[1], day=cells[2],
                first_reading=cells[3], psalm=cells[4], second_reading=cells[5],
                acclamation=acclamation, gospel=gospel, source=source,
            ))
            count += 1
        log(f"{source or 'html'}: table {t_idx} -> {count} row(s)")
    return out

def rows_from_files(paths: Iterable[Path]) -> List[SourceRow]:
    out: List[SourceRow] = []
    for p in sorted(paths):
        out.extend(rows_from_html(p.read_text(encoding="utf-8"), source=p.name))
    return out
