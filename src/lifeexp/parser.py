# turns the raw html of the source page into a StatisticsTable
# no network here, so tests can feed fixture html directly

from __future__ import annotations
import logging
import math
import re
from typing import Optional
from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag
from .errors import NumericParseError, ParseError, RowShapeError, TableNotFound
from .models import COMMON_KEY, CountryStatistic, StatisticsTable

logger = logging.getLogger(__name__)

CELLS_PER_ROW = 4
# plain ascii decimal, no digit separators
NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def parse_table(
    html: str,
    table_class: str = "wikitable",
    table_index: int = 2,
    strict: bool = False,
) -> StatisticsTable:
    """Extract ``country -> CountryStatistic`` from one table of ``html``.

    The table is the ``table_index``-th (zero-based) element carrying
    ``table_class``. Each row contributes ``(name, all, male, female)`` from
    its first four cells, the name being the text of the first link in the
    first cell. Rows without cells or without a link are skipped. Rows with
    a name but fewer than four cells are skipped, or raise ``RowShapeError``
    when ``strict`` is set. Later duplicates overwrite earlier ones.
    """
    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as exc:
        raise ParseError(f"Unparseable source page: {exc}") from exc
    tables = soup.find_all(class_=table_class)
    if len(tables) <= table_index:
        raise TableNotFound(
            f"Expected at least {table_index + 1} elements with class {table_class!r}, found {len(tables)}"
        )

    table = tables[table_index]
    body = table.find("tbody") or table

    result: StatisticsTable = {}
    for row_number, tr in enumerate(body.find_all("tr"), start=1):
        cells = tr.find_all("td", limit=CELLS_PER_ROW)
        name = _country_name(cells[0]) if cells else None
        if name is None:
            continue

        if len(cells) < CELLS_PER_ROW:
            if strict:
                raise RowShapeError(
                    f"Row {row_number} ({name!r}) has {len(cells)} cells, expected {CELLS_PER_ROW}"
                )
            logger.debug("skipping row %d (%r): only %d cells", row_number, name, len(cells))
            continue

        if name == COMMON_KEY:
            # reserved for the aggregate computed by the service
            continue

        all_, male, female = (_parse_number(c, row_number, name) for c in cells[1:])
        result[name] = CountryStatistic(all=all_, male=male, female=female)

    return result


def _country_name(cell: Tag) -> Optional[str]:
    link = cell.find("a")
    if link is None:
        return None
    return link.get_text()


def _parse_number(cell: Tag, row_number: int, name: str) -> float:
    text = cell.get_text().strip()
    if not NUMBER_RE.fullmatch(text):
        raise NumericParseError(f"Row {row_number} ({name!r}): {text!r} is not a number")
    value = float(text)
    if not math.isfinite(value) or value < 0:
        raise NumericParseError(f"Row {row_number} ({name!r}): {text!r} is out of range")
    return value
