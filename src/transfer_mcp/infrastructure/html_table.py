"""Turn the railway.gov.tw transfer search page into raw table rows.

Only tokenization happens here: cells keep their rowspan and no merge is
applied. See domain.reconstruction for the carry logic.
"""
from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from transfer_mcp.domain.entities import Cell, RawRow
from transfer_mcp.domain.exceptions import TimetableFormatError

logger = logging.getLogger(__name__)

ITINERARY_TABLE_CLASS = "itinerary-controls"
HEADER_ROWS = 2
NO_RESULT_MARKERS = ("查無資料", "查無符合條件之車次")


def _span(td: Tag) -> int:
    try:
        span = int(str(td.get("rowspan", "1")).strip())
    except ValueError:
        return 1
    return max(span, 1)


def _cell(td: Tag) -> Cell:
    return Cell(content=td.get_text().strip(), span=_span(td))


def extract_rows(html: str) -> list[RawRow]:
    """Return the data rows of the itinerary table as Cells.

    A page without the table but with a "no results" marker gives [].
    Raises TimetableFormatError when the table is missing for any other reason.
    """
    soup = BeautifulSoup(html, "html.parser")
    table = soup.find("table", class_=ITINERARY_TABLE_CLASS)
    if not isinstance(table, Tag):
        if any(marker in html for marker in NO_RESULT_MARKERS):
            logger.info("Upstream reported no matching trains")
            return []
        raise TimetableFormatError(
            f"Could not find the {ITINERARY_TABLE_CLASS} table in the HTML."
        )

    rows: list[RawRow] = []
    for tr in table.find_all("tr")[HEADER_ROWS:]:
        rows.append(tuple(_cell(td) for td in tr.find_all("td", recursive=False)))
    return rows
