"""Schedule table extraction from upstream HTML documents."""

import logging

from bs4 import BeautifulSoup, Tag

from .exceptions import ScrapingError
from .layouts import JSON_LAYOUT, TableLayout, get_layout
from .models import ScheduleRecord

logger = logging.getLogger(__name__)

# html5lib builds the tree the way a browser does, including the implicit
# <tbody> that the layout selectors rely on.
DEFAULT_PARSER = "html5lib"


def parse_document(body: bytes | str, parser: str = DEFAULT_PARSER) -> BeautifulSoup:
    """Parse a raw response body into a navigable tree.

    Raises:
        ScrapingError: If the body cannot be parsed at all
    """
    try:
        return BeautifulSoup(body, parser)
    except Exception as e:
        raise ScrapingError(f"Failed to parse schedule document: {str(e)}") from e


def _cell_text(cell: Tag) -> str:
    return cell.get_text().strip()


def extract_row(row: Tag, layout: TableLayout) -> ScheduleRecord | None:
    """Map one table row onto a record, or ``None`` for non-data rows."""
    values: dict[str, str] = {}
    for index, cell in enumerate(row.select("td")):
        field = layout.field_for(index)
        if field is None:
            break
        values[field] = _cell_text(cell)

    # Header and spacer rows that slip past the skip have no train number
    if not values.get("id"):
        return None
    return ScheduleRecord(**values)


def extract_schedule(
    document: BeautifulSoup | bytes | str,
    layout: str | TableLayout = JSON_LAYOUT,
) -> list[ScheduleRecord]:
    """Extract schedule records from a timetable page in document order.

    Args:
        document: Parsed tree or raw response body
        layout: Layout descriptor or registered layout name

    Returns:
        Records for every data row, empty if the layout's table is absent

    Raises:
        ScrapingError: If a raw body cannot be parsed
        ValidationError: If the layout name is unknown
    """
    table_layout = get_layout(layout)
    if not isinstance(document, BeautifulSoup):
        document = parse_document(document)

    records: list[ScheduleRecord] = []
    bodies = document.select(table_layout.body_selector)
    for body in bodies:
        rows = body.select(table_layout.row_selector)
        for row in rows[table_layout.header_rows :]:
            record = extract_row(row, table_layout)
            if record is not None:
                records.append(record)

    if not bodies:
        logger.debug(f"No table matched layout {table_layout.name!r}")
    else:
        logger.debug(
            f"Extracted {len(records)} records using layout {table_layout.name!r}"
        )
    return records


class ScheduleExtractor:
    """Extractor bound to one table layout."""

    def __init__(
        self, layout: str | TableLayout = JSON_LAYOUT, parser: str = DEFAULT_PARSER
    ):
        """Initialize the extractor.

        Args:
            layout: Layout descriptor or registered layout name
            parser: BeautifulSoup tree builder name
        """
        self.layout = get_layout(layout)
        self.parser = parser

    def extract(self, body: bytes | str) -> list[ScheduleRecord]:
        """Parse ``body`` and extract its schedule records."""
        return extract_schedule(parse_document(body, self.parser), self.layout)
