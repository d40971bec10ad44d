"""Known table layouts of the upstream timetable page.

The page carries no per-field markup, so every layout is described purely by
where its table body lives and which field each cell position holds.
"""

from dataclasses import dataclass

from .exceptions import ValidationError

# Both known layouts open the table body with three caption/header rows.
# Observed on the live site; the markup offers nothing to detect them by.
HEADER_ROW_COUNT = 3

# Spacer rows between trains carry this class and hold no data.
SEPARATOR_ROW_CLASS = "pix"


@dataclass(frozen=True)
class TableLayout:
    """Positional description of a schedule table."""

    name: str
    body_selector: str
    columns: tuple[str, ...]
    row_selector: str = f"tr:not(.{SEPARATOR_ROW_CLASS})"
    header_rows: int = HEADER_ROW_COUNT

    def field_for(self, index: int) -> str | None:
        """Return the record field stored in cell ``index``, if any."""
        if 0 <= index < len(self.columns):
            return self.columns[index]
        return None


JSON_LAYOUT = TableLayout(
    name="json",
    body_selector="#geo2g > tbody",
    columns=(
        "id",
        "period",
        "route",
        "arrival_from",
        "arrival_station_from",
        "departure_from",
        "arrival_to",
        "arrival_station_to",
        "departure_to",
        "time_in_trip",
        "distance",
        "active_from",
        "active_to",
    ),
)

LEGACY_LAYOUT = TableLayout(
    name="legacy",
    body_selector="#geo2 > tbody > tr > td > table > tbody",
    columns=(
        "id",
        "period",
        "route",
        "arrival_from",
        "departure_from",
        "arrival_to",
        "departure_to",
        "time_in_trip",
        "active_from",
        "active_to",
    ),
)

_LAYOUTS: dict[str, TableLayout] = {}


def register_layout(layout: TableLayout) -> None:
    """Make a layout available by name."""
    _LAYOUTS[layout.name] = layout


def get_layout(layout: str | TableLayout) -> TableLayout:
    """Resolve a layout name (or pass a layout through).

    Raises:
        ValidationError: If no layout is registered under the name
    """
    if isinstance(layout, TableLayout):
        return layout
    try:
        return _LAYOUTS[layout]
    except KeyError:
        known = ", ".join(sorted(_LAYOUTS))
        raise ValidationError(
            f"Unknown table layout {layout!r} (known: {known})"
        ) from None


def layout_names() -> list[str]:
    """Names of all registered layouts."""
    return sorted(_LAYOUTS)


register_layout(JSON_LAYOUT)
register_layout(LEGACY_LAYOUT)
