"""Unit tests for CLI formatters."""

import json
from io import StringIO
from unittest.mock import patch

from rich.console import Console

from swrailway_timetable.cli.formatters import (
    format_schedule_json,
    format_schedule_table,
    format_station_json,
    format_station_table,
)
from swrailway_timetable.core.models import ScheduleRecord, Station


class TestFormatters:
    """Test CLI formatters."""

    def setup_method(self):
        """Set up test fixtures."""
        self.full_record = ScheduleRecord(
            id="6001",
            period="щоденно",
            route="Київ - Коростень",
            arrival_from="05:10",
            arrival_station_from="Святошин",
            departure_from="05:12",
            arrival_to="07:40",
            arrival_station_to="Коростень",
            departure_to="07:45",
            time_in_trip="02:28",
            distance="152 км",
            active_from="01.06.2018",
            active_to="31.12.2018",
        )
        self.legacy_record = ScheduleRecord(
            id="6101",
            period="пн-пт",
            route="Київ - Фастів",
            departure_from="08:02",
            arrival_to="09:10",
            time_in_trip="01:08",
        )
        self.stations = [Station(id="85", info="Київська обл.", label="Святошин")]

    def _render(self, func, *args, **kwargs) -> str:
        console = Console(file=StringIO(), width=200)
        with patch("swrailway_timetable.cli.formatters.console", console):
            func(*args, **kwargs)
            return console.file.getvalue()

    def test_format_schedule_table_basic(self):
        """Test basic schedule table."""
        output = self._render(format_schedule_table, [self.full_record], title="85 → 88")

        assert "85 → 88" in output
        assert "6001" in output
        assert "Київ - Коростень" in output
        assert "05:12" in output
        assert "07:40" in output
        assert "02:28" in output
        assert "152 км" not in output

    def test_format_schedule_table_verbose(self):
        """Test verbose table with connections, distance and validity."""
        output = self._render(format_schedule_table, [self.full_record], verbose=True)

        assert "Святошин → Коростень" in output
        assert "152 км" in output
        assert "01.06.2018–31.12.2018" in output

    def test_format_schedule_table_verbose_legacy(self):
        """Test that legacy records get no connection columns."""
        output = self._render(format_schedule_table, [self.legacy_record], verbose=True)

        assert "6101" in output
        assert "Distance" not in output
        assert "Valid" in output

    def test_format_schedule_table_empty(self):
        """Test table formatting with no records."""
        output = self._render(format_schedule_table, [])

        assert "No trains found." in output

    def test_format_schedule_json(self):
        """Test JSON formatting with upstream field names."""
        data = json.loads(format_schedule_json([self.full_record, self.legacy_record]))

        assert len(data) == 2
        assert data[0]["id"] == "6001"
        assert data[0]["arrivalStationFrom"] == "Святошин"
        assert data[0]["distance"] == "152 км"
        assert data[1]["departureFrom"] == "08:02"
        assert data[1]["distance"] == ""

    def test_format_schedule_json_keeps_cyrillic(self):
        """Test that JSON output is not ASCII-escaped."""
        assert "Коростень" in format_schedule_json([self.full_record])

    def test_format_schedule_json_empty(self):
        """Test JSON formatting with no records."""
        assert json.loads(format_schedule_json([])) == []

    def test_format_station_table(self):
        """Test station table."""
        output = self._render(format_station_table, self.stations)

        assert "85" in output
        assert "Святошин" in output
        assert "Київська обл." not in output

    def test_format_station_table_verbose(self):
        """Test station table with info column."""
        output = self._render(format_station_table, self.stations, verbose=True)

        assert "Київська обл." in output

    def test_format_station_table_empty(self):
        """Test station table with no stations."""
        output = self._render(format_station_table, [])

        assert "No stations found." in output

    def test_format_station_json(self):
        """Test station JSON formatting."""
        data = json.loads(format_station_json(self.stations))

        assert data == [{"id": "85", "info": "Київська обл.", "label": "Святошин"}]
