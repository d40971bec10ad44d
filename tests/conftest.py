"""Test configuration and fixtures."""

import pytest

from swrailway_timetable.core.models import ScheduleRecord


@pytest.fixture
def sample_station_json():
    """Sample station search JSON response."""
    return """[
        {"id": "85", "info": "Київська обл.", "label": "Святошин"},
        {"id": 88, "info": "Київська обл.", "label": "Святошинська"}
    ]"""


@pytest.fixture
def sample_schedule_html():
    """Sample timetable page in the newer 13-column layout."""
    return """
    <html><head><meta charset="utf-8"><title>Розклад руху</title></head>
    <body>
    <table id="geo2g" class="td_center">
        <tr><td colspan="13">Розклад руху приміських поїздів</td></tr>
        <tr class="pix"><td colspan="13"></td></tr>
        <tr><td>№ поїзда</td><td>Періодичність</td><td>Маршрут</td>
            <td colspan="3">Святошин</td><td colspan="3">Коростень</td>
            <td>Час у дорозі</td><td>Відстань</td><td colspan="2">Діє</td></tr>
        <tr><td>header</td><td></td><td></td><td>приб.</td><td>пересадка</td>
            <td>відпр.</td><td>приб.</td><td>пересадка</td><td>відпр.</td>
            <td></td><td></td><td>з</td><td>по</td></tr>
        <tr class="pix"><td colspan="13"></td></tr>
        <tr>
            <td> 6001 </td><td> щоденно </td><td> Київ - Коростень </td>
            <td> 05:10 </td><td> Святошин </td><td> 05:12 </td>
            <td> 07:40 </td><td> Коростень </td><td> 07:45 </td>
            <td> 02:28 </td><td> 152 км </td><td> 01.06.2018 </td><td> 31.12.2018 </td>
        </tr>
        <tr class="pix"><td colspan="13"></td></tr>
        <tr>
            <td>&nbsp;</td><td>примітка</td><td>рядок без номера</td>
            <td></td><td></td><td></td><td></td><td></td><td></td>
            <td></td><td></td><td></td><td></td>
        </tr>
        <tr>
            <td>6003/6004</td><td>крім сб, нд</td><td>Київ - Малин</td>
            <td>14:29</td><td></td><td>14:31</td>
            <td>16:02</td><td></td><td>16:02</td>
            <td>01:31</td><td>98 км</td><td>01.06.2018</td><td>31.08.2018</td>
        </tr>
        <tr>
            <td>6005</td><td>сб, нд</td><td>Київ - Тетерів</td>
            <td>18:00</td><td>Святошин</td><td>18:02</td>
        </tr>
    </table>
    </body></html>
    """


@pytest.fixture
def sample_legacy_html():
    """Sample timetable page in the older nested 10-column layout."""
    return """
    <html><head><meta charset="utf-8"></head><body>
    <table id="geo2">
      <tr><td>
        <table>
          <tr><td colspan="10">Розклад</td></tr>
          <tr><td>№</td><td>Періодичність</td><td>Маршрут</td>
              <td colspan="2">Святошин</td><td colspan="2">Коростень</td>
              <td>У дорозі</td><td colspan="2">Діє</td></tr>
          <tr class="pix"><td colspan="10"></td></tr>
          <tr><td>№</td><td></td><td></td><td>приб.</td><td>відпр.</td>
              <td>приб.</td><td>відпр.</td><td></td><td>з</td><td>по</td></tr>
          <tr><td>6101</td><td>щоденно</td><td>Київ - Фастів</td>
              <td>08:00</td><td>08:02</td><td>09:10</td><td>09:11</td>
              <td>01:08</td><td>01.01.2017</td><td>31.12.2017</td></tr>
          <tr class="pix"><td colspan="10"></td></tr>
          <tr><td>6103</td><td>пн-пт</td><td>Київ - Козятин</td>
              <td>17:45</td><td>17:47</td><td>20:05</td><td>20:07</td>
              <td>02:18</td><td>01.01.2017</td><td>31.12.2017</td></tr>
        </table>
      </td></tr>
    </table>
    </body></html>
    """


@pytest.fixture
def make_record():
    """Factory for schedule records with a given departure time."""

    def _make(train_id: str, departure_from: str) -> ScheduleRecord:
        return ScheduleRecord(
            id=train_id,
            period="щоденно",
            route="Київ - Коростень",
            departure_from=departure_from,
        )

    return _make
