"""Shared pytest fixtures for the TRA/THSR Transfer MCP Server test suite."""
from __future__ import annotations

import pytest

from transfer_mcp.domain.entities import StationTime, TrainLeg, TransferRecord
from transfer_mcp.domain.value_objects import Direction

_HEADER = """
<tr><th colspan="4">臺鐵</th><th colspan="4">高鐵</th><th rowspan="2">總時間</th></tr>
<tr><th>車次</th><th>出發</th><th>抵達</th><th>行駛時間</th>
    <th>車次</th><th>出發</th><th>抵達</th><th>行駛時間</th></tr>
"""


def _page(body: str) -> str:
    return (
        "<html><body><div class='result'>"
        f"<table class=\"itinerary-controls\">{_HEADER}{body}</table>"
        "</div></body></html>"
    )


@pytest.fixture
def tra2thsr_html() -> str:
    """Search result page where one TRA train feeds two THSR trains."""
    return _page(
        """
<tr>
  <td rowspan="2"><a href="#">1234 </a></td>
  <td rowspan="2">07:10 北新竹</td>
  <td rowspan="2">07:25 新竹</td>
  <td rowspan="2">15分</td>
  <td>0803</td><td>07:40 新竹</td><td>08:20 台北</td><td>40分</td>
  <td>1時10分</td>
</tr>
<tr>
  <td>0805</td><td>07:55 新竹</td><td>08:31 台北</td><td>36分</td>
  <td>1時21分</td>
</tr>
<tr>
  <td>1240</td><td>07:40 北新竹</td><td>07:55 新竹</td><td>15分</td>
  <td>0809</td><td>08:10 新竹</td><td>08:50 台北</td><td>40分</td>
  <td>1時10分</td>
</tr>
"""
    )


@pytest.fixture
def thsr2tra_html() -> str:
    """Search result page where two THSR trains feed one TRA train."""
    return _page(
        """
<tr>
  <td>0650</td><td>17:20 台北</td><td>17:55 新竹</td><td>35分</td>
  <td rowspan="2">1187</td>
  <td rowspan="2">18:20 新竹</td>
  <td rowspan="2">18:34 北新竹</td>
  <td rowspan="2">14分</td>
  <td>1時14分</td>
</tr>
<tr>
  <td>0652</td><td>17:35 台北</td><td>18:05 新竹</td><td>30分</td>
  <td>59分</td>
</tr>
"""
    )


@pytest.fixture
def no_result_html() -> str:
    return "<html><body><p class='alert'>查無符合條件之車次</p></body></html>"


def _make_record(
    depart: str | None = "07:10",
    arrive: str | None = "08:20",
    direction: Direction = Direction.TRA2THSR,
    date: str = "2026/10/19",
) -> TransferRecord:
    """Build a record whose first leg departs at `depart` and second leg arrives at `arrive`."""
    first = TrainLeg(
        train_number="1234",
        start=StationTime(depart, "北新竹"),
        end=StationTime("07:25", "新竹"),
        duration_minutes=15,
    )
    second = TrainLeg(
        train_number="0803",
        start=StationTime("07:40", "新竹"),
        end=StationTime(arrive, "台北"),
        duration_minutes=40,
    )
    return TransferRecord(
        direction=direction,
        leg_a=first,
        leg_b=second,
        total_duration_minutes=70,
        date=date,
    )


@pytest.fixture
def make_record():  # type: ignore[no-untyped-def]
    """Factory fixture for TransferRecords with chosen departure/arrival times."""
    return _make_record
