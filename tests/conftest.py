from datetime import datetime
from typing import Optional

import pytest

from shiftwage.models.shift import ShiftRecord
from shiftwage.models.wage import TimeWindow, WageConfiguration


@pytest.fixture
def config_factory():
    """WageConfiguration with the usual day/night split and the payable window off."""
    def _make(
        morning=("06:00", "17:00"),
        night=("17:00", "06:00"),
        payable=("08:00", "01:00"),
        payable_enabled=False,
        morning_rate=17.0,
        night_rate=20.0,
        flat_rate=20.0,
    ) -> WageConfiguration:
        return WageConfiguration(
            morning_window=TimeWindow.from_times(*morning),
            night_window=TimeWindow.from_times(*night),
            payable_window=TimeWindow.from_times(*payable),
            payable_window_enabled=payable_enabled,
            morning_rate=morning_rate,
            night_rate=night_rate,
            flat_rate=flat_rate,
        )
    return _make


@pytest.fixture
def shift_factory():
    """ShiftRecord from 'YYYY-MM-DD HH:MM' strings; no clock_out means an open shift."""
    def _make(clock_in: str, clock_out: Optional[str] = None, employee_id=1, employee_name=None) -> ShiftRecord:
        start = datetime.strptime(clock_in, "%Y-%m-%d %H:%M")
        end = datetime.strptime(clock_out, "%Y-%m-%d %H:%M") if clock_out else None
        return ShiftRecord(
            employee_id=employee_id,
            employee_name=employee_name,
            organization_id="org-1",
            clock_in_date=start.date(),
            clock_in_time=start.time(),
            clock_out_date=end.date() if end else None,
            clock_out_time=end.time() if end else None,
        )
    return _make
