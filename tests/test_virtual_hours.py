from datetime import datetime, timedelta, timezone

import pytest

from shiftwage.core.exceptions import InvalidConfigurationError
from shiftwage.models.shift import ComputedHours
from shiftwage.services.hours_service import (
    classify_hours,
    classify_virtual_hours,
    effective_clock_out,
    elapsed_hours,
    localize_now,
)


def test_open_night_shift_as_of_now(config_factory, shift_factory):
    shift = shift_factory("2025-03-03 22:00")
    now = datetime(2025, 3, 4, 2, 0)

    hours = classify_virtual_hours(shift, config_factory(), now)

    assert hours.night_hours == 4.0
    assert hours.morning_hours == 0.0
    assert hours.total_payable_hours == 4.0
    assert elapsed_hours(shift, now) == 4.0


def test_aware_now_is_converted_to_organization_timezone(config_factory, shift_factory):
    shift = shift_factory("2025-03-03 22:00")
    # 22:00 UTC is 02:00 in Dubai (UTC+4, no daylight saving)
    now = datetime(2025, 3, 3, 22, 0, tzinfo=timezone.utc)

    assert effective_clock_out(shift, now, "Asia/Dubai") == datetime(2025, 3, 4, 2, 0)
    hours = classify_virtual_hours(shift, config_factory(), now, "Asia/Dubai")
    assert hours.night_hours == 4.0


def test_aware_now_without_timezone_keeps_its_wall_clock():
    now = datetime(2025, 3, 4, 2, 0, tzinfo=timezone(timedelta(hours=3)))
    assert localize_now(now) == datetime(2025, 3, 4, 2, 0)


def test_naive_now_is_already_local():
    now = datetime(2025, 3, 4, 2, 0)
    assert localize_now(now, "Asia/Dubai") is now


def test_unknown_timezone_is_rejected(config_factory, shift_factory):
    shift = shift_factory("2025-03-03 22:00")
    now = datetime(2025, 3, 3, 22, 0, tzinfo=timezone.utc)
    with pytest.raises(InvalidConfigurationError):
        classify_virtual_hours(shift, config_factory(), now, "Mars/Olympus_Mons")


def test_open_shift_outside_payable_window_is_zero(config_factory, shift_factory):
    shift = shift_factory("2025-03-03 05:00")
    hours = classify_virtual_hours(
        shift, config_factory(payable_enabled=True), datetime(2025, 3, 3, 7, 0)
    )
    assert hours == ComputedHours.zero()


def test_seconds_are_ignored(config_factory, shift_factory):
    shift = shift_factory("2025-03-03 22:00")
    hours = classify_virtual_hours(shift, config_factory(), datetime(2025, 3, 4, 2, 0, 59, 999))
    assert hours.total_payable_hours == 4.0


def test_clocked_out_shift_uses_real_clock_out(config_factory, shift_factory):
    shift = shift_factory("2025-03-03 08:00", "2025-03-03 20:00")
    config = config_factory()
    now = datetime(2025, 3, 5, 12, 0)

    assert classify_virtual_hours(shift, config, now) == classify_hours(shift, config)
    assert effective_clock_out(shift, now) == datetime(2025, 3, 3, 20, 0)


def test_live_hours_grow_with_now(config_factory, shift_factory):
    shift = shift_factory("2025-03-03 08:00")
    config = config_factory(payable_enabled=True)

    earlier = classify_virtual_hours(shift, config, datetime(2025, 3, 3, 12, 0))
    later = classify_virtual_hours(shift, config, datetime(2025, 3, 3, 19, 30))

    assert earlier.total_payable_hours == 4.0
    assert later.total_payable_hours == 11.5
    assert later.morning_hours == 9.0
    assert later.night_hours == 2.5


def test_open_shift_after_midnight_before_payable_window_is_zero(config_factory, shift_factory):
    shift = shift_factory("2025-03-03 00:10")
    hours = classify_virtual_hours(
        shift, config_factory(payable_enabled=True), datetime(2025, 3, 3, 7, 0)
    )
    assert hours == ComputedHours.zero()
