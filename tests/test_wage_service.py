import math
from datetime import datetime

import pytest

from shiftwage.core.exceptions import InvalidShiftError
from shiftwage.models.shift import ComputedHours
from shiftwage.models.wage import EmployeeRates
from shiftwage.services.wage_service import calculate_shift, compute_amounts, recalculate_shifts


def test_flat_and_split_amounts(config_factory):
    hours = ComputedHours(morning_hours=9.0, night_hours=3.0, total_payable_hours=12.0)
    amounts = compute_amounts(hours, 12.0, config_factory(morning_rate=17, night_rate=20, flat_rate=20))

    assert amounts.flat_amount == 240.0
    assert amounts.split_amount == 213.0


def test_employee_rates_take_precedence(config_factory):
    hours = ComputedHours(morning_hours=9.0, night_hours=3.0, total_payable_hours=12.0)
    config = config_factory()

    assert compute_amounts(hours, 12.0, config, EmployeeRates(morning_rate=18)).split_amount == 222.0
    # unset or zero rates fall back to the organization rate
    assert compute_amounts(hours, 12.0, config, EmployeeRates(morning_rate=0, night_rate=25)).split_amount == 228.0


@pytest.mark.parametrize("elapsed", [-0.5, math.nan, math.inf])
def test_invalid_elapsed_hours_rejected(config_factory, elapsed):
    with pytest.raises(InvalidShiftError):
        compute_amounts(ComputedHours.zero(), elapsed, config_factory())


def test_zero_hours_pay_nothing(config_factory):
    amounts = compute_amounts(ComputedHours.zero(), 0.0, config_factory())
    assert amounts.flat_amount == 0.0
    assert amounts.split_amount == 0.0


def test_flat_amount_uses_elapsed_hours(config_factory, shift_factory):
    shift = shift_factory("2025-03-03 06:00", "2025-03-03 18:00")
    result = calculate_shift(shift, config_factory(payable_enabled=True))

    assert result.elapsed_hours == 12.0
    assert result.hours.total_payable_hours == 10.0
    assert result.amounts.flat_amount == 240.0
    # 9h morning at 17 + 1h night at 20
    assert result.amounts.split_amount == 173.0


def test_calculate_completed_shift(config_factory, shift_factory):
    shift = shift_factory("2025-03-03 08:00", "2025-03-03 20:00", employee_name="Mona")
    result = calculate_shift(shift, config_factory())

    assert result.employee_name == "Mona"
    assert result.is_active is False
    assert result.is_virtual is False
    assert result.clock_in == datetime(2025, 3, 3, 8, 0)
    assert result.effective_clock_out == datetime(2025, 3, 3, 20, 0)
    assert result.amounts.split_amount == 213.0


def test_open_shift_without_now_is_zero(config_factory, shift_factory):
    result = calculate_shift(shift_factory("2025-03-03 22:00"), config_factory())

    assert result.is_active is True
    assert result.is_virtual is False
    assert result.effective_clock_out is None
    assert result.elapsed_hours == 0.0
    assert result.hours == ComputedHours.zero()
    assert result.amounts.flat_amount == 0.0


def test_open_shift_with_now_is_virtual(config_factory, shift_factory):
    result = calculate_shift(
        shift_factory("2025-03-03 22:00"), config_factory(), now=datetime(2025, 3, 4, 2, 0)
    )

    assert result.is_virtual is True
    assert result.effective_clock_out == datetime(2025, 3, 4, 2, 0)
    assert result.elapsed_hours == 4.0
    assert result.hours.night_hours == 4.0
    assert result.amounts.flat_amount == 80.0
    assert result.amounts.split_amount == 80.0


def test_recalculate_keeps_order_and_rates(config_factory, shift_factory):
    shifts = [
        shift_factory("2025-03-03 08:00", "2025-03-03 20:00", employee_id=1),
        shift_factory("2025-03-03 08:00", "2025-03-03 20:00", employee_id=2),
        shift_factory("2025-03-04 22:00", employee_id=3),
    ]
    results = recalculate_shifts(
        shifts,
        config_factory(),
        employee_rates={"2": EmployeeRates(morning_rate=20, night_rate=30)},
        max_workers=2,
    )

    assert [r.employee_id for r in results] == [1, 2, 3]
    assert results[0].amounts.split_amount == 213.0
    assert results[1].amounts.split_amount == 9 * 20 + 3 * 30
    assert results[2].is_active is True
    assert results[2].hours == ComputedHours.zero()


def test_recalculate_empty_batch(config_factory):
    assert recalculate_shifts([], config_factory()) == []


def test_parallel_batch_matches_sequential(config_factory, shift_factory):
    config = config_factory(payable_enabled=True, night=("17:00", "01:00"))
    shifts = [
        shift_factory(
            f"2025-03-{day:02d} {hour:02d}:15",
            f"2025-03-{day + 1:02d} {(hour + 5) % 24:02d}:45",
            employee_id=hour,
        )
        for day in range(1, 11)
        for hour in range(24)
    ]

    parallel = recalculate_shifts(shifts, config, max_workers=8)
    sequential = [calculate_shift(s, config) for s in shifts]

    assert parallel == sequential
