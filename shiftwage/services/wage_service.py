import logging
import math
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Dict, List, Optional, Union

from shiftwage.core.exceptions import InvalidShiftError
from shiftwage.models.shift import ComputedAmounts, ComputedHours, ShiftCalculation, ShiftRecord
from shiftwage.models.wage import EmployeeRates, WageConfiguration
from shiftwage.services.hours_service import (
    GapAllocationPolicy,
    classify_hours,
    classify_virtual_hours,
    effective_clock_out,
    elapsed_minutes,
)

logger = logging.getLogger(__name__)

EmployeeId = Union[int, str]

def compute_amounts(
    hours: ComputedHours,
    elapsed: float,
    config: WageConfiguration,
    employee_rates: Optional[EmployeeRates] = None,
) -> ComputedAmounts:
    """Flat and split pay for one shift.

    The flat amount is paid on elapsed hours, the split amount on the classified
    (payable-window clipped) morning and night hours.
    """
    if elapsed is None or not math.isfinite(elapsed) or elapsed < 0:
        raise InvalidShiftError(f"Elapsed hours must be a non-negative number, got {elapsed}")

    morning_rate, night_rate = config.resolve_rates(employee_rates)

    split_amount = hours.morning_hours * morning_rate + hours.night_hours * night_rate
    flat_amount = elapsed * config.flat_rate

    return ComputedAmounts(
        flat_amount=max(0.0, round(flat_amount, 2)),
        split_amount=max(0.0, round(split_amount, 2)),
    )

def calculate_shift(
    shift: ShiftRecord,
    config: WageConfiguration,
    employee_rates: Optional[EmployeeRates] = None,
    now: Optional[datetime] = None,
    timezone: Optional[str] = None,
    policy: Optional[GapAllocationPolicy] = None,
) -> ShiftCalculation:
    """Hours and amounts for one shift; open shifts are projected to `now` when given"""
    is_virtual = shift.is_active and now is not None

    if is_virtual:
        hours = classify_virtual_hours(shift, config, now, timezone, policy)
        clock_out = effective_clock_out(shift, now, timezone)
    else:
        hours = classify_hours(shift, config, policy)
        clock_out = shift.clock_out_at

    elapsed = elapsed_minutes(shift, now, timezone) / 60
    amounts = compute_amounts(hours, elapsed, config, employee_rates)

    return ShiftCalculation(
        employee_id=shift.employee_id,
        employee_name=shift.employee_name,
        organization_id=shift.organization_id,
        clock_in=shift.clock_in_at,
        effective_clock_out=clock_out,
        is_active=shift.is_active,
        is_virtual=is_virtual,
        elapsed_hours=round(elapsed, 2),
        hours=hours,
        amounts=amounts,
    )

def recalculate_shifts(
    shifts: List[ShiftRecord],
    config: WageConfiguration,
    employee_rates: Optional[Dict[EmployeeId, EmployeeRates]] = None,
    max_workers: Optional[int] = None,
    now: Optional[datetime] = None,
    timezone: Optional[str] = None,
    policy: Optional[GapAllocationPolicy] = None,
) -> List[ShiftCalculation]:
    """Recalculate a batch of shifts in parallel, results in input order.

    The configuration and rate table are copied once up front so every shift in
    the batch is computed against the same settings.
    """
    if not shifts:
        logger.info("No shifts to recalculate")
        return []

    config_snapshot = config.model_copy(deep=True)
    rates_snapshot = {str(key): rates for key, rates in (employee_rates or {}).items()}

    logger.info(f"Recalculating hours and wages for {len(shifts)} shifts...")

    def _calculate(shift: ShiftRecord) -> ShiftCalculation:
        rates = rates_snapshot.get(str(shift.employee_id))
        return calculate_shift(shift, config_snapshot, rates, now, timezone, policy)

    with ThreadPoolExecutor(max_workers=max_workers or None) as executor:
        results = list(executor.map(_calculate, shifts))

    active = sum(1 for r in results if r.is_active)
    morning = sum(r.hours.morning_hours for r in results)
    night = sum(r.hours.night_hours for r in results)
    logger.info(
        f"Recalculated {len(results)} shifts ({active} active): "
        f"M:{morning:.2f}h N:{night:.2f}h"
    )
    return results
