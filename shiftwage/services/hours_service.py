# shiftwage/services/hours_service.py
"""
Morning / night classification of worked hours.

classify_hours works on completed shifts, classify_virtual_hours projects an
open shift as if it clocked out at "now". Both place the shift on the minute
timeline of its clock-in day, optionally clip it to the payable window, measure
the morning and night windows against what is left and then make sure every
payable minute lands in exactly one of the two buckets.
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from shiftwage.core.exceptions import InvalidConfigurationError, InvalidShiftError
from shiftwage.models.shift import ComputedHours, ShiftRecord
from shiftwage.models.wage import MINUTES_PER_DAY, WageConfiguration
from shiftwage.services.overlap import Segment, clip_to_window, segments_overlap_minutes

logger = logging.getLogger(__name__)

# 0.01 hours
GAP_TOLERANCE_MINUTES = 0.6

class GapAllocationPolicy(ABC):
    """Decides where payable minutes outside both morning and night windows go"""

    @abstractmethod
    def allocate(self, morning: float, night: float, unaccounted: float, clock_out_hour: int) -> Tuple[float, float]:
        """Return the (morning, night) minutes after absorbing `unaccounted` (may be negative)"""

class LargerShareGapPolicy(GapAllocationPolicy):
    """Give the gap to whichever bucket already holds more minutes, morning on ties"""

    def allocate(self, morning, night, unaccounted, clock_out_hour):
        if morning >= night:
            return morning + unaccounted, night
        return morning, night + unaccounted

class BusinessHoursGapPolicy(LargerShareGapPolicy):
    """Shifts ending by the cutoff hour put the whole gap on morning, later ones use the larger share"""

    def __init__(self, cutoff_hour: int = 17):
        self.cutoff_hour = cutoff_hour

    def allocate(self, morning, night, unaccounted, clock_out_hour):
        if clock_out_hour <= self.cutoff_hour:
            return morning + unaccounted, night
        return super().allocate(morning, night, unaccounted, clock_out_hour)

DEFAULT_GAP_POLICY = BusinessHoursGapPolicy()

def minute_of_day(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute

def minutes_between(clock_in: datetime, clock_out: datetime) -> int:
    """Elapsed whole minutes; a clock-out before clock-in is taken as the next day"""
    elapsed = int((clock_out - clock_in).total_seconds() // 60)
    if elapsed < 0:
        elapsed += MINUTES_PER_DAY
    if elapsed < 0:
        raise InvalidShiftError(f"Clock-out {clock_out.isoformat()} is more than a day before clock-in {clock_in.isoformat()}")
    return elapsed

def localize_now(now: datetime, timezone: Optional[str] = None) -> datetime:
    """Wall-clock "now" in the organization timezone, as a naive datetime.

    Naive values are taken as already localized; the system timezone is never consulted.
    """
    if now.tzinfo is None:
        return now
    if timezone:
        try:
            now = now.astimezone(ZoneInfo(timezone))
        except (ZoneInfoNotFoundError, ValueError):
            raise InvalidConfigurationError(f"Unknown timezone '{timezone}'")
    return now.replace(tzinfo=None)

def effective_clock_out(shift: ShiftRecord, now: datetime, timezone: Optional[str] = None) -> datetime:
    """The real clock-out, or "now" standing in for it while the shift is open"""
    if not shift.is_active:
        return shift.clock_out_at
    return localize_now(now, timezone).replace(second=0, microsecond=0)

def elapsed_minutes(shift: ShiftRecord, now: Optional[datetime] = None, timezone: Optional[str] = None) -> int:
    if shift.is_active:
        if now is None:
            return 0
        return minutes_between(shift.clock_in_at, effective_clock_out(shift, now, timezone))
    return minutes_between(shift.clock_in_at, shift.clock_out_at)

def elapsed_hours(shift: ShiftRecord, now: Optional[datetime] = None, timezone: Optional[str] = None) -> float:
    return round(elapsed_minutes(shift, now, timezone) / 60, 2)

def _payable_segments(shift_start: int, shift_end: int, config: WageConfiguration) -> List[Segment]:
    if config.payable_window_enabled:
        return clip_to_window(shift_start, shift_end, config.payable_window, anchor=shift_start)
    if shift_end > shift_start:
        return [(shift_start, shift_end)]
    return []

def _to_hours(morning: float, night: float, total: float) -> ComputedHours:
    total_hours = round(total / 60, 2)
    morning_hours = min(round(morning / 60, 2), total_hours)
    remaining = max(0.0, round(total_hours - morning_hours, 2))

    if abs(morning + night - total) <= GAP_TOLERANCE_MINUTES:
        # every payable minute is classified: derive night so the rounded parts add up
        night_hours = remaining
    else:
        night_hours = min(round(night / 60, 2), remaining)

    return ComputedHours(
        morning_hours=max(0.0, morning_hours),
        night_hours=night_hours,
        total_payable_hours=total_hours,
    )

def classify_interval(
    shift_start: int,
    shift_end: int,
    clock_out_hour: int,
    config: WageConfiguration,
    policy: Optional[GapAllocationPolicy] = None,
) -> ComputedHours:
    """Classify the minutes [shift_start, shift_end) of the clock-in day timeline"""
    policy = policy or DEFAULT_GAP_POLICY

    segments = _payable_segments(shift_start, shift_end, config)
    total = float(sum(end - start for start, end in segments))
    if total <= 0:
        return ComputedHours.zero()

    morning = float(segments_overlap_minutes(segments, config.morning_window, anchor=shift_start))
    night = float(segments_overlap_minutes(segments, config.night_window, anchor=shift_start))

    unaccounted = total - (morning + night)
    if abs(unaccounted) > GAP_TOLERANCE_MINUTES:
        logger.debug(f"Allocating {unaccounted:.1f} unaccounted minutes (M:{morning:.1f} N:{night:.1f})")
        morning, night = policy.allocate(morning, night, unaccounted, clock_out_hour)

    morning, night = max(0.0, morning), max(0.0, night)

    # Never classify more than the payable time actually worked
    combined = morning + night
    if combined > total:
        ratio = total / combined
        morning *= ratio
        night *= ratio

    return _to_hours(morning, night, total)

def classify_hours(
    shift: ShiftRecord,
    config: WageConfiguration,
    policy: Optional[GapAllocationPolicy] = None,
) -> ComputedHours:
    """Split a completed shift into morning, night and payable hours.

    Shifts without a real clock-out have nothing to compute yet and get zero hours.
    """
    if shift.is_active:
        logger.debug(f"Shift for employee {shift.employee_id} is not clocked out, returning zero hours")
        return ComputedHours.zero()

    clock_in = shift.clock_in_at
    clock_out = shift.clock_out_at
    shift_start = minute_of_day(clock_in)
    shift_end = shift_start + minutes_between(clock_in, clock_out)

    return classify_interval(shift_start, shift_end, clock_out.hour, config, policy)

def classify_virtual_hours(
    shift: ShiftRecord,
    config: WageConfiguration,
    now: datetime,
    timezone: Optional[str] = None,
    policy: Optional[GapAllocationPolicy] = None,
) -> ComputedHours:
    """Hours an open shift would have if it clocked out at `now`.

    `now` is converted to `timezone` when it is timezone-aware. Shifts that are
    already clocked out are classified from their real clock-out.
    """
    if not shift.is_active:
        return classify_hours(shift, config, policy)

    clock_in = shift.clock_in_at
    clock_out = effective_clock_out(shift, now, timezone)
    shift_start = minute_of_day(clock_in)
    shift_end = shift_start + minutes_between(clock_in, clock_out)

    return classify_interval(shift_start, shift_end, clock_out.hour, config, policy)
