# shiftwage/services/pay_period_service.py
import calendar
import csv
import io
import logging
from datetime import date, timedelta
from typing import Dict, List, Union

from shiftwage.models.payroll import PayPeriodSummary
from shiftwage.models.shift import ShiftCalculation

logger = logging.getLogger(__name__)

FIXED_DAY = "fixed_day"
MONTH_DYNAMIC = "month_dynamic"
PAY_PERIOD_MODES = (FIXED_DAY, MONTH_DYNAMIC)

class PayPeriod:
    """An inclusive date range that shifts are paid for"""
    def __init__(self, start_date: date, end_date: date):
        if end_date < start_date:
            raise ValueError(f"Pay period ends ({end_date}) before it starts ({start_date})")
        self.start_date = start_date
        self.end_date = end_date

    @property
    def date_range_string(self) -> str:
        """Return formatted date range"""
        return f"{self.start_date.strftime('%B %d')} - {self.end_date.strftime('%B %d, %Y')}"

    @property
    def start_date_str(self) -> str:
        return self.start_date.strftime('%Y-%m-%d')

    @property
    def end_date_str(self) -> str:
        return self.end_date.strftime('%Y-%m-%d')

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, PayPeriod)
            and self.start_date == other.start_date
            and self.end_date == other.end_date
        )

    def __repr__(self) -> str:
        return f"PayPeriod({self.start_date_str} -> {self.end_date_str})"

def _month_day(year: int, month: int, day: int) -> date:
    """Day `day` of a month given as an unnormalized month index, clamped to the month length"""
    year_shift, month_index = divmod(month - 1, 12)
    year, month = year + year_shift, month_index + 1
    return date(year, month, min(day, calendar.monthrange(year, month)[1]))

def calculate_pay_period(mode: str, end_day: int, today: date, offset_months: int = 0) -> PayPeriod:
    """
    Pay period containing `today`, shifted by `offset_months`.

    Args:
        mode: 'month_dynamic' for calendar months, 'fixed_day' for periods ending on `end_day`
        end_day: Last day of each fixed_day period (1-31, clamped to short months)
        today: Reference date
        offset_months: -1 for the previous period, 1 for the next one

    Returns:
        PayPeriod object
    """
    if mode not in PAY_PERIOD_MODES:
        raise ValueError(f"Invalid pay period mode '{mode}'. Expected one of {', '.join(PAY_PERIOD_MODES)}")
    if not 1 <= end_day <= 31:
        raise ValueError(f"Pay period end day must be between 1 and 31, got {end_day}")

    if mode == MONTH_DYNAMIC:
        month = today.month + offset_months
        return PayPeriod(_month_day(today.year, month, 1), _month_day(today.year, month, 31))

    # Past this month's end day we are already in the period ending next month
    month = today.month + offset_months
    if today.day > _month_day(today.year, today.month, end_day).day:
        month += 1

    end = _month_day(today.year, month, end_day)
    previous_end = _month_day(today.year, month - 1, end_day)
    return PayPeriod(previous_end + timedelta(days=1), end)

def summarize_pay_period(calculations: List[ShiftCalculation], period: PayPeriod) -> List[PayPeriodSummary]:
    """Per-employee totals for the shifts clocked in during the period"""
    grouped: Dict[Union[int, str], List[ShiftCalculation]] = {}
    for calc in calculations:
        if period.contains(calc.clock_in.date()):
            grouped.setdefault(calc.employee_id, []).append(calc)

    summaries = []
    for employee_id, shifts in grouped.items():
        shifts.sort(key=lambda c: c.clock_in)
        summaries.append(PayPeriodSummary(
            employee_id=employee_id,
            employee_name=next((c.employee_name for c in shifts if c.employee_name), None),
            start_date=period.start_date_str,
            end_date=period.end_date_str,
            shift_count=len(shifts),
            active_shifts=sum(1 for c in shifts if c.is_active),
            total_elapsed_hours=round(sum(c.elapsed_hours for c in shifts), 2),
            total_payable_hours=round(sum(c.hours.total_payable_hours for c in shifts), 2),
            morning_hours=round(sum(c.hours.morning_hours for c in shifts), 2),
            night_hours=round(sum(c.hours.night_hours for c in shifts), 2),
            flat_amount=round(sum(c.amounts.flat_amount for c in shifts), 2),
            split_amount=round(sum(c.amounts.split_amount for c in shifts), 2),
            calculations=shifts,
        ))

    summaries.sort(key=lambda s: ((s.employee_name or "").lower(), str(s.employee_id)))
    logger.info(f"Summarized {len(summaries)} employees for {period.date_range_string}")
    return summaries

def generate_pay_period_csv(summaries: List[PayPeriodSummary]) -> str:
    """Generate CSV format for payroll export"""

    output = io.StringIO()
    writer = csv.writer(output)

    # Header
    writer.writerow([
        'Employee ID', 'Employee Name', 'Start Date', 'End Date', 'Shifts',
        'Elapsed Hours', 'Payable Hours', 'Morning Hours', 'Night Hours',
        'Flat Amount', 'Split Amount'
    ])

    # Data rows
    for summary in summaries:
        writer.writerow([
            summary.employee_id,
            summary.employee_name or "",
            summary.start_date,
            summary.end_date,
            summary.shift_count,
            summary.total_elapsed_hours,
            summary.total_payable_hours,
            summary.morning_hours,
            summary.night_hours,
            summary.flat_amount,
            summary.split_amount
        ])

    return output.getvalue()
