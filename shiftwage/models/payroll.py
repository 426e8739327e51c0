from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from shiftwage.models.shift import ComputedHours, ShiftCalculation, ShiftRecord
from shiftwage.models.wage import EmployeeRates

class PayPeriodSummary(BaseModel):
    """Pay period totals for one employee"""
    employee_id: Union[int, str]
    employee_name: Optional[str] = None
    start_date: str
    end_date: str
    shift_count: int
    active_shifts: int = 0
    total_elapsed_hours: float
    total_payable_hours: float
    morning_hours: float
    night_hours: float
    flat_amount: float
    split_amount: float
    calculations: List[ShiftCalculation]

class OverlapRequest(BaseModel):
    shift_start: int = Field(ge=0)
    shift_end: int = Field(ge=0)
    start_time: str  # HH:MM or HH:MM:SS
    end_time: str

class HoursRequest(BaseModel):
    shift: ShiftRecord
    settings: Optional[Dict[str, Any]] = None  # flat wage-settings row
    employee_rates: Optional[EmployeeRates] = None

class VirtualHoursRequest(HoursRequest):
    now: Optional[datetime] = None
    timezone: Optional[str] = None

class AmountsRequest(BaseModel):
    hours: ComputedHours
    elapsed_hours: float = Field(ge=0)
    settings: Optional[Dict[str, Any]] = None
    employee_rates: Optional[EmployeeRates] = None

class RecalculateRequest(BaseModel):
    shifts: List[ShiftRecord]
    settings: Optional[Dict[str, Any]] = None
    employee_rates: Dict[str, EmployeeRates] = {}  # keyed by employee_id
    now: Optional[datetime] = None  # project open shifts to this instant
    timezone: Optional[str] = None

class PayPeriodReportRequest(RecalculateRequest):
    mode: Optional[str] = None  # fixed_day or month_dynamic
    end_day: Optional[int] = None
    reference_date: Optional[date] = None
    offset_months: int = 0
