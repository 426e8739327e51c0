from pydantic import BaseModel, Field
from datetime import date, datetime, time
from typing import Optional, Union

# Clock-out time stored for shifts that are still open; only an exact 00:00:00 counts
NOT_CLOCKED_OUT = time(0, 0, 0)

def _to_minute(value: time) -> time:
    return value.replace(second=0, microsecond=0)

class ShiftRecord(BaseModel):
    """One attendance period as supplied by the timesheet store"""
    employee_id: Union[int, str]
    employee_name: Optional[str] = None
    organization_id: Optional[str] = None
    clock_in_date: date
    clock_in_time: time
    clock_out_date: Optional[date] = None
    clock_out_time: Optional[time] = None

    @property
    def is_active(self) -> bool:
        return self.clock_out_time is None or self.clock_out_time.replace(microsecond=0) == NOT_CLOCKED_OUT

    @property
    def clock_in_at(self) -> datetime:
        return datetime.combine(self.clock_in_date, _to_minute(self.clock_in_time))

    @property
    def clock_out_at(self) -> Optional[datetime]:
        if self.is_active:
            return None
        return datetime.combine(self.clock_out_date or self.clock_in_date, _to_minute(self.clock_out_time))

class ComputedHours(BaseModel):
    morning_hours: float = Field(default=0.0, ge=0)
    night_hours: float = Field(default=0.0, ge=0)
    total_payable_hours: float = Field(default=0.0, ge=0)

    @classmethod
    def zero(cls) -> "ComputedHours":
        return cls()

class ComputedAmounts(BaseModel):
    flat_amount: float = Field(default=0.0, ge=0)
    split_amount: float = Field(default=0.0, ge=0)

class ShiftCalculation(BaseModel):
    """Computed fields for one shift, ready to be persisted by the caller"""
    employee_id: Union[int, str]
    employee_name: Optional[str] = None
    organization_id: Optional[str] = None
    clock_in: datetime
    effective_clock_out: Optional[datetime] = None
    is_active: bool = False
    is_virtual: bool = False
    elapsed_hours: float = 0.0
    hours: ComputedHours
    amounts: ComputedAmounts
