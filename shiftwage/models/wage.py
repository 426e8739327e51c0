from datetime import time
from typing import Any, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from shiftwage.core.config import WageDefaults
from shiftwage.core.exceptions import InvalidConfigurationError

MINUTES_PER_DAY = 24 * 60

TimeLike = Union[str, time]

def to_minute_of_day(value: TimeLike) -> int:
    """Convert 'HH:MM', 'HH:MM:SS(.ffffff)' or a time to minutes since midnight.

    Seconds are dropped: windows and shifts are compared at minute resolution.
    """
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if not isinstance(value, str) or not value.strip():
        raise InvalidConfigurationError(f"Invalid time of day: {value!r}")

    parts = value.strip().split(".")[0].split(":")
    if len(parts) not in (2, 3):
        raise InvalidConfigurationError(f"Invalid time of day: {value!r}. Use HH:MM or HH:MM:SS")
    try:
        hour, minute = int(parts[0]), int(parts[1])
    except ValueError:
        raise InvalidConfigurationError(f"Invalid time of day: {value!r}. Use HH:MM or HH:MM:SS")

    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise InvalidConfigurationError(f"Time of day out of range: {value!r}")
    return hour * 60 + minute

class TimeWindow(BaseModel):
    """A repeating daily interval; end <= start means it wraps past midnight"""
    model_config = ConfigDict(frozen=True)

    start_minute: int = Field(ge=0, lt=MINUTES_PER_DAY)
    end_minute: int = Field(ge=0, lt=MINUTES_PER_DAY)

    @classmethod
    def from_times(cls, start: TimeLike, end: TimeLike) -> "TimeWindow":
        return cls(start_minute=to_minute_of_day(start), end_minute=to_minute_of_day(end))

    @property
    def wraps(self) -> bool:
        return self.end_minute <= self.start_minute

    @property
    def effective_end(self) -> int:
        return self.end_minute + MINUTES_PER_DAY if self.wraps else self.end_minute

    @property
    def duration_minutes(self) -> int:
        return self.effective_end - self.start_minute

    def bounds(self) -> Tuple[int, int]:
        return self.start_minute, self.effective_end

class EmployeeRates(BaseModel):
    """Per-employee rate overrides; unset (or zero) rates fall back to the organization"""
    model_config = ConfigDict(frozen=True)

    morning_rate: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    night_rate: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)

class WageConfiguration(BaseModel):
    """Organization wage settings, read-only input to every calculation"""
    model_config = ConfigDict(frozen=True)

    morning_window: TimeWindow
    night_window: TimeWindow
    payable_window: TimeWindow
    payable_window_enabled: bool = False
    morning_rate: float = Field(ge=0, allow_inf_nan=False)
    night_rate: float = Field(ge=0, allow_inf_nan=False)
    flat_rate: float = Field(ge=0, allow_inf_nan=False)

    @classmethod
    def from_settings(cls, settings: Optional[Mapping[str, Any]] = None) -> "WageConfiguration":
        """Build from a flat wage-settings row, filling blanks from WageDefaults"""
        merged = WageDefaults.as_settings()
        for key, value in (settings or {}).items():
            if value is not None and value != "":
                merged[key] = value

        return cls(
            morning_window=TimeWindow.from_times(merged["morning_start_time"], merged["morning_end_time"]),
            night_window=TimeWindow.from_times(merged["night_start_time"], merged["night_end_time"]),
            payable_window=TimeWindow.from_times(
                merged["working_hours_start_time"], merged["working_hours_end_time"]
            ),
            payable_window_enabled=merged["working_hours_window_enabled"],
            morning_rate=merged["morning_wage_rate"],
            night_rate=merged["night_wage_rate"],
            flat_rate=merged["default_flat_wage_rate"],
        )

    def resolve_rates(self, employee_rates: Optional[EmployeeRates] = None) -> Tuple[float, float]:
        """Morning and night rates, employee overrides first"""
        if employee_rates is None:
            return self.morning_rate, self.night_rate
        return (
            employee_rates.morning_rate or self.morning_rate,
            employee_rates.night_rate or self.night_rate,
        )
