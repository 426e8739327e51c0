import logging
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException
from shiftwage.core.config import WageDefaults
from shiftwage.models.payroll import AmountsRequest, HoursRequest, OverlapRequest, VirtualHoursRequest # Import models
from shiftwage.models.shift import ComputedAmounts, ShiftCalculation
from shiftwage.models.wage import TimeWindow, WageConfiguration
from shiftwage.services.overlap import overlap_minutes, daily_overlap_minutes # Import services
from shiftwage.services.wage_service import calculate_shift, compute_amounts

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/calculate/overlap")
async def calculate_overlap(request: OverlapRequest):
    """Overlap in minutes between a shift (minute offsets from clock-in midnight) and a window"""
    try:
        window = TimeWindow.from_times(request.start_time, request.end_time)
        return {
            "window_start_minute": window.start_minute,
            "window_end_minute": window.effective_end,
            "wraps_midnight": window.wraps,
            "overlap_minutes": overlap_minutes(request.shift_start, request.shift_end, window),
            "daily_overlap_minutes": daily_overlap_minutes(request.shift_start, request.shift_end, window),
        }
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error calculating overlap: {e}")
        raise HTTPException(status_code=500, detail="Failed to calculate overlap")

@router.post("/calculate/hours", response_model=ShiftCalculation)
async def calculate_hours(request: HoursRequest):
    """Morning/night split, payable hours and amounts for a completed shift"""
    try:
        config = WageConfiguration.from_settings(request.settings)
        return calculate_shift(request.shift, config, request.employee_rates)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error calculating shift hours: {e}")
        raise HTTPException(status_code=500, detail="Failed to calculate hours")

@router.post("/calculate/virtual-hours", response_model=ShiftCalculation)
async def calculate_virtual_hours(request: VirtualHoursRequest):
    """Live hours for an open shift, as if the employee clocked out now"""
    try:
        config = WageConfiguration.from_settings(request.settings)
        now = request.now or datetime.now(timezone.utc)
        tz_name = request.timezone or WageDefaults.ORGANIZATION_TIMEZONE
        return calculate_shift(request.shift, config, request.employee_rates, now=now, timezone=tz_name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error calculating virtual hours: {e}")
        raise HTTPException(status_code=500, detail="Failed to calculate virtual hours")

@router.post("/calculate/amounts", response_model=ComputedAmounts)
async def calculate_amounts(request: AmountsRequest):
    """Flat and split amounts for already classified hours"""
    try:
        config = WageConfiguration.from_settings(request.settings)
        return compute_amounts(request.hours, request.elapsed_hours, config, request.employee_rates)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error calculating amounts: {e}")
        raise HTTPException(status_code=500, detail="Failed to calculate amounts")
