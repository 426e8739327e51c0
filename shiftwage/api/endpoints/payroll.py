import logging
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, HTTPException, Response
from shiftwage.core.config import BatchConfig, PayPeriodConfig, WageDefaults
from shiftwage.models.payroll import PayPeriodReportRequest, RecalculateRequest # Import models
from shiftwage.models.wage import WageConfiguration
from shiftwage.services.wage_service import recalculate_shifts # Import services
from shiftwage.services.pay_period_service import (
    calculate_pay_period,
    summarize_pay_period,
    generate_pay_period_csv,
    PayPeriod
)

router = APIRouter()
logger = logging.getLogger(__name__)

def _period_payload(period: PayPeriod) -> dict:
    return {
        "start_date": period.start_date_str,
        "end_date": period.end_date_str,
        "date_range": period.date_range_string,
        "days": period.days,
    }

@router.post("/payroll/recalculate")
async def recalculate_all(request: RecalculateRequest):
    """Recalculate hours and wages for a batch of shifts"""
    try:
        config = WageConfiguration.from_settings(request.settings)
        tz_name = request.timezone or WageDefaults.ORGANIZATION_TIMEZONE

        calculations = recalculate_shifts(
            request.shifts,
            config,
            request.employee_rates,
            max_workers=BatchConfig.BATCH_MAX_WORKERS,
            now=request.now,
            timezone=tz_name,
        )

        return {
            "count": len(calculations),
            "active": sum(1 for c in calculations if c.is_active),
            "calculations": calculations
        }

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error recalculating shifts: {e}")
        raise HTTPException(status_code=500, detail="Failed to recalculate shifts")

@router.get("/payroll/pay-period")
async def get_pay_period(
    mode: Optional[str] = None,
    end_day: Optional[int] = None,
    reference_date: Optional[str] = None,  # YYYY-MM-DD
    offset_months: int = 0
):
    """Get the pay period containing a date (defaults to today)"""
    try:
        today = datetime.strptime(reference_date, '%Y-%m-%d').date() if reference_date else date.today()
        period = calculate_pay_period(
            mode or PayPeriodConfig.PAY_PERIOD_MODE,
            end_day if end_day is not None else PayPeriodConfig.PAY_PERIOD_END_DAY,
            today,
            offset_months
        )
        return _period_payload(period)

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/payroll/pay-period-report")
async def get_pay_period_report(request: PayPeriodReportRequest, format: str = "json"):
    """Per-employee pay period totals for the submitted shifts (json or csv)"""
    try:
        period = calculate_pay_period(
            request.mode or PayPeriodConfig.PAY_PERIOD_MODE,
            request.end_day if request.end_day is not None else PayPeriodConfig.PAY_PERIOD_END_DAY,
            request.reference_date or date.today(),
            request.offset_months
        )

        config = WageConfiguration.from_settings(request.settings)
        in_period = [s for s in request.shifts if period.contains(s.clock_in_date)]
        calculations = recalculate_shifts(
            in_period,
            config,
            request.employee_rates,
            max_workers=BatchConfig.BATCH_MAX_WORKERS,
            now=request.now,
            timezone=request.timezone or WageDefaults.ORGANIZATION_TIMEZONE,
        )
        summaries = summarize_pay_period(calculations, period)

        if format.lower() == "csv":
            # Return CSV format for payroll systems
            return Response(
                content=generate_pay_period_csv(summaries),
                media_type="text/csv",
                headers={"Content-Disposition": f"attachment; filename=payroll_{period.start_date_str}_to_{period.end_date_str}.csv"}
            )

        return {
            **_period_payload(period),
            "total_employees": len(summaries),
            "total_flat_amount": round(sum(s.flat_amount for s in summaries), 2),
            "total_split_amount": round(sum(s.split_amount for s in summaries), 2),
            "employee_reports": summaries
        }

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error generating pay period report: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate pay period report")
