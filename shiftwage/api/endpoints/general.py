import logging

from fastapi import APIRouter, HTTPException
from shiftwage.core.config import ServerConfig, WageDefaults, PayPeriodConfig # Import configs
from shiftwage.models.wage import WageConfiguration

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/")
async def root():
    return {
        "message": ServerConfig.APP_NAME,
        "version": ServerConfig.APP_VERSION,
        "description": ServerConfig.APP_DESCRIPTION,
        "status": "running",
        "https_enabled": ServerConfig.https_enabled(),
    }

@router.get("/config")
async def get_public_config():
    """Get public configuration information"""
    return {
        "app_name": ServerConfig.APP_NAME,
        "app_version": ServerConfig.APP_VERSION,
        "organization_timezone": WageDefaults.ORGANIZATION_TIMEZONE,
        "default_wage_settings": WageDefaults.as_settings(),
        "pay_period_mode": PayPeriodConfig.PAY_PERIOD_MODE,
        "pay_period_end_day": PayPeriodConfig.PAY_PERIOD_END_DAY,
        "development_mode": ServerConfig.DEVELOPMENT_MODE,
    }

@router.get("/health")
async def health_check():
    """Health check that also validates the default wage settings"""
    try:
        config = WageConfiguration.from_settings()
        return {
            "status": "healthy",
            "wage_settings": "valid",
            "payable_window_enabled": config.payable_window_enabled,
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail="Service unavailable")
