import os
from typing import List
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

def parse_list_env(env_var: str, default: List[str] = None) -> List[str]:
    """Parse comma-separated environment variable into list"""
    if default is None:
        default = []

    value = os.getenv(env_var, "")
    if not value.strip():
        return default

    return [item.strip() for item in value.split(",") if item.strip()]

def parse_bool_env(env_var: str, default: bool = False) -> bool:
    """Parse boolean environment variable"""
    return os.getenv(env_var, str(default)).lower() in ("true", "1", "yes", "on")

class WageDefaults:
    """Organization wage settings used when a request carries none"""

    # Morning / night split windows (HH:MM or HH:MM:SS, night may wrap midnight)
    MORNING_START_TIME = os.getenv("WAGE_MORNING_START_TIME", "06:00:00")
    MORNING_END_TIME = os.getenv("WAGE_MORNING_END_TIME", "17:00:00")
    NIGHT_START_TIME = os.getenv("WAGE_NIGHT_START_TIME", "17:00:00")
    NIGHT_END_TIME = os.getenv("WAGE_NIGHT_END_TIME", "01:00:00")

    # Payable working-hours window
    WORKING_HOURS_WINDOW_ENABLED = parse_bool_env("WAGE_WORKING_HOURS_WINDOW_ENABLED", True)
    WORKING_HOURS_START_TIME = os.getenv("WAGE_WORKING_HOURS_START_TIME", "08:00:00")
    WORKING_HOURS_END_TIME = os.getenv("WAGE_WORKING_HOURS_END_TIME", "01:00:00")

    # Hourly rates
    MORNING_WAGE_RATE = float(os.getenv("WAGE_MORNING_RATE", "17.0"))
    NIGHT_WAGE_RATE = float(os.getenv("WAGE_NIGHT_RATE", "20.0"))
    DEFAULT_FLAT_WAGE_RATE = float(os.getenv("WAGE_FLAT_RATE", "20.0"))

    # Timezone used to localize "now" for live calculations
    ORGANIZATION_TIMEZONE = os.getenv("ORGANIZATION_TIMEZONE", "Africa/Cairo")

    @classmethod
    def as_settings(cls) -> dict:
        """Defaults in the flat wage-settings row shape"""
        return {
            "morning_start_time": cls.MORNING_START_TIME,
            "morning_end_time": cls.MORNING_END_TIME,
            "night_start_time": cls.NIGHT_START_TIME,
            "night_end_time": cls.NIGHT_END_TIME,
            "working_hours_window_enabled": cls.WORKING_HOURS_WINDOW_ENABLED,
            "working_hours_start_time": cls.WORKING_HOURS_START_TIME,
            "working_hours_end_time": cls.WORKING_HOURS_END_TIME,
            "morning_wage_rate": cls.MORNING_WAGE_RATE,
            "night_wage_rate": cls.NIGHT_WAGE_RATE,
            "default_flat_wage_rate": cls.DEFAULT_FLAT_WAGE_RATE,
        }

class PayPeriodConfig:
    """Pay period settings from Environment"""

    # "fixed_day" (period ends on PAY_PERIOD_END_DAY) or "month_dynamic" (calendar month)
    PAY_PERIOD_MODE = os.getenv("PAY_PERIOD_MODE", "fixed_day")
    PAY_PERIOD_END_DAY = int(os.getenv("PAY_PERIOD_END_DAY", "28"))

class BatchConfig:
    """Batch recalculation settings from Environment"""

    # 0 lets ThreadPoolExecutor pick its default
    BATCH_MAX_WORKERS = int(os.getenv("BATCH_MAX_WORKERS", "0"))

class ServerConfig:
    """Server Configuration from Environment"""

    # Server settings
    HOST = os.getenv("SHIFTWAGE_HOST", "0.0.0.0")
    PORT = int(os.getenv("SHIFTWAGE_PORT", "8000"))
    WORKERS = int(os.getenv("SHIFTWAGE_WORKERS", "1"))
    LOG_LEVEL = os.getenv("SHIFTWAGE_LOG_LEVEL", "info")

    # Optional TLS, served by uvicorn when both files are given
    SSL_CERT_FILE = os.getenv("SSL_CERT_FILE", "")
    SSL_KEY_FILE = os.getenv("SSL_KEY_FILE", "")

    # Development settings
    DEVELOPMENT_MODE = parse_bool_env("DEVELOPMENT_MODE", False)
    ENABLE_API_DOCS = parse_bool_env("ENABLE_API_DOCS", True)

    # CORS settings
    CORS_ORIGINS = parse_list_env("CORS_ORIGINS", ["*"])
    CORS_ALLOW_CREDENTIALS = parse_bool_env("CORS_ALLOW_CREDENTIALS", True)

    # App metadata
    APP_NAME = os.getenv("APP_NAME", "Shift Wage Calculator")
    APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
    APP_DESCRIPTION = os.getenv("APP_DESCRIPTION", "Morning/night split hours and wage calculation for timesheets")

    @classmethod
    def https_enabled(cls) -> bool:
        return bool(cls.SSL_CERT_FILE and cls.SSL_KEY_FILE)
