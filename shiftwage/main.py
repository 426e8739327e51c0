import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from shiftwage.core.config import ServerConfig, WageDefaults, PayPeriodConfig # Import configs
from shiftwage.models.wage import WageConfiguration
from shiftwage.api.endpoints import general, calculations, payroll # Import all endpoint routers

# Configure logging
log_level = getattr(logging, ServerConfig.LOG_LEVEL.upper())
logging.basicConfig(level=log_level)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup logic
    logger.info("=" * 60)
    logger.info(f"🚀 {ServerConfig.APP_NAME.upper()}")
    logger.info(f"Version: {ServerConfig.APP_VERSION}")
    logger.info("=" * 60)

    # Fail fast on malformed default wage settings
    defaults = WageConfiguration.from_settings()

    window_status = "ENABLED" if defaults.payable_window_enabled else "DISABLED"
    logger.info(f"Default payable window: {window_status}")
    logger.info(f"Default rates: morning {defaults.morning_rate} / night {defaults.night_rate} / flat {defaults.flat_rate}")
    logger.info(f"Organization timezone: {WageDefaults.ORGANIZATION_TIMEZONE}")
    logger.info(f"Pay period: {PayPeriodConfig.PAY_PERIOD_MODE} (end day {PayPeriodConfig.PAY_PERIOD_END_DAY})")
    logger.info(f"HTTPS: {'ENABLED' if ServerConfig.https_enabled() else 'DISABLED'}")
    logger.info("=" * 60)
    logger.info("Shift Wage Calculator started successfully!")

    yield  # Server is running

    # Shutdown logic
    logger.info("Shutting down Shift Wage Calculator...")


app = FastAPI(
    title=ServerConfig.APP_NAME,
    version=ServerConfig.APP_VERSION,
    description=ServerConfig.APP_DESCRIPTION,
    lifespan=lifespan,
    docs_url="/docs" if ServerConfig.ENABLE_API_DOCS else None,
    redoc_url="/redoc" if ServerConfig.ENABLE_API_DOCS else None,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=ServerConfig.CORS_ORIGINS,
    allow_credentials=ServerConfig.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(general.router, tags=["General"])
app.include_router(calculations.router, tags=["Calculations"])
app.include_router(payroll.router, tags=["Payroll"])
