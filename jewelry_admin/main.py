# main.py
import logging

from fastapi import Depends, FastAPI

from .config.database import get_database_manager, lifespan
from .config.settings import get_settings
from .routers import analytics, coupons, customers, orders, policies, products, reviews, shipping
from .schemas.common import ErrorResponse, HealthCheckResponse, RootResponse
from .utils.dependencies import require_admin
from .utils.errors import register_exception_handlers
from .utils.rate_limit import api_rate_limit
from .utils.serializers import utcnow

settings = get_settings()

# Setup logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

if not settings.admin_api_key:
    logger.warning("⚠️  ADMIN_API_KEY is not set, admin routes are open")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    lifespan=lifespan
)

register_exception_handlers(app)

api_dependencies = [Depends(api_rate_limit), Depends(require_admin)]
error_responses = {code: {"model": ErrorResponse} for code in (400, 401, 404, 429, 500, 503)}

for module in (products, coupons, customers, orders, shipping, policies, reviews, analytics):
    app.include_router(module.router, prefix=settings.api_prefix, dependencies=api_dependencies, responses=error_responses)


@app.get("/", response_model=RootResponse, tags=["Root"])
async def root():
    """Root endpoint - Always accessible"""
    return RootResponse(
        message=f"Welcome to {settings.app_name}",
        version=settings.app_version,
        docs="/docs",
        health="/health",
        status="running",
        timestamp=utcnow().isoformat(),
    )


@app.get("/health", response_model=HealthCheckResponse, tags=["Health"])
async def health_check():
    """Health check endpoint - Always accessible"""
    db_manager = get_database_manager()
    try:
        if db_manager.is_connected():
            await db_manager.get_database().command('ping')
            db_status = "connected"
        else:
            db_status = "disconnected"
    except Exception as e:
        db_status = f"error: {str(e)}"

    return HealthCheckResponse(
        status="healthy",
        database=db_status,
        timestamp=utcnow().isoformat(),
        version=settings.app_version,
    )
