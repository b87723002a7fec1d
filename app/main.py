"""
app/main.py

Purpose: Application entry point

- Initializes FastAPI app
- Loads configuration and logging
- Registers API routes (OTP, admission form)
- Runs the expired-OTP sweeper for the app's lifetime
- No business logic should be written here
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from contextlib import asynccontextmanager, suppress
import asyncio
import time

from app.core.config import settings, validate_settings
from app.core.errors import add_exception_handlers
from app.core.logging import setup_logging, get_logger
from app.api import otp, form
from app.api.deps import get_otp_service, get_form_service, close_services
from utils.constants import LIVENESS_MESSAGE

# Initialize logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info("🚀 Starting Admission backend...")

    try:
        logger.info("Validating configuration...")
        missing = validate_settings()
        if missing:
            logger.warning(
                f"⚠️ Missing configuration: {', '.join(missing)}. "
                "Requests that need them will fail with CONFIGURATION_ERROR"
            )
        else:
            logger.info("✅ Configuration validated")
    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    sweeper = None
    if settings.OTP_SWEEP_INTERVAL_SECONDS > 0:
        sweeper = asyncio.create_task(
            get_otp_service().store.run_sweeper(settings.OTP_SWEEP_INTERVAL_SECONDS)
        )

    logger.info("🎉 Admission backend started successfully!")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug Mode: {settings.DEBUG}")

    yield  # Application runs here

    logger.info("🛑 Shutting down Admission backend...")

    if sweeper:
        sweeper.cancel()
        with suppress(asyncio.CancelledError):
            await sweeper

    close_services()
    logger.info("👋 Admission backend shut down successfully")


app = FastAPI(
    title="Admission Backend",
    description="OTP verification and admission form forwarding",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time header to all responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    # Log slow requests
    if process_time > 5.0:  # More than 5 seconds
        logger.warning(
            f"Slow request detected: {request.method} {request.url.path}",
            extra={"process_time": process_time}
        )

    return response


add_exception_handlers(app)

app.include_router(otp.router, tags=["OTP"])
app.include_router(form.router, tags=["Admission Form"])


@app.get("/", response_class=PlainTextResponse, tags=["Health"])
async def root():
    """Liveness string."""
    return LIVENESS_MESSAGE


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Reports whether the external endpoints are configured and how many OTPs
    are pending.
    """
    otp_service = get_otp_service()
    form_service = get_form_service()

    checks = {
        "messaging": "configured" if otp_service.messenger.is_configured() else "not_configured",
        "sheet": "configured" if form_service.sheet.is_configured() else "not_configured",
    }
    healthy = all(value == "configured" for value in checks.values())

    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy" if healthy else "degraded",
            "timestamp": time.time(),
            "environment": settings.ENVIRONMENT,
            "version": "1.0.0",
            "pending_otps": len(otp_service.store),
            "checks": checks,
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
