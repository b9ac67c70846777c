# fonsterkalkyl/main.py
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from . import __version__
from .config import get_settings
from .logging_config import get_logger, setup_logging
from .pricing.errors import IncompleteJobError, PriceListError
from .routers import metrics, pricing, quote

settings = get_settings()

setup_logging(
    level=settings.log_level,
    log_dir=settings.log_dir if settings.log_to_file else None,
    rotation=settings.log_rotation,
    retention=settings.log_retention,
)
logger = get_logger(__name__)


# ----------------------------------------------------
# App init
# ----------------------------------------------------
app = FastAPI(title="Fönsterkalkyl", version=__version__)
logger.info(f"startup env={settings.app_env} price_list_configured={bool(settings.price_list_url)}")


# ----------------------------------------------------
# Health
# ----------------------------------------------------
@app.get("/health", include_in_schema=True)
def health() -> dict:
    return {"status": "ok"}


# ----------------------------------------------------
# Logging middleware
# ----------------------------------------------------
@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    latency_ms = round((time.time() - start) * 1000, 2)
    logger.debug(
        f"request_finished method={request.method} path={request.url.path} "
        f"status_code={response.status_code} latency_ms={latency_ms}"
    )
    return response


# ----------------------------------------------------
# Error mapping
# ----------------------------------------------------
@app.exception_handler(IncompleteJobError)
def incomplete_job_handler(request: Request, exc: IncompleteJobError):
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "issues": [i.as_dict() for i in exc.issues]},
    )


@app.exception_handler(PriceListError)
def price_list_handler(request: Request, exc: PriceListError):
    return JSONResponse(status_code=502, content={"detail": str(exc)})


# ----------------------------------------------------
# Routers
# ----------------------------------------------------
app.include_router(pricing.router)
app.include_router(quote.router)
app.include_router(metrics.router)  # /metrics
