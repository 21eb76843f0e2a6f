import logging
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tripplanner.config import settings
from tripplanner.errors import ConfigurationError, PlannerError

# ─── Logging setup (file + console) ───
_LOG_DIR = Path(settings.log_dir)
_LOG_DIR.mkdir(parents=True, exist_ok=True)

_log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

logging.basicConfig(
    level=_log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[
        logging.StreamHandler(),
        RotatingFileHandler(
            _LOG_DIR / "tripplanner.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        ),
    ],
)

# Quiet noisy libraries
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

from tripplanner.middleware import RequestGuardMiddleware
from tripplanner.routers import search, travel_plan
from tripplanner.services.llm_client import llm_client
from tripplanner.services.search_client import serp_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup — refuse to run without credentials
    missing = settings.missing_credentials()
    if missing:
        logger.critical(f"Missing required configuration: {', '.join(missing)}")
        raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")
    logger.info(f"Trip planner ready, accepting requests from {settings.cors_origin_list}")

    yield

    # Shutdown
    await llm_client.close()
    await serp_client.close()
    logger.info("Upstream clients closed")


app = FastAPI(
    title="Trip Planner",
    description="LLM trip itineraries and search-backed travel Q&A",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(RequestGuardMiddleware)


# ─── Central error handling ───

@app.exception_handler(PlannerError)
async def planner_error_handler(request: Request, exc: PlannerError):
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.message}",
            exc_info=exc.__cause__ or exc,
        )
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info(f"{request.method} {request.url.path} invalid body: {exc.errors()}")
    return JSONResponse(status_code=400, content={"ok": False, "error": "Invalid request body"})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"ok": False, "error": str(exc.detail)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"ok": False, "error": "Internal server error"})


app.include_router(travel_plan.router, prefix="/api/travel-plan", tags=["travel-plan"])
app.include_router(search.router, prefix="/api/search", tags=["search"])


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Travel backend up"


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "service": "tripplanner"}
