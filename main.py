from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.orm import Session
from database import Base, engine, SessionLocal, get_db

from routers.people import people_router
from routers.tracker_types import tracker_type_router
from routers.trackers import tracker_router
from routers.categories import category_router
from routers.rounds import round_router
from routers.entries import entry_router
from routers.weights import weight_router
from routers.settings import settings_router

from models.person import Person
from models.tracker_type import TrackerType
from models.tracker import Tracker
from models.category import Category
from models.round import Round, RoundCategory
from models.entry import Entry
from models.weight_entry import WeightEntry
from models.app_settings import AppSettings

from config import settings
from functions.app_settings import load_app_config
from utils.errors import TrackerError

import logging
import logging.handlers
import time
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError

SERVICE_NAME = "habit-wheel-api"
NO_STORE = {"Cache-Control": "no-store"}

app = FastAPI(title=SERVICE_NAME, version="1.0.0")
Base.metadata.create_all(bind=engine)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logs_dir = Path(settings.LOG_DIR)


# ✅ Setup logging configuration inline
def setup_logging():
    """Console logging with colors plus rotating api/error log files"""

    class ColoredFormatter(logging.Formatter):
        COLORS = {
            'DEBUG': '\033[36m',    # Cyan
            'INFO': '\033[32m',     # Green
            'WARNING': '\033[33m',  # Yellow
            'ERROR': '\033[31m',    # Red
            'CRITICAL': '\033[35m', # Magenta
            'RESET': '\033[0m'      # Reset
        }

        def format(self, record):
            if settings.LOG_COLORS.lower() == "true" and getattr(record, 'color', False):
                level_color = self.COLORS.get(record.levelname, '')
                reset_color = self.COLORS['RESET']
                original_levelname = record.levelname
                record.levelname = f"{level_color}{record.levelname}{reset_color}"
                formatted = super().format(record)
                record.levelname = original_levelname
                return formatted
            return super().format(record)

    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logger = logging.getLogger("habit_wheel")
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(ColoredFormatter(
        fmt='%(asctime)s | %(levelname)-8s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(console_handler)

    if settings.LOG_TO_FILE.lower() == "true":
        logs_dir.mkdir(exist_ok=True)
        file_formatter = logging.Formatter(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        file_handler = logging.handlers.RotatingFileHandler(
            filename=logs_dir / "api.log",
            maxBytes=settings.LOG_MAX_FILE_SIZE,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)

        error_handler = logging.handlers.RotatingFileHandler(
            filename=logs_dir / "errors.log",
            maxBytes=settings.LOG_MAX_FILE_SIZE // 2,
            backupCount=3,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(file_formatter)

        logger.addHandler(file_handler)
        logger.addHandler(error_handler)

    logger.propagate = False
    return logger

# ✅ Initialize logger
logger = setup_logging()


def format_json_for_log(data, max_length=1000):
    """Format data as JSON for logging"""
    try:
        json_str = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if len(json_str) > max_length:
            return json_str[:max_length] + "... [truncated]"
        return json_str
    except (TypeError, ValueError):
        return str(data)


SAFE_BODY_LOG_BYTES = 16_000

def _is_json(content_type: Optional[str]) -> bool:
    return bool(content_type and content_type.split(";")[0].strip().lower() == "application/json")


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    request_id = f"req_{int(time.time() * 1000)}"
    start_time = time.time()

    client_ip = request.client.host if request.client else "unknown"
    logger.info(f"🔵 [{request_id}] {request.method} {request.url.path} | Client: {client_ip}", extra={"color": True})

    if request.query_params:
        logger.info(f"🔍 [{request_id}] Query: {dict(request.query_params)}", extra={"color": True})

    if _is_json(request.headers.get("content-type")):
        raw = await request.body()  # Starlette caches this, downstream can still read
        if raw:
            text_body = raw[:SAFE_BODY_LOG_BYTES].decode("utf-8", errors="replace")
            if len(raw) > SAFE_BODY_LOG_BYTES:
                text_body += "... [truncated]"
            logger.info(f"📄 [{request_id}] Body: {text_body}", extra={"color": True})

    try:
        response = await call_next(request)
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(
            f"💥 [{request_id}] EXCEPTION: {request.method} {request.url.path} | Error: {str(e)} | Time: {process_time:.3f}s",
            exc_info=True,
            extra={"color": True},
        )
        raise

    process_time = time.time() - start_time
    emoji = "✅" if response.status_code < 300 else "🔄" if response.status_code < 400 else "⚠️" if response.status_code < 500 else "❌"
    logger.info(
        f"{emoji} [{request_id}] {response.status_code} | {process_time:.3f}s",
        extra={"color": True},
    )

    if process_time > 1.0:
        logger.warning(f"🐌 [{request_id}] SLOW REQUEST: {process_time:.3f}s for {request.method} {request.url.path}", extra={"color": True})

    return response


# ✅ Exception handlers: every error body is {"error": "..."}
@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError):
    logger.warning(
        f"⚠️ {type(exc).__name__}: {request.method} {request.url.path} - {exc.message}",
        extra={'color': True}
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def _validation_message(errors) -> str:
    if not errors:
        return "Request validation failed"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    message = str(first.get("msg", "invalid value")).removeprefix("Value error, ")
    return f"{'.'.join(location)}: {message}" if location else message


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    error_details = exc.errors()

    logger.error(
        f"🔴 VALIDATION ERROR: {request.method} {request.url.path}",
        extra={'color': True}
    )
    logger.error(f"🔴 Details: {format_json_for_log(error_details)}")

    return JSONResponse(
        status_code=400,
        content={"error": _validation_message(error_details)}
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"💥 UNHANDLED EXCEPTION: {request.method} {request.url.path} - {str(exc)}",
        exc_info=True,
        extra={'color': True}
    )

    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"}
    )


# ✅ Application lifecycle events
@app.on_event("startup")
async def startup_event():
    logger.info("🚀 Habit Wheel API starting up...", extra={'color': True})

    db = SessionLocal()
    try:
        app.state.app_config = load_app_config(db)
    finally:
        db.close()

    logger.info(f"⚙️ App config: {app.state.app_config}", extra={'color': True})
    logger.info("✅ Habit Wheel API started successfully!", extra={'color': True})

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("🛑 Habit Wheel API shutting down...", extra={'color': True})


# ✅ Include routers
app.include_router(people_router)
app.include_router(tracker_type_router)
app.include_router(tracker_router)
app.include_router(category_router)
app.include_router(round_router)
app.include_router(entry_router)
app.include_router(weight_router)
app.include_router(settings_router)


# ✅ Probes
@app.get("/health")
async def health_check():
    return JSONResponse(
        content={
            "status": "ok",
            "service": SERVICE_NAME,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        headers=NO_STORE,
    )


@app.get("/ready")
def readiness_check(db: Session = Depends(get_db)):
    """Ready once the database answers"""
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"❌ Readiness check failed: {e}", extra={'color': True})
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "service": SERVICE_NAME,
                "database": "error",
                "error": str(e),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
            headers=NO_STORE,
        )

    return JSONResponse(
        content={
            "status": "ready",
            "service": SERVICE_NAME,
            "database": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        headers=NO_STORE,
    )


@app.get("/")
async def root():
    return {
        "message": "Welcome to the Habit Wheel API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
