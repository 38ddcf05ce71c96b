from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
# quiet HTTP client debug logs
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)


# ✅ middlewares
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ routers
from routers import (
    assignments, config, directory, evaluations, intake,
    pdf_reports, profiles, reports, teachers,
)
from database.init_db import init_db

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
)

# ✅ CORS (dashboard frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ request latency (X-Latency-Ms response header)
app.add_middleware(TimingMiddleware, slow_ms=settings.SLOW_REQUEST_MS)

# ✅ global error handlers (one JSON error format)
add_error_handlers(app)

# ✅ /v1 prefix
app.include_router(teachers.router,     prefix="/v1")
app.include_router(assignments.router,  prefix="/v1")
app.include_router(profiles.router,     prefix="/v1")
app.include_router(directory.router,    prefix="/v1")
app.include_router(intake.router,       prefix="/v1")
app.include_router(evaluations.router,  prefix="/v1")
app.include_router(reports.router,      prefix="/v1")
app.include_router(pdf_reports.router,  prefix="/v1")
app.include_router(config.router,       prefix="/v1")


# ✅ health check
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "API is running"}


@app.on_event("startup")
def _create_tables():
    init_db()


@app.get("/")
def root():
    return {"message": f"{settings.APP_TITLE} - {settings.APP_DESCRIPTION}"}
