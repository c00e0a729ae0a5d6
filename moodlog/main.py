import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from moodlog.api import entries, recommendations, statistics, users
from moodlog.config import get_settings
from moodlog.db.database import engine, Base
from moodlog.engine.advice import AdviceGenerator
from moodlog.services.entries import DuplicateEntryError, EntryNotFoundError

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger("moodlog")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("=== Application Startup ===")
    Base.metadata.create_all(bind=engine)

    # One advice client for the process lifetime, handed to requests via app.state
    app.state.advice_generator = AdviceGenerator(settings)
    logger.info(f"Advice generation enabled: {app.state.advice_generator.enabled}")

    yield

    await app.state.advice_generator.close()
    logger.info("=== Shutdown Complete ===")


app = FastAPI(
    title="Mental Health Tracker API",
    description="Daily mood journaling with AI-generated recommendations",
    version="0.1.0",
    lifespan=lifespan
)

app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(entries.router, prefix="/entries", tags=["entries"])
app.include_router(recommendations.router, prefix="/recommendations", tags=["recommendations"])
app.include_router(statistics.router, prefix="/statistics", tags=["statistics"])


@app.exception_handler(DuplicateEntryError)
async def duplicate_entry_handler(request: Request, exc: DuplicateEntryError):
    return JSONResponse(
        status_code=409,
        content={"detail": str(exc), "day": exc.day.date().isoformat()}
    )


@app.exception_handler(EntryNotFoundError)
async def entry_not_found_handler(request: Request, exc: EntryNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s %s", request.method, request.url)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


@app.get("/")
async def root():
    return {"message": "Mental Health Tracker API", "docs": "/docs"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
