from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from app.routers import history, volunteers
from app.core.config import settings
from app.core.exceptions import register_exception_handlers
from app.database.engine import create_db_and_tables, dispose_engine

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application...")

    if settings.AUTO_CREATE_TABLES:
        create_db_and_tables()
    else:
        logger.info("AUTO_CREATE_TABLES disabled, expecting an existing schema")

    logger.info("Application startup complete")

    yield

    logger.info("Application shutdown initiated...")
    dispose_engine()
    logger.info("Application shutdown complete")

app = FastAPI(
    title=settings.APP_NAME,
    description="Backend API for recording volunteer participation history, statistics and rankings",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FRONTEND_URL,  # Frontend URL from settings
        "http://localhost:3000",  # React default
        "http://localhost:5173",  # Vite default
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(history.router)        # History: /history/*, /volunteers/{id}/history, stats, rankings
app.include_router(volunteers.router)     # Volunteers: /volunteers/* (profiles backing the lookup)

@app.get("/")
def read_root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "modules": {
            "history": "/history/* (participation history and event completion)",
            "stats": "/volunteers/{volunteer_id}/stats, /top-volunteers (derived statistics)",
            "events": "/events/{event_id}/history (per-event rosters)",
            "volunteers": "/volunteers/* (volunteer profiles)"
        },
        "docs": "/docs",
        "redoc": "/redoc"
    }

@app.get("/health")
def health_check():
    return {"status": "healthy"}
