from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.api.routers import hotels
from app.core.config import settings
from app.core.database import get_db
import logging

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Hotel Search API",
    description="Hotel listing search with cheapest room, reviews and radius filters",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(hotels.router, prefix="/api/v1/hotels", tags=["hotels"])


@app.get("/")
def root():
    return {"message": "Hotel Search API"}


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Health check endpoint that verifies the database"""
    health_status = {
        "status": "healthy",
        "services": {}
    }

    try:
        db.execute(text("SELECT 1"))
        health_status["services"]["database"] = "healthy"
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        health_status["status"] = "unhealthy"
        health_status["services"]["database"] = "unhealthy"

    return health_status
