"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.database import Base, engine

# Import routers
from app.routers import users, venues, resources, bookings, feedback, status_feed

# Import all models so Base.metadata knows about them
from app.models.user import User                         # noqa: F401
from app.models.venue import Venue                       # noqa: F401
from app.models.resource import Resource                 # noqa: F401
from app.models.booking import Booking                   # noqa: F401
from app.models.booking_history import BookingHistory    # noqa: F401
from app.models.feedback import Feedback                 # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Venue Booking",
    description="Venue booking requests with director → secretary → IT approval and post-event feedback",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(venues.router, prefix="/api/venues", tags=["Venues"])
app.include_router(resources.router, prefix="/api/resources", tags=["Resources"])
app.include_router(bookings.router, prefix="/api/bookings", tags=["Bookings"])
app.include_router(feedback.router, prefix="/api/feedback", tags=["Feedback"])
app.include_router(status_feed.router, tags=["StatusFeed"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
