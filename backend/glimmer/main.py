"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from glimmer.config import settings
from glimmer.database import Base, engine

# Import routers
from glimmer.routers import users, checkins, reminder_settings, contacts, notifications, cron

# Import all models so Base.metadata knows about them
from glimmer.models.user import User                          # noqa: F401
from glimmer.models.check_in import CheckIn                   # noqa: F401
from glimmer.models.reminder_settings import ReminderSettings  # noqa: F401
from glimmer.models.emergency_contact import EmergencyContact  # noqa: F401
from glimmer.models.notification_log import NotificationLog    # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Glimmer",
    description="Daily wellbeing check-ins with inactivity reminders for users and their emergency contacts",
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
app.include_router(checkins.router, prefix="/api/users", tags=["CheckIns"])
app.include_router(reminder_settings.router, prefix="/api/users", tags=["ReminderSettings"])
app.include_router(contacts.router, prefix="/api/users", tags=["EmergencyContacts"])
app.include_router(notifications.router, prefix="/api/users", tags=["Notifications"])
app.include_router(cron.router, prefix="/api/cron", tags=["Cron"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
