"""FastAPI application entry point."""
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from campus_events.config import settings
from campus_events.database import Base, engine

# Import routers
from campus_events.routers import auth, accounts, events, registrations, resources, stats

# Import all models so Base.metadata knows about them
from campus_events.models.account import Account, RoleAssignment, Credential  # noqa: F401
from campus_events.models.resource import Resource                          # noqa: F401
from campus_events.models.event import Event                                # noqa: F401
from campus_events.models.registration import EventRegistration             # noqa: F401
from campus_events.models.event_mutation import EventMutation               # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="University Events",
    description="Campus event proposals, admin approval and capacity-limited student registration",
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
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(accounts.router, prefix="/api/accounts", tags=["Accounts"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(registrations.router, prefix="/api/registrations", tags=["Registrations"])
app.include_router(resources.router, prefix="/api/resources", tags=["Resources"])
app.include_router(stats.router, prefix="/api/stats", tags=["Stats"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}


def run():
    """Serve the API with uvicorn (``campus-events`` console script)."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
