"""
EDC Console: FastAPI application entry point.

This module initializes the FastAPI application behind the EDC
administrative console. It configures logging and CORS, creates the
in-memory console session, and registers the routes of the four pages:
dashboard, provider, consumer and visualization.

The console is a presentation layer: every asset, policy, contract
definition, negotiation and transfer lives in the provider and consumer
connectors, reached through their Management APIs.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import load_settings
from app.db.client import init_session
from app.routes import consumer_routes, dashboard_routes, provider_routes, visualization_routes

settings = load_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# ------------------------------------------------------------------------------
# Application initialization
# ------------------------------------------------------------------------------

app = FastAPI(
    title="EDC Console",
    description="Administrative console for an Eclipse Dataspace Connector provider/consumer pair",
    version="0.1.0"
)

# ------------------------------------------------------------------------------
# Middleware configuration
# ------------------------------------------------------------------------------

# CORS middleware: allows cross-origin requests from the browser front-end.
# Adjust 'allow_origins' for production deployment.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ------------------------------------------------------------------------------
# Application startup events
# ------------------------------------------------------------------------------

@app.on_event("startup")
async def startup_session():
    """
    Create the console session on application startup.

    Every cache and page state starts empty; nothing survives a restart.
    """

    init_session(settings)

# ------------------------------------------------------------------------------
# API routes registration
# ------------------------------------------------------------------------------

app.include_router(dashboard_routes.router, prefix="/dashboard", tags=["Dashboard"])
app.include_router(provider_routes.router, prefix="/provider", tags=["Provider"])
app.include_router(consumer_routes.router, prefix="/consumer", tags=["Consumer"])
app.include_router(visualization_routes.router, prefix="/visualization", tags=["Visualization"])
