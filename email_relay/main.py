"""
FastAPI application for the email relay.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from email_relay import __version__
from email_relay.config import settings
from email_relay.core.logging import configure_logging, get_logger
from email_relay.handlers import get_handler_names
from email_relay.routers.functions import router as functions_router

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    configure_logging(settings.log_level, json_output=settings.json_logs)
    log.info("application_starting", functions=get_handler_names())

    yield

    log.info("application_stopped")


app = FastAPI(
    title="Email Relay",
    description="Sends HTML email over SMTP and re-hosts images for email",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(functions_router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


def run() -> None:
    """Serve the app on HOST:PORT."""
    configure_logging(settings.log_level, json_output=settings.json_logs)
    log.info("server_listening", host=settings.host, port=settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
