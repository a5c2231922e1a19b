"""
App entrypoint.

- Loads the bundled dataset once before serving (fails fast on a corrupt bundle)
- Welcome text on /, v1 routes under /v1, Swagger UI at /docs
- `python main.py` runs uvicorn on settings.host:settings.port
"""
from __future__ import annotations
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

import routers
from config import settings
from dataset import get_dataset
from errors import install_error_handlers
from logging_config import configure_logging

logger = logging.getLogger(__name__)

WELCOME_TEXT = "Welcome to The Trivia Time API!✨🦄"


@asynccontextmanager
async def lifespan(app: FastAPI):
    dataset = get_dataset().load()
    logger.info(
        "%s %s ready: %d categories, %d questions",
        settings.service_name, settings.version, len(dataset.categories), len(dataset.questions),
    )
    yield


configure_logging()

app = FastAPI(
    title=settings.service_name,
    version=settings.version,
    description=settings.description,
    lifespan=lifespan,
)

# Error layer first: middleware added later wraps it, so CORS headers reach 500s too
install_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", response_class=PlainTextResponse, include_in_schema=False)
def welcome() -> str:
    return WELCOME_TEXT


app.include_router(routers.router, prefix="/v1")


if __name__ == "__main__":
    import uvicorn

    logger.info("Trivia Time API is running at %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
