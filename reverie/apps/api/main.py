"""FastAPI application entrypoint for Reverie."""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reverie.libs.logging_utils import configure_logging
from reverie.libs.ml import create_inference
from reverie.libs.schemas import get_settings
from reverie.apps.api.routes.ml import router as ml_router

configure_logging()
LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Tests may pre-populate app.state.inference with fakes.
    if getattr(app.state, "inference", None) is None:
        app.state.inference = create_inference(get_settings())
    LOGGER.info("Reverie API started")
    yield
    LOGGER.info("Reverie API stopped")


app = FastAPI(title="Reverie API", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:8080",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


app.include_router(ml_router)
