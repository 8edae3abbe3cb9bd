"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from anigrid import __version__
from anigrid.config import settings
from anigrid.engine.pipeline import load_stages

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.anigrid_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="anigrid",
        description="Hexagonal mosaic of a ranked entity collection",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Stage modules register themselves on import
    load_stages()

    from anigrid.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
