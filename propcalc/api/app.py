"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from propcalc.api.routes import calculator
from propcalc.config import settings

logging.getLogger("propcalc").setLevel(settings.log_level)

app = FastAPI(
    title="Property Investment Calculator",
    description="Stamp duty, cash flow and 30-year projections for Australian investment property",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(calculator.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
