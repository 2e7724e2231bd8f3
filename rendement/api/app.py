"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rendement.config import settings
from rendement.api.routes import analysis, sell_or_keep, snowball, tax

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Rendement",
    description="Investment return and tax engine for Portuguese rental property",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analysis.router)
app.include_router(tax.router)
app.include_router(snowball.router)
app.include_router(sell_or_keep.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
