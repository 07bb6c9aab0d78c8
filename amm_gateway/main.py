from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routers import admin, events, ledger, liquidity, swap
from .shared.config import get_settings


logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = FastAPI(title="AMM Gateway")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(swap.router)
app.include_router(liquidity.router)
app.include_router(admin.router)
app.include_router(events.router)
app.include_router(ledger.router)


@app.get("/health")
def health():
    return {"status": "ok"}
