# src/app/main.py
from __future__ import annotations
import logging
import sys
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from src.app.config import settings
from src.app.infra.storage.base import IMAGES_ROUTE
from src.app.routers.auth import router as auth_router
from src.app.routers.sauces import router as sauces_router

# Simple stdout logging (fine for dev and containers)
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

app = FastAPI(title="Hot Sauce API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(sauces_router)

Path(settings.IMAGES_DIR).mkdir(parents=True, exist_ok=True)
app.mount(f"/{IMAGES_ROUTE}", StaticFiles(directory=settings.IMAGES_DIR), name=IMAGES_ROUTE)


@app.get("/health")
def health():
    return {"ok": True}
