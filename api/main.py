# api/main.py
import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

APP_ENV = os.getenv("APP_ENV", "local")
# Must run before database.db reads DATABASE_URL / POSTGRES_*
load_dotenv(".env.local" if APP_ENV == "local" else ".env")

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

from database.db import init_db  # noqa: E402
from api.routers import candidates, health, populate, scrape  # noqa: E402

LOCAL_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


def _allowed_origins() -> list:
    if APP_ENV == "local":
        return LOCAL_ORIGINS
    raw = os.getenv("ALLOWED_ORIGINS", "")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"🚀 Recruiting backend starting (env={APP_ENV})")
    try:
        init_db()
    except Exception as e:
        logger.error(f"❌ Could not create recruiting tables: {e}", exc_info=True)
        raise
    yield
    logger.info("🛑 Recruiting backend stopped")


app = FastAPI(
    title="PhD Recruiting API",
    version="1.0.0",
    description="Discovers PhD candidates from academic sources and serves the recruiting dashboard.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(populate.router, prefix="/populate", tags=["Population"])
app.include_router(candidates.router, prefix="/candidates", tags=["Candidates"])
app.include_router(scrape.router, prefix="/scrape", tags=["Scrape"])


@app.get("/")
async def root():
    return {"message": "PhD recruiting backend is up", "env": APP_ENV}
