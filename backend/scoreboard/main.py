import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scoreboard.config import settings
from scoreboard.routers import games, scoreboard, teams
from scoreboard.utils.espn_client import get_espn_client

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await get_espn_client().close()
    logging.getLogger(__name__).info("ESPN client closed")


app = FastAPI(
    title="Scoreboard API",
    version="0.1.0",
    description="Live NFL, MLS, EPL and MLB scoreboards",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(scoreboard.router)
app.include_router(teams.router)
app.include_router(games.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
