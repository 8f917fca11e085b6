from contextlib import asynccontextmanager
import os

from dotenv import load_dotenv
from fastapi import FastAPI
import httpx
import uvicorn

dotenv_path = os.path.join(os.path.dirname(__file__), '.env')
load_dotenv(dotenv_path)

from .controllers import WatchlistController
from .core import get_config_service, logger
from .core.constants import MARKET_DATA_TIMEOUT
from .database import get_db_service
from .middlewares import register_middlewares


@asynccontextmanager
async def lifespan(app: FastAPI):
    config_service = get_config_service()
    db_service = get_db_service(config_service=config_service)
    await db_service.init_db()

    app.state.http_client = httpx.AsyncClient(
        timeout=config_service.get_float("MARKET_DATA_TIMEOUT", MARKET_DATA_TIMEOUT)
    )
    logger.info("Watchlist service started")

    yield

    await app.state.http_client.aclose()
    await db_service.dispose()
    logger.info("Watchlist service stopped")


app = FastAPI(title="Watchlist Service", lifespan=lifespan)

register_middlewares(app)

watchlist_controller = WatchlistController()
app.include_router(watchlist_controller.get_router())


@app.get("/health")
async def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("watchlist_service.main:app", host="0.0.0.0", port=8003, reload=True)
