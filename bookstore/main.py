# bookstore/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from bookstore.api import register_routers
from bookstore.data.database import Base, init_database
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database...")
    try:
        init_database()
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info(f"Tables ready: {list(Base.metadata.tables.keys())}")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Bookstore Service",
        version="1.0.0",
        lifespan=lifespan,
    )
    register_routers(app)
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
