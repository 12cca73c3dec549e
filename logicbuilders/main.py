# logicbuilders/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from logicbuilders import __version__
from logicbuilders.api import api_router, register_exception_handlers
from logicbuilders.data.database import init_db
from logicbuilders.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database")
    init_db()
    yield
    logger.info("Shutting down")


def create_app() -> FastAPI:
    app = FastAPI(
        title="LogicBuilders",
        version=__version__,
        lifespan=lifespan,
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
