import asyncio
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.blockchain import ChainClient
from .core.config import Settings
from .routers import status
from .services.startup import bootstrap, load_settings
from .services.updater import UpdateCycleExecutor, UpdateLoop, make_target_set

logger = logging.getLogger(__name__)


def build_update_loop(settings: Settings, client: ChainClient) -> UpdateLoop:
    """Wire the executor and loop with the configured targets and interval."""
    executor = UpdateCycleExecutor(client, method_name=settings.UPDATE_METHOD)
    return UpdateLoop(
        executor,
        targets=lambda: make_target_set(settings.BAND_CONTRACT_ADDRESSES),
        interval_seconds=settings.UPDATE_INTERVAL_SECONDS,
    )


def create_app(settings: Settings, client: ChainClient, update_loop: UpdateLoop) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Run the update loop in the background for the app's lifetime."""
        app.state.loop_task = asyncio.create_task(update_loop.run_forever())
        logger.info("Update loop started and running in background")

        yield

        logger.info("Shutting down update loop...")
        app.state.loop_task.cancel()
        try:
            await app.state.loop_task
        except asyncio.CancelledError:
            pass

    app = FastAPI(
        title=settings.NAME,
        description="Band oracles updater",
        version=settings.VERSION,
        docs_url="/api",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.client = client
    app.state.loop_task = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(status.router)
    return app


def main() -> None:
    env_path = Path(os.getenv("ENV_FILE", ".env"))
    if env_path.exists():
        load_dotenv(env_path)
    else:
        load_dotenv()

    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    client = bootstrap(settings)
    update_loop = build_update_loop(settings, client)

    if settings.API_ENABLED:
        app = create_app(settings, client, update_loop)
        uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
    else:
        asyncio.run(update_loop.run_forever())
