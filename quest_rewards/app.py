import asyncio
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from quest_rewards import __version__
from quest_rewards.routers.reward_router import router
from quest_rewards.middleware import RequestContextMiddleware
from quest_rewards.utils.config_loader import CONFIG, has_config_changed, reload_config
from quest_rewards.utils.content_loader import get_content, reload_content

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def config_hot_reload_task():
    """
    Background task to check for config file changes and reload.
    Interval comes from `hot_reload_interval` (seconds, default 1 hour).
    """
    while True:
        await asyncio.sleep(int(CONFIG.get("hot_reload_interval", 3600)))
        if has_config_changed():
            logger.info("Config file change detected, reloading...")
            reload_config()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fail at startup rather than on the first request if content is broken
    content = get_content()
    logger.info("Content loaded: %d items, %d rooms", len(content.items), len(content.dungeon_rooms))

    app.state.config_reload_task = asyncio.create_task(config_hot_reload_task())

    yield

    app.state.config_reload_task.cancel()
    try:
        await app.state.config_reload_task
    except asyncio.CancelledError:
        pass


app = FastAPI(
    title="Quest Reward Service",
    description="Calculates quest rewards and their audit receipts",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


app.add_middleware(RequestContextMiddleware)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Process-Time", "X-Policy-Version"]
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handling any unhandled exceptions globally."""
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.exception("[%s] Unhandled error", request_id)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "message": "An unexpected error occurred",
            "request_id": request_id
        }
    )


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "Quest Reward Service",
        "policy_version": CONFIG.get("policy_version", "unknown"),
        "hot_reload": "enabled"
    }


@app.post("/admin/reload-config")
async def manual_config_reload():
    """Manually reload game-balance config and content tables."""
    try:
        new_config = reload_config()
        content = reload_content()
    except (FileNotFoundError, ValueError) as e:
        return {
            "status": "error",
            "message": f"Failed to reload config: {str(e)}"
        }
    return {
        "status": "success",
        "message": "Configuration reloaded successfully",
        "policy_version": new_config.get("policy_version", "unknown"),
        "items": len(content.items),
    }


app.include_router(router)
