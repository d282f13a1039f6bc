from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from daybook.api.router import api_router
from daybook.api.routers.health import router as health_router
from daybook.core.logging import configure_logging
from daybook.core.settings import get_settings
from daybook.dependency_injection import build_container
from daybook.services.contracts import ChatCompletionClientProtocol

settings = get_settings()
configure_logging(settings.effective_log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("starting daybook assistant", extra={"app_env": settings.app_env, "model": settings.ai_model})

    container = build_container(settings)
    app.state.settings = settings
    app.state.container = container

    chat_client: ChatCompletionClientProtocol | None = None
    if settings.ai_api_key:
        chat_client = container.resolve(ChatCompletionClientProtocol)
        logger.info("chat completion client initialized", extra={"base_url": settings.ai_api_base_url})
    else:
        logger.warning("AI_API_KEY is not set, assistant endpoints will fail")

    try:
        yield
    finally:
        if chat_client is not None:
            await chat_client.close()
        logger.info("daybook assistant shutdown complete")


app = FastAPI(
    title="Daybook Assistant",
    version="0.1.0",
    docs_url="/docs" if settings.enable_swagger else None,
    redoc_url="/redoc" if settings.enable_swagger else None,
    openapi_url="/openapi.json" if settings.enable_swagger else None,
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(api_router, prefix="/api")
