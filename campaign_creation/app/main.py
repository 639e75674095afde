"""Main file to start backend server."""

import typing
from contextlib import asynccontextmanager
from importlib.metadata import version

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI

from .api import router as api_router
from .core.environment import settings
from .core.log_config import logger, setup_logging
from .core.session_registry import InMemorySessionRegistry
from .middlewares.logging_context import add_logging_middleware

# this needs to be called per uvicorn worker
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> typing.AsyncGenerator[None, None]:
    # On startup
    logger.info('Initializing app')

    yield

    # On cleanup
    session_ids = app.state.session_registry.session_ids()
    logger.info('Shutting down gracefully, discarding %d open session(s)', len(session_ids))
    for session_id in session_ids:
        logger.debug('Discarding campaign creation session', session_id=str(session_id))

    logger.info('Graceful shutdown complete')


app = FastAPI(
    title='Campaign Creation Service',
    description='Drive advertising campaign drafts from creation to publication',
    version=version('campaign-creation'),
    redoc_url='/',
    docs_url='/docs',
    openapi_url='/openapi.json',
    lifespan=lifespan,
)
app.state.session_registry = InMemorySessionRegistry(max_sessions=settings.MAX_SESSIONS)

# Middlewares are executed in REVERSE order from when they are added

add_logging_middleware(app)
app.add_middleware(CorrelationIdMiddleware)

app.include_router(api_router)
