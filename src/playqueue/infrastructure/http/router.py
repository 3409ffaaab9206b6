"""HTTP resource adapter exposing the play queue.

Routes (relative to the configured prefix)::

    GET  /          --> [url, ...]           the whole queue
    GET  /{index}   --> {"url": ...}         a single entry, negative indexes allowed
    PUT  /          {"queue": [url, ...]}    replace the whole queue
    PUT  /{index}   {"url": ...}             replace a single entry
    POST /          {"url": ...}             append, possibly via a preprocessor

None of the routes except POST consult the preprocessors.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import APIRouter, FastAPI, Request, Response, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from playqueue.domain.shared.exceptions import DomainError
from playqueue.domain.shared.messages import LogTemplates, ResponseMessages
from playqueue.domain.shared.types import QueueEntry

if TYPE_CHECKING:
    from playqueue.application.services.queue_service import QueueStore
    from playqueue.config.container import Container

logger = logging.getLogger(__name__)


# ============================================
# Request / Response Models
# ============================================


class ReplaceQueueRequest(BaseModel):
    queue: list[QueueEntry] | None = None


class UrlRequest(BaseModel):
    url: QueueEntry | None = None


class UrlResponse(BaseModel):
    url: QueueEntry


# ============================================
# Routes
# ============================================


def create_router(store: QueueStore) -> APIRouter:
    router = APIRouter(tags=["playqueue"])

    @router.get("/", response_model=list[QueueEntry])
    async def list_queue() -> list[QueueEntry]:
        return await store.get_all()

    @router.get("/{index}", response_model=UrlResponse)
    async def get_entry(index: int) -> UrlResponse:
        return UrlResponse(url=await store.get_at(index))

    @router.put("/", status_code=status.HTTP_204_NO_CONTENT)
    async def replace_queue(body: ReplaceQueueRequest | None = None) -> Response:
        await store.replace_all(body.queue if body else None)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.put("/{index}", status_code=status.HTTP_204_NO_CONTENT)
    async def replace_entry(index: int, body: UrlRequest | None = None) -> Response:
        await store.replace_at(index, body.url if body else None)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.post("/", response_class=PlainTextResponse)
    async def append_entry(body: UrlRequest | None = None) -> PlainTextResponse:
        result = await store.append(body.url if body else None)
        if result.pending:
            return PlainTextResponse(
                ResponseMessages.ACCEPTED_PROCESSING, status_code=status.HTTP_202_ACCEPTED
            )
        return PlainTextResponse(ResponseMessages.SUCCESS, status_code=status.HTTP_200_OK)

    return router


async def domain_error_handler(request: Request, exc: DomainError) -> PlainTextResponse:
    """Report request-time domain failures as 400 with the error message."""
    logger.debug("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return PlainTextResponse(exc.message, status_code=status.HTTP_400_BAD_REQUEST)


# ============================================
# Application
# ============================================


def create_app(container: Container) -> FastAPI:
    """Build the FastAPI application around an initialized container."""
    store = container.queue_store

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await container.shutdown()
        logger.info(LogTemplates.SERVICE_STOPPED)

    app = FastAPI(title="playqueue", lifespan=lifespan)
    app.add_exception_handler(DomainError, domain_error_handler)
    app.include_router(create_router(store), prefix=container.settings.server.prefix)
    app.state.container = container
    return app
