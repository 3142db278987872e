"""
Serve `hht_assistant.app:app` with any ASGI server.
"""
from contextlib import asynccontextmanager
from logging import getLogger
from typing import Optional

import httpx
from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hht_assistant.config import SearchSettings, get_cors_origins
from hht_assistant.errors import SearchError, UpstreamFailure
from hht_assistant.schemas import ErrorResponse, SearchResponse
from hht_assistant.youtube import search_videos

load_dotenv()

logger = getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.settings = SearchSettings.from_env()
    async with httpx.AsyncClient() as client:
        app.state.http_client = client
        yield


app = FastAPI(
    title="HHT Assistant Search API",
    description="Relays chat queries to YouTube and returns embeddable videos.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_methods=["GET"],
    allow_headers=["*"],
)


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_settings(request: Request) -> SearchSettings:
    return request.app.state.settings


@app.exception_handler(SearchError)
async def search_error_handler(request: Request, exc: SearchError):
    payload = exc.to_response().model_dump(exclude_none=True)
    return JSONResponse(status_code=exc.status_code, content=payload)


@app.get(
    "/api/search",
    response_model=SearchResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def search(
    query: Optional[str] = None,
    client: httpx.AsyncClient = Depends(get_http_client),
    search_settings: SearchSettings = Depends(get_settings),
):
    """
    Search YouTube for embeddable videos matching a free-text query.
    """
    try:
        videos = await search_videos(client, query, search_settings)
    except SearchError:
        raise
    except Exception as e:
        logger.exception("Unexpected error while searching YouTube")
        raise UpstreamFailure(details=str(e))
    return SearchResponse(videos=videos)
