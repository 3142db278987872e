"""
Relay a free-text query to the YouTube Data API search endpoint.

Ranking and filtering are left entirely to YouTube: this module builds the
request parameters, makes one call, and reshapes the response.
"""
from logging import getLogger
from typing import Any, Dict, List, Optional

import httpx

from hht_assistant.config import SearchSettings
from hht_assistant.errors import InvalidRequest, NotFound, UpstreamFailure
from hht_assistant.schemas import VideoResult

logger = getLogger(__name__)

YOUTUBE_SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"


def build_search_params(query: str, settings: SearchSettings) -> Dict[str, Any]:
    q = query.strip()
    if settings.query_suffix:
        q = f"{q} {settings.query_suffix}"

    params = {
        "part": "snippet",
        "q": q,
        "type": "video",
        "maxResults": settings.max_results,
        "order": settings.order,
        "videoEmbeddable": "true",
        "relevanceLanguage": "en",
        "safeSearch": "strict",
    }
    if settings.video_duration:
        params["videoDuration"] = settings.video_duration
    if settings.api_key:
        params["key"] = settings.api_key
    return params


def extract_error_detail(response: httpx.Response) -> str:
    """
    Pull YouTube's `error.message` out of an error body, falling back to
    the status line when the body isn't the usual JSON shape.
    """
    try:
        message = response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        message = None
    if message:
        return str(message)
    return f"{response.status_code} {response.reason_phrase}".strip()


def parse_video_item(item: Dict[str, Any]) -> Optional[VideoResult]:
    ident = item.get("id")
    video_id = ident.get("videoId") if isinstance(ident, dict) else None
    if not video_id:
        return None

    snippet = item.get("snippet") or {}
    thumbnails = snippet.get("thumbnails") or {}
    thumbnail = (thumbnails.get("medium") or thumbnails.get("default") or {}).get("url")

    return VideoResult(
        video_id=video_id,
        title=snippet.get("title") or "",
        description=snippet.get("description") or "",
        thumbnail=thumbnail or "",
    )


async def search_videos(
    client: httpx.AsyncClient, query: Optional[str], settings: SearchSettings
) -> List[VideoResult]:
    if query is None or not query.strip():
        raise InvalidRequest()

    params = build_search_params(query, settings)
    logger.info(f"Searching YouTube for: '{params['q']}'")

    try:
        response = await client.get(YOUTUBE_SEARCH_URL, params=params)
    except httpx.HTTPError as e:
        logger.error(f"YouTube API Error: {e!r}")
        raise UpstreamFailure(details=str(e) or e.__class__.__name__)

    if response.is_error:
        detail = extract_error_detail(response)
        logger.error(f"YouTube API Error: {response.text}")
        raise UpstreamFailure(details=detail)

    try:
        items = response.json().get("items") or []
    except (ValueError, AttributeError) as e:
        logger.error(f"YouTube API returned an unreadable body: {e}")
        raise UpstreamFailure(details="Unexpected response from YouTube")

    videos = []
    for item in items:
        if not isinstance(item, dict):
            continue
        video = parse_video_item(item)
        if video is not None:
            videos.append(video)

    if not videos:
        raise NotFound()

    videos = videos[: settings.max_results]
    logger.info(f"Found {len(videos)} videos for '{query.strip()}'")
    return videos
