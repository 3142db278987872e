import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport

from hht_assistant.config import SearchSettings

pytest_plugins = ["pytest_asyncio"]


def youtube_item(video_id, title="A video", description="", thumbnail=None):
    return {
        "kind": "youtube#searchResult",
        "id": {"kind": "youtube#video", "videoId": video_id},
        "snippet": {
            "title": title,
            "description": description,
            "thumbnails": {
                "default": {"url": f"https://i.ytimg.com/vi/{video_id}/default.jpg"},
                "medium": {"url": thumbnail or f"https://i.ytimg.com/vi/{video_id}/mqdefault.jpg"},
            },
        },
    }


GRAVITY_ITEMS = [
    youtube_item("dQw4w9WgXcQ", "What is gravity?", "Gravity explained simply"),
    youtube_item("9bZkp7q19f0", "Gravity in 5 minutes", "A short lesson"),
    youtube_item("kJQP7kiw5Fk", "Einstein and gravity", "General relativity"),
]


class FakeYouTube:
    """
    Stands in for the YouTube search endpoint. Records every request and
    answers with whatever `status` and `payload` the test sets.
    """

    def __init__(self, payload=None, status=200, exc=None):
        self.payload = {"items": GRAVITY_ITEMS} if payload is None else payload
        self.status = status
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if isinstance(self.payload, (dict, list)):
            return httpx.Response(self.status, json=self.payload)
        return httpx.Response(self.status, content=self.payload)

    @property
    def params(self):
        return self.requests[-1].url.params


@pytest.fixture(name="youtube_item")
def youtube_item_fixture():
    return youtube_item


@pytest.fixture
def fake_youtube():
    return FakeYouTube()


@pytest.fixture
def search_settings():
    return SearchSettings(api_key="test-key")


@pytest_asyncio.fixture
async def youtube_client(fake_youtube):
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_youtube)) as client:
        yield client


@pytest_asyncio.fixture
async def test_client(youtube_client, search_settings):
    from hht_assistant.app import app, get_http_client, get_settings

    app.dependency_overrides[get_http_client] = lambda: youtube_client
    app.dependency_overrides[get_settings] = lambda: search_settings

    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()

