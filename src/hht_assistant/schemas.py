from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class VideoResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    video_id: str = Field(alias="videoId")
    title: str
    description: str = ""
    thumbnail: str = ""

    @property
    def embed_url(self) -> str:
        return f"https://www.youtube.com/embed/{self.video_id}"


class SearchResponse(BaseModel):
    videos: List[VideoResult]


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
