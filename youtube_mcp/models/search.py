from enum import Enum
from typing import Iterable, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

NO_TITLE = "No title"
NO_ID = "No ID"
NO_CHANNEL_NAME = "No channel name"
NO_CHANNEL_ID = "No channel ID"
UNKNOWN_DATE = "Unknown date"
NO_DESCRIPTION = "No description"
NO_THUMBNAIL = ""


class SortKey(str, Enum):
    RELEVANCE = "relevance"
    DATE = "date"
    RATING = "rating"
    VIEW_COUNT = "viewCount"
    TITLE = "title"
    VIDEO_COUNT = "videoCount"

    @classmethod
    def coerce(cls, value: "SortKey | str | None", allowed: Optional[Iterable["SortKey"]] = None) -> "SortKey":
        """Map a caller-supplied sort value onto a SortKey, falling back to rating."""
        if isinstance(value, cls):
            key = value
        else:
            try:
                key = cls(str(value).strip())
            except ValueError:
                return cls.RATING
        if allowed is not None and key not in set(allowed):
            return cls.RATING
        return key


VIDEO_SORT_KEYS = (
    SortKey.RELEVANCE,
    SortKey.DATE,
    SortKey.RATING,
    SortKey.VIEW_COUNT,
    SortKey.TITLE,
)
CHANNEL_SORT_KEYS = VIDEO_SORT_KEYS + (SortKey.VIDEO_COUNT,)


class _Result(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class VideoSearchResult(_Result):
    title: str = NO_TITLE
    video_id: str = NO_ID
    channel_name: str = NO_CHANNEL_NAME

class ChannelSearchResult(_Result):
    channel_name: str = NO_CHANNEL_NAME
    channel_id: str = NO_CHANNEL_ID

class ChannelVideoResult(_Result):
    title: str = NO_TITLE
    video_id: str = NO_ID
    published_at: str = UNKNOWN_DATE
    description: str = NO_DESCRIPTION
    thumbnail_url: str = NO_THUMBNAIL
