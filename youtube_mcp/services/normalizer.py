"""Convert loosely structured backend records into typed search results.

Backend records come from more than one shape (yt-dlp flat entries as well as
innertube-style objects with an ``author`` member), so every field is read
through ``RawRecord`` and falls back to a fixed sentinel. Normalizing never
raises.
"""
from typing import Any, Iterable, List
from youtube_mcp.models.search import (
    NO_CHANNEL_ID,
    NO_CHANNEL_NAME,
    NO_DESCRIPTION,
    NO_ID,
    NO_TITLE,
    UNKNOWN_DATE,
    ChannelSearchResult,
    ChannelVideoResult,
    VideoSearchResult,
)
from youtube_mcp.utils.records import RawRecord

_TITLE = ("title", ("title", "text"))
_VIDEO_ID = ("video_id", "videoId", "id")
_CHANNEL_NAME = (("author", "name"), "channel", "uploader", "name")
_CHANNEL_ID = (("author", "id"), "channel_id", "channelId", "uploader_id", "id")
_PUBLISHED = ("published", "publishedAt", "published_at", "upload_date", "timestamp")
_DESCRIPTION = ("description", ("description_snippet", "text"), ("snippet", "text"))


def normalize_video(raw: Any) -> VideoSearchResult:
    record = RawRecord(raw)
    return VideoSearchResult(
        title=record.first_string(_TITLE, NO_TITLE),
        video_id=record.first_string(_VIDEO_ID, NO_ID),
        channel_name=record.first_string(_CHANNEL_NAME, NO_CHANNEL_NAME),
    )


def normalize_channel(raw: Any) -> ChannelSearchResult:
    record = RawRecord(raw)
    return ChannelSearchResult(
        channel_name=record.first_string(_CHANNEL_NAME + _TITLE, NO_CHANNEL_NAME),
        channel_id=record.first_string(_CHANNEL_ID, NO_CHANNEL_ID),
    )


def normalize_channel_video(raw: Any) -> ChannelVideoResult:
    record = RawRecord(raw)
    return ChannelVideoResult(
        title=record.first_string(_TITLE, NO_TITLE),
        video_id=record.first_string(_VIDEO_ID, NO_ID),
        published_at=record.first_string(_PUBLISHED, UNKNOWN_DATE),
        description=record.first_string(_DESCRIPTION, NO_DESCRIPTION),
        thumbnail_url=record.first_url("thumbnails"),
    )


def normalize_all(records: Iterable[Any], normalizer) -> List[Any]:
    return [normalizer(raw) for raw in records or []]
