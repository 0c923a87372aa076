import asyncio
import re
from typing import Callable, List, Optional
from pydantic import ValidationError
from youtube_mcp.config import settings
from youtube_mcp.core.client import YouTubeClient
from youtube_mcp.core.errors import (
    ChannelNotFound,
    InvalidInput,
    NoCaptions,
    RetrievalFailure,
    YouTubeServiceError,
)
from youtube_mcp.models.search import (
    CHANNEL_SORT_KEYS,
    VIDEO_SORT_KEYS,
    ChannelSearchResult,
    ChannelVideoResult,
    SortKey,
    VideoSearchResult,
)
from youtube_mcp.models.transcript import TranscriptChunk
from youtube_mcp.providers.youtube import YouTubeProvider
from youtube_mcp.services.normalizer import (
    normalize_all,
    normalize_channel,
    normalize_channel_video,
    normalize_video,
)
from youtube_mcp.utils.chunker import Chunker, policy_from_options
from youtube_mcp.utils.logger import logger

_WATCH_ID = re.compile(r"[?&]v=([^&]+)")
_SHORT_ID = re.compile(r"youtu.be/([^?]+)")


def extract_video_id(url: str) -> Optional[str]:
    m = _WATCH_ID.search(url or "")
    if m:
        return m.group(1)
    m = _SHORT_ID.search(url or "")
    if m:
        return m.group(1)
    return None


class YoutubeService:
    """Transcript, search and channel listing operations.

    A new client is built from ``client_factory`` for every call, so calls
    share no state. Blocking client calls run in a worker thread.
    """

    def __init__(self, client_factory: Callable[[], YouTubeClient] = YouTubeProvider):
        self.client_factory = client_factory

    async def get_transcript(
        self,
        video_url: str,
        chunk_size: Optional[int] = None,
        chunk_by_silence: bool = False,
        silence_threshold: Optional[int] = None,
    ) -> List[TranscriptChunk]:
        video_id = extract_video_id(video_url)
        if not video_id:
            raise InvalidInput()
        try:
            chunker = Chunker(policy_from_options(chunk_size, chunk_by_silence, silence_threshold))
        except ValidationError as e:
            raise InvalidInput("Invalid chunking options") from e

        try:
            client = self.client_factory()
            tracks = await asyncio.to_thread(client.get_caption_tracks, video_id)
            if not tracks:
                raise NoCaptions()
            segments = await asyncio.to_thread(client.get_transcript_segments, video_id)
        except YouTubeServiceError:
            raise
        except Exception as e:
            logger.exception(f"Failed to fetch transcript for {video_id}: {e}")
            raise RetrievalFailure() from e

        return chunker.chunk(segments)

    async def get_transcript_text(self, video_id: str) -> str:
        chunks = await self.get_transcript(f"https://www.youtube.com/watch?v={video_id}")
        return " ".join(c.text for c in chunks)

    async def search_videos(self, query: str, sort_by: str = SortKey.RATING.value) -> List[VideoSearchResult]:
        sort = SortKey.coerce(sort_by, VIDEO_SORT_KEYS)
        records = await self._search(query, "video", sort, "Failed to search videos")
        return normalize_all(records.get("videos"), normalize_video)[:settings.SEARCH_MAX_RESULTS]

    async def search_channels(self, query: str, sort_by: str = SortKey.RATING.value) -> List[ChannelSearchResult]:
        sort = SortKey.coerce(sort_by, CHANNEL_SORT_KEYS)
        records = await self._search(query, "channel", sort, "Failed to search channels")
        return normalize_all(records.get("channels"), normalize_channel)[:settings.SEARCH_MAX_RESULTS]

    async def _search(self, query: str, result_type: str, sort: SortKey, failure: str) -> dict:
        try:
            client = self.client_factory()
            records = await asyncio.to_thread(
                client.search, query, result_type, sort, settings.SEARCH_MAX_RESULTS
            )
        except Exception as e:
            logger.exception(f"{failure} for {query!r}: {e}")
            raise RetrievalFailure(failure) from e
        records = records or {}
        logger.info(f"Search {result_type} {query!r} (sort={sort.value}) returned "
                    f"{len(records.get('videos') or [])} videos, {len(records.get('channels') or [])} channels")
        return records

    async def get_channel_videos(
        self, channel_id: str, max_results: int = settings.CHANNEL_VIDEOS_DEFAULT
    ) -> List[ChannelVideoResult]:
        limit = max(1, min(int(max_results), settings.CHANNEL_VIDEOS_MAX))
        try:
            client = self.client_factory()
            channel = await asyncio.to_thread(client.get_channel, channel_id)
            if not channel:
                raise ChannelNotFound(f"Channel not found: {channel_id}")
            uploads = await asyncio.to_thread(client.get_channel_uploads, channel_id, limit)
        except YouTubeServiceError:
            raise
        except Exception as e:
            logger.exception(f"Failed to fetch videos for channel {channel_id}: {e}")
            raise RetrievalFailure("Failed to fetch channel videos") from e

        return normalize_all(uploads, normalize_channel_video)[:limit]

