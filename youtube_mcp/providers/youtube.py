import base64
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode
import yt_dlp
from yt_dlp.utils import DownloadError
from youtube_transcript_api import YouTubeTranscriptApi, TranscriptsDisabled, NoTranscriptFound
from youtube_mcp.config import settings
from youtube_mcp.core.client import YouTubeClient
from youtube_mcp.models.search import SortKey
from youtube_mcp.models.transcript import TranscriptSegment
from youtube_mcp.utils.logger import logger

YOUTUBE_BASE_URL = "https://www.youtube.com"

# Field 1 of the search "sp" protobuf. Title and video count have no web
# equivalent and fall back to relevance.
_SORT_CODES = {
    SortKey.RELEVANCE: 0,
    SortKey.RATING: 1,
    SortKey.DATE: 2,
    SortKey.VIEW_COUNT: 3,
    SortKey.TITLE: 0,
    SortKey.VIDEO_COUNT: 0,
}
# Field 2.2 of the search "sp" protobuf
_TYPE_CODES = {"video": 1, "channel": 2}


def search_params(sort: SortKey, result_type: str) -> str:
    """Encode the ``sp`` query parameter YouTube uses for sort order and result type."""
    raw = bytes([0x08, _SORT_CODES[sort], 0x12, 0x02, 0x10, _TYPE_CODES[result_type]])
    return base64.b64encode(raw).decode("ascii")


def search_url(query: str, result_type: str, sort: SortKey) -> str:
    qs = urlencode({"search_query": query, "sp": search_params(sort, result_type)})
    return f"{YOUTUBE_BASE_URL}/results?{qs}"


def channel_videos_url(channel_id: str) -> str:
    return f"{YOUTUBE_BASE_URL}/channel/{channel_id}/videos"


def is_channel_entry(entry: Dict[str, Any]) -> bool:
    url = entry.get("url") or ""
    if "list=" in url:
        return False
    return entry.get("ie_key") == "YoutubeTab" or "/channel/" in url or "/@" in url


class YouTubeProvider(YouTubeClient):
    def __init__(self, cookies_path: Optional[str] = None):
        self.cookies_path = cookies_path or settings.COOKIES_PATH
        self._transcript_lists = {}

    def _ydl_opts(self, **extra) -> dict:
        opts = {
            'quiet': True,
            'no_warnings': True,
            'skip_download': True,
            'extract_flat': 'in_playlist',
        }
        if self.cookies_path:
            opts['cookiefile'] = self.cookies_path
        opts.update(extra)
        return opts

    def _transcript_list(self, video_id: str):
        if video_id not in self._transcript_lists:
            self._transcript_lists[video_id] = YouTubeTranscriptApi().list(video_id)
        return self._transcript_lists[video_id]

    def get_caption_tracks(self, video_id: str) -> List[Any]:
        try:
            return list(self._transcript_list(video_id))
        except (TranscriptsDisabled, NoTranscriptFound) as e:
            logger.warning(f"No transcripts for {video_id}: {type(e).__name__}")
            return []

    def get_transcript_segments(self, video_id: str) -> List[TranscriptSegment]:
        transcript_list = self._transcript_list(video_id)
        try:
            transcript = transcript_list.find_transcript(settings.TRANSCRIPT_LANGUAGES)
        except NoTranscriptFound:
            tracks = list(transcript_list)
            if not tracks:
                raise
            transcript = tracks[0]
            logger.info(f"No preferred transcript language for {video_id}, using {transcript.language_code}")

        segments = []
        for item in transcript.fetch():
            start = float(item.start)
            end = start + float(item.duration)
            segments.append(TranscriptSegment(
                text=item.text or "",
                start_ms=int(round(start * 1000)),
                end_ms=int(round(end * 1000)),
            ))
        logger.debug(f"Fetched {len(segments)} segments for {video_id} ({transcript.language_code})")
        return segments

    def search(self, query: str, result_type: str, sort: SortKey, limit: int) -> Dict[str, List[Any]]:
        url = search_url(query, result_type, sort)
        logger.debug(f"Searching {result_type}s: {url}")
        with yt_dlp.YoutubeDL(self._ydl_opts(playlistend=limit)) as ydl:
            info = ydl.extract_info(url, download=False)

        results = {"videos": [], "channels": []}
        for entry in info.get("entries") or []:
            if not isinstance(entry, dict):
                continue
            if is_channel_entry(entry):
                results["channels"].append(entry)
            elif "list=" not in (entry.get("url") or ""):
                results["videos"].append(entry)
        return results

    def get_channel(self, channel_id: str) -> Optional[Dict[str, Any]]:
        try:
            with yt_dlp.YoutubeDL(self._ydl_opts()) as ydl:
                info = ydl.extract_info(channel_videos_url(channel_id), download=False, process=False)
        except DownloadError as e:
            logger.warning(f"Could not resolve channel {channel_id}: {e}")
            return None
        if not info or not info.get("channel_id"):
            return None
        return {
            "channel_id": info.get("channel_id"),
            "channel": info.get("channel") or info.get("uploader"),
            "description": info.get("description"),
        }

    def get_channel_uploads(self, channel_id: str, limit: int) -> List[Any]:
        with yt_dlp.YoutubeDL(self._ydl_opts(playlistend=limit)) as ydl:
            info = ydl.extract_info(channel_videos_url(channel_id), download=False)
        return [e for e in info.get("entries") or [] if isinstance(e, dict)]
