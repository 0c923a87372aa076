from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from youtube_mcp.models.search import SortKey
from youtube_mcp.models.transcript import TranscriptSegment

class YouTubeClient(ABC):
    @abstractmethod
    def get_caption_tracks(self, video_id: str) -> Optional[List[Any]]:
        """List the caption tracks available for a video."""
        pass

    @abstractmethod
    def get_transcript_segments(self, video_id: str) -> List[TranscriptSegment]:
        """Fetch the caption segments of a video in chronological order."""
        pass

    @abstractmethod
    def search(self, query: str, result_type: str, sort: SortKey, limit: int) -> Dict[str, List[Any]]:
        """Search YouTube. Returns ``{"videos": [...], "channels": [...]}``."""
        pass

    @abstractmethod
    def get_channel(self, channel_id: str) -> Optional[Any]:
        """Get channel metadata, or None if the channel cannot be resolved."""
        pass

    @abstractmethod
    def get_channel_uploads(self, channel_id: str, limit: int) -> List[Any]:
        """List a channel's uploaded videos, newest first."""
        pass
