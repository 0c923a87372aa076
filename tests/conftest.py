import pytest
from youtube_mcp.core.client import YouTubeClient
from youtube_mcp.models.transcript import TranscriptSegment
from youtube_mcp.services.youtube_service import YoutubeService


class FakeClient(YouTubeClient):
    def __init__(self, tracks=("en",), segments=None, videos=None, channels=None,
                 channel=None, uploads=None, error=None):
        self.tracks = list(tracks) if tracks is not None else None
        self.segments = segments or []
        self.videos = videos or []
        self.channels = channels or []
        self.channel = channel
        self.uploads = uploads or []
        self.error = error
        self.calls = []

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        if self.error:
            raise self.error

    def get_caption_tracks(self, video_id):
        self._call("get_caption_tracks", video_id)
        return self.tracks

    def get_transcript_segments(self, video_id):
        self._call("get_transcript_segments", video_id)
        return self.segments

    def search(self, query, result_type, sort, limit):
        self._call("search", query, result_type, sort, limit)
        return {"videos": self.videos, "channels": self.channels}

    def get_channel(self, channel_id):
        self._call("get_channel", channel_id)
        return self.channel

    def get_channel_uploads(self, channel_id, limit):
        self._call("get_channel_uploads", channel_id, limit)
        return self.uploads[:limit]


def seg(text, start, end):
    return TranscriptSegment(text=text, start_ms=start, end_ms=end)


@pytest.fixture
def segments():
    return [seg("hello", 0, 900), seg("world", 950, 1800), seg("again", 2500, 3100)]


@pytest.fixture
def make_service():
    def factory(**kwargs):
        client = FakeClient(**kwargs)
        return YoutubeService(lambda: client), client
    return factory


@pytest.fixture
def fake_client_cls():
    return FakeClient
