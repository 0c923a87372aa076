from types import SimpleNamespace
import pytest
from youtube_transcript_api import NoTranscriptFound, TranscriptsDisabled
from yt_dlp.utils import DownloadError
from youtube_mcp.models.search import SortKey
from youtube_mcp.providers import youtube as provider_module
from youtube_mcp.providers.youtube import (
    YouTubeProvider,
    is_channel_entry,
    search_params,
    search_url,
)


class FakeTranscript:
    def __init__(self, language_code, snippets):
        self.language_code = language_code
        self.snippets = snippets

    def fetch(self):
        return [SimpleNamespace(text=t, start=s, duration=d) for t, s, d in self.snippets]


class FakeTranscriptList:
    def __init__(self, transcripts):
        self.transcripts = transcripts

    def __iter__(self):
        return iter(self.transcripts)

    def find_transcript(self, languages):
        for t in self.transcripts:
            if t.language_code in languages:
                return t
        raise NoTranscriptFound("abc", languages, None)


def fake_api(transcript_list=None, error=None):
    calls = []

    class FakeApi:
        def list(self, video_id):
            calls.append(video_id)
            if error:
                raise error
            return transcript_list

    return FakeApi, calls


class FakeYoutubeDL:
    info = {}
    error = None
    instances = []

    def __init__(self, opts):
        self.opts = opts
        self.requests = []
        FakeYoutubeDL.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def extract_info(self, url, download=True, process=True):
        self.requests.append((url, download, process))
        if self.error:
            raise self.error
        return self.info


@pytest.fixture
def ydl(monkeypatch):
    FakeYoutubeDL.info = {}
    FakeYoutubeDL.error = None
    FakeYoutubeDL.instances = []
    monkeypatch.setattr(provider_module.yt_dlp, "YoutubeDL", FakeYoutubeDL)
    return FakeYoutubeDL


def test_search_params_encode_sort_and_type():
    assert search_params(SortKey.RATING, "video") == "CAESAhAB"
    assert search_params(SortKey.RELEVANCE, "channel") == "CAASAhAC"
    assert search_params(SortKey.TITLE, "video") == search_params(SortKey.RELEVANCE, "video")
    assert search_params(SortKey.VIDEO_COUNT, "channel") == search_params(SortKey.RELEVANCE, "channel")


def test_search_url_quotes_query():
    url = search_url("lo-fi beats & chill", "video", SortKey.DATE)

    assert url.startswith("https://www.youtube.com/results?search_query=lo-fi+beats+%26+chill&sp=")


def test_is_channel_entry():
    assert is_channel_entry({"ie_key": "YoutubeTab", "url": "https://www.youtube.com/channel/UC1"})
    assert is_channel_entry({"url": "https://www.youtube.com/@acme"})
    assert not is_channel_entry({"ie_key": "YoutubeTab", "url": "https://www.youtube.com/playlist?list=PL1"})
    assert not is_channel_entry({"ie_key": "Youtube", "url": "https://www.youtube.com/watch?v=abc"})


def test_caption_tracks(monkeypatch):
    transcripts = FakeTranscriptList([FakeTranscript("en", [])])
    api, calls = fake_api(transcripts)
    monkeypatch.setattr(provider_module, "YouTubeTranscriptApi", api)
    provider = YouTubeProvider()

    assert len(provider.get_caption_tracks("abc")) == 1
    provider.get_transcript_segments("abc")
    assert calls == ["abc"]


def test_caption_tracks_disabled(monkeypatch):
    api, _ = fake_api(error=TranscriptsDisabled("abc"))
    monkeypatch.setattr(provider_module, "YouTubeTranscriptApi", api)

    assert YouTubeProvider().get_caption_tracks("abc") == []


def test_segments_in_milliseconds(monkeypatch):
    transcripts = FakeTranscriptList([
        FakeTranscript("de", [("hallo", 0.0, 1.0)]),
        FakeTranscript("en", [("hello", 0.5, 1.25), ("world", 1.8, 0.7)]),
    ])
    api, _ = fake_api(transcripts)
    monkeypatch.setattr(provider_module, "YouTubeTranscriptApi", api)
    monkeypatch.setattr(provider_module.settings, "TRANSCRIPT_LANGUAGES", ["en"])

    segments = YouTubeProvider().get_transcript_segments("abc")

    assert [(s.text, s.start_ms, s.end_ms) for s in segments] == [
        ("hello", 500, 1750),
        ("world", 1800, 2500),
    ]


def test_segments_fall_back_to_first_track(monkeypatch):
    transcripts = FakeTranscriptList([FakeTranscript("fr", [("bonjour", 1.0, 2.0)])])
    api, _ = fake_api(transcripts)
    monkeypatch.setattr(provider_module, "YouTubeTranscriptApi", api)
    monkeypatch.setattr(provider_module.settings, "TRANSCRIPT_LANGUAGES", ["en"])

    segments = YouTubeProvider().get_transcript_segments("abc")

    assert segments[0].text == "bonjour"
    assert (segments[0].start_ms, segments[0].end_ms) == (1000, 3000)


def test_search_splits_entries(ydl):
    ydl.info = {"entries": [
        {"ie_key": "Youtube", "id": "v1", "url": "https://www.youtube.com/watch?v=v1"},
        {"ie_key": "YoutubeTab", "id": "UC1", "url": "https://www.youtube.com/channel/UC1"},
        {"ie_key": "YoutubeTab", "id": "PL1", "url": "https://www.youtube.com/playlist?list=PL1"},
        "junk",
    ]}

    results = YouTubeProvider().search("q", "video", SortKey.RATING, 5)

    assert [e["id"] for e in results["videos"]] == ["v1"]
    assert [e["id"] for e in results["channels"]] == ["UC1"]
    instance = ydl.instances[0]
    assert instance.opts["playlistend"] == 5
    assert instance.opts["extract_flat"] == "in_playlist"
    assert "sp=CAESAhAB" in instance.requests[0][0]


def test_cookies_passed_to_ytdlp(ydl):
    YouTubeProvider(cookies_path="/tmp/cookies.txt").search("q", "channel", SortKey.DATE, 3)

    assert ydl.instances[0].opts["cookiefile"] == "/tmp/cookies.txt"


def test_get_channel(ydl):
    ydl.info = {"channel_id": "UC1", "channel": "Acme", "entries": iter([])}

    channel = YouTubeProvider().get_channel("UC1")

    assert channel["channel_id"] == "UC1"
    assert channel["channel"] == "Acme"
    url, download, process = ydl.instances[0].requests[0]
    assert url == "https://www.youtube.com/channel/UC1/videos"
    assert (download, process) == (False, False)


def test_get_channel_unresolved(ydl):
    ydl.error = DownloadError("ERROR: This channel does not exist.")

    assert YouTubeProvider().get_channel("UCnope") is None


def test_get_channel_without_metadata(ydl):
    ydl.info = {"title": "something"}

    assert YouTubeProvider().get_channel("UC1") is None


def test_get_channel_uploads(ydl):
    ydl.info = {"entries": [{"id": "v1"}, {"id": "v2"}, None]}

    uploads = YouTubeProvider().get_channel_uploads("UC1", 2)

    assert [u["id"] for u in uploads] == ["v1", "v2"]
    assert ydl.instances[0].opts["playlistend"] == 2
