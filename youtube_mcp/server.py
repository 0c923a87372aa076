"""
MCP server exposing YouTube transcripts, search and channel listings.

Tools return their results as JSON text. Errors raised by the service carry a
fixed, caller-safe message and surface as tool errors.
"""
import json
from typing import Annotated, Iterable, Optional
from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel, Field
from youtube_mcp.config import settings
from youtube_mcp.services.youtube_service import YoutubeService
from youtube_mcp.utils.logger import logger

mcp = FastMCP(settings.SERVER_NAME)

service = YoutubeService()


def to_json(items: Iterable[BaseModel], indent: Optional[int] = None) -> str:
    return json.dumps([item.model_dump(by_alias=True) for item in items], indent=indent, ensure_ascii=False)


@mcp.tool(
    name="get_transcript",
    description=(
        "Retrieves the full transcript of a specified YouTube video. This tool is useful for "
        "understanding video content without watching it, or for extracting textual information "
        "from videos. FORMATTING GUIDANCE (optional - user instructions override): When creating "
        "summaries, consider using: **Key Points with Timestamps:** Use [MM:SS] or [HH:MM:SS] inline "
        "references. **Structure:** Break into logical sections. **Context:** Include video title "
        "and channel."
    ),
)
async def get_transcript(
    videoUrl: Annotated[str, Field(description="The full URL of the YouTube video, e.g. 'https://www.youtube.com/watch?v=dQw4w9WgXcQ'.")],
    chunkSize: Annotated[Optional[int], Field(description="Optional: maximum number of characters per transcript chunk.")] = None,
    chunkBySilence: Annotated[Optional[bool], Field(description="Optional: if true, split the transcript at pauses in speech.")] = None,
    silenceThreshold: Annotated[Optional[int], Field(description="Optional: with chunkBySilence, the minimum pause in milliseconds that starts a new chunk (default 200).")] = None,
) -> str:
    logger.info(f"get_transcript {videoUrl} chunkSize={chunkSize} chunkBySilence={chunkBySilence}")
    chunks = await service.get_transcript(
        videoUrl,
        chunk_size=chunkSize,
        chunk_by_silence=bool(chunkBySilence),
        silence_threshold=silenceThreshold,
    )
    return to_json(chunks)


@mcp.tool(
    name="search_videos",
    description=(
        "Searches YouTube for videos matching the specified query. Returns a list of video results "
        "with title, video ID, and channel information. Results are sorted by rating by default."
    ),
)
async def search_videos(
    query: Annotated[str, Field(description="The search query to find YouTube videos.")],
    sortBy: Annotated[str, Field(description="Optional: relevance, date, rating (default), viewCount or title.")] = "rating",
) -> str:
    videos = await service.search_videos(query, sortBy)
    return to_json(videos)


@mcp.tool(
    name="search_channels",
    description="Searches YouTube for channels matching the specified query. You can specify a sort order for the results (default: rating).",
)
async def search_channels(
    query: Annotated[str, Field(description="The search query to find YouTube channels.")],
    sortBy: Annotated[str, Field(description="Optional: relevance, date, rating (default), viewCount, title or videoCount.")] = "rating",
) -> str:
    channels = await service.search_channels(query, sortBy)
    return to_json(channels, indent=2)


@mcp.tool(
    name="get_channel_videos",
    description="Retrieves a list of videos from a specified YouTube channel.",
)
async def get_channel_videos(
    channelId: Annotated[str, Field(description="The YouTube channel ID, as returned by search_channels.")],
    maxResults: Annotated[int, Field(description="Maximum number of videos to retrieve (default: 50, max: 200).")] = settings.CHANNEL_VIDEOS_DEFAULT,
) -> str:
    videos = await service.get_channel_videos(channelId, maxResults)
    return to_json(videos, indent=2)


@mcp.resource(
    "youtube://transcript/{video_id}",
    name="YouTube Transcript",
    description="Plain-text transcript of a YouTube video.",
    mime_type="text/plain",
)
async def transcript_resource(video_id: str) -> str:
    return await service.get_transcript_text(video_id)


def run(transport: Optional[str] = None) -> None:
    transport = transport or settings.TRANSPORT
    logger.info(f"Starting {settings.SERVER_NAME} MCP server ({transport})")
    mcp.run(transport=transport)
