import argparse
import asyncio
import sys
from rich.console import Console
from rich.table import Table
from youtube_mcp.config import settings
from youtube_mcp.core.errors import YouTubeServiceError
from youtube_mcp.models.search import CHANNEL_SORT_KEYS, SortKey
from youtube_mcp.server import run, to_json
from youtube_mcp.services.youtube_service import YoutubeService

console = Console()

def format_time(ms: int) -> str:
    m, s = divmod(int(ms) // 1000, 60)
    h, m = divmod(m, 60)
    if h > 0:
        return f"{h:02d}:{m:02d}:{s:02d}"
    return f"{m:02d}:{s:02d}"

def render_transcript(chunks):
    table = Table(title=f"Transcript ({len(chunks)} chunks)", show_header=True, header_style="bold magenta")
    table.add_column("Time", style="cyan", width=15)
    table.add_column("Text", style="white")
    for chunk in chunks:
        table.add_row(f"{format_time(chunk.start_ms)} - {format_time(chunk.end_ms)}", chunk.text.strip())
    console.print(table)

def render_results(title: str, results):
    if not results:
        console.print(f"[yellow]{title}: no results[/yellow]")
        return
    table = Table(title=title, show_header=True, header_style="bold magenta")
    columns = list(results[0].model_dump(by_alias=True).keys())
    for col in columns:
        table.add_column(col, overflow="fold")
    for result in results:
        row = result.model_dump(by_alias=True)
        table.add_row(*[row[col] for col in columns])
    console.print(table)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="youtube-mcp", description="YouTube MCP server")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the MCP server")
    serve.add_argument("--transport", choices=["stdio", "sse", "streamable-http"], default=settings.TRANSPORT)

    transcript = sub.add_parser("transcript", help="Fetch a video transcript")
    transcript.add_argument("url", help="Video URL")
    transcript.add_argument("--chunk-size", type=int, help="Maximum characters per chunk")
    transcript.add_argument("--by-silence", action="store_true", help="Split at pauses in speech")
    transcript.add_argument("--threshold", type=int, help="Pause length in ms that starts a new chunk")

    sorts = [k.value for k in CHANNEL_SORT_KEYS]
    search = sub.add_parser("search", help="Search videos")
    search.add_argument("query")
    search.add_argument("--sort", default=SortKey.RATING.value, help=f"One of {', '.join(sorts[:-1])}")

    channels = sub.add_parser("channels", help="Search channels")
    channels.add_argument("query")
    channels.add_argument("--sort", default=SortKey.RATING.value, help=f"One of {', '.join(sorts)}")

    channel_videos = sub.add_parser("channel-videos", help="List a channel's videos")
    channel_videos.add_argument("channel_id")
    channel_videos.add_argument("--max", type=int, default=settings.CHANNEL_VIDEOS_DEFAULT, help="Maximum videos (capped at 200)")

    for p in (transcript, search, channels, channel_videos):
        p.add_argument("--json", action="store_true", help="Print raw JSON instead of a table")
    return parser

async def dispatch(args, service: YoutubeService):
    if args.command == "transcript":
        chunks = await service.get_transcript(
            args.url,
            chunk_size=args.chunk_size,
            chunk_by_silence=args.by_silence,
            silence_threshold=args.threshold,
        )
        return chunks, render_transcript
    if args.command == "search":
        results = await service.search_videos(args.query, args.sort)
        return results, lambda r: render_results("Videos", r)
    if args.command == "channels":
        results = await service.search_channels(args.query, args.sort)
        return results, lambda r: render_results("Channels", r)
    results = await service.get_channel_videos(args.channel_id, args.max)
    return results, lambda r: render_results("Channel videos", r)

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(2)

    if args.command == "serve":
        run(args.transport)
        return

    try:
        with console.status("Talking to YouTube..."):
            results, render = asyncio.run(dispatch(args, YoutubeService()))
    except YouTubeServiceError as e:
        console.print(f"[bold red]Error:[/bold red] {e.message}")
        sys.exit(1)

    if args.json:
        console.print_json(to_json(results))
    else:
        render(results)

if __name__ == "__main__":
    main()
