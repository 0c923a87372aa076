import logging
from rich.console import Console
from rich.logging import RichHandler
from youtube_mcp.config import settings

def setup_logger(name: str = "youtube_mcp") -> logging.Logger:
    # stdout carries the stdio JSON-RPC stream
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)]
    )
    return logging.getLogger(name)

logger = setup_logger()
