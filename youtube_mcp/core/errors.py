class YouTubeServiceError(Exception):
    """Base error. ``message`` is safe to show to the caller."""

    message = "YouTube request failed"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

class InvalidInput(YouTubeServiceError):
    message = "Invalid YouTube URL"

class NoCaptions(YouTubeServiceError):
    message = "No caption tracks found for this video."

class ChannelNotFound(YouTubeServiceError):
    message = "Channel not found"

class RetrievalFailure(YouTubeServiceError):
    message = "Failed to fetch transcript"
