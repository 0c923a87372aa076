from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

class Settings(BaseSettings):
    # Server
    SERVER_NAME: str = "youtube"
    TRANSPORT: str = "stdio"

    # Transcript Settings
    SILENCE_THRESHOLD_MS: int = 200
    TRANSCRIPT_LANGUAGES: List[str] = ["en"]

    # Listing Limits
    SEARCH_MAX_RESULTS: int = 20
    CHANNEL_VIDEOS_DEFAULT: int = 50
    CHANNEL_VIDEOS_MAX: int = 200

    # System Settings
    LOG_LEVEL: str = "INFO"

    # Paths
    COOKIES_PATH: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env", 
        env_file_encoding="utf-8",
        env_prefix="YOUTUBE_MCP_",
        extra="ignore"
    )

settings = Settings()
