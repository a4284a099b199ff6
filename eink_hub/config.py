"""
Server configuration loaded from the environment (and an optional .env file).
"""

import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()

MEMORY_DATABASE_URL = "memory://"
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./eink_hub.db"
DEFAULT_SETUP_LOGO_URL = "https://usetrmnl.com/images/setup/setup-logo.bmp"


class ServerConfig(BaseModel):
    """Runtime settings shared by the app factory and the routers."""

    database_url: str = DEFAULT_DATABASE_URL
    setup_logo_url: str = Field(
        default=DEFAULT_SETUP_LOGO_URL,
        description="Image served on setup, to unprovisioned devices and for empty playlists",
    )
    log_format: Literal["json", "pretty"] = "json"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    @property
    def uses_memory_store(self) -> bool:
        return self.database_url == MEMORY_DATABASE_URL


def load_config() -> ServerConfig:
    """Build a ServerConfig from environment variables."""
    return ServerConfig(
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        setup_logo_url=os.getenv("SETUP_LOGO_URL", DEFAULT_SETUP_LOGO_URL),
        log_format=os.getenv("LOG_FORMAT", "json").lower(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        debug=os.getenv("DEBUG", "false").lower() == "true",
    )
