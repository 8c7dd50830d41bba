"""Configuration management for the FastAPI server.

Settings are read from environment variables with the ``BW_`` prefix.
"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration settings.

    Attributes:
        app_name: Application name
        debug: Debug mode flag
        scanner_config_path: Optional scanner config YAML path
        cors_origins: List of allowed CORS origins
        host: Server host address
        port: Server port number
    """

    app_name: str = "BW Scanner API"
    debug: bool = False

    scanner_config_path: Optional[str] = None

    # The HTML page may be served from anywhere
    cors_origins: list[str] = ["*"]

    host: str = "0.0.0.0"
    port: int = 8000

    class Config:
        """Pydantic configuration."""
        env_prefix = "BW_"
        case_sensitive = False


settings = Settings()
