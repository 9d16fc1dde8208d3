"""
Configuration for the vocabulary converter.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Converter configuration loaded from environment variables.

    Environment variables:
        YML2VOCAB_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR). Default: INFO
        YML2VOCAB_LOG_FORMAT: Log output, console or json. Default: console
        YML2VOCAB_HTTP_TIMEOUT: Timeout in seconds when the source is fetched from a URL.
                                Default: 30
        YML2VOCAB_USER_AGENT: User-Agent header for fetching remote sources.
    """

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        alias="YML2VOCAB_LOG_LEVEL",
        description="Logging level"
    )

    log_format: Literal["console", "json"] = Field(
        default="console",
        alias="YML2VOCAB_LOG_FORMAT",
        description="Rendering of the log lines"
    )

    http_timeout: float = Field(
        default=30.0,
        alias="YML2VOCAB_HTTP_TIMEOUT",
        description="Timeout in seconds for remote sources"
    )

    user_agent: str = Field(
        default="yml2vocab/1.0 (Vocabulary generator)",
        alias="YML2VOCAB_USER_AGENT",
        description="User-Agent header for remote sources"
    )


# Global settings instance
settings = Settings()
