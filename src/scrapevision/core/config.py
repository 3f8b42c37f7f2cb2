"""Configuration management for ScrapeVision."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""
    
    # Remote job API
    api_base_url: str = Field("http://localhost:5000", description="Base URL of the analysis service")
    verify_ssl: bool = Field(True, description="Verify TLS certificates of the analysis service")
    request_timeout: float = Field(30.0, description="Per-request timeout in seconds")
    
    # Polling policy
    poll_interval: float = Field(2.0, description="Seconds between status polls")
    poll_backoff: float = Field(1.0, description="Multiplier applied to the poll delay after each pending tick")
    max_poll_interval: float = Field(30.0, description="Upper bound for the poll delay in seconds")
    max_poll_attempts: int = Field(900, description="Status polls before giving up (0 disables the limit)")
    cancel_attempts: int = Field(2, description="Delivery attempts for the cancel notification")
    
    # Logging
    log_level: str = Field("INFO", description="Logging level")
    
    # Crawl defaults
    default_method: str = Field("bfs", description="Default crawl method (bfs or dfs)")
    default_depth: int = Field(5, description="Default crawl depth")
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


# Global settings instance
settings = Settings()
