"""Application configuration."""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "Assay Plate Share"
    debug: bool = False

    # Share links
    public_base_url: str = "http://localhost:3000/"

    # Short link store
    short_links_path: str = "data/short-links.json"
    short_id_length: int = 8

    # CORS
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    class Config:
        env_file = ".env"


settings = Settings()
