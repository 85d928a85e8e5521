from pydantic import ConfigDict
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env", env_prefix="HTML_MD_SERVER_")

    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False
    log_level: str = "INFO"

    timeout_seconds: int = 30
    follow_redirects: bool = True
    http_proxy: Optional[str] = None
    user_agent: str = "html-md-server/0.1"

    max_content_length: int = 10 * 1024 * 1024
    cache_control: str = "public, max-age=3600, s-maxage=86400"


def get_settings() -> Settings:
    return Settings()
