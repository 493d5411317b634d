from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Upstash Redis REST endpoint for usage counters and the scrape cache.
    # Empty values mean "not configured": the gate fails open and the cache is skipped.
    upstash_redis_rest_url: str = ""
    upstash_redis_rest_token: str = ""
    store_timeout_s: float = 3.0
    # Anthropic Messages API for ad copy generation
    anthropic_api_key: str = ""
    anthropic_base_url: str = "https://api.anthropic.com"
    anthropic_version: str = "2023-06-01"
    anthropic_model: str = "claude-sonnet-4-20250514"
    generation_timeout_s: float = 60.0
    log_level: str = "info"
    # Landing page fetch identity. Many sites vary content by perceived client.
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    accept_language: str = "en-US,en;q=0.5"
    fetch_timeout_s: float = 8.0
    # Free usage gate: N generations per window anchored at first use
    free_limit: int = 10
    window_days: int = 30
    quota_key_prefix: str = "rsa:ip:"
    # Scrape cache
    cache_ttl_s: int = 60 * 60 * 24
    cache_key_prefix: str = "rsa:scrape:"
    cors_origins: list[str] = ["*"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def window_seconds(self) -> int:
        return self.window_days * 24 * 60 * 60

    @property
    def store_configured(self) -> bool:
        return bool(self.upstash_redis_rest_url and self.upstash_redis_rest_token)


settings = Settings()
